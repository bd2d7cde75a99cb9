"""
Common wrapper for compiled Atonomi contracts.

Each concrete wrapper names its artifact and validates its constructor
arguments; deployment itself is done by :class:`atonomi_deploy.deployer.Deployer`.
"""

from typing import Any, Dict, List, Optional

from web3 import Web3

from ..artifacts.loader import get_abi, get_bytecode
from ..exceptions import UnlinkedLibraryError
from ..linking import find_unlinked_libraries, link_bytecode


def validate_address(value: str, label: str) -> str:
    """Return a checksummed address or raise ValueError."""
    if not value or not Web3.is_address(value):
        raise ValueError(f"Invalid {label} address: {value!r}")
    return Web3.to_checksum_address(value)


class ContractWrapper:
    """Artifact-backed contract: ABI, bytecode and prepared calls."""

    CONTRACT_NAME = ""

    def __init__(self, abi: Optional[list] = None, bytecode: Optional[str] = None):
        self.abi = abi if abi is not None else get_abi(self.CONTRACT_NAME)
        self.bytecode = bytecode if bytecode is not None else get_bytecode(self.CONTRACT_NAME)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.CONTRACT_NAME}>"

    def encode_constructor_params(self, *args) -> List[Any]:
        """Validate and order constructor arguments. Base contracts take none."""
        if args:
            raise ValueError(
                f"{self.CONTRACT_NAME} constructor takes no arguments, got {len(args)}"
            )
        return []

    def get_deployment_data(self, *args) -> Dict[str, Any]:
        """
        Get complete deployment data for the contract.

        Returns:
            Dictionary with bytecode, ABI and validated constructor args

        Raises:
            UnlinkedLibraryError: If the bytecode still needs library linking
        """
        constructor_args = self.encode_constructor_params(*args)
        self.ensure_linked()

        return {
            "bytecode": self.bytecode,
            "abi": self.abi,
            "constructor_args": constructor_args,
            "contract_name": self.CONTRACT_NAME,
        }

    def link(self, library_name: str, address: str, source_name: Optional[str] = None) -> None:
        """Link a deployed library into this contract's bytecode."""
        self.bytecode = link_bytecode(self.bytecode, library_name, address, source_name)

    def ensure_linked(self) -> None:
        placeholders = find_unlinked_libraries(self.bytecode)
        if placeholders:
            raise UnlinkedLibraryError(self.CONTRACT_NAME, placeholders)

    def find_function(self, function_name: str) -> Dict[str, Any]:
        for item in self.abi:
            if item.get('type') == 'function' and item.get('name') == function_name:
                return item
        raise ValueError(f"Function {function_name} not found in ABI")

    def prepare_transaction(
        self,
        function_name: str,
        *args,
        **kwargs
    ) -> Dict[str, Any]:
        """
        Prepare a transaction for a specific function.

        Args:
            function_name: Name of the contract function
            *args: Function arguments
            **kwargs: Additional transaction parameters

        Returns:
            Prepared transaction dictionary
        """
        function_abi = self.find_function(function_name)

        return {
            "function": function_name,
            "args": args,
            "abi": function_abi,
            "params": kwargs,
        }
