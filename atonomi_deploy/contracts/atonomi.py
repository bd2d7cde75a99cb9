"""Atonomi contract wrapper."""

from typing import Any, List

from .base import ContractWrapper, validate_address


class AtonomiContract(ContractWrapper):
    """
    Wrapper for the main Atonomi contract.

    Atonomi reads its state from eternal storage, charges fees in the ATMI
    token and takes its fee schedule from Settings.
    """

    CONTRACT_NAME = "Atonomi"

    def encode_constructor_params(
        self,
        storage_address: str,
        token_address: str,
        settings_address: str
    ) -> List[Any]:
        """Validate the three collaborator addresses, in constructor order."""
        return [
            validate_address(storage_address, "storage"),
            validate_address(token_address, "token"),
            validate_address(settings_address, "settings"),
        ]
