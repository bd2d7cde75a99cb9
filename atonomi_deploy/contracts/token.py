"""
AMLToken contract wrapper for deployment.

This module provides a high-level interface for deploying the ATMI
ERC20 token.
"""

from typing import Any, List

from .base import ContractWrapper


class AMLTokenContract(ContractWrapper):
    """
    Wrapper for the AMLToken (ATMI) contract.

    The token is linked against SafeMathLib and minted in full to the
    deploying account.
    """

    CONTRACT_NAME = "AMLToken"

    def encode_constructor_params(
        self,
        name: str,
        symbol: str,
        initial_supply: int,
        decimals: int,
        mintable: bool
    ) -> List[Any]:
        """
        Encode constructor parameters for deployment.

        Args:
            name: Token name (e.g., "Atonomi Token")
            symbol: Token symbol (e.g., "ATMI")
            initial_supply: Initial supply (in smallest units)
            decimals: Number of decimals (typically 18)
            mintable: Whether more tokens can be minted later

        Returns:
            Ordered constructor arguments

        Raises:
            ValueError: If validation fails
        """
        if not name:
            raise ValueError("Token name is required")

        if not symbol:
            raise ValueError("Token symbol is required")

        if decimals < 0 or decimals > 18:
            raise ValueError("Decimals must be between 0 and 18")

        if initial_supply <= 0:
            raise ValueError("Initial supply must be greater than 0")

        return [name, symbol, initial_supply, decimals, bool(mintable)]
