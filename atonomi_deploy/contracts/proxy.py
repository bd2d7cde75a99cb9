"""
Upgradability proxy wrapper.

The proxy keeps a fixed address while the logic contract behind it can be
swapped by its owner through ``upgradeTo``.
"""

from typing import Any, Dict

from .base import ContractWrapper, validate_address


class AtonomiProxyContract(ContractWrapper):
    """Wrapper for the AtonomiOwnedUpgradabilityProxy contract."""

    CONTRACT_NAME = "AtonomiOwnedUpgradabilityProxy"
    UPGRADE_FUNCTION = "upgradeTo"

    def prepare_upgrade(self, implementation_address: str) -> Dict[str, Any]:
        """
        Prepare an ``upgradeTo`` call.

        Note: Only the proxy owner can upgrade.

        Args:
            implementation_address: Address of the new logic contract

        Returns:
            Prepared function call data
        """
        implementation = validate_address(implementation_address, "implementation")
        return self.prepare_transaction(self.UPGRADE_FUNCTION, implementation)
