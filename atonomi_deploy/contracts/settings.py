"""
Network settings contract wrapper.

Settings holds the registration and activation fees, the reputation reward
and how it is split, and the write-rate threshold, all kept in eternal
storage.
"""

from typing import Any, List

from .base import ContractWrapper, validate_address


class SettingsContract(ContractWrapper):
    """Wrapper for the Settings contract."""

    CONTRACT_NAME = "Settings"

    def encode_constructor_params(
        self,
        storage_address: str,
        registration_fee: int,
        activation_fee: int,
        reputation_reward: int,
        reputation_share: int,
        block_threshold: int
    ) -> List[Any]:
        """
        Encode constructor parameters for deployment.

        Args:
            storage_address: Address of AtonomiEternalStorage
            registration_fee: Device registration fee (in smallest units)
            activation_fee: Device activation fee (in smallest units)
            reputation_reward: Reward per reputation write (in smallest units)
            reputation_share: Percentage of the reward kept by the reputation author
            block_threshold: Blocks an author must wait between writes

        Returns:
            Ordered constructor arguments

        Raises:
            ValueError: If validation fails
        """
        storage = validate_address(storage_address, "storage")

        for label, value in (
            ("Registration fee", registration_fee),
            ("Activation fee", activation_fee),
            ("Reputation reward", reputation_reward),
        ):
            if not isinstance(value, int) or value < 0:
                raise ValueError(f"{label} must be a non-negative integer in base units")

        if not isinstance(reputation_share, int) or not 0 <= reputation_share <= 100:
            raise ValueError("Reputation share must be an integer between 0 and 100")

        if not isinstance(block_threshold, int) or block_threshold <= 0:
            raise ValueError("Block threshold must be a positive integer")

        return [
            storage,
            registration_fee,
            activation_fee,
            reputation_reward,
            reputation_share,
            block_threshold,
        ]
