"""
Deployment configuration for the Atonomi contract suite.

Holds the hand-maintained address book of already deployed contracts, the
numeric constructor parameters used when deploying the network settings,
and the client settings read from the environment.
"""

import os
from dataclasses import dataclass
from decimal import Decimal
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple, Union

from web3 import Web3

from .exceptions import DuplicateAddressError, NetworkNotFoundError

Number = Union[int, float, str, Decimal]


def to_base_units(amount: Number, decimals: int) -> int:
    """
    Scale a human-readable token amount to base units, exactly.

    Args:
        amount: Amount in whole tokens (e.g., 0.125)
        decimals: Number of decimals for the token

    Returns:
        ``amount * 10 ** decimals`` as an integer

    Raises:
        ValueError: If the amount has more precision than ``decimals`` allows
    """
    if decimals < 0:
        raise ValueError("Decimals must not be negative")

    scaled = Decimal(str(amount)).scaleb(decimals)
    if scaled != scaled.to_integral_value():
        raise ValueError(
            f"{amount} cannot be represented with {decimals} decimals"
        )
    return int(scaled)


@dataclass(frozen=True)
class NetworkAddresses:
    """Addresses of the contracts deployed on one network."""

    token: Optional[str] = None
    atonomi: Optional[str] = None
    settings: Optional[str] = None
    proxy: Optional[str] = None

    def as_dict(self) -> Dict[str, Optional[str]]:
        return {
            "token": self.token,
            "atonomi": self.atonomi,
            "settings": self.settings,
            "proxy": self.proxy,
        }


# Edited by hand per release.
CHAINS: Mapping[str, NetworkAddresses] = MappingProxyType({
    "mainnet": NetworkAddresses(
        token="0x97aeb5066e1a590e868b511457beb6fe99d329f5",
        atonomi="0x899f3b22908ff5674f8237c321ab309417887606",
        settings="0x2566c658331eac75d3b3ccd0e45c78d9cf6c4c4c",
    ),
    "kovan": NetworkAddresses(
        token="0xe66254d9560c2d030ca5c3439c5d6b58061dd6f7",
        atonomi="0xbde8f51601e552d620c208049c5970f7b52cd044",
        settings="0x729a741ce0c776130c50d35906f0dbd248184982",
    ),
})


def get_network_addresses(
    network: str, book: Mapping[str, NetworkAddresses] = CHAINS
) -> NetworkAddresses:
    """
    Look up the deployed addresses for a network.

    Raises:
        NetworkNotFoundError: If the network has no entry in the book
    """
    if network not in book:
        available = ", ".join(sorted(book))
        raise NetworkNotFoundError(
            f"Network '{network}' not found in address book. "
            f"Available networks: {available}"
        )
    return book[network]


def find_duplicate_addresses(
    book: Mapping[str, NetworkAddresses] = CHAINS
) -> List[Tuple[str, List[str]]]:
    """
    Find addresses that appear under more than one network.

    Empty entries are ignored and addresses are compared case-insensitively.

    Returns:
        List of ``(address, networks)`` pairs, sorted by address
    """
    seen: Dict[str, List[str]] = {}
    for network, addresses in book.items():
        for address in set(a.lower() for a in addresses.as_dict().values() if a):
            seen.setdefault(address, []).append(network)

    return sorted(
        (address, sorted(networks))
        for address, networks in seen.items()
        if len(networks) > 1
    )


def validate_address_book(book: Mapping[str, NetworkAddresses] = CHAINS) -> None:
    """Raise DuplicateAddressError if two networks share an address."""
    duplicates = find_duplicate_addresses(book)
    if duplicates:
        details = "; ".join(
            f"{address} in {', '.join(networks)}" for address, networks in duplicates
        )
        raise DuplicateAddressError(f"Address shared between networks: {details}")


@dataclass(frozen=True)
class DeploymentParameters:
    """
    Constructor parameters for the token and the network settings.

    Fees and rewards are expressed in whole tokens and scaled by
    ``multiplier`` when passed to the contracts.
    """

    token_name: str = "Atonomi Token"
    token_symbol: str = "ATMI"
    token_decimals: int = 18
    registration_fee: Number = 1
    activation_fee: Number = 1
    reputation_reward: Number = 1
    reputation_share: int = 20
    block_threshold: int = 5760  # assuming 15s blocks, 1 write per day
    initial_supply: Number = 1000000000
    mintable: bool = False

    @property
    def multiplier(self) -> int:
        return 10 ** self.token_decimals

    @property
    def reg_fee(self) -> int:
        return to_base_units(self.registration_fee, self.token_decimals)

    @property
    def act_fee(self) -> int:
        return to_base_units(self.activation_fee, self.token_decimals)

    @property
    def rep_reward(self) -> int:
        return to_base_units(self.reputation_reward, self.token_decimals)

    @property
    def initial_supply_units(self) -> int:
        return to_base_units(self.initial_supply, self.token_decimals)

    def token_constructor_args(self) -> list:
        """Ordered AMLToken constructor arguments."""
        return [
            self.token_name,
            self.token_symbol,
            self.initial_supply_units,
            self.token_decimals,
            self.mintable,
        ]

    def settings_constructor_args(self, storage) -> list:
        """Ordered Settings constructor arguments for a storage address (or reference)."""
        return [
            storage,
            self.reg_fee,
            self.act_fee,
            self.rep_reward,
            self.reputation_share,
            self.block_threshold,
        ]


PRODUCTION_PARAMETERS = DeploymentParameters(
    reputation_reward="0.125",
    reputation_share=80,
)

DEVELOPMENT_PARAMETERS = DeploymentParameters()


@dataclass
class ClientSettings:
    """Connection and sender settings, usually read from the environment."""

    rpc_url: str = "http://127.0.0.1:8545"
    sender: Optional[str] = None
    private_key: Optional[str] = None
    network: str = "development"
    gas_price_gwei: Number = 1
    receipt_timeout: int = 120

    @classmethod
    def from_env(cls) -> "ClientSettings":
        """
        Build settings from environment variables.

        ``ATONOMI_RPC_URL``, ``ETHER_ADDR``, ``ATONOMI_PRIVATE_KEY``,
        ``ATONOMI_NETWORK``, ``ATONOMI_GAS_PRICE_GWEI`` and
        ``ATONOMI_RECEIPT_TIMEOUT`` override the defaults when set.
        """
        defaults = cls()
        return cls(
            rpc_url=os.getenv("ATONOMI_RPC_URL", defaults.rpc_url),
            sender=os.getenv("ETHER_ADDR"),
            private_key=os.getenv("ATONOMI_PRIVATE_KEY") or None,
            network=os.getenv("ATONOMI_NETWORK", defaults.network),
            gas_price_gwei=os.getenv("ATONOMI_GAS_PRICE_GWEI", defaults.gas_price_gwei),
            receipt_timeout=int(
                os.getenv("ATONOMI_RECEIPT_TIMEOUT", defaults.receipt_timeout)
            ),
        )

    def validate(self) -> None:
        if not self.rpc_url:
            raise ValueError("rpc_url is required")
        if not self.sender:
            raise ValueError("sender address is required (set ETHER_ADDR)")
        if not Web3.is_address(self.sender):
            raise ValueError(f"Invalid sender address: {self.sender}")


def connect(settings: ClientSettings) -> Web3:
    """Create a Web3 client for the configured RPC endpoint."""
    return Web3(Web3.HTTPProvider(settings.rpc_url))
