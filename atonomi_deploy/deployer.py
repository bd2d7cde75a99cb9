"""
Deployment and upgrade procedures.

Both procedures convert a gwei gas price to wei, encode the call, ask the
connected node for a gas estimate and, unless only an estimate was requested,
submit a single transaction and return its hash. Nothing is retried and no
receipt is awaited; errors raised by the chain client propagate unchanged.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence

from web3 import Web3

from .config import Number
from .contracts.base import ContractWrapper, validate_address
from .contracts.proxy import AtonomiProxyContract
from .exceptions import DeploymentError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransactionRequest:
    """A single transaction, built fresh for each call."""

    sender: str
    data: str
    to: Optional[str] = None
    gas: Optional[int] = None
    gas_price: Optional[int] = None

    @property
    def is_contract_creation(self) -> bool:
        return self.to is None

    def with_gas(self, gas: int, gas_price: int) -> "TransactionRequest":
        return TransactionRequest(
            sender=self.sender,
            data=self.data,
            to=self.to,
            gas=gas,
            gas_price=gas_price,
        )

    def to_tx_params(self) -> Dict[str, Any]:
        """Transaction dict in the shape web3 expects."""
        params: Dict[str, Any] = {"from": self.sender, "data": self.data}
        if self.to is not None:
            params["to"] = self.to
        if self.gas is not None:
            params["gas"] = self.gas
        if self.gas_price is not None:
            params["gasPrice"] = self.gas_price
        return params


@dataclass(frozen=True)
class DeploymentResult:
    """Outcome of a deploy or upgrade call. ``tx_hash`` is None for estimates."""

    contract_name: str
    gas_estimate: int
    gas_price: int
    tx_hash: Optional[str] = None

    @property
    def submitted(self) -> bool:
        return self.tx_hash is not None


def gwei_to_wei(gas_price_gwei: Number) -> int:
    return int(Web3.to_wei(gas_price_gwei, "gwei"))


class Deployer:
    """
    Sends deployment and administrative transactions from a fixed sender.

    When ``private_key`` is given, transactions are signed locally and sent
    raw; otherwise the node is expected to manage the sender account.
    """

    def __init__(self, w3: Web3, sender: str, private_key: Optional[str] = None):
        self.w3 = w3
        self.sender = validate_address(sender, "sender")
        self.private_key = private_key

    def build_deploy_request(
        self, contract: ContractWrapper, constructor_args: Sequence[Any] = ()
    ) -> TransactionRequest:
        """Encode the constructor invocation for a contract."""
        deployment = contract.get_deployment_data(*constructor_args)
        factory = self.w3.eth.contract(
            abi=deployment["abi"], bytecode=deployment["bytecode"]
        )
        data = factory.constructor(*deployment["constructor_args"]).data_in_transaction
        return TransactionRequest(sender=self.sender, data=data)

    def deploy(
        self,
        contract: ContractWrapper,
        gas_price_gwei: Number,
        constructor_args: Sequence[Any] = (),
        estimate_only: bool = False,
    ) -> DeploymentResult:
        """
        Deploy a contract, or only estimate the gas it would take.

        Args:
            contract: Wrapper for the contract to deploy
            gas_price_gwei: Gas price in gwei
            constructor_args: Constructor arguments, validated by the wrapper
            estimate_only: Stop after the gas estimate

        Returns:
            DeploymentResult with the gas estimate and, if submitted, the hash
        """
        logger.info("deploying %s...", contract.CONTRACT_NAME)
        gas_price = gwei_to_wei(gas_price_gwei)
        logger.info("gas price %s", gas_price)

        request = self.build_deploy_request(contract, constructor_args)
        return self._estimate_and_submit(
            contract.CONTRACT_NAME, request, gas_price, estimate_only
        )

    def upgrade(
        self,
        proxy_address: str,
        implementation_address: str,
        gas_price_gwei: Number,
        estimate_only: bool = False,
        proxy: Optional[AtonomiProxyContract] = None,
    ) -> DeploymentResult:
        """
        Point an existing proxy at a new implementation.

        Args:
            proxy_address: Address of the deployed proxy
            implementation_address: Address of the new logic contract
            gas_price_gwei: Gas price in gwei
            estimate_only: Stop after the gas estimate
            proxy: Proxy wrapper supplying the ABI (loaded from artifacts if None)

        Returns:
            DeploymentResult with the gas estimate and, if submitted, the hash
        """
        proxy_address = validate_address(proxy_address, "proxy")
        proxy = proxy or AtonomiProxyContract()
        call = proxy.prepare_upgrade(implementation_address)

        logger.info(
            "upgrading proxy %s to %s...", proxy_address, call["args"][0]
        )
        gas_price = gwei_to_wei(gas_price_gwei)
        logger.info("gas price %s", gas_price)

        bound = self.w3.eth.contract(address=proxy_address, abi=proxy.abi)
        data = bound.encode_abi(call["function"], args=list(call["args"]))
        request = TransactionRequest(sender=self.sender, data=data, to=proxy_address)

        return self._estimate_and_submit(
            proxy.CONTRACT_NAME, request, gas_price, estimate_only
        )

    def submit(self, request: TransactionRequest) -> str:
        """Send a fully specified request and return its hex hash."""
        params = request.to_tx_params()
        if self.private_key:
            params["nonce"] = self.w3.eth.get_transaction_count(self.sender, "pending")
            params["chainId"] = self.w3.eth.chain_id
            signed = self.w3.eth.account.sign_transaction(params, self.private_key)
            tx_hash = self.w3.eth.send_raw_transaction(signed.raw_transaction)
        else:
            tx_hash = self.w3.eth.send_transaction(params)
        return Web3.to_hex(tx_hash)

    def wait_for_contract_address(self, tx_hash: str, timeout: int = 120) -> str:
        """
        Block until a creation transaction is mined and return the new address.

        Raises:
            DeploymentError: If the transaction reverted or created no contract
        """
        receipt = self.w3.eth.wait_for_transaction_receipt(tx_hash, timeout=timeout)
        if receipt.get("status") == 0:
            raise DeploymentError(f"Transaction {tx_hash} reverted")
        address = receipt.get("contractAddress")
        if not address:
            raise DeploymentError(f"Transaction {tx_hash} did not create a contract")
        return address

    def _estimate_and_submit(
        self,
        contract_name: str,
        request: TransactionRequest,
        gas_price: int,
        estimate_only: bool,
    ) -> DeploymentResult:
        gas = self.w3.eth.estimate_gas(request.to_tx_params())
        logger.info("gas estimate %s", gas)

        if estimate_only:
            return DeploymentResult(contract_name, gas, gas_price)

        tx_hash = self.submit(request.with_gas(gas, gas_price))
        logger.info("txn hash %s", tx_hash)
        return DeploymentResult(contract_name, gas, gas_price, tx_hash)


def deploy_atonomi_proxy(
    deployer: Deployer,
    gas_price_gwei: Number,
    estimate_only: bool = False,
    proxy: Optional[AtonomiProxyContract] = None,
) -> DeploymentResult:
    """Deploy the AtonomiOwnedUpgradabilityProxy, which takes no constructor arguments."""
    return deployer.deploy(
        proxy or AtonomiProxyContract(), gas_price_gwei, estimate_only=estimate_only
    )
