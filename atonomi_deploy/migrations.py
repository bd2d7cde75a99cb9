"""
Migration manifests and the runner that executes them.

A migration is an ordered list of steps. Deploy steps may refer to the
address produced by an earlier step through :class:`Ref`; link steps patch a
deployed library into a later contract's bytecode. The runner executes the
steps one after another, waits for each deployment to be mined so later steps
can use its address, and stops at the first failure. Transactions sent before
a failure stay on chain.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Union

from .config import DEVELOPMENT_PARAMETERS, DeploymentParameters, Number
from .contracts import CONTRACT_WRAPPERS
from .contracts.base import ContractWrapper
from .deployer import Deployer
from .exceptions import ContractNotFoundError, MigrationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Ref:
    """Placeholder for the address of a contract deployed by an earlier step."""

    contract_name: str


@dataclass(frozen=True)
class DeployStep:
    contract_name: str
    args: Tuple[Any, ...] = ()

    def describe(self) -> str:
        return f"deploy {self.contract_name}"


@dataclass(frozen=True)
class LinkStep:
    library_name: str
    target_name: str
    source_name: Optional[str] = None

    def describe(self) -> str:
        return f"link {self.library_name} -> {self.target_name}"


Step = Union[DeployStep, LinkStep]


@dataclass(frozen=True)
class Migration:
    """An ordered deployment script guarded to a set of networks."""

    name: str
    networks: Tuple[str, ...]
    steps: Tuple[Step, ...]

    def applies_to(self, network: str) -> bool:
        return network in self.networks


@dataclass
class MigrationRecord:
    """What a run did: one ``(description, result)`` entry per completed step."""

    migration: str
    network: str
    entries: List[Tuple[str, str]] = field(default_factory=list)
    addresses: Dict[str, str] = field(default_factory=dict)

    @property
    def skipped(self) -> bool:
        return not self.entries


def development_migration(
    params: DeploymentParameters = DEVELOPMENT_PARAMETERS,
) -> Migration:
    """Full Atonomi stack for a local development chain."""
    storage = Ref("AtonomiEternalStorage")
    return Migration(
        name="2_deploy_dev",
        networks=("development",),
        steps=(
            DeployStep("SafeMathLib"),
            # ERC20 token
            LinkStep("SafeMathLib", "AMLToken"),
            DeployStep("AMLToken", tuple(params.token_constructor_args())),
            # storage
            DeployStep("AtonomiEternalStorage"),
            # network settings
            DeployStep("Settings", tuple(params.settings_constructor_args(storage))),
            # atonomi
            DeployStep(
                "Atonomi",
                (storage, Ref("AMLToken"), Ref("Settings")),
            ),
        ),
    )


class MigrationRunner:
    """Executes a migration step by step against one deployer."""

    def __init__(
        self,
        deployer: Deployer,
        gas_price_gwei: Number,
        contracts: Optional[Dict[str, ContractWrapper]] = None,
        receipt_timeout: int = 120,
    ):
        self.deployer = deployer
        self.gas_price_gwei = gas_price_gwei
        self.contracts: Dict[str, ContractWrapper] = dict(contracts or {})
        self.receipt_timeout = receipt_timeout

    def contract(self, name: str) -> ContractWrapper:
        if name not in self.contracts:
            if name not in CONTRACT_WRAPPERS:
                raise ContractNotFoundError(f"No wrapper for contract: {name}")
            self.contracts[name] = CONTRACT_WRAPPERS[name]()
        return self.contracts[name]

    def run(self, migration: Migration, network: str) -> MigrationRecord:
        """
        Execute every step of ``migration`` on ``network``, in order.

        Networks outside the migration's guard are skipped without touching
        the chain. The first failing step stops the run and its exception
        propagates.
        """
        record = MigrationRecord(migration.name, network)
        if not migration.applies_to(network):
            logger.info(
                "skipping migration %s on network %s (runs on %s)",
                migration.name, network, ", ".join(migration.networks),
            )
            return record

        logger.info("running migration %s on %s", migration.name, network)
        for index, step in enumerate(migration.steps, start=1):
            try:
                result = self._execute(step, record)
            except Exception:
                logger.error(
                    "migration %s halted at step %d (%s)",
                    migration.name, index, step.describe(),
                )
                raise
            record.entries.append((step.describe(), result))

        return record

    def _execute(self, step: Step, record: MigrationRecord) -> str:
        if isinstance(step, LinkStep):
            library_address = self._resolve(Ref(step.library_name), record)
            self.contract(step.target_name).link(
                step.library_name, library_address, step.source_name
            )
            return library_address

        contract = self.contract(step.contract_name)
        args = [self._resolve(arg, record) for arg in step.args]
        result = self.deployer.deploy(contract, self.gas_price_gwei, constructor_args=args)
        address = self.deployer.wait_for_contract_address(
            result.tx_hash, timeout=self.receipt_timeout
        )
        logger.info("%s: %s", step.contract_name, address)
        record.addresses[step.contract_name] = address
        return address

    @staticmethod
    def _resolve(arg: Any, record: MigrationRecord) -> Any:
        if not isinstance(arg, Ref):
            return arg
        if arg.contract_name not in record.addresses:
            raise MigrationError(
                f"{arg.contract_name} must be deployed before it is referenced"
            )
        return record.addresses[arg.contract_name]

