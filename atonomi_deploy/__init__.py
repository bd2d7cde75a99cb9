"""
Atonomi Deployment Package

Loads compiled Atonomi contract artifacts and publishes them to an Ethereum
network: single contract deployments, proxy upgrades and the ordered
development migration.
"""

__version__ = "2.0.0"
__author__ = "Atonomi"

from .artifacts.loader import (
    get_abi,
    get_bytecode,
    load_artifact,
    get_contract_metadata
)

from .config import (
    CHAINS,
    DEVELOPMENT_PARAMETERS,
    PRODUCTION_PARAMETERS,
    ClientSettings,
    DeploymentParameters,
    NetworkAddresses,
    get_network_addresses,
)
from .contracts import (
    AMLTokenContract,
    AtonomiContract,
    AtonomiEternalStorageContract,
    AtonomiProxyContract,
    SafeMathLibContract,
    SettingsContract,
)
from .deployer import Deployer, DeploymentResult, TransactionRequest, deploy_atonomi_proxy
from .exceptions import (
    ArtifactNotFoundError,
    ContractNotFoundError,
    DeploymentError,
    DuplicateAddressError,
    MigrationError,
    NetworkNotFoundError,
    UnlinkedLibraryError,
)
from .migrations import MigrationRunner, development_migration

__all__ = [
    'get_abi',
    'get_bytecode',
    'load_artifact',
    'get_contract_metadata',
    'CHAINS',
    'DEVELOPMENT_PARAMETERS',
    'PRODUCTION_PARAMETERS',
    'ClientSettings',
    'DeploymentParameters',
    'NetworkAddresses',
    'get_network_addresses',
    'AMLTokenContract',
    'AtonomiContract',
    'AtonomiEternalStorageContract',
    'AtonomiProxyContract',
    'SafeMathLibContract',
    'SettingsContract',
    'Deployer',
    'DeploymentResult',
    'TransactionRequest',
    'deploy_atonomi_proxy',
    'MigrationRunner',
    'development_migration',
    'ArtifactNotFoundError',
    'ContractNotFoundError',
    'DeploymentError',
    'DuplicateAddressError',
    'MigrationError',
    'NetworkNotFoundError',
    'UnlinkedLibraryError',
]
