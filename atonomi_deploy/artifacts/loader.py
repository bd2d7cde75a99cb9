"""
Artifact loader for compiled Atonomi contracts.

This module provides functions to load ABI, bytecode, and other metadata
from the Truffle-compiled contract artifacts (``build/contracts/*.json``).
"""

import json
import os
from pathlib import Path
from typing import Dict, Any, Optional

from web3 import Web3

from ..exceptions import ArtifactNotFoundError, ContractNotFoundError

# Get the package root directory
PACKAGE_DIR = Path(__file__).parent.parent
# Artifacts are copied during package build to this location
ARTIFACTS_DIR = PACKAGE_DIR / "data" / "artifacts"

# Fallback to development path if artifacts not in package
if not ARTIFACTS_DIR.exists():
    # Development mode: use the truffle build directory
    PROJECT_ROOT = PACKAGE_DIR.parent
    ARTIFACTS_DIR = PROJECT_ROOT / "build" / "contracts"

ARTIFACTS_DIR_ENV = "ATONOMI_ARTIFACTS_DIR"

# Contract name mappings
CONTRACT_PATHS = {
    "AtonomiOwnedUpgradabilityProxy": "AtonomiOwnedUpgradabilityProxy.json",
    "SafeMathLib": "SafeMathLib.json",
    "AMLToken": "AMLToken.json",
    "AtonomiEternalStorage": "AtonomiEternalStorage.json",
    "Settings": "Settings.json",
    "Atonomi": "Atonomi.json",
}


def get_artifacts_dir() -> Path:
    """Return the artifacts directory, honouring ``ATONOMI_ARTIFACTS_DIR``."""
    override = os.environ.get(ARTIFACTS_DIR_ENV)
    if override:
        return Path(override)
    return ARTIFACTS_DIR


def load_artifact(contract_name: str) -> Dict[str, Any]:
    """
    Load the complete artifact JSON for a contract.

    Args:
        contract_name: Name of the contract (e.g., 'Atonomi', 'AMLToken')

    Returns:
        Complete artifact dictionary including ABI, bytecode, and metadata

    Raises:
        ArtifactNotFoundError: If the artifact file doesn't exist
        ContractNotFoundError: If the contract name is not recognized
    """
    if contract_name not in CONTRACT_PATHS:
        available = ", ".join(CONTRACT_PATHS.keys())
        raise ContractNotFoundError(
            f"Unknown contract: {contract_name}. "
            f"Available contracts: {available}"
        )

    artifact_path = get_artifacts_dir() / CONTRACT_PATHS[contract_name]

    if not artifact_path.exists():
        raise ArtifactNotFoundError(
            f"Artifact file not found: {artifact_path}\n"
            f"Make sure the contracts have been compiled with 'truffle compile'"
        )

    with open(artifact_path, 'r') as f:
        return json.load(f)


def get_abi(contract_name: str) -> list:
    """
    Get the ABI for a specific contract.

    Args:
        contract_name: Name of the contract

    Returns:
        Contract ABI as a list
    """
    artifact = load_artifact(contract_name)
    return artifact.get('abi', [])


def get_bytecode(contract_name: str) -> str:
    """
    Get the deployment bytecode for a specific contract.

    Args:
        contract_name: Name of the contract

    Returns:
        Bytecode as a hex string (with '0x' prefix)
    """
    artifact = load_artifact(contract_name)
    return artifact.get('bytecode', '0x')


def get_deployed_bytecode(contract_name: str) -> str:
    """Get the runtime bytecode for a specific contract."""
    artifact = load_artifact(contract_name)
    return artifact.get('deployedBytecode', '0x')


def get_contract_metadata(contract_name: str) -> Dict[str, Any]:
    """
    Get metadata about the contract compilation.

    Args:
        contract_name: Name of the contract

    Returns:
        Dictionary containing compiler version, source path, networks, etc.
    """
    artifact = load_artifact(contract_name)

    return {
        'contractName': artifact.get('contractName'),
        'sourcePath': artifact.get('sourcePath'),
        'compiler': artifact.get('compiler'),
        'networks': artifact.get('networks', {}),
        'schemaVersion': artifact.get('schemaVersion'),
        'updatedAt': artifact.get('updatedAt'),
    }


def get_network_address(contract_name: str, network_id: int) -> Optional[str]:
    """
    Get the address truffle recorded for a contract on a network.

    Args:
        contract_name: Name of the contract
        network_id: Numeric network id (e.g., 1 for mainnet, 42 for kovan)

    Returns:
        The recorded address, or None if the contract was never migrated there
    """
    networks = load_artifact(contract_name).get('networks', {})
    entry = networks.get(str(network_id))
    if not entry:
        return None
    return entry.get('address')


def get_function_selector(contract_name: str, function_name: str) -> Optional[str]:
    """
    Get the function selector (4-byte signature) for a specific function.

    Args:
        contract_name: Name of the contract
        function_name: Name of the function

    Returns:
        Function selector as a hex string with '0x' prefix, or None if not found
    """
    abi = get_abi(contract_name)

    for item in abi:
        if item.get('type') == 'function' and item.get('name') == function_name:
            inputs = ','.join([inp['type'] for inp in item.get('inputs', [])])
            signature = f"{function_name}({inputs})"
            return Web3.to_hex(Web3.keccak(text=signature)[:4])

    return None


def list_available_contracts() -> list:
    """
    List all available contracts in the package.

    Returns:
        List of contract names
    """
    return list(CONTRACT_PATHS.keys())


def validate_artifacts() -> Dict[str, bool]:
    """
    Validate that all expected artifacts are present.

    Returns:
        Dictionary mapping contract names to availability status
    """
    status = {}
    for contract_name in CONTRACT_PATHS:
        try:
            load_artifact(contract_name)
            status[contract_name] = True
        except (ArtifactNotFoundError, ContractNotFoundError, json.JSONDecodeError):
            status[contract_name] = False

    return status
