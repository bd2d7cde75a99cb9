"""Shared pytest fixtures for atonomi-deploy tests."""

import json
from pathlib import Path
from typing import Any, Dict
from unittest.mock import MagicMock

import pytest

from atonomi_deploy.linking import legacy_placeholder

SENDER = "0x90f8bf6a479f320ead074411a4b0e7944ea8c9c1"
PROXY_ADDRESS = "0xbde8f51601e552d620c208049c5970f7b52cd044"
IMPLEMENTATION_ADDRESS = "0x5b1869d9a4c187f2eaa108f3062412ecf0526b24"
TX_HASH = bytes.fromhex("ab" * 32)


def _constructor(*types: str) -> Dict[str, Any]:
    return {
        "type": "constructor",
        "inputs": [{"name": f"_arg{i}", "type": t} for i, t in enumerate(types)],
        "stateMutability": "nonpayable",
    }


def _function(name: str, *types: str) -> Dict[str, Any]:
    return {
        "type": "function",
        "name": name,
        "inputs": [{"name": f"_arg{i}", "type": t} for i, t in enumerate(types)],
        "outputs": [],
        "stateMutability": "nonpayable",
    }


ARTIFACTS = {
    "AtonomiOwnedUpgradabilityProxy": {
        "abi": [
            _constructor(),
            _function("upgradeTo", "address"),
            _function("transferProxyOwnership", "address"),
        ],
        "bytecode": "0x6080604052600a",
    },
    "SafeMathLib": {
        "abi": [_function("times", "uint256", "uint256")],
        "bytecode": "0x60806040526001",
    },
    "AMLToken": {
        "abi": [
            _constructor("string", "string", "uint256", "uint8", "bool"),
            _function("transfer", "address", "uint256"),
            _function("approve", "address", "uint256"),
        ],
        "bytecode": "0x6080" + legacy_placeholder("SafeMathLib") + "6000",
    },
    "AtonomiEternalStorage": {
        "abi": [_constructor()],
        "bytecode": "0x60806040526002",
    },
    "Settings": {
        "abi": [_constructor("address", "uint256", "uint256", "uint256", "uint256", "uint256")],
        "bytecode": "0x60806040526003",
    },
    "Atonomi": {
        "abi": [_constructor("address", "address", "address")],
        "bytecode": "0x60806040526004",
        "networks": {
            "42": {"address": "0xbde8f51601e552d620c208049c5970f7b52cd044"},
        },
    },
}


@pytest.fixture
def artifacts_dir(tmp_path: Path, monkeypatch) -> Path:
    """Write truffle-style artifacts to a temp dir and point the loader at it."""
    build_dir = tmp_path / "build" / "contracts"
    build_dir.mkdir(parents=True)
    for name, body in ARTIFACTS.items():
        artifact = {"contractName": name, "schemaVersion": "2.0.1", **body}
        with open(build_dir / f"{name}.json", "w") as f:
            json.dump(artifact, f, indent=2)

    monkeypatch.setenv("ATONOMI_ARTIFACTS_DIR", str(build_dir))
    return build_dir


@pytest.fixture
def mock_w3() -> MagicMock:
    """Chain client double: fixed estimates, hashes and fresh contract addresses."""
    w3 = MagicMock()
    w3.eth.estimate_gas.return_value = 1234567
    w3.eth.send_transaction.return_value = TX_HASH
    w3.eth.send_raw_transaction.return_value = TX_HASH
    w3.eth.get_transaction_count.return_value = 7
    w3.eth.chain_id = 1337
    w3.eth.contract.return_value.constructor.return_value.data_in_transaction = "0x6080"
    w3.eth.contract.return_value.encode_abi.return_value = "0x3659cfe6"

    counter = iter(range(1, 100))

    def receipt(tx_hash, timeout=120):
        return {"status": 1, "contractAddress": "0x" + f"{next(counter):040x}"}

    w3.eth.wait_for_transaction_receipt.side_effect = receipt
    return w3
