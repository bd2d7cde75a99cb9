"""Unit tests for migration manifests and the runner."""

from pathlib import Path
from unittest.mock import MagicMock

import pytest
from web3 import Web3

from atonomi_deploy.config import DEVELOPMENT_PARAMETERS
from atonomi_deploy.deployer import Deployer
from atonomi_deploy.exceptions import MigrationError
from atonomi_deploy.linking import find_unlinked_libraries
from atonomi_deploy.migrations import (
    DeployStep,
    LinkStep,
    Migration,
    MigrationRunner,
    Ref,
    development_migration,
)
from conftest import SENDER


def _address(n: int) -> str:
    return "0x" + f"{n:040x}"


def _deployed_bytecodes(mock_w3: MagicMock):
    return [
        call.kwargs["bytecode"]
        for call in mock_w3.eth.contract.call_args_list
        if "bytecode" in call.kwargs
    ]


class TestDevelopmentManifest:
    """Test the declared development migration."""

    def test_declared_order(self):
        steps = development_migration().steps
        assert [step.describe() for step in steps] == [
            "deploy SafeMathLib",
            "link SafeMathLib -> AMLToken",
            "deploy AMLToken",
            "deploy AtonomiEternalStorage",
            "deploy Settings",
            "deploy Atonomi",
        ]

    def test_only_development(self):
        migration = development_migration()
        assert migration.applies_to("development")
        assert not migration.applies_to("mainnet")
        assert not migration.applies_to("kovan")

    def test_token_arguments(self):
        token_step = development_migration().steps[2]
        assert token_step.args == (
            "Atonomi Token", "ATMI", 1000000000000000000000000000, 18, False
        )

    def test_settings_and_atonomi_reference_earlier_steps(self):
        steps = development_migration().steps
        storage = Ref("AtonomiEternalStorage")
        assert steps[4].args == (
            storage,
            DEVELOPMENT_PARAMETERS.reg_fee,
            DEVELOPMENT_PARAMETERS.act_fee,
            DEVELOPMENT_PARAMETERS.rep_reward,
            20,
            5760,
        )
        assert steps[5].args == (storage, Ref("AMLToken"), Ref("Settings"))


class TestMigrationRunner:
    """Test sequential execution against a mocked chain client."""

    def test_runs_in_declared_order(self, artifacts_dir: Path, mock_w3: MagicMock):
        runner = MigrationRunner(Deployer(mock_w3, SENDER), 1)

        record = runner.run(development_migration(), "development")

        assert [description for description, _ in record.entries] == [
            "deploy SafeMathLib",
            "link SafeMathLib -> AMLToken",
            "deploy AMLToken",
            "deploy AtonomiEternalStorage",
            "deploy Settings",
            "deploy Atonomi",
        ]
        assert record.addresses == {
            "SafeMathLib": _address(1),
            "AMLToken": _address(2),
            "AtonomiEternalStorage": _address(3),
            "Settings": _address(4),
            "Atonomi": _address(5),
        }
        assert mock_w3.eth.send_transaction.call_count == 5

    def test_bytecode_deployed_in_order_and_linked(
        self, artifacts_dir: Path, mock_w3: MagicMock
    ):
        runner = MigrationRunner(Deployer(mock_w3, SENDER), 1)
        runner.run(development_migration(), "development")

        bytecodes = _deployed_bytecodes(mock_w3)
        assert bytecodes[0] == "0x60806040526001"
        assert bytecodes[2] == "0x60806040526002"
        assert bytecodes[3] == "0x60806040526003"
        assert bytecodes[4] == "0x60806040526004"

        token_bytecode = bytecodes[1]
        assert find_unlinked_libraries(token_bytecode) == set()
        assert _address(1)[2:] in token_bytecode

    def test_resolves_references(self, artifacts_dir: Path, mock_w3: MagicMock):
        runner = MigrationRunner(Deployer(mock_w3, SENDER), 1)
        runner.run(development_migration(), "development")

        constructor = mock_w3.eth.contract.return_value.constructor
        settings_args = constructor.call_args_list[3][0]
        atonomi_args = constructor.call_args_list[4][0]
        assert settings_args[0] == Web3.to_checksum_address(_address(3))
        assert list(atonomi_args) == [
            Web3.to_checksum_address(_address(n)) for n in (3, 2, 4)
        ]

    def test_mainnet_does_nothing(self, mock_w3: MagicMock):
        runner = MigrationRunner(Deployer(mock_w3, SENDER), 1)

        record = runner.run(development_migration(), "mainnet")

        assert record.skipped
        assert record.addresses == {}
        mock_w3.eth.contract.assert_not_called()
        mock_w3.eth.estimate_gas.assert_not_called()
        mock_w3.eth.send_transaction.assert_not_called()

    def test_halts_on_first_failure(self, artifacts_dir: Path, mock_w3: MagicMock):
        mock_w3.eth.send_transaction.side_effect = [
            bytes.fromhex("01" * 32),
            bytes.fromhex("02" * 32),
            RuntimeError("nonce too low"),
        ]
        runner = MigrationRunner(Deployer(mock_w3, SENDER), 1)

        with pytest.raises(RuntimeError, match="nonce too low"):
            runner.run(development_migration(), "development")

        # SafeMathLib, AMLToken sent; storage failed; nothing after it
        assert mock_w3.eth.send_transaction.call_count == 3
        assert mock_w3.eth.wait_for_transaction_receipt.call_count == 2

    def test_reference_before_deploy(self, artifacts_dir: Path, mock_w3: MagicMock):
        migration = Migration(
            name="broken",
            networks=("development",),
            steps=(DeployStep("Atonomi", (Ref("A"), Ref("B"), Ref("C"))),),
        )
        runner = MigrationRunner(Deployer(mock_w3, SENDER), 1)

        with pytest.raises(MigrationError):
            runner.run(migration, "development")
        mock_w3.eth.send_transaction.assert_not_called()

    def test_link_before_library_deployed(self, artifacts_dir: Path, mock_w3: MagicMock):
        migration = Migration(
            name="broken",
            networks=("development",),
            steps=(LinkStep("SafeMathLib", "AMLToken"),),
        )
        runner = MigrationRunner(Deployer(mock_w3, SENDER), 1)

        with pytest.raises(MigrationError):
            runner.run(migration, "development")

    def test_uses_supplied_gas_price(self, artifacts_dir: Path, mock_w3: MagicMock):
        runner = MigrationRunner(Deployer(mock_w3, SENDER), 3)
        runner.run(development_migration(), "development")

        for call in mock_w3.eth.send_transaction.call_args_list:
            assert call[0][0]["gasPrice"] == 3 * 10 ** 9
