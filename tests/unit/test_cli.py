"""Unit tests for the atonomi-deploy command line."""

import json
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from atonomi_deploy import cli
from conftest import IMPLEMENTATION_ADDRESS, PROXY_ADDRESS, SENDER


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch):
    """Keep .env files and the caller's environment out of the tests."""
    monkeypatch.setattr(cli, "load_dotenv", lambda: None)
    for name in (
        "ETHER_ADDR",
        "ATONOMI_PRIVATE_KEY",
        "ATONOMI_NETWORK",
        "ATONOMI_GAS_PRICE_GWEI",
        "ATONOMI_RECEIPT_TIMEOUT",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def connected(monkeypatch, mock_w3: MagicMock) -> MagicMock:
    monkeypatch.setattr(cli, "connect", lambda settings: mock_w3)
    return mock_w3


class TestAddresses:
    def test_prints_book(self, capsys):
        assert cli.main(["addresses"]) == 0
        book = json.loads(capsys.readouterr().out)
        assert set(book) == {"mainnet", "kovan"}

    def test_single_network(self, capsys):
        assert cli.main(["addresses", "--network", "kovan"]) == 0
        book = json.loads(capsys.readouterr().out)
        assert book["kovan"]["token"] == "0xe66254d9560c2d030ca5c3439c5d6b58061dd6f7"

    def test_unknown_network(self):
        assert cli.main(["addresses", "--network", "ropsten"]) == 1

    def test_check_addresses(self):
        assert cli.main(["check-addresses"]) == 0

    def test_invalid_receipt_timeout(self, monkeypatch):
        monkeypatch.setenv("ATONOMI_RECEIPT_TIMEOUT", "soon")
        assert cli.main(["addresses"]) == 1


class TestDeployProxy:
    def test_estimate_only(self, artifacts_dir: Path, connected: MagicMock, capsys):
        code = cli.main(["--sender", SENDER, "deploy-proxy", "--gas-price", "5", "--estimate-only"])

        assert code == 0
        connected.eth.send_transaction.assert_not_called()
        assert "gas estimate 1234567" in capsys.readouterr().out

    def test_submits(self, artifacts_dir: Path, connected: MagicMock, capsys):
        code = cli.main(["--sender", SENDER, "deploy-proxy", "--gas-price", "5"])

        assert code == 0
        connected.eth.send_transaction.assert_called_once()
        assert "txn hash 0x" in capsys.readouterr().out

    def test_sender_from_env(self, artifacts_dir: Path, connected: MagicMock, monkeypatch):
        monkeypatch.setenv("ETHER_ADDR", SENDER)
        assert cli.main(["deploy-proxy", "--estimate-only"]) == 0

    def test_missing_sender(self, artifacts_dir: Path, connected: MagicMock):
        assert cli.main(["deploy-proxy", "--estimate-only"]) == 1
        connected.eth.estimate_gas.assert_not_called()

    def test_fractional_gas_price(self, artifacts_dir: Path, connected: MagicMock, capsys):
        code = cli.main(["--sender", SENDER, "deploy-proxy", "--gas-price", "0.5", "--estimate-only"])

        assert code == 0
        assert "@ 500000000 wei" in capsys.readouterr().out

    @pytest.mark.parametrize("gas_price", ["abc", "-1", "NaN"])
    def test_invalid_gas_price(self, connected: MagicMock, capsys, gas_price):
        with pytest.raises(SystemExit) as exc_info:
            cli.main(["--sender", SENDER, "deploy-proxy", "--gas-price", gas_price])

        assert exc_info.value.code == 2
        assert "gas price" in capsys.readouterr().err
        connected.eth.estimate_gas.assert_not_called()

    def test_invalid_gas_price_from_env(self, connected: MagicMock, monkeypatch):
        monkeypatch.setenv("ATONOMI_GAS_PRICE_GWEI", "cheap")
        with pytest.raises(SystemExit) as exc_info:
            cli.main(["--sender", SENDER, "migrate"])

        assert exc_info.value.code == 2
        connected.eth.send_transaction.assert_not_called()


class TestUpgrade:
    def test_upgrade_by_address(self, artifacts_dir: Path, connected: MagicMock):
        code = cli.main([
            "--sender", SENDER, "upgrade",
            "--proxy", PROXY_ADDRESS,
            "--implementation", IMPLEMENTATION_ADDRESS,
            "--estimate-only",
        ])

        assert code == 0
        connected.eth.send_transaction.assert_not_called()

    def test_network_without_proxy(self, artifacts_dir: Path, connected: MagicMock):
        code = cli.main([
            "--sender", SENDER, "upgrade",
            "--network", "mainnet",
            "--implementation", IMPLEMENTATION_ADDRESS,
        ])

        assert code == 1
        connected.eth.contract.assert_not_called()


class TestMigrate:
    def test_development(self, artifacts_dir: Path, connected: MagicMock, capsys):
        code = cli.main(["--sender", SENDER, "migrate", "--network", "development"])

        assert code == 0
        assert connected.eth.send_transaction.call_count == 5
        assert "deploy Atonomi:" in capsys.readouterr().out

    def test_mainnet_skipped(self, artifacts_dir: Path, connected: MagicMock, capsys):
        code = cli.main(["--sender", SENDER, "migrate", "--network", "mainnet"])

        assert code == 0
        connected.eth.send_transaction.assert_not_called()
        assert "Nothing to do" in capsys.readouterr().out
