"""Command line front end: ``atonomi-deploy``."""

import argparse
import json
import logging
import sys
from decimal import Decimal, InvalidOperation
from typing import Optional, Sequence

from dotenv import load_dotenv

from .config import (
    CHAINS,
    ClientSettings,
    connect,
    find_duplicate_addresses,
    get_network_addresses,
)
from .deployer import Deployer, DeploymentResult, deploy_atonomi_proxy
from .exceptions import DeploymentError
from .migrations import MigrationRunner, development_migration

logger = logging.getLogger(__name__)


def _gas_price(value: str) -> Decimal:
    try:
        price = Decimal(value)
    except InvalidOperation:
        raise argparse.ArgumentTypeError(f"invalid gas price: {value!r}")
    if not price.is_finite() or price < 0:
        raise argparse.ArgumentTypeError(f"gas price must be a non-negative number: {value!r}")
    return price


def _build_parser(settings: ClientSettings) -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="atonomi-deploy",
        description="Deploy and upgrade the Atonomi contracts.",
    )
    p.add_argument("--rpc", default=settings.rpc_url, help="RPC URL (default: ATONOMI_RPC_URL)")
    p.add_argument("--sender", default=settings.sender, help="Sender address (default: ETHER_ADDR)")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = p.add_subparsers(dest="command", required=True)

    deploy = sub.add_parser("deploy-proxy", help="Deploy AtonomiOwnedUpgradabilityProxy")
    deploy.add_argument(
        "--gas-price", type=_gas_price, default=settings.gas_price_gwei, help="Gas price in gwei"
    )
    deploy.add_argument("--estimate-only", action="store_true", help="Only estimate gas")

    upgrade = sub.add_parser("upgrade", help="Point a proxy at a new implementation")
    target = upgrade.add_mutually_exclusive_group(required=True)
    target.add_argument("--proxy", help="Proxy address")
    target.add_argument("--network", help="Take the proxy address from the address book")
    upgrade.add_argument("--implementation", required=True, help="New implementation address")
    upgrade.add_argument(
        "--gas-price", type=_gas_price, default=settings.gas_price_gwei, help="Gas price in gwei"
    )
    upgrade.add_argument("--estimate-only", action="store_true", help="Only estimate gas")

    migrate = sub.add_parser("migrate", help="Run the development migration")
    migrate.add_argument("--network", default=settings.network, help="Target network name")
    migrate.add_argument(
        "--gas-price", type=_gas_price, default=settings.gas_price_gwei, help="Gas price in gwei"
    )

    addresses = sub.add_parser("addresses", help="Print the deployed address book")
    addresses.add_argument("--network", help="Only this network")

    sub.add_parser("check-addresses", help="Fail if two networks share an address")
    return p


def _print_result(result: DeploymentResult) -> None:
    print(f"{result.contract_name}: gas estimate {result.gas_estimate} @ {result.gas_price} wei")
    if result.submitted:
        print(f"txn hash {result.tx_hash}")


def _deployer(args, settings: ClientSettings) -> Deployer:
    settings.rpc_url = args.rpc
    settings.sender = args.sender
    settings.validate()
    return Deployer(connect(settings), settings.sender, settings.private_key)


def main(argv: Optional[Sequence[str]] = None) -> int:
    load_dotenv()
    try:
        settings = ClientSettings.from_env()
    except ValueError as e:
        logger.error("Invalid environment: %s", e)
        return 1

    args = _build_parser(settings).parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.command == "addresses":
            if args.network:
                book = {args.network: get_network_addresses(args.network).as_dict()}
            else:
                book = {name: entry.as_dict() for name, entry in CHAINS.items()}
            print(json.dumps(book, indent=2))

        elif args.command == "check-addresses":
            duplicates = find_duplicate_addresses()
            for address, networks in duplicates:
                print(f"{address} shared by {', '.join(networks)}")
            return 1 if duplicates else 0

        elif args.command == "deploy-proxy":
            deployer = _deployer(args, settings)
            _print_result(deploy_atonomi_proxy(deployer, args.gas_price, args.estimate_only))

        elif args.command == "upgrade":
            proxy_address = args.proxy
            if args.network:
                proxy_address = get_network_addresses(args.network).proxy
                if not proxy_address:
                    raise DeploymentError(
                        f"No proxy address recorded for network '{args.network}'"
                    )
            deployer = _deployer(args, settings)
            _print_result(deployer.upgrade(
                proxy_address, args.implementation, args.gas_price, args.estimate_only
            ))

        elif args.command == "migrate":
            deployer = _deployer(args, settings)
            runner = MigrationRunner(
                deployer, args.gas_price, receipt_timeout=settings.receipt_timeout
            )
            record = runner.run(development_migration(), args.network)
            if record.skipped:
                print(f"Nothing to do on network '{args.network}'")
            for description, result in record.entries:
                print(f"{description}: {result}")

    except (DeploymentError, ValueError) as e:
        logger.error("%s", e)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
