#!/usr/bin/env python3
"""Validate that all artifacts are loadable and the address book is sane"""

import sys
from pathlib import Path

# Add parent directory to path so we can import the package
sys.path.insert(0, str(Path(__file__).parent.parent))

from atonomi_deploy.artifacts.loader import (
    load_artifact,
    list_available_contracts,
)
from atonomi_deploy.config import find_duplicate_addresses
from atonomi_deploy.exceptions import DeploymentError
from atonomi_deploy.linking import find_unlinked_libraries

# Contracts whose bytecode is expected to reference a library
LINKED_CONTRACTS = {"AMLToken"}


def validate():
    """Validate that all exposed contracts are loadable"""
    print("Validating package...")

    contracts = list_available_contracts()
    print(f"\nFound {len(contracts)} exposed contracts:")

    all_valid = True
    for name in contracts:
        try:
            artifact = load_artifact(name)
        except DeploymentError as e:
            print(f"  ❌ {name}: {e}")
            all_valid = False
            continue

        abi = artifact.get("abi", [])
        bytecode = artifact.get("bytecode", "")
        placeholders = find_unlinked_libraries(bytecode)

        if not abi:
            print(f"  ⚠️  {name}: No ABI found")
            all_valid = False
        elif not bytecode or bytecode == "0x":
            print(f"  ⚠️  {name}: No bytecode found")
            all_valid = False
        elif placeholders and name not in LINKED_CONTRACTS:
            print(f"  ⚠️  {name}: unexpected library placeholders {sorted(placeholders)}")
            all_valid = False
        else:
            print(
                f"  ✅ {name}: {len(abi)} ABI items, {len(bytecode)} bytecode chars"
            )

    duplicates = find_duplicate_addresses()
    for address, networks in duplicates:
        print(f"  ❌ address book: {address} shared by {', '.join(networks)}")
        all_valid = False

    print()
    if all_valid:
        print("✅ All contracts valid!")
        return 0
    else:
        print("❌ Some contracts failed validation")
        return 1


if __name__ == "__main__":
    sys.exit(validate())
