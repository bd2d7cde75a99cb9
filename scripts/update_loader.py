#!/usr/bin/env python3
"""
Auto-update loader.py CONTRACT_PATHS from the truffle build directory
"""
import json
import re
import sys
from pathlib import Path


BUILD_DIR = Path("build/contracts")
LOADER_FILE = Path("atonomi_deploy/artifacts/loader.py")

# Deployable contracts only; interfaces and test helpers are left out
EXPOSED_CONTRACTS = [
    "AtonomiOwnedUpgradabilityProxy",
    "SafeMathLib",
    "AMLToken",
    "AtonomiEternalStorage",
    "Settings",
    "Atonomi",
]


def discover_contracts(build_dir: Path = BUILD_DIR) -> dict:
    """Map each exposed contract to its artifact file name, if compiled"""
    found = {}
    for name in EXPOSED_CONTRACTS:
        artifact = build_dir / f"{name}.json"
        if not artifact.exists():
            print(f"⚠️  {name}: {artifact} missing, keeping default path")
        else:
            # artifacts are named after contractName, check it matches
            contract_name = json.loads(artifact.read_text()).get("contractName", name)
            if contract_name != name:
                print(f"⚠️  {artifact} holds {contract_name}, not {name}")
        found[name] = f"{name}.json"
    return found


def update_loader(contracts: dict, loader_file: Path = LOADER_FILE) -> bool:
    """Update loader.py with current CONTRACT_PATHS"""
    if not loader_file.exists():
        print(f"❌ Error: {loader_file} not found")
        return False

    content = loader_file.read_text()

    paths_lines = ["CONTRACT_PATHS = {"]
    for name, path in contracts.items():
        paths_lines.append(f'    "{name}": "{path}",')
    paths_lines.append("}")

    new_paths = "\n".join(paths_lines)

    pattern = r"CONTRACT_PATHS = \{[^}]*\}"
    updated_content = re.sub(pattern, new_paths, content, flags=re.DOTALL)

    loader_file.write_text(updated_content)

    print(f"✅ Updated loader.py with {len(contracts)} contracts:")
    for name in contracts:
        print(f"   - {name}")

    return True


if __name__ == "__main__":
    success = update_loader(discover_contracts())
    sys.exit(0 if success else 1)
