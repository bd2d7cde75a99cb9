"""Library linking for contract bytecode.

Bytecode that calls an external library carries a 40 character placeholder
where the library address goes. Truffle emits ``__Name_____...`` placeholders,
newer solc emits ``__$<34 hex chars of keccak(source:Name)>$__``.
"""

import logging
import re
from typing import Optional, Set

from web3 import Web3

logger = logging.getLogger(__name__)

PLACEHOLDER_LENGTH = 40
PLACEHOLDER_RE = re.compile(r"__.{%d}" % (PLACEHOLDER_LENGTH - 2))


def legacy_placeholder(library_name: str) -> str:
    """Truffle style placeholder for a library name."""
    return ("__" + library_name[:36]).ljust(PLACEHOLDER_LENGTH, "_")


def hashed_placeholder(fully_qualified_name: str) -> str:
    """solc >= 0.5 placeholder for ``path/to/Source.sol:Name``."""
    digest = Web3.keccak(text=fully_qualified_name).hex()
    if digest.startswith("0x"):
        digest = digest[2:]
    return "__$" + digest[:34] + "$__"


def find_unlinked_libraries(bytecode: Optional[str]) -> Set[str]:
    """Return the set of placeholders still present in the bytecode."""
    if not bytecode:
        return set()
    return set(PLACEHOLDER_RE.findall(bytecode))


def link_bytecode(
    bytecode: str,
    library_name: str,
    address: str,
    source_name: Optional[str] = None,
) -> str:
    """
    Substitute a library address into bytecode.

    Args:
        bytecode: Hex bytecode, with or without '0x' prefix
        library_name: Library contract name (e.g., 'SafeMathLib')
        address: Deployed library address
        source_name: Source path used for solc's hashed placeholder

    Returns:
        Bytecode with every placeholder for the library replaced. Bytecode
        that does not reference the library is returned unchanged.
    """
    if not Web3.is_address(address):
        raise ValueError(f"Invalid library address: {address}")

    replacement = address.lower()[2:] if address.startswith("0x") else address.lower()

    placeholders = [legacy_placeholder(library_name)]
    if source_name:
        placeholders.append(hashed_placeholder(f"{source_name}:{library_name}"))

    linked = bytecode
    for placeholder in placeholders:
        linked = linked.replace(placeholder, replacement)

    if linked == bytecode:
        logger.debug("bytecode does not reference %s, nothing to link", library_name)
    return linked
