"""Wrappers for the compiled Atonomi contracts."""
from .atonomi import AtonomiContract
from .base import ContractWrapper
from .proxy import AtonomiProxyContract
from .safe_math import SafeMathLibContract
from .settings import SettingsContract
from .storage import AtonomiEternalStorageContract
from .token import AMLTokenContract

CONTRACT_WRAPPERS = {
    wrapper.CONTRACT_NAME: wrapper
    for wrapper in (
        AtonomiProxyContract,
        SafeMathLibContract,
        AMLTokenContract,
        AtonomiEternalStorageContract,
        SettingsContract,
        AtonomiContract,
    )
}

__all__ = [
    "CONTRACT_WRAPPERS",
    "ContractWrapper",
    "AtonomiContract",
    "AtonomiProxyContract",
    "SafeMathLibContract",
    "SettingsContract",
    "AtonomiEternalStorageContract",
    "AMLTokenContract",
]
