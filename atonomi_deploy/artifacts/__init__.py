"""Artifact loading utilities for compiled Atonomi contracts."""
from .loader import get_abi, get_bytecode, load_artifact

__all__ = ["get_abi", "get_bytecode", "load_artifact"]
