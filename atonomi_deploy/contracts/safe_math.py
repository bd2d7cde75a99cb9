"""SafeMathLib library wrapper."""

from .base import ContractWrapper


class SafeMathLibContract(ContractWrapper):
    """Arithmetic library linked into the token before it is deployed."""

    CONTRACT_NAME = "SafeMathLib"
