"""AtonomiEternalStorage wrapper."""

from .base import ContractWrapper


class AtonomiEternalStorageContract(ContractWrapper):
    """
    Key/value storage shared by the settings and the Atonomi contract.

    Deployed without constructor arguments; its address is passed to the
    contracts that read and write it.
    """

    CONTRACT_NAME = "AtonomiEternalStorage"
