"""Custom exception classes for atonomi-deploy.

Errors raised by the chain client (RPC failures, reverted estimates,
insufficient funds) are not wrapped here; they propagate unchanged.
"""


class DeploymentError(Exception):
    """Base exception for deployment-related errors."""

    pass


class NetworkNotFoundError(DeploymentError, ValueError):
    """Raised when a network has no entry in the address book."""

    pass


class ContractNotFoundError(DeploymentError, ValueError):
    """Raised when a contract name is not a known artifact."""

    pass


class ArtifactNotFoundError(DeploymentError, FileNotFoundError):
    """Raised when a compiled artifact file is missing."""

    pass


class UnlinkedLibraryError(DeploymentError, ValueError):
    """Raised when bytecode still contains library placeholders."""

    def __init__(self, contract_name: str, placeholders):
        self.contract_name = contract_name
        self.placeholders = sorted(placeholders)
        super().__init__(
            f"{contract_name} has unlinked libraries: "
            f"{', '.join(self.placeholders)}. Link before deploy."
        )


class DuplicateAddressError(DeploymentError, ValueError):
    """Raised when two networks share the same deployed address."""

    pass


class MigrationError(DeploymentError):
    """Raised when a migration manifest cannot be executed as declared."""

    pass
