"""
Error types raised while checking containers for image updates.

Every failure below the dispatcher is raised as an UpdateCheckError
subclass. The UpdateChecker decides, based on its FailurePolicy, whether
a failure marks a single record as unknown or aborts the whole batch.
"""


class UpdateCheckError(Exception):
    """Base class for all update check failures."""


class RuntimeCollaboratorError(UpdateCheckError):
    """Container list or image inspect against the Docker daemon failed."""


class RegistryAuthError(UpdateCheckError):
    """Token endpoint unreachable, returned non-200 or a malformed body."""

    def __init__(self, message: str, status: int = None):
        super().__init__(message)
        self.status = status


class RegistryQueryError(UpdateCheckError):
    """Manifest query or fallback digest lookup failed at transport level."""


class MalformedReferenceError(UpdateCheckError):
    """Repository tag is missing or lacks the repository:tag separator."""
