"""
Shared types for update detection.

This module contains the dataclasses and enums used by the reference
parser, the digest resolvers and the UpdateChecker dispatcher.
"""

from dataclasses import dataclass
from enum import Enum


# Default namespace for unqualified Docker Hub repositories
DEFAULT_NAMESPACE = "library"


class FailurePolicy(Enum):
    """How the dispatcher reacts when one container's check fails."""
    # Mark only the failing record as unknown, keep the rest of the batch
    ISOLATE = "isolate"
    # Cancel the remaining checks and fail the whole batch
    ABORT = "abort"


class DigestComparison(Enum):
    """Rule used to turn a resolved digest into an updatable verdict."""
    # Updatable when any known digest differs from the latest one
    ANY_MISMATCH = "any"
    # Only the last known digest decides (legacy behaviour)
    LAST_WRITE = "last"


@dataclass(frozen=True)
class RegistryReference:
    """
    Canonical (repository, tag) pair for a registry lookup.

    The repository always carries a namespace, e.g. "library/nginx".
    """
    repository: str
    tag: str

    def __str__(self) -> str:
        return f"{self.repository}:{self.tag}"
