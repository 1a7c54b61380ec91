"""
Updates Module

Image update detection for running containers.

Architecture:
- UpdateChecker: Dispatcher that checks all containers concurrently
- RegistryClient: Primary digest resolver (registry token + manifest HEAD)
- FallbackResolver: Daemon-side digest lookup when the registry gives no digest
- is_updatable: Digest comparison rule
"""

from updates.errors import (
    UpdateCheckError,
    RuntimeCollaboratorError,
    RegistryAuthError,
    RegistryQueryError,
    MalformedReferenceError,
)
from updates.fallback_resolver import FallbackResolver
from updates.reference import parse_repo_tag, normalize_repo_tags
from updates.registry_client import RegistryClient
from updates.types import DigestComparison, FailurePolicy, RegistryReference
from updates.update_checker import UpdateChecker
from updates.update_evaluator import is_updatable

__all__ = [
    'UpdateChecker',
    'RegistryClient',
    'FallbackResolver',
    'is_updatable',
    'parse_repo_tag',
    'normalize_repo_tags',
    'DigestComparison',
    'FailurePolicy',
    'RegistryReference',
    'UpdateCheckError',
    'RuntimeCollaboratorError',
    'RegistryAuthError',
    'RegistryQueryError',
    'MalformedReferenceError',
]
