"""
Image reference parsing for registry lookups.
"""

from typing import List

from updates.errors import MalformedReferenceError
from updates.types import DEFAULT_NAMESPACE, RegistryReference


def namespaced(repository: str) -> str:
    """
    Prefix unqualified Docker Hub repositories with the default namespace.

    Examples:
        nginx → library/nginx
        grafana/grafana → grafana/grafana
    """
    if "/" not in repository:
        return f"{DEFAULT_NAMESPACE}/{repository}"
    return repository


def parse_repo_tag(repo_tag: str) -> RegistryReference:
    """
    Parse a repository:tag string into a canonical RegistryReference.

    The repository part is everything before the first colon, the tag is
    the segment after it.

    Args:
        repo_tag: Repository tag as reported in an image's RepoTags (e.g., "nginx:1.25")

    Returns:
        RegistryReference with a namespaced repository

    Raises:
        MalformedReferenceError: If there is no ":" separator or either side is empty

    Examples:
        nginx:1.25 → (library/nginx, 1.25)
        grafana/grafana:10.2.0 → (grafana/grafana, 10.2.0)
    """
    parts = repo_tag.split(":")
    if len(parts) < 2 or not parts[0] or not parts[1]:
        raise MalformedReferenceError(f"Malformed image reference (expected repository:tag): {repo_tag!r}")

    return RegistryReference(repository=namespaced(parts[0]), tag=parts[1])


def normalize_repo_tags(repo_tags: List[str]) -> List[str]:
    """
    Reduce Docker RepoTags to their repository:tag prefix.

    Anything after a second colon is dropped; entries without a tag
    separator are skipped.
    """
    normalized = []
    for tag in repo_tags or []:
        parts = tag.split(":")
        if len(parts) > 1:
            normalized.append(f"{parts[0]}:{parts[1]}")
    return normalized
