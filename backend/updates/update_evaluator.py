"""
Updatability verdict from locally known digests and the latest upstream digest.
"""

from typing import Sequence

from updates.types import DigestComparison


def is_updatable(
    digests: Sequence[str],
    latest_digest: str,
    comparison: DigestComparison = DigestComparison.ANY_MISMATCH,
) -> bool:
    """
    Decide whether a newer image is available.

    Known digests look like "nginx@sha256:abc..." while the latest digest is
    bare ("sha256:abc..."), so a known digest matches when it contains the
    latest digest as a substring.

    Args:
        digests: Image RepoDigests recorded at pull time
        latest_digest: Digest resolved from the registry ("" if unresolved)
        comparison: ANY_MISMATCH (default) or LAST_WRITE

    Returns:
        False when there are no known digests or no latest digest.
        ANY_MISMATCH: True if any known digest lacks the latest digest.
        LAST_WRITE: result for the last known digest only.
    """
    if not digests or not latest_digest:
        return False

    if comparison is DigestComparison.LAST_WRITE:
        updatable = False
        for digest in digests:
            updatable = latest_digest not in digest
        return updatable

    return any(latest_digest not in digest for digest in digests)
