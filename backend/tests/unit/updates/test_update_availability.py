"""
Unit tests for update availability detection logic.

Tests verify:
- Digest comparison by substring match
- Empty digest set and empty latest digest never updatable
- Multi-digest images under both comparison rules
"""

import pytest

from updates.types import DigestComparison
from updates.update_evaluator import is_updatable


# =============================================================================
# Single Digest Tests
# =============================================================================

class TestUpdateAvailabilityDetection:
    """Test updatable verdict for a single known digest"""

    @pytest.mark.parametrize("comparison", list(DigestComparison))
    def test_update_available_when_digest_differs(self, comparison):
        """Should detect update when the known digest lacks the latest digest"""
        assert is_updatable(["app@sha256:aaa"], "sha256:bbb", comparison) is True

    @pytest.mark.parametrize("comparison", list(DigestComparison))
    def test_no_update_when_digest_same(self, comparison):
        """Should not detect update when the known digest contains the latest digest"""
        assert is_updatable(["app@sha256:aaa"], "sha256:aaa", comparison) is False

    @pytest.mark.parametrize("comparison", list(DigestComparison))
    def test_empty_digest_set_never_updatable(self, comparison):
        """Images without RepoDigests have nothing to compare against"""
        assert is_updatable([], "sha256:bbb", comparison) is False

    @pytest.mark.parametrize("comparison", list(DigestComparison))
    def test_empty_latest_digest_never_updatable(self, comparison):
        """Unresolved latest digest must not report an update"""
        assert is_updatable(["app@sha256:aaa"], "", comparison) is False

    def test_default_rule_is_any_mismatch(self):
        digests = ["app@sha256:bbb", "mirror/app@sha256:aaa"]

        assert is_updatable(digests, "sha256:bbb") == is_updatable(
            digests, "sha256:bbb", DigestComparison.ANY_MISMATCH
        )


# =============================================================================
# Multi Digest Tests
# =============================================================================

class TestMultiDigestComparison:
    """Images pushed to several repositories carry several RepoDigests"""

    @pytest.mark.parametrize("comparison", list(DigestComparison))
    def test_all_digests_match(self, comparison):
        digests = ["app@sha256:aaa", "mirror/app@sha256:aaa"]

        assert is_updatable(digests, "sha256:aaa", comparison) is False

    @pytest.mark.parametrize("comparison", list(DigestComparison))
    def test_last_digest_mismatches(self, comparison):
        """Both rules report updatable when the last digest differs"""
        digests = ["app@sha256:aaa", "mirror/app@sha256:ccc"]

        assert is_updatable(digests, "sha256:aaa", comparison) is True

    def test_first_digest_mismatch_any_rule(self):
        """ANY_MISMATCH: an earlier mismatch is enough"""
        digests = ["mirror/app@sha256:ccc", "app@sha256:aaa"]

        assert is_updatable(digests, "sha256:aaa", DigestComparison.ANY_MISMATCH) is True

    def test_first_digest_mismatch_last_write_rule(self):
        """LAST_WRITE: the matching last digest overwrites the earlier mismatch"""
        digests = ["mirror/app@sha256:ccc", "app@sha256:aaa"]

        assert is_updatable(digests, "sha256:aaa", DigestComparison.LAST_WRITE) is False

    @pytest.mark.parametrize("digests,expected", [
        (["a@sha256:x", "b@sha256:x", "c@sha256:x"], False),
        (["a@sha256:y", "b@sha256:y", "c@sha256:x"], False),
        (["a@sha256:x", "b@sha256:x", "c@sha256:y"], True),
    ])
    def test_last_write_only_last_digest_decides(self, digests, expected):
        assert is_updatable(digests, "sha256:x", DigestComparison.LAST_WRITE) is expected

    def test_partial_digest_substring_match(self):
        """Latest digest only needs to be contained in the known digest"""
        assert is_updatable(["app@sha256:abcdef123456"], "abcdef") is False
