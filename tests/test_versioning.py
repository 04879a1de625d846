"""Tests for semantic version parsing and release ordering."""

import pytest

from selfcheck.core.models import SemVer
from selfcheck.core.versioning import is_newer, is_semantic, parse_semver


class TestParseSemver:
    """Tests for parse_semver / is_semantic."""

    def test_parses_triple(self):
        assert parse_semver("1.8.3") == SemVer(1, 8, 3)

    def test_strips_whitespace(self):
        assert parse_semver(" 0.5.0\n") == SemVer(0, 5, 0)

    @pytest.mark.parametrize("version", ["dev", "abc123d", "1.2", "1.2.3.4", "v1.2.3", ""])
    def test_rejects_non_semantic(self, version):
        assert not is_semantic(version)
        with pytest.raises(ValueError):
            parse_semver(version)

    def test_orders_numerically(self):
        """1.10.0 sorts after 1.9.9, unlike a string comparison."""
        assert parse_semver("1.10.0") > parse_semver("1.9.9")


class TestIsNewer:
    """Tests for is_newer."""

    @pytest.mark.parametrize("version", ["0.0.0", "0.5.0", "1.8.3", "10.20.30"])
    def test_equal_is_not_newer(self, version):
        assert is_newer(version, version) is False

    def test_newer_release(self):
        assert is_newer("1.8.3", "0.5.0") is True

    def test_older_release(self):
        assert is_newer("0.4.1", "0.5.0") is False

    def test_patch_bump(self):
        assert is_newer("0.5.1", "0.5.0") is True

    @pytest.mark.parametrize("candidate", ["1.8.3", "99.0.0", "dev"])
    def test_dev_build_never_outdated(self, candidate):
        assert is_newer(candidate, "dev") is False

    def test_commit_hash_never_outdated(self):
        assert is_newer("1.8.3", "abc123d") is False

    def test_non_semantic_candidate_is_not_newer(self):
        assert is_newer("dev", "0.5.0") is False
