"""Semantic version comparison for release checks.

Only strict major.minor.patch strings take part in ordering. Anything else
("dev", a short commit hash from a container build) is a development build
and is never reported as outdated.
"""

import re

from selfcheck.core.models import SemVer

SEMVER_RE = re.compile(r'^(\d+)\.(\d+)\.(\d+)$')


def is_semantic(version: str) -> bool:
    return bool(SEMVER_RE.match(version.strip()))


def parse_semver(version: str) -> SemVer:
    """Parse 'major.minor.patch'. Raises ValueError for anything else."""
    match = SEMVER_RE.match(version.strip())
    if not match:
        raise ValueError(f"Not a semantic version: {version!r}")
    return SemVer(*(int(part) for part in match.groups()))


def is_newer(candidate: str, current: str) -> bool:
    """True if candidate is a strictly newer release than current."""
    if not is_semantic(current):
        return False
    # An upstream development tag is not a release
    if not is_semantic(candidate):
        return False
    return parse_semver(candidate) > parse_semver(current)
