"""Ordering of migration ids and persisted config versions.

Both are release versions compared with `packaging`, so "1.0.10" sorts after
"1.0.9" and "1.0" equals "1.0.0".
"""

from packaging.version import Version


def parse_version(version: str) -> Version:
    """Parse a version string.

    Raises:
        InvalidVersion: If version is not a valid release version
    """
    return Version(version)


def compare_versions(left: str, right: str) -> int:
    """Return -1, 0 or 1 as left sorts before, equal to, or after right."""
    left_version = Version(left)
    right_version = Version(right)
    if left_version > right_version:
        return 1
    if left_version < right_version:
        return -1
    return 0
