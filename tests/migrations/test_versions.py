"""Tests for migration version ordering."""

import pytest
from packaging.version import InvalidVersion, Version

from botbox.migrations.versions import compare_versions, parse_version


def test_parse_version() -> None:
    assert parse_version("1.0.10") == Version("1.0.10")
    assert parse_version("1.0") == parse_version("1.0.0")


def test_parse_version_rejects_garbage() -> None:
    with pytest.raises(InvalidVersion):
        parse_version("not-a-version")


@pytest.mark.parametrize(
    ("left", "right", "expected"),
    [
        ("1.0.10", "1.0.9", 1),
        ("1.0.9", "1.0.10", -1),
        ("1.0", "1.0.0", 0),
        ("1.0.1", "1.0", 1),
        ("0.0.0", "1.0.0", -1),
    ],
)
def test_compare_versions(left: str, right: str, expected: int) -> None:
    assert compare_versions(left, right) == expected


def test_sort_is_numeric_not_lexicographic() -> None:
    assert sorted(["1.0.10", "1.0.2", "1.0.9"], key=parse_version) == [
        "1.0.2",
        "1.0.9",
        "1.0.10",
    ]
