"""Tests for content fingerprints."""

import hashlib

from botbox.artifacts.catalog import DOCS, SCRIPTS
from botbox.artifacts.fingerprint import (
    EMPTY_FINGERPRINT,
    compute_fingerprint,
    fingerprint_contents,
)
from botbox.config.project_config import ProjectSettings
from botbox.gateway.bundle.fake import FakeBundleCatalog


def test_fingerprint_is_truncated_sha256() -> None:
    """Fingerprint is the first 12 hex chars of sha256 over the concatenation."""
    expected = hashlib.sha256(b"ab").hexdigest()[:12]

    assert fingerprint_contents([b"a", b"b"]) == expected


def test_empty_contents_use_sentinel() -> None:
    """No eligible items maps to the all-zero fingerprint."""
    assert fingerprint_contents([]) == EMPTY_FINGERPRINT == "000000000000"


def test_empty_item_differs_from_no_items() -> None:
    """A single empty item is not the same as nothing eligible."""
    assert fingerprint_contents([b""]) != EMPTY_FINGERPRINT


def test_compute_fingerprint_is_stable(bundle: FakeBundleCatalog) -> None:
    """Unchanged bundle content gives the same fingerprint twice."""
    settings = ProjectSettings.empty()

    assert compute_fingerprint(bundle, DOCS, settings) == compute_fingerprint(
        bundle, DOCS, settings
    )


def test_compute_fingerprint_changes_with_one_byte() -> None:
    """Changing one byte of one item changes the fingerprint."""
    settings = ProjectSettings.empty()
    before = FakeBundleCatalog(items={"docs": {"a.md": "alpha", "b.md": "beta"}})
    after = FakeBundleCatalog(items={"docs": {"a.md": "alpha", "b.md": "betb"}})

    assert compute_fingerprint(before, DOCS, settings) != compute_fingerprint(
        after, DOCS, settings
    )


def test_compute_fingerprint_hashes_in_name_order() -> None:
    """Items are hashed sorted by name."""
    bundle = FakeBundleCatalog(items={"docs": {"b.md": "B", "a.md": "A"}})

    result = compute_fingerprint(bundle, DOCS, ProjectSettings.empty())

    assert result == fingerprint_contents([b"A", b"B"])


def test_compute_fingerprint_only_covers_eligible_items(bundle: FakeBundleCatalog) -> None:
    """Scripts a project is not eligible for do not affect its fingerprint."""
    only_botbus = ProjectSettings.from_config({"tools": {"botbus": True}})

    result = compute_fingerprint(bundle, SCRIPTS, only_botbus)

    assert result == fingerprint_contents([b"// respond\n"])


def test_compute_fingerprint_without_eligible_items(bundle: FakeBundleCatalog) -> None:
    """A project with no tools has the empty scripts fingerprint."""
    assert compute_fingerprint(bundle, SCRIPTS, ProjectSettings.empty()) == EMPTY_FINGERPRINT
