"""Tests for version marker I/O."""

from pathlib import Path

from botbox.artifacts.catalog import DOCS, SCRIPTS
from botbox.artifacts.markers import load_marker, save_marker


def test_load_marker_missing(tmp_project: Path) -> None:
    """Returns None when the marker file doesn't exist."""
    assert load_marker(tmp_project, DOCS) is None


def test_load_marker_strips_whitespace(tmp_project: Path) -> None:
    """Trailing newline written by hand is ignored."""
    marker = tmp_project / ".agents" / "botbox" / ".version"
    marker.parent.mkdir(parents=True)
    marker.write_text("abc123def456\n", encoding="utf-8")

    assert load_marker(tmp_project, DOCS) == "abc123def456"


def test_load_marker_empty_file(tmp_project: Path) -> None:
    """An empty marker counts as missing."""
    marker = tmp_project / ".agents" / "botbox" / ".version"
    marker.parent.mkdir(parents=True)
    marker.write_text("  \n", encoding="utf-8")

    assert load_marker(tmp_project, DOCS) is None


def test_save_marker_creates_parent_dirs(tmp_project: Path) -> None:
    """Saving a scripts marker creates .agents/botbox/scripts/."""
    assert save_marker(tmp_project, SCRIPTS, "0123456789ab") is True

    marker = tmp_project / ".agents" / "botbox" / "scripts" / ".scripts-version"
    assert marker.read_text(encoding="utf-8") == "0123456789ab"


def test_save_marker_skips_identical_value(tmp_project: Path) -> None:
    """Rewriting the same fingerprint is a no-op."""
    save_marker(tmp_project, DOCS, "0123456789ab")

    assert save_marker(tmp_project, DOCS, "0123456789ab") is False
    assert load_marker(tmp_project, DOCS) == "0123456789ab"
