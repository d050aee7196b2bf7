"""Tests for artifact staleness detection."""

from pathlib import Path

import pytest

from botbox.artifacts.catalog import DOCS, HOOKS, SCRIPTS
from botbox.artifacts.fingerprint import compute_fingerprint
from botbox.artifacts.markers import save_marker
from botbox.artifacts.staleness import check_staleness, evaluate_staleness
from botbox.config.project_config import ProjectSettings
from botbox.gateway.bundle.fake import FakeBundleCatalog


class TestEvaluateStaleness:
    """Tests for the pure marker comparison."""

    def test_matching_marker_is_up_to_date(self) -> None:
        result = evaluate_staleness(DOCS, "aaaaaaaaaaaa", "aaaaaaaaaaaa")

        assert result.is_stale is False
        assert result.reason == "up-to-date"
        assert result.needs_sync is False

    def test_different_marker_is_stale(self) -> None:
        result = evaluate_staleness(SCRIPTS, "aaaaaaaaaaaa", "bbbbbbbbbbbb")

        assert result.is_stale is True
        assert result.reason == "version-mismatch"
        assert result.needs_sync is True

    @pytest.mark.parametrize("kind", [SCRIPTS, HOOKS])
    def test_missing_marker_on_opt_in_kind_is_not_managed(self, kind) -> None:
        """Opt-in kinds without a marker are left alone."""
        result = evaluate_staleness(kind, None, "bbbbbbbbbbbb")

        assert result.is_stale is False
        assert result.reason == "not-managed"
        assert result.needs_sync is False

    def test_missing_marker_on_mandatory_kind_is_not_initialized(self) -> None:
        """Mandatory kinds without a marker are not stale but still need a sync."""
        result = evaluate_staleness(DOCS, None, "bbbbbbbbbbbb")

        assert result.is_stale is False
        assert result.reason == "not-initialized"
        assert result.needs_sync is True

    def test_describe_shows_versions(self) -> None:
        result = evaluate_staleness(SCRIPTS, "aaaaaaaaaaaa", "bbbbbbbbbbbb")

        assert result.describe() == "loop scripts (aaaaaaaaaaaa → bbbbbbbbbbbb)"

    def test_describe_without_marker(self) -> None:
        result = evaluate_staleness(DOCS, None, "bbbbbbbbbbbb")

        assert result.describe() == "workflow docs ((none) → bbbbbbbbbbbb)"


class TestCheckStaleness:
    """Tests for staleness against markers on disk."""

    def test_reports_current_marker(self, tmp_project: Path, bundle: FakeBundleCatalog) -> None:
        settings = ProjectSettings.empty()
        save_marker(tmp_project, DOCS, compute_fingerprint(bundle, DOCS, settings))

        result = check_staleness(tmp_project, bundle, DOCS, settings)

        assert result.reason == "up-to-date"

    def test_reports_outdated_marker(self, tmp_project: Path, bundle: FakeBundleCatalog) -> None:
        save_marker(tmp_project, DOCS, "000000000001")

        result = check_staleness(tmp_project, bundle, DOCS, ProjectSettings.empty())

        assert result.is_stale is True
        assert result.installed_version == "000000000001"

    def test_does_not_write(self, tmp_project: Path, bundle: FakeBundleCatalog) -> None:
        """Checking never creates markers or directories."""
        check_staleness(tmp_project, bundle, HOOKS, ProjectSettings.empty())

        assert list(tmp_project.iterdir()) == []
