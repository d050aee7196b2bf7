"""Check artifact staleness by comparing installed markers to bundle fingerprints."""

from pathlib import Path

from botbox.artifacts.fingerprint import compute_fingerprint
from botbox.artifacts.markers import load_marker
from botbox.artifacts.models import ArtifactKind, StalenessResult
from botbox.config.project_config import ProjectSettings
from botbox.gateway.bundle.abc import BundleCatalog


def evaluate_staleness(
    kind: ArtifactKind, installed_version: str | None, current_version: str
) -> StalenessResult:
    """Compare an installed marker to the current fingerprint.

    A kind is stale only if its marker exists and differs. A missing marker
    is never stale: opt-in kinds report "not-managed", mandatory kinds report
    "not-initialized".
    """
    if installed_version is None:
        return StalenessResult(
            kind=kind,
            is_stale=False,
            reason="not-initialized" if kind.required else "not-managed",
            current_version=current_version,
            installed_version=None,
        )

    if installed_version != current_version:
        return StalenessResult(
            kind=kind,
            is_stale=True,
            reason="version-mismatch",
            current_version=current_version,
            installed_version=installed_version,
        )

    return StalenessResult(
        kind=kind,
        is_stale=False,
        reason="up-to-date",
        current_version=current_version,
        installed_version=installed_version,
    )


def check_staleness(
    project_dir: Path,
    bundle: BundleCatalog,
    kind: ArtifactKind,
    settings: ProjectSettings,
) -> StalenessResult:
    """Check whether a kind needs resyncing in a project. No side effects."""
    return evaluate_staleness(
        kind,
        installed_version=load_marker(project_dir, kind),
        current_version=compute_fingerprint(bundle, kind, settings),
    )
