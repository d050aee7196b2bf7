"""Copy bundled artifacts into a project's .agents/botbox/ directory."""

import logging
from pathlib import Path

from botbox.artifacts.catalog import list_eligible_items
from botbox.artifacts.fingerprint import compute_fingerprint
from botbox.artifacts.markers import save_marker
from botbox.artifacts.models import ArtifactKind, SyncResult
from botbox.config.project_config import ProjectSettings
from botbox.gateway.bundle.abc import BundleCatalog

logger = logging.getLogger(__name__)

EXECUTABLE_MODE = 0o755


def _write_item(target_path: Path, content: bytes, executable: bool) -> bool:
    """Write one item, skipping content-equal files.

    Returns True if the file content was written.
    """
    if target_path.is_file() and target_path.read_bytes() == content:
        if executable and target_path.stat().st_mode & 0o777 != EXECUTABLE_MODE:
            target_path.chmod(EXECUTABLE_MODE)
        return False

    target_path.parent.mkdir(parents=True, exist_ok=True)
    target_path.write_bytes(content)
    if executable:
        target_path.chmod(EXECUTABLE_MODE)
    return True


def _finish(
    project_dir: Path,
    bundle: BundleCatalog,
    kind: ArtifactKind,
    settings: ProjectSettings,
    written: list[str],
) -> SyncResult:
    fingerprint = compute_fingerprint(bundle, kind, settings)
    marker_updated = save_marker(project_dir, kind, fingerprint)
    logger.debug(
        "Synced %s: %d written, marker %s", kind.name, len(written), fingerprint
    )
    return SyncResult(
        kind=kind,
        written=tuple(written),
        fingerprint=fingerprint,
        marker_updated=marker_updated,
    )


def install_items(
    project_dir: Path,
    bundle: BundleCatalog,
    kind: ArtifactKind,
    settings: ProjectSettings,
) -> SyncResult:
    """Copy every eligible item of a kind into the project.

    Creates the target directory and overwrites same-named files whose
    content differs. Writes the kind's marker on success.
    """
    target_dir = kind.target_path(project_dir)
    target_dir.mkdir(parents=True, exist_ok=True)

    written: list[str] = []
    for name in list_eligible_items(bundle, kind, settings):
        if _write_item(target_dir / name, bundle.read_item(kind, name), kind.executable):
            written.append(name)
    return _finish(project_dir, bundle, kind, settings, written)


def update_existing_items(
    project_dir: Path,
    bundle: BundleCatalog,
    kind: ArtifactKind,
    settings: ProjectSettings,
) -> SyncResult:
    """Re-copy only the bundled items the project already has.

    Used for kinds the user may have opted out of item by item: a script
    deleted from the project stays deleted. Writes the kind's marker on
    success.
    """
    target_dir = kind.target_path(project_dir)

    written: list[str] = []
    for name in bundle.list_items(kind):
        target_path = target_dir / name
        if not target_path.exists():
            continue
        if _write_item(target_path, bundle.read_item(kind, name), kind.executable):
            written.append(name)
    return _finish(project_dir, bundle, kind, settings, written)


def sync_kind(
    project_dir: Path,
    bundle: BundleCatalog,
    kind: ArtifactKind,
    settings: ProjectSettings,
) -> SyncResult:
    """Apply a kind using its configured apply mode."""
    if kind.apply_mode == "update-existing":
        return update_existing_items(project_dir, bundle, kind, settings)
    return install_items(project_dir, bundle, kind, settings)
