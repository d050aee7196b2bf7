"""Data models for artifact management."""

from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from botbox.config.project_config import ProjectSettings

# How an artifact kind is written into a project:
# - install: create the target dir and copy every eligible item
# - update-existing: re-copy only items the project already has
ApplyMode = Literal["install", "update-existing"]

StalenessReason = Literal["not-managed", "not-initialized", "version-mismatch", "up-to-date"]

# Managed directory inside a target project
AGENTS_DIR = Path(".agents") / "botbox"


@dataclass(frozen=True)
class ArtifactKind:
    """One category of versioned material bundled with botbox."""

    name: str
    label: str
    # Directory under botbox/data/ holding the bundled items
    bundle_dir: str
    # Directory under the project root receiving the items
    target_dir: Path
    marker_filename: str
    item_suffix: str
    apply_mode: ApplyMode
    # Mandatory kinds are installed even when the project has no marker yet
    required: bool
    executable: bool
    eligibility: Callable[[str, ProjectSettings], bool]

    def target_path(self, project_dir: Path) -> Path:
        return project_dir / self.target_dir

    def marker_path(self, project_dir: Path) -> Path:
        return self.target_path(project_dir) / self.marker_filename

    def is_eligible(self, item_name: str, settings: ProjectSettings) -> bool:
        return self.eligibility(item_name, settings)


@dataclass(frozen=True)
class StalenessResult:
    """Result of checking one artifact kind's staleness."""

    kind: ArtifactKind
    is_stale: bool
    reason: StalenessReason
    current_version: str
    installed_version: str | None

    @property
    def needs_sync(self) -> bool:
        """True if sync should write this kind.

        Stale kinds always sync. A mandatory kind with no marker predates
        version tracking and is installed as well.
        """
        return self.is_stale or self.reason == "not-initialized"

    def describe(self) -> str:
        installed = self.installed_version if self.installed_version is not None else "(none)"
        return f"{self.kind.label} ({installed} → {self.current_version})"


@dataclass(frozen=True)
class SyncResult:
    """Result of writing one artifact kind into a project."""

    kind: ArtifactKind
    written: tuple[str, ...]
    fingerprint: str
    marker_updated: bool

    @property
    def changed(self) -> bool:
        return bool(self.written) or self.marker_updated
