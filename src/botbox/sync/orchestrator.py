"""Bring a project's managed artifacts and config up to date.

Apply mode runs pending config migrations first, since a migration can change
which scripts and hooks later steps consider eligible. Each artifact kind is
then checked and synced independently: a failure in one step is reported and
the remaining steps still run. Check mode computes the same staleness report
and never writes.
"""

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from botbox.artifacts.catalog import (
    DESIGN_DOCS,
    DOCS,
    DOCUMENTATION_KINDS,
    HOOKS,
    SCRIPTS,
    TOOLING_KINDS,
    list_eligible_items,
)
from botbox.artifacts.hook_settings import get_claude_settings_path, register_hook_scripts
from botbox.artifacts.models import AGENTS_DIR, ArtifactKind, StalenessResult
from botbox.artifacts.staleness import check_staleness
from botbox.artifacts.sync import sync_kind
from botbox.config.project_config import (
    CONFIG_FILENAME,
    ProjectConfigError,
    ProjectSettings,
    get_config_path,
    get_config_version,
    load_project_config,
)
from botbox.gateway.bundle.abc import BundleCatalog
from botbox.gateway.hook_store.abc import HookStore
from botbox.gateway.vcs.abc import Vcs
from botbox.migrations.engine import (
    MigrationError,
    current_migration_version,
    get_pending_migrations,
    run_migrations,
)
from botbox.migrations.models import Migration, MigrationContext
from botbox.migrations.registry import MIGRATIONS
from botbox.templates.agents_md import (
    get_agents_md_path,
    parse_agents_md_header,
    update_managed_section,
)

logger = logging.getLogger(__name__)

MANAGED_SECTION_LABEL = "managed section of AGENTS.md"


class MissingInstallationError(Exception):
    """Raised when the project has no .agents/botbox/ directory."""


class StaleCheckError(Exception):
    """Raised by check mode when any component is out of date.

    Attributes:
        components: Description of each stale component
    """

    def __init__(self, components: Sequence[str]) -> None:
        self.components = tuple(components)
        super().__init__(f"Stale: {', '.join(self.components)}")


@dataclass(frozen=True)
class SyncReport:
    """Outcome of one sync invocation."""

    lines: tuple[str, ...]
    updated: tuple[str, ...]
    changed_paths: tuple[Path, ...]
    config_version: str | None
    migration_error: MigrationError | None
    step_errors: tuple[str, ...]
    # Hook registrations removed by a migration and not restored
    lost_hooks: tuple[str, ...]
    committed: bool

    @property
    def changed(self) -> bool:
        return bool(self.updated)

    @property
    def failed(self) -> bool:
        return (
            self.migration_error is not None or bool(self.step_errors) or bool(self.lost_hooks)
        )


@dataclass
class _ProjectState:
    project_dir: Path
    config_path: Path
    # None when .botbox.json is missing or unparseable
    config: dict[str, Any] | None
    settings: ProjectSettings


def _load_state(project_dir: Path, warn: Callable[[str], None]) -> _ProjectState:
    config_path = get_config_path(project_dir)
    try:
        config = load_project_config(config_path)
    except ProjectConfigError as e:
        # Hand-edited config: skip migrations, keep syncing artifacts
        logger.info("Ignoring unreadable config: %s", e)
        warn(f"{e}. Skipping config migrations.")
        config = None

    if config is not None:
        settings = ProjectSettings.from_config(config)
    else:
        settings = _settings_from_agents_md(project_dir, warn)
    return _ProjectState(
        project_dir=project_dir,
        config_path=config_path,
        config=config,
        settings=settings,
    )


def _settings_from_agents_md(project_dir: Path, warn: Callable[[str], None]) -> ProjectSettings:
    agents_md_path = get_agents_md_path(project_dir)
    if not agents_md_path.is_file():
        return ProjectSettings.empty()
    try:
        content = agents_md_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        warn(f"Ignoring header of {agents_md_path.name}: {e}")
        return ProjectSettings.empty()
    header = parse_agents_md_header(content)
    return ProjectSettings.from_config(header.as_config())


def _pending_migrations(
    state: _ProjectState, migrations: Sequence[Migration]
) -> list[Migration]:
    if state.config is None:
        return []
    return get_pending_migrations(get_config_version(state.config), migrations)


def _render_managed_section(
    project_dir: Path, bundle: BundleCatalog, settings: ProjectSettings
) -> tuple[str, str] | None:
    """Return (current, regenerated) AGENTS.md content, or None if absent.

    Raises:
        UnicodeDecodeError: If AGENTS.md is not valid UTF-8
    """
    agents_md_path = get_agents_md_path(project_dir)
    if not agents_md_path.is_file():
        return None
    content = agents_md_path.read_text(encoding="utf-8")
    updated = update_managed_section(
        content,
        doc_names=list_eligible_items(bundle, DOCS, settings),
        design_doc_names=list_eligible_items(bundle, DESIGN_DOCS, settings),
        install_command=settings.install_command,
    )
    return content, updated


def find_stale_components(
    project_dir: Path,
    bundle: BundleCatalog,
    *,
    migrations: Sequence[Migration] = MIGRATIONS,
    warn: Callable[[str], None] = logger.warning,
) -> list[str]:
    """Describe every component that apply mode would update. No side effects."""
    state = _load_state(project_dir, warn)
    stale: list[str] = []

    for kind in DOCUMENTATION_KINDS:
        result = check_staleness(project_dir, bundle, kind, state.settings)
        if result.needs_sync:
            stale.append(result.describe())

    try:
        rendered = _render_managed_section(project_dir, bundle, state.settings)
    except (OSError, ValueError) as e:
        warn(f"Cannot check {MANAGED_SECTION_LABEL}: {e}")
        rendered = None
    if rendered is not None and rendered[0] != rendered[1]:
        stale.append(MANAGED_SECTION_LABEL)

    for kind in TOOLING_KINDS:
        result = check_staleness(project_dir, bundle, kind, state.settings)
        if result.needs_sync:
            stale.append(result.describe())

    pending = _pending_migrations(state, migrations)
    if pending and state.config is not None:
        installed = get_config_version(state.config)
        stale.append(f"{CONFIG_FILENAME} ({installed} → {current_migration_version(migrations)})")

    return stale


class _SyncRun:
    """Mutable bookkeeping for one apply-mode run."""

    def __init__(self, log: Callable[[str], None], warn: Callable[[str], None]) -> None:
        self.log = log
        self.warn = warn
        self.lines: list[str] = []
        self.updated: list[str] = []
        self.changed_paths: list[Path] = []
        self.step_errors: list[str] = []
        self.lost_hooks: list[str] = []

    def emit(self, line: str) -> None:
        self.lines.append(line)
        self.log(line)

    def record(self, component: str, paths: Sequence[Path]) -> None:
        self.updated.append(component)
        for path in paths:
            if path not in self.changed_paths:
                self.changed_paths.append(path)

    def fail(self, label: str, error: Exception) -> None:
        message = f"Failed to sync {label}: {error}"
        logger.warning(message)
        self.step_errors.append(message)
        self.warn(message)


def _update_line(kind: ArtifactKind, written: tuple[str, ...]) -> str:
    if kind.name == SCRIPTS.name and written:
        return f"Updated {kind.label}: {', '.join(written)}"
    return f"Updated {kind.label}"


def _apply_kind(
    run: _SyncRun,
    project_dir: Path,
    bundle: BundleCatalog,
    kind: ArtifactKind,
    settings: ProjectSettings,
) -> StalenessResult | None:
    """Sync one kind if it needs it. Returns the staleness that triggered it."""
    try:
        staleness = check_staleness(project_dir, bundle, kind, settings)
        if not staleness.needs_sync:
            logger.debug("%s: %s", kind.name, staleness.reason)
            return None

        paths = [kind.target_path(project_dir)]
        if kind.name == HOOKS.name:
            # Registered before sync_kind so a bad settings.json leaves the marker stale
            installed = list_eligible_items(bundle, kind, settings)
            hooks_dir = kind.target_path(project_dir).resolve()
            if register_hook_scripts(project_dir, hooks_dir, installed):
                paths.append(get_claude_settings_path(project_dir))
        result = sync_kind(project_dir, bundle, kind, settings)
    except (OSError, ValueError) as e:
        run.fail(kind.label, e)
        return None

    run.emit(_update_line(kind, result.written))
    run.record(kind.label, paths)
    return staleness


def _apply_managed_section(
    run: _SyncRun, project_dir: Path, bundle: BundleCatalog, settings: ProjectSettings
) -> None:
    try:
        rendered = _render_managed_section(project_dir, bundle, settings)
        if rendered is None or rendered[0] == rendered[1]:
            return
        agents_md_path = get_agents_md_path(project_dir)
        agents_md_path.write_text(rendered[1], encoding="utf-8")
    except (OSError, ValueError) as e:
        run.fail(MANAGED_SECTION_LABEL, e)
        return

    run.emit(f"Updated {MANAGED_SECTION_LABEL}")
    run.record(MANAGED_SECTION_LABEL, [agents_md_path])


def _apply_migrations(
    run: _SyncRun,
    state: _ProjectState,
    bundle: BundleCatalog,
    hook_store: HookStore,
    migrations: Sequence[Migration],
) -> MigrationError | None:
    pending = _pending_migrations(state, migrations)
    if not pending or state.config is None:
        return None

    ctx = MigrationContext(
        project_dir=state.project_dir,
        agents_dir=state.project_dir / AGENTS_DIR,
        config_path=state.config_path,
        config=state.config,
        bundle=bundle,
        hook_store=hook_store,
        log=run.log,
        warn=run.warn,
    )

    error: MigrationError | None = None
    try:
        result = run_migrations(ctx, pending)
    except MigrationError as e:
        logger.error("%s", e)
        run.warn(str(e))
        error = e
        result = e.result
    run.lost_hooks.extend(ctx.lost_hooks)

    # Migrations edit the config dict in place
    state.settings = ProjectSettings.from_config(state.config)
    if result.changed:
        run.emit(f"Migrated {CONFIG_FILENAME}: {result.from_version} → {result.to_version}")
        run.record(CONFIG_FILENAME, [state.config_path, state.project_dir / AGENTS_DIR])
    return error


def _summary_line(run: _SyncRun, docs_staleness: StalenessResult | None) -> str:
    if docs_staleness is not None:
        installed = docs_staleness.installed_version or "(none)"
        return f"Synced: {installed} → {docs_staleness.current_version}"
    if run.updated:
        return f"Updated: {', '.join(run.updated)}"
    return "Already up to date."


def _commit_changes(
    run: _SyncRun, vcs: Vcs, project_dir: Path, config_version: str | None
) -> bool:
    if not vcs.is_repo(project_dir):
        logger.debug("%s is not a repository, skipping commit", project_dir)
        return False

    message = (
        f"chore: botbox sync (updated {', '.join(run.updated)}; "
        f"config {config_version or 'none'})"
    )
    try:
        vcs.commit(project_dir, message, run.changed_paths)
    except RuntimeError as e:
        run.warn(f"Could not commit sync changes: {e}")
        return False
    run.log(f"Committed: {message}")
    return True


def sync_project(
    *,
    project_dir: Path,
    bundle: BundleCatalog,
    hook_store: HookStore,
    vcs: Vcs,
    check: bool,
    commit: bool,
    log: Callable[[str], None],
    warn: Callable[[str], None],
    migrations: Sequence[Migration] = MIGRATIONS,
) -> SyncReport:
    """Check or apply every managed component of a project.

    Args:
        project_dir: Project root containing .agents/botbox/
        bundle: Source of bundled artifacts
        hook_store: External hook registry used by migrations
        vcs: Version control wrapper for the optional commit
        check: Report only; raise StaleCheckError if anything is stale
        commit: Commit changed files when the project is a repository
        log: Sink for progress lines
        warn: Sink for warnings
        migrations: Registered migrations (defaults to the built-in registry)

    Raises:
        MissingInstallationError: If .agents/botbox/ does not exist
        StaleCheckError: In check mode, if any component is stale
    """
    if not (project_dir / AGENTS_DIR).is_dir():
        raise MissingInstallationError(
            f"No {AGENTS_DIR.as_posix()}/ found in {project_dir}. Run `botbox init` first."
        )

    if check:
        stale = find_stale_components(project_dir, bundle, migrations=migrations, warn=warn)
        if stale:
            raise StaleCheckError(stale)
        log("Already up to date.")
        return SyncReport(
            lines=("Already up to date.",),
            updated=(),
            changed_paths=(),
            config_version=None,
            migration_error=None,
            step_errors=(),
            lost_hooks=(),
            committed=False,
        )

    run = _SyncRun(log, warn)
    state = _load_state(project_dir, warn)

    migration_error = _apply_migrations(run, state, bundle, hook_store, migrations)

    docs_staleness: StalenessResult | None = None
    for kind in DOCUMENTATION_KINDS:
        staleness = _apply_kind(run, project_dir, bundle, kind, state.settings)
        if kind.name == DOCS.name:
            docs_staleness = staleness

    _apply_managed_section(run, project_dir, bundle, state.settings)

    for kind in TOOLING_KINDS:
        _apply_kind(run, project_dir, bundle, kind, state.settings)

    run.emit(_summary_line(run, docs_staleness))

    config_version = get_config_version(state.config) if state.config is not None else None
    committed = False
    if commit and run.updated:
        committed = _commit_changes(run, vcs, project_dir, config_version)

    return SyncReport(
        lines=tuple(run.lines),
        updated=tuple(run.updated),
        changed_paths=tuple(run.changed_paths),
        config_version=config_version,
        migration_error=migration_error,
        step_errors=tuple(run.step_errors),
        lost_hooks=tuple(run.lost_hooks),
        committed=committed,
    )
