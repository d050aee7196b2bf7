"""Show installed and bundled versions of every managed component."""

from pathlib import Path

import click

from botbox.artifacts.catalog import ARTIFACT_KINDS
from botbox.artifacts.staleness import check_staleness
from botbox.config.project_config import (
    CONFIG_FILENAME,
    ProjectConfigError,
    ProjectSettings,
    get_config_path,
    get_config_version,
    load_project_config,
)
from botbox.core.context import BotboxContext
from botbox.migrations.engine import current_migration_version, get_pending_migrations


@click.command("versions")
@click.option(
    "--project-root",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Project root (defaults to the current directory)",
)
@click.pass_obj
def versions_cmd(ctx: BotboxContext, project_root: Path | None) -> None:
    """Compare installed artifact markers and config version to this botbox.

    Read-only; run `botbox sync` to apply updates.
    """
    project_dir = project_root if project_root is not None else ctx.cwd

    config = None
    try:
        config = load_project_config(get_config_path(project_dir))
    except ProjectConfigError as e:
        click.echo(click.style("⚠️  ", fg="yellow") + str(e), err=True)
    settings = ProjectSettings.empty()
    if config is not None:
        settings = ProjectSettings.from_config(config)

    for kind in ARTIFACT_KINDS:
        result = check_staleness(project_dir, ctx.bundle, kind, settings)
        installed = result.installed_version or "(none)"
        if result.reason == "up-to-date":
            status = click.style("✓ ", fg="green")
        elif result.reason == "not-managed":
            status = click.style("- ", dim=True)
        else:
            status = click.style("⚠️  ", fg="yellow")
        click.echo(
            f"{status}{kind.label}: {installed} → {result.current_version} ({result.reason})"
        )

    latest = current_migration_version()
    if config is None:
        click.echo(f"{CONFIG_FILENAME}: (none) → {latest}")
        return

    installed_version = get_config_version(config)
    pending = get_pending_migrations(installed_version)
    click.echo(f"{CONFIG_FILENAME}: {installed_version} → {latest}")
    if pending:
        click.echo(f"   Pending migrations: {', '.join(m.id for m in pending)}")
