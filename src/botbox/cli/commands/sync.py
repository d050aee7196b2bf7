"""Sync managed artifacts and migrate the project config."""

from pathlib import Path

import click

from botbox.core.context import BotboxContext
from botbox.sync.orchestrator import MissingInstallationError, StaleCheckError, sync_project


def _log(message: str) -> None:
    click.echo(message)


def _warn(message: str) -> None:
    color = "red" if message.startswith("CRITICAL") else "yellow"
    click.echo(click.style(message, fg=color), err=True)


@click.command("sync")
@click.option("--check", is_flag=True, help="Report stale components without changing anything")
@click.option("--no-commit", is_flag=True, help="Do not commit the updated files")
@click.option(
    "--project-root",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Project root (defaults to the current directory)",
)
@click.pass_obj
def sync_cmd(ctx: BotboxContext, check: bool, no_commit: bool, project_root: Path | None) -> None:
    """Update workflow docs, scripts, prompts and hooks to the bundled versions.

    Pending .botbox.json migrations run first. With --check, nothing is
    written and the command exits 1 if anything is out of date.

    Examples:

    \b
      # Apply all updates and commit them
      botbox sync

    \b
      # CI: fail if the project is behind
      botbox sync --check
    """
    project_dir = project_root if project_root is not None else ctx.cwd

    try:
        report = sync_project(
            project_dir=project_dir,
            bundle=ctx.bundle,
            hook_store=ctx.hook_store,
            vcs=ctx.vcs,
            check=check,
            commit=not no_commit,
            log=_log,
            warn=_warn,
        )
    except MissingInstallationError as e:
        click.echo(click.style("Error: ", fg="red") + str(e), err=True)
        raise SystemExit(1) from e
    except StaleCheckError as e:
        click.echo(str(e), err=True)
        raise SystemExit(1) from e

    if report.lost_hooks:
        lost = ", ".join(report.lost_hooks)
        click.echo(click.style("Re-register lost hooks by hand: ", fg="red") + lost, err=True)
    if report.failed:
        click.echo(click.style("Sync finished with errors", fg="red"), err=True)
        raise SystemExit(1)
