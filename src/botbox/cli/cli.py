import logging

import click

from botbox.cli.commands.migrations import migrations_group
from botbox.cli.commands.sync import sync_cmd
from botbox.cli.commands.versions import versions_cmd
from botbox.core.context import create_context

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])  # terse help flags


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="botbox")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, debug: bool) -> None:
    """Keep a project's botbox docs, scripts, prompts and hooks up to date."""
    if debug:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s - %(levelname)s - %(message)s")

    # Only create context if not already provided (e.g., by tests)
    if ctx.obj is None:
        ctx.obj = create_context(debug=debug)


cli.add_command(sync_cmd)
cli.add_command(versions_cmd)
cli.add_command(migrations_group)


def main() -> None:
    """CLI entry point used by the `botbox` console script."""
    cli()
