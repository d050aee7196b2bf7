"""Inspect registered config migrations."""

import click

from botbox.migrations.engine import sort_migrations
from botbox.migrations.registry import MIGRATIONS


@click.group("migrations")
def migrations_group() -> None:
    """Inspect .botbox.json migrations."""


@click.command("list")
def list_cmd() -> None:
    """List registered migrations in the order they apply."""
    for migration in sort_migrations(MIGRATIONS):
        click.echo(f"{migration.id}  {migration.title}")


migrations_group.add_command(list_cmd)
