"""Apply pending config migrations in version order.

The config version is persisted after every migration, so a failure in one
migration keeps the progress made by the ones before it. A failed migration
stops the run; later migrations wait for the next invocation.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from botbox.config.project_config import (
    BASELINE_CONFIG_VERSION,
    get_config_version,
    save_project_config,
)
from botbox.migrations.models import Migration, MigrationContext
from botbox.migrations.registry import MIGRATIONS
from botbox.migrations.versions import compare_versions, parse_version

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MigrationRunResult:
    """Versions before and after a migration run, and the ids it applied."""

    from_version: str
    to_version: str
    applied: tuple[str, ...]

    @property
    def changed(self) -> bool:
        return bool(self.applied)


class MigrationError(Exception):
    """Raised when a migration's `up` fails.

    Attributes:
        migration_id: Id of the failing migration
        title: Title of the failing migration
        cause_message: Message of the underlying exception
        result: Progress persisted before the failure
    """

    def __init__(self, migration: Migration, cause: Exception, result: MigrationRunResult) -> None:
        self.migration_id = migration.id
        self.title = migration.title
        self.cause_message = str(cause)
        self.result = result
        super().__init__(f"Migration {migration.id} ({migration.title}) failed: {cause}")

    @property
    def applied(self) -> tuple[str, ...]:
        return self.result.applied


def sort_migrations(migrations: Sequence[Migration]) -> list[Migration]:
    """Sort migrations by numeric id."""
    return sorted(migrations, key=lambda migration: parse_version(migration.id))


def current_migration_version(migrations: Sequence[Migration] = MIGRATIONS) -> str:
    """Return the highest registered migration id, or the baseline if none.

    This is also the version written into a newly initialized project.
    """
    if not migrations:
        return BASELINE_CONFIG_VERSION
    return sort_migrations(migrations)[-1].id


def get_pending_migrations(
    installed_version: str, migrations: Sequence[Migration] = MIGRATIONS
) -> list[Migration]:
    """Return migrations newer than installed_version, in apply order."""
    return [
        migration
        for migration in sort_migrations(migrations)
        if compare_versions(migration.id, installed_version) > 0
    ]


def run_migrations(ctx: MigrationContext, pending: Sequence[Migration]) -> MigrationRunResult:
    """Apply migrations in order, persisting the config after each one.

    Args:
        ctx: Migration context holding the live config
        pending: Migrations to apply, already sorted (see get_pending_migrations)

    Raises:
        MigrationError: If a migration raises. The config on disk reflects
            the last successful migration.
    """
    from_version = get_config_version(ctx.config)
    applied: list[str] = []

    for migration in pending:
        logger.debug("Applying migration %s: %s", migration.id, migration.title)
        try:
            migration.up(ctx)
        except Exception as e:
            partial = MigrationRunResult(
                from_version=from_version,
                to_version=get_config_version(ctx.config),
                applied=tuple(applied),
            )
            raise MigrationError(migration, e, partial) from e

        ctx.config["version"] = migration.id
        save_project_config(ctx.config_path, ctx.config)
        applied.append(migration.id)
        logger.info("Applied migration %s", migration.id)

    return MigrationRunResult(
        from_version=from_version,
        to_version=get_config_version(ctx.config),
        applied=tuple(applied),
    )
