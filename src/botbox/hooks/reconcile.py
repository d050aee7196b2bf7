"""Rewrite external hook registrations that the service cannot edit in place.

The hook service only supports remove and add, so every rewrite has a window
where the old registration is gone and the new one is not yet registered. If
the add fails, the captured original is added back. If that also fails, the
registration is lost and an operator has to re-register it by hand.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from botbox.gateway.hook_store.abc import HookStore, HookStoreUnavailableError
from botbox.gateway.hook_store.types import HookRegistration

logger = logging.getLogger(__name__)

RewriteOutcome = Literal["rewritten", "restored", "lost", "remove-failed"]


@dataclass(frozen=True)
class RewriteRecord:
    """What happened to one matching registration."""

    original: HookRegistration
    replacement: HookRegistration
    outcome: RewriteOutcome
    new_id: str | None
    error: str | None


@dataclass(frozen=True)
class ReconcileResult:
    """Result of one rewrite pass over the hook registry."""

    available: bool
    records: tuple[RewriteRecord, ...]

    def _ids_with(self, outcome: RewriteOutcome) -> list[str]:
        return [r.original.id or "" for r in self.records if r.outcome == outcome]

    @property
    def rewritten(self) -> list[str]:
        return self._ids_with("rewritten")

    @property
    def restored(self) -> list[str]:
        return self._ids_with("restored")

    @property
    def lost(self) -> list[str]:
        return self._ids_with("lost")


def belongs_to_project(registration: HookRegistration, project_dir: Path) -> bool:
    """Check whether a registration runs in this project's working directory."""
    if registration.cwd is None:
        return False
    if registration.cwd == str(project_dir):
        return True
    return Path(registration.cwd).resolve() == project_dir.resolve()


def _format_command(registration: HookRegistration) -> str:
    return " ".join(registration.command)


def rewrite_registrations(
    *,
    store: HookStore,
    project_dir: Path,
    match: Callable[[HookRegistration], bool],
    transform: Callable[[HookRegistration], HookRegistration],
    log: Callable[[str], None],
    warn: Callable[[str], None],
) -> ReconcileResult:
    """Replace matching registrations with transformed copies.

    Only active registrations in `project_dir` that satisfy `match` are
    touched. For each one: remove it, add `transform(original)`, and if that
    add fails, add the original back.

    Args:
        store: Hook registry gateway
        project_dir: Project whose registrations are considered
        match: Selects registrations that need rewriting
        transform: Builds the replacement from the captured original
        log: Sink for informational messages
        warn: Sink for warnings (including CRITICAL lost-hook messages)

    Returns:
        ReconcileResult with one record per matching registration. If the
        listing itself fails, available is False and nothing was touched.
    """
    try:
        registrations = store.list_registrations()
    except HookStoreUnavailableError as e:
        logger.info("Hook service unavailable, skipping hook rewrite: %s", e)
        log("Hook service not available, skipping hook migration")
        return ReconcileResult(available=False, records=())

    candidates = [
        registration
        for registration in registrations
        if registration.active
        and belongs_to_project(registration, project_dir)
        and match(registration)
    ]

    records: list[RewriteRecord] = []
    for original in candidates:
        records.append(_rewrite_one(store, original, transform(original), log, warn))
    return ReconcileResult(available=True, records=tuple(records))


def _rewrite_one(
    store: HookStore,
    original: HookRegistration,
    replacement: HookRegistration,
    log: Callable[[str], None],
    warn: Callable[[str], None],
) -> RewriteRecord:
    hook_id = original.id or ""
    replacement = replacement.with_changes(id=None)

    try:
        store.remove_registration(hook_id)
    except HookStoreUnavailableError as e:
        # Nothing was mutated; a later run can retry
        logger.warning("Could not remove hook %s: %s", hook_id, e)
        warn(f"Could not remove hook {hook_id}, skipping")
        return RewriteRecord(
            original=original,
            replacement=replacement,
            outcome="remove-failed",
            new_id=None,
            error=str(e),
        )

    try:
        new_id = store.add_registration(replacement)
    except HookStoreUnavailableError as add_error:
        return _restore(store, original, replacement, str(add_error), warn)

    logger.info("Rewrote hook %s as %s", hook_id, new_id or "(unknown id)")
    log(f"Updated hook {hook_id}: {_format_command(original)} → {_format_command(replacement)}")
    return RewriteRecord(
        original=original,
        replacement=replacement,
        outcome="rewritten",
        new_id=new_id,
        error=None,
    )


def _restore(
    store: HookStore,
    original: HookRegistration,
    replacement: HookRegistration,
    add_error: str,
    warn: Callable[[str], None],
) -> RewriteRecord:
    hook_id = original.id or ""
    try:
        restored_id = store.add_registration(original.with_changes(id=None))
    except HookStoreUnavailableError as restore_error:
        logger.critical(
            "Hook %s was removed and could not be restored (add: %s; restore: %s)",
            hook_id,
            add_error,
            restore_error,
        )
        warn(
            f"CRITICAL: hook {hook_id} was removed and could not be restored. "
            f"Re-register it manually: {_format_command(original)}"
        )
        return RewriteRecord(
            original=original,
            replacement=replacement,
            outcome="lost",
            new_id=None,
            error=f"{add_error}; restore failed: {restore_error}",
        )

    logger.warning("Rewrite of hook %s failed, original restored as %s", hook_id, restored_id)
    warn(f"Could not re-add hook {hook_id} ({add_error}); original registration restored")
    return RewriteRecord(
        original=original,
        replacement=replacement,
        outcome="restored",
        new_id=restored_id,
        error=add_error,
    )
