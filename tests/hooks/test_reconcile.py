"""Tests for rewriting external hook registrations via remove + add."""

import logging
from pathlib import Path

import pytest

from botbox.gateway.hook_store.fake import FakeHookStore
from botbox.gateway.hook_store.types import HookRegistration
from botbox.hooks.reconcile import belongs_to_project, rewrite_registrations

PROJECT = Path("/work/myapp")


def _hook(hook_id: str, command: tuple[str, ...], **overrides: object) -> HookRegistration:
    registration = HookRegistration(
        id=hook_id,
        channel="myapp",
        mention=None,
        guard=None,
        command=command,
        priority=1,
        active=True,
        cwd=str(PROJECT),
        agent="myapp-dev",
        description=None,
    )
    return registration.with_changes(**overrides)


def _uses_sh(registration: HookRegistration) -> bool:
    return any(arg.endswith(".sh") for arg in registration.command)


def _to_mjs(registration: HookRegistration) -> HookRegistration:
    return registration.with_changes(
        command=tuple(arg.replace(".sh", ".mjs") for arg in registration.command)
    )


class _Sinks:
    def __init__(self) -> None:
        self.logs: list[str] = []
        self.warnings: list[str] = []


def _rewrite(store: FakeHookStore, sinks: _Sinks):
    return rewrite_registrations(
        store=store,
        project_dir=PROJECT,
        match=_uses_sh,
        transform=_to_mjs,
        log=sinks.logs.append,
        warn=sinks.warnings.append,
    )


def test_rewrites_matching_registration() -> None:
    store = FakeHookStore(registrations=[_hook("h1", ("bash", "loop.sh"))])
    sinks = _Sinks()

    result = _rewrite(store, sinks)

    assert result.rewritten == ["h1"]
    [replacement] = store.registrations
    assert replacement.command == ("bash", "loop.mjs")
    assert replacement.priority == 1
    assert replacement.channel == "myapp"
    assert replacement.cwd == str(PROJECT)
    assert sinks.logs == ["Updated hook h1: bash loop.sh → bash loop.mjs"]


def test_skips_other_projects_inactive_and_non_matching() -> None:
    store = FakeHookStore(
        registrations=[
            _hook("other", ("bash", "loop.sh"), cwd="/work/otherapp"),
            _hook("inactive", ("bash", "loop.sh"), active=False),
            _hook("current", ("bun", "loop.mjs")),
        ]
    )

    result = _rewrite(store, _Sinks())

    assert result.records == ()
    assert store.calls == [("list", "")]


def test_unavailable_service_is_a_no_op() -> None:
    store = FakeHookStore(available=False)
    sinks = _Sinks()

    result = _rewrite(store, sinks)

    assert result.available is False
    assert sinks.logs == ["Hook service not available, skipping hook migration"]
    assert sinks.warnings == []


def test_remove_failure_skips_registration() -> None:
    original = _hook("h1", ("bash", "loop.sh"))
    store = FakeHookStore(registrations=[original], fail_removes=frozenset({"h1"}))
    sinks = _Sinks()

    result = _rewrite(store, sinks)

    assert result.records[0].outcome == "remove-failed"
    assert store.registrations == [original]
    assert ("add", "bash loop.mjs") not in store.calls
    assert sinks.warnings == ["Could not remove hook h1, skipping"]


def test_failed_add_restores_original() -> None:
    store = FakeHookStore(registrations=[_hook("h1", ("bash", "loop.sh"))], fail_adds=1)
    sinks = _Sinks()

    result = _rewrite(store, sinks)

    assert result.restored == ["h1"]
    [restored] = store.registrations
    assert restored.command == ("bash", "loop.sh")
    assert restored.id != "h1"
    assert len(sinks.warnings) == 1
    assert "original registration restored" in sinks.warnings[0]


def test_failed_restore_reports_lost_hook(caplog: pytest.LogCaptureFixture) -> None:
    store = FakeHookStore(registrations=[_hook("h1", ("bash", "loop.sh"))], fail_adds=2)
    sinks = _Sinks()

    with caplog.at_level(logging.CRITICAL, logger="botbox.hooks.reconcile"):
        result = _rewrite(store, sinks)

    assert result.lost == ["h1"]
    assert store.registrations == []
    assert sinks.warnings[0].startswith("CRITICAL: hook h1 was removed")
    assert "bash loop.sh" in sinks.warnings[0]
    assert any(record.levelno == logging.CRITICAL for record in caplog.records)


def test_continues_after_lost_hook() -> None:
    store = FakeHookStore(
        registrations=[_hook("h1", ("bash", "a.sh")), _hook("h2", ("bash", "b.sh"))],
        fail_adds=2,
    )

    result = _rewrite(store, _Sinks())

    assert result.lost == ["h1"]
    assert result.rewritten == ["h2"]


def test_belongs_to_project_resolves_paths(tmp_path: Path) -> None:
    (tmp_path / "sub").mkdir()
    registration = _hook("h1", ("true",), cwd=f"{tmp_path}/sub/..")

    assert belongs_to_project(registration, tmp_path) is True
    assert belongs_to_project(registration.with_changes(cwd=None), tmp_path) is False
