"""Registered config migrations.

Migrations must tolerate partially migrated projects: directories may be
missing, config fields may already be set, and hooks may have been removed
by hand since the last run.
"""

import posixpath
from collections.abc import Callable
from typing import Any

from botbox.artifacts.catalog import SCRIPTS
from botbox.artifacts.sync import install_items
from botbox.config.project_config import ProjectSettings
from botbox.gateway.hook_store.types import HookGuard, HookRegistration
from botbox.hooks.reconcile import rewrite_registrations
from botbox.migrations.models import Migration, MigrationContext


def _project_section(config: dict[str, Any]) -> dict[str, Any]:
    project = config.get("project")
    if not isinstance(project, dict):
        project = {}
        config["project"] = project
    return project


def _rewrite_project_hooks(
    ctx: MigrationContext,
    match: Callable[[HookRegistration], bool],
    transform: Callable[[HookRegistration], HookRegistration],
) -> None:
    result = rewrite_registrations(
        store=ctx.hook_store,
        project_dir=ctx.project_dir,
        match=match,
        transform=transform,
        log=ctx.log,
        warn=ctx.warn,
    )
    ctx.lost_hooks.extend(result.lost)


def _move_legacy_scripts(ctx: MigrationContext) -> None:
    old_scripts_dir = ctx.project_dir / "scripts"
    new_scripts_dir = ctx.agents_dir / "scripts"

    if not old_scripts_dir.exists():
        return

    if new_scripts_dir.exists():
        ctx.warn(
            "Legacy scripts/ exists alongside .agents/botbox/scripts/. "
            "Skipping move; remove scripts/ manually if no longer needed."
        )
        return

    try:
        new_scripts_dir.parent.mkdir(parents=True, exist_ok=True)
        old_scripts_dir.rename(new_scripts_dir)
    except OSError as e:
        raise RuntimeError(f"Failed to move scripts: {e}") from e
    ctx.log("Migrated scripts/ to .agents/botbox/scripts/")


def _replace_shell_scripts(ctx: MigrationContext) -> None:
    scripts_dir = ctx.agents_dir / "scripts"
    if not scripts_dir.exists():
        return

    for script in sorted(scripts_dir.glob("*.sh")):
        script.unlink()
        ctx.log(f"Removed legacy script: {script.name}")

    settings = ProjectSettings.from_config(ctx.config)
    result = install_items(ctx.project_dir, ctx.bundle, SCRIPTS, settings)
    if result.written:
        ctx.log(f"Installed scripts: {', '.join(result.written)}")


def _uses_shell_script(registration: HookRegistration) -> bool:
    return any(arg.endswith(".sh") for arg in registration.command)


def _point_hooks_at_node_scripts(ctx: MigrationContext) -> None:
    settings = ProjectSettings.from_config(ctx.config)
    name = settings.name

    def transform(hook: HookRegistration) -> HookRegistration:
        is_security_spawner = any("spawn-security-reviewer.sh" in arg for arg in hook.command)
        command: list[str] = []
        for arg in hook.command:
            if arg == "bash":
                command.append("bun")
            elif "spawn-security-reviewer.sh" in arg:
                command.append(arg.replace("spawn-security-reviewer.sh", "reviewer-loop.mjs"))
            elif arg.endswith(".sh"):
                command.append(arg.removesuffix(".sh") + ".mjs")
            else:
                command.append(arg)

        if is_security_spawner and name:
            command.extend([name, hook.mention or f"{name}-security"])

        return hook.with_changes(
            command=tuple(command),
            agent=hook.agent or settings.default_agent,
        )

    _rewrite_project_hooks(ctx, _uses_shell_script, transform)


def _add_default_agent_and_channel(ctx: MigrationContext) -> None:
    project = _project_section(ctx.config)
    name = project.get("name")
    if not name:
        ctx.warn("No project.name in config, skipping migration")
        return

    changed = False
    if not project.get("default_agent"):
        project["default_agent"] = f"{name}-dev"
        changed = True
    if not project.get("channel"):
        project["channel"] = name
        changed = True

    if changed:
        ctx.log(f"Added default_agent: {project['default_agent']}, channel: {project['channel']}")


def _is_unguarded_mention_hook(registration: HookRegistration) -> bool:
    return registration.mention is not None and registration.guard is None


def _guard_mention_hooks(ctx: MigrationContext) -> None:
    def transform(hook: HookRegistration) -> HookRegistration:
        mentioned = hook.mention or ""
        return hook.with_changes(
            guard=HookGuard(
                claim_pattern=f"agent://{mentioned}",
                claim_owner=mentioned,
                ttl_seconds=None,
            )
        )

    _rewrite_project_hooks(ctx, _is_unguarded_mention_hook, transform)


def _rename_beads_tool(ctx: MigrationContext) -> None:
    tools = ctx.config.get("tools")
    if not isinstance(tools, dict) or "beads" not in tools:
        return

    beads_enabled = tools.pop("beads")
    tools.setdefault("bones", beads_enabled)
    ctx.log("Migrated config: tools.beads → tools.bones")


ROLE_DEFAULTS: dict[str, dict[str, Any]] = {
    "dev": {"model": "opus", "max_loops": 100, "pause": 2, "timeout": 1800},
    "worker": {"model": "balanced", "timeout": 900},
    "reviewer": {"model": "strong", "max_loops": 100, "pause": 2, "timeout": 900},
}


def _add_role_settings(ctx: MigrationContext) -> None:
    agents = ctx.config.get("agents")
    if not isinstance(agents, dict):
        agents = {}
        ctx.config["agents"] = agents

    added: list[str] = []
    for role, defaults in ROLE_DEFAULTS.items():
        role_settings = agents.get(role)
        if not isinstance(role_settings, dict):
            role_settings = {}
            agents[role] = role_settings
        for key, value in defaults.items():
            if key not in role_settings:
                role_settings[key] = value
                added.append(f"{role}.{key}")

    if added:
        ctx.log(f"Added agent settings: {', '.join(added)}")


# Node loop scripts and the `botbox run` subcommand replacing each
LOOP_RUNNERS = {
    "respond.mjs": "responder",
    "router.mjs": "responder",
    "reviewer-loop.mjs": "reviewer-loop",
    "agent-loop.mjs": "worker-loop",
    "dev-loop.mjs": "dev-loop",
}


def _find_node_loop(command: tuple[str, ...]) -> int | None:
    """Return the index of `bun` when it launches a known loop script."""
    for index, arg in enumerate(command[:-1]):
        if arg == "bun" and posixpath.basename(command[index + 1]) in LOOP_RUNNERS:
            return index
    return None


def _runs_node_loop(registration: HookRegistration) -> bool:
    return _find_node_loop(registration.command) is not None


def _run_hooks_through_botbox(ctx: MigrationContext) -> None:
    settings = ProjectSettings.from_config(ctx.config)
    name = settings.name or "project"

    def transform(hook: HookRegistration) -> HookRegistration:
        index = _find_node_loop(hook.command)
        if index is None:
            return hook
        runner = LOOP_RUNNERS[posixpath.basename(hook.command[index + 1])]
        script_args = hook.command[index + 2 :]

        command = [*hook.command[:index], "botbox", "run", runner]
        role = runner
        if runner == "reviewer-loop" and len(script_args) >= 2:
            reviewer_agent = script_args[1]
            command.extend(["--agent", reviewer_agent])
            role = "reviewer-" + reviewer_agent.removeprefix(f"{name}-")

        return hook.with_changes(
            command=tuple(command),
            description=hook.description or f"botbox:{name}:{role}",
        )

    _rewrite_project_hooks(ctx, _runs_node_loop, transform)


MIGRATIONS: tuple[Migration, ...] = (
    Migration(
        id="1.0.1",
        title="Move loop scripts into .agents/botbox/scripts",
        description="Migrates legacy scripts/ to the managed location.",
        up=_move_legacy_scripts,
    ),
    Migration(
        id="1.0.2",
        title="Replace .sh loop scripts with .mjs versions",
        description="Removes legacy .sh scripts and installs eligible .mjs scripts.",
        up=_replace_shell_scripts,
    ),
    Migration(
        id="1.0.3",
        title="Update bus hooks from .sh to .mjs scripts",
        description="Re-registers project hooks so their commands run the .mjs scripts.",
        up=_point_hooks_at_node_scripts,
    ),
    Migration(
        id="1.0.4",
        title="Add default_agent and channel to project config",
        description="Adds project.default_agent and project.channel to .botbox.json.",
        up=_add_default_agent_and_channel,
    ),
    Migration(
        id="1.0.5",
        title="Guard mention hooks with an agent claim",
        description="Re-registers @mention hooks without a claim so only one agent spawns.",
        up=_guard_mention_hooks,
    ),
    Migration(
        id="1.0.6",
        title="Rename beads tool to bones",
        description="Renames tools.beads to tools.bones in .botbox.json.",
        up=_rename_beads_tool,
    ),
    Migration(
        id="1.0.7",
        title="Add per-role agent settings",
        description="Fills in model, loop bound and timeout defaults under agents.*.",
        up=_add_role_settings,
    ),
    Migration(
        id="1.0.8",
        title="Run hook commands through botbox run",
        description="Re-registers hooks that launch .mjs loops with bun to use `botbox run`.",
        up=_run_hooks_through_botbox,
    ),
)
