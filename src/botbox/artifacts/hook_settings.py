"""Register installed hook scripts in .claude/settings.json.

Entries whose command points into the managed hooks directory are owned by
botbox and regenerated on every hooks sync; everything else in the settings
file is preserved.
"""

import json
from pathlib import Path
from typing import Any

from botbox.artifacts.catalog import HOOK_REGISTRY


def get_claude_settings_path(project_dir: Path) -> Path:
    """Get path to the project's .claude/settings.json."""
    return project_dir / ".claude" / "settings.json"


def load_settings(settings_path: Path) -> dict[str, Any]:
    """Load settings.json, returning an empty dict if it doesn't exist.

    Raises:
        ValueError: If the file is not a JSON object
    """
    if not settings_path.exists():
        return {}
    data = json.loads(settings_path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"{settings_path} must contain a JSON object")
    return data


def _is_managed_entry(entry: Any, hooks_dir: Path) -> bool:
    if not isinstance(entry, dict):
        return False
    hooks = entry.get("hooks")
    if not isinstance(hooks, list):
        return False
    prefix = str(hooks_dir) + "/"
    for hook in hooks:
        command = hook.get("command") if isinstance(hook, dict) else None
        if isinstance(command, str) and command.startswith(prefix):
            return True
    return False


def build_hooks_config(
    existing: dict[str, Any], hooks_dir: Path, hook_names: list[str]
) -> dict[str, Any]:
    """Return a copy of settings with botbox hook entries regenerated.

    Each installed hook gets one entry per event it is registered for.

    Raises:
        ValueError: If `hooks` is not an object or an event is not a list
    """
    settings = json.loads(json.dumps(existing))
    hooks_section = settings.get("hooks")
    if hooks_section is None:
        hooks_section = {}
    if not isinstance(hooks_section, dict):
        raise ValueError("settings.json: hooks must be an object")

    cleaned: dict[str, list[Any]] = {}
    for event, entries in hooks_section.items():
        if not isinstance(entries, list):
            raise ValueError(f"settings.json: hooks.{event} must be a list")
        kept = [entry for entry in entries if not _is_managed_entry(entry, hooks_dir)]
        if kept:
            cleaned[event] = kept

    for hook_name in sorted(hook_names):
        entry = HOOK_REGISTRY.get(hook_name)
        if entry is None:
            continue
        for event in entry.events:
            cleaned.setdefault(event, []).append(
                {
                    "matcher": "",
                    "hooks": [{"type": "command", "command": str(hooks_dir / hook_name)}],
                }
            )

    if cleaned:
        settings["hooks"] = cleaned
    else:
        settings.pop("hooks", None)
    return settings


def register_hook_scripts(project_dir: Path, hooks_dir: Path, hook_names: list[str]) -> bool:
    """Write hook registrations for installed hook scripts.

    Returns True if settings.json was written.
    """
    settings_path = get_claude_settings_path(project_dir)
    existing = load_settings(settings_path)
    updated = build_hooks_config(existing, hooks_dir, hook_names)
    if updated == existing:
        return False

    settings_path.parent.mkdir(parents=True, exist_ok=True)
    settings_path.write_text(json.dumps(updated, indent=2) + "\n", encoding="utf-8")
    return True
