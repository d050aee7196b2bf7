"""Project config I/O for .botbox.json.

The config document is kept as a plain mutable dict so migrations can edit it
field by field. `ProjectSettings` is the read-only view the artifact catalog
uses to decide which bundled items a project is eligible for.
"""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from packaging.version import InvalidVersion, Version

CONFIG_FILENAME = ".botbox.json"

# Version assumed for a config written before the `version` field existed
BASELINE_CONFIG_VERSION = "0.0.0"

# Legacy tool keys that older configs still carry
TOOL_ALIASES = {"beads": "bones"}


class ProjectConfigError(Exception):
    """Raised when .botbox.json exists but cannot be used as a config."""


def get_config_path(project_dir: Path) -> Path:
    """Get path to .botbox.json file."""
    return project_dir / CONFIG_FILENAME


def load_project_config(config_path: Path) -> dict[str, Any] | None:
    """Load config from .botbox.json.

    Returns None if file does not exist.

    Raises:
        ProjectConfigError: If the file is not UTF-8 JSON, not an object, or
            records a version that does not parse
    """
    if not config_path.exists():
        return None

    try:
        text = config_path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise ProjectConfigError(f"{config_path.name} is not valid UTF-8: {e}") from e
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ProjectConfigError(f"Invalid JSON in {config_path.name}: {e}") from e

    if not isinstance(data, dict):
        raise ProjectConfigError(f"{config_path.name} must contain a JSON object")
    _check_version(config_path, data)
    return data


def _check_version(config_path: Path, data: dict[str, Any]) -> None:
    version = data.get("version")
    # Absent or empty means the baseline version
    if version is None or version == "":
        return
    if not isinstance(version, str):
        raise ProjectConfigError(f"{config_path.name} version must be a string, got {version!r}")
    try:
        Version(version)
    except InvalidVersion as e:
        raise ProjectConfigError(f"Invalid version in {config_path.name}: {e}") from e


def save_project_config(config_path: Path, config: dict[str, Any]) -> None:
    """Save config to .botbox.json (2-space indent, trailing newline)."""
    content = json.dumps(config, indent=2, ensure_ascii=False) + "\n"
    config_path.write_text(content, encoding="utf-8")


def get_config_version(config: dict[str, Any]) -> str:
    """Return the schema version recorded in config, or the baseline."""
    version = config.get("version")
    if isinstance(version, str) and version:
        return version
    return BASELINE_CONFIG_VERSION


def _as_str_list(value: Any) -> tuple[str, ...]:
    if isinstance(value, str):
        return (value,)
    if isinstance(value, list):
        return tuple(str(item) for item in value if item)
    return ()


def _enabled_tools(value: Any) -> frozenset[str]:
    # Current configs use {"tool": true}; very old ones used a plain list
    if isinstance(value, dict):
        names = [name for name, enabled in value.items() if enabled]
    elif isinstance(value, list):
        names = [str(name) for name in value]
    else:
        names = []
    return frozenset(TOOL_ALIASES.get(name, name) for name in names)


@dataclass(frozen=True)
class ProjectSettings:
    """Read-only view of the config fields that drive artifact eligibility."""

    name: str | None
    project_types: tuple[str, ...]
    tools: frozenset[str]
    reviewers: tuple[str, ...]
    default_agent: str | None
    channel: str | None
    install_command: str | None

    @classmethod
    def empty(cls) -> "ProjectSettings":
        """Settings for a project whose config is missing or unreadable."""
        return cls(
            name=None,
            project_types=(),
            tools=frozenset(),
            reviewers=(),
            default_agent=None,
            channel=None,
            install_command=None,
        )

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> "ProjectSettings":
        project = config.get("project")
        if not isinstance(project, dict):
            project = {}
        review = config.get("review")
        if not isinstance(review, dict):
            review = {}

        name = project.get("name") or None
        default_agent = project.get("default_agent") or (f"{name}-dev" if name else None)
        return cls(
            name=name,
            project_types=_as_str_list(project.get("type")),
            tools=_enabled_tools(config.get("tools")),
            reviewers=_as_str_list(review.get("reviewers")),
            default_agent=default_agent,
            channel=project.get("channel") or name,
            install_command=project.get("install_command") or None,
        )
