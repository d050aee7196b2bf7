"""Convert hook registrations to and from the `bus hooks` CLI format.

`parse_listing` reads `bus hooks list --format json` output and
`build_add_arguments` produces the argument vector for `bus hooks add`, so a
registration can go list -> modify -> add without string splicing.
"""

import json
from typing import Any

from botbox.gateway.hook_store.types import HookGuard, HookRegistration

# `bus hooks list` does not report claim TTLs; guarded hooks are re-added with this
DEFAULT_CLAIM_TTL_SECONDS = 600

AGENT_URI_PREFIX = "agent://"


def _optional_str(value: Any) -> str | None:
    if isinstance(value, str) and value:
        return value
    return None


def _optional_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.isdigit():
        return int(value)
    return None


def _parse_guard(entry: dict[str, Any], condition: dict[str, Any]) -> HookGuard | None:
    pattern: str | None = None
    if condition.get("type") == "claim_available":
        pattern = _optional_str(condition.get("pattern"))
    if pattern is None:
        pattern = _optional_str(entry.get("claim_pattern"))
    if pattern is None:
        return None

    owner = _optional_str(entry.get("claim_owner")) or pattern.removeprefix(AGENT_URI_PREFIX)
    return HookGuard(
        claim_pattern=pattern,
        claim_owner=owner,
        ttl_seconds=_optional_int(entry.get("ttl")),
    )


def parse_listing_entry(entry: Any) -> HookRegistration | None:
    """Parse one listed hook. Returns None for entries without an id or command."""
    if not isinstance(entry, dict):
        return None
    hook_id = entry.get("id")
    command = entry.get("command")
    if hook_id is None or not isinstance(command, list):
        return None

    condition = entry.get("condition")
    if not isinstance(condition, dict):
        condition = {}

    mention: str | None = None
    if condition.get("type") == "mention_received":
        agent = _optional_str(condition.get("agent"))
        mention = agent.removeprefix("@") if agent else None

    return HookRegistration(
        id=str(hook_id),
        channel=_optional_str(entry.get("channel")),
        mention=mention,
        guard=_parse_guard(entry, condition),
        command=tuple(str(arg) for arg in command),
        priority=_optional_int(entry.get("priority")),
        active=bool(entry.get("active", True)),
        cwd=_optional_str(entry.get("cwd")),
        agent=_optional_str(entry.get("agent")),
        description=_optional_str(entry.get("description")),
    )


def parse_listing(payload: str) -> list[HookRegistration]:
    """Parse `bus hooks list --format json` output.

    Accepts either a bare JSON array or an object with a "hooks" array.

    Raises:
        ValueError: If the payload is not JSON of either shape
    """
    stripped = payload.strip()
    if not stripped:
        return []

    data = json.loads(stripped)
    if isinstance(data, dict):
        data = data.get("hooks", [])
    if not isinstance(data, list):
        raise ValueError("hook listing is neither a list nor an object with 'hooks'")

    registrations = []
    for entry in data:
        registration = parse_listing_entry(entry)
        if registration is not None:
            registrations.append(registration)
    return registrations


def build_add_arguments(registration: HookRegistration) -> list[str]:
    """Build the `bus hooks add` arguments (after "add") for a registration."""
    args: list[str] = []
    if registration.agent:
        args.extend(["--agent", registration.agent])
    if registration.channel:
        args.extend(["--channel", registration.channel])
    if registration.mention:
        args.extend(["--mention", registration.mention])
    if registration.guard is not None:
        ttl = registration.guard.ttl_seconds
        args.extend(
            [
                "--claim",
                registration.guard.claim_pattern,
                "--claim-owner",
                registration.guard.claim_owner,
                "--ttl",
                str(ttl if ttl is not None else DEFAULT_CLAIM_TTL_SECONDS),
            ]
        )
    if registration.priority is not None:
        args.extend(["--priority", str(registration.priority)])
    if registration.cwd:
        args.extend(["--cwd", registration.cwd])
    if registration.description:
        args.extend(["--description", registration.description])
    args.append("--")
    args.extend(registration.command)
    return args
