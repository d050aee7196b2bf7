"""Tests for converting `bus hooks` JSON to and from HookRegistration."""

import json

import pytest

from botbox.gateway.hook_store.serialization import (
    build_add_arguments,
    parse_listing,
    parse_listing_entry,
)
from botbox.gateway.hook_store.types import HookGuard, HookRegistration


def _registration(**overrides: object) -> HookRegistration:
    base = HookRegistration(
        id="7",
        channel="myapp",
        mention=None,
        guard=None,
        command=("botbox", "run", "dev-loop"),
        priority=None,
        active=True,
        cwd="/work/myapp",
        agent="myapp-dev",
        description=None,
    )
    return base.with_changes(**overrides)


class TestParseListing:
    """Tests for parse_listing and parse_listing_entry."""

    def test_accepts_bare_array(self) -> None:
        payload = json.dumps([{"id": 1, "command": ["bun", "x.mjs"], "cwd": "/p"}])

        [registration] = parse_listing(payload)

        assert registration.id == "1"
        assert registration.command == ("bun", "x.mjs")
        assert registration.active is True

    def test_accepts_hooks_object(self) -> None:
        payload = json.dumps({"hooks": [{"id": "a", "command": ["true"]}]})

        assert [r.id for r in parse_listing(payload)] == ["a"]

    def test_empty_output_is_empty_listing(self) -> None:
        assert parse_listing("  \n") == []

    def test_rejects_other_shapes(self) -> None:
        with pytest.raises(ValueError):
            parse_listing('"oops"')

    def test_rejects_invalid_json(self) -> None:
        with pytest.raises(ValueError):
            parse_listing("not json")

    def test_skips_entries_without_command(self) -> None:
        assert parse_listing_entry({"id": 3}) is None
        assert parse_listing_entry("garbage") is None

    def test_mention_condition(self) -> None:
        registration = parse_listing_entry(
            {
                "id": 4,
                "command": ["true"],
                "condition": {"type": "mention_received", "agent": "@myapp-security"},
            }
        )

        assert registration is not None
        assert registration.mention == "myapp-security"
        assert registration.trigger_type == "mention"
        assert registration.guard is None

    def test_claim_condition(self) -> None:
        registration = parse_listing_entry(
            {
                "id": 5,
                "command": ["true"],
                "condition": {"type": "claim_available", "pattern": "agent://myapp-dev"},
                "active": False,
            }
        )

        assert registration is not None
        assert registration.guard == HookGuard(
            claim_pattern="agent://myapp-dev", claim_owner="myapp-dev", ttl_seconds=None
        )
        assert registration.active is False

    def test_mention_with_top_level_claim(self) -> None:
        registration = parse_listing_entry(
            {
                "id": 6,
                "command": ["true"],
                "condition": {"type": "mention_received", "agent": "myapp-security"},
                "claim_pattern": "agent://myapp-security",
                "claim_owner": "myapp-security",
                "priority": 2,
            }
        )

        assert registration is not None
        assert registration.mention == "myapp-security"
        assert registration.guard is not None
        assert registration.guard.claim_owner == "myapp-security"
        assert registration.priority == 2


class TestBuildAddArguments:
    """Tests for build_add_arguments."""

    def test_channel_hook(self) -> None:
        args = build_add_arguments(_registration(priority=3, description="botbox:myapp:dev-loop"))

        assert args == [
            "--agent",
            "myapp-dev",
            "--channel",
            "myapp",
            "--priority",
            "3",
            "--cwd",
            "/work/myapp",
            "--description",
            "botbox:myapp:dev-loop",
            "--",
            "botbox",
            "run",
            "dev-loop",
        ]

    def test_guard_gets_default_ttl(self) -> None:
        guard = HookGuard(claim_pattern="agent://x", claim_owner="x", ttl_seconds=None)

        args = build_add_arguments(_registration(guard=guard))

        claim_index = args.index("--claim")
        assert args[claim_index : claim_index + 6] == [
            "--claim",
            "agent://x",
            "--claim-owner",
            "x",
            "--ttl",
            "600",
        ]

    def test_guard_keeps_known_ttl(self) -> None:
        guard = HookGuard(claim_pattern="agent://x", claim_owner="x", ttl_seconds=120)

        args = build_add_arguments(_registration(guard=guard))

        assert args[args.index("--ttl") + 1] == "120"

    def test_command_follows_separator(self) -> None:
        args = build_add_arguments(_registration(command=("bun", "--flag", "x.mjs")))

        assert args[args.index("--") + 1 :] == ["bun", "--flag", "x.mjs"]
