"""Data types for external hook registrations."""

import dataclasses
from dataclasses import dataclass
from typing import Literal

TriggerType = Literal["channel", "mention"]


@dataclass(frozen=True)
class HookGuard:
    """Claim that must be available before a hook fires.

    Attributes:
        claim_pattern: Claim URI, e.g. "agent://myapp-dev"
        claim_owner: Agent that holds the claim while the command runs
        ttl_seconds: Claim TTL, or None when the listing did not report it
    """

    claim_pattern: str
    claim_owner: str
    ttl_seconds: int | None


@dataclass(frozen=True)
class HookRegistration:
    """Hook rule registered in the external hook service.

    Attributes:
        id: Service-assigned id; None for a definition not yet added
        channel: Channel the hook subscribes to
        mention: Agent name whose @mention fires the hook (no leading "@")
        guard: Claim guard, if any
        command: Argument vector run when the hook fires
        priority: Service priority, or None for the service default
        active: Whether the service currently fires this hook
        cwd: Working directory the command runs in
        agent: Agent identity the hook was registered as
        description: Free-form label (botbox uses "botbox:<project>:<role>")
    """

    id: str | None
    channel: str | None
    mention: str | None
    guard: HookGuard | None
    command: tuple[str, ...]
    priority: int | None
    active: bool
    cwd: str | None
    agent: str | None
    description: str | None

    @property
    def trigger_type(self) -> TriggerType:
        return "mention" if self.mention else "channel"

    def with_changes(self, **changes: object) -> "HookRegistration":
        """Return a copy with some fields replaced."""
        return dataclasses.replace(self, **changes)  # type: ignore[arg-type]
