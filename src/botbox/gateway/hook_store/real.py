"""Production HookStore using the `bus` CLI."""

import json
import logging

from botbox.gateway.hook_store.abc import HookStore, HookStoreUnavailableError
from botbox.gateway.hook_store.serialization import build_add_arguments, parse_listing
from botbox.gateway.hook_store.types import HookRegistration
from botbox.subprocess_utils import run_subprocess_with_context

logger = logging.getLogger(__name__)

# Every bus call is a same-host round trip; anything slower is treated as down
BOTBOX_HOOK_TIMEOUT_SECONDS = 10


class RealBusHookStore(HookStore):
    """Production implementation using `bus hooks` subcommands.

    All operations execute the bus CLI via subprocess with a bounded timeout.
    """

    def __init__(self, *, timeout_seconds: float = BOTBOX_HOOK_TIMEOUT_SECONDS) -> None:
        self._timeout_seconds = timeout_seconds

    def _run(self, args: list[str], operation_context: str) -> str:
        try:
            result = run_subprocess_with_context(
                cmd=["bus", "hooks", *args],
                operation_context=operation_context,
                timeout=self._timeout_seconds,
            )
        except RuntimeError as e:
            raise HookStoreUnavailableError(str(e)) from e
        return result.stdout

    def list_registrations(self) -> list[HookRegistration]:
        stdout = self._run(["list", "--format", "json"], "list bus hooks")
        try:
            return parse_listing(stdout)
        except ValueError as e:
            # json.JSONDecodeError is a ValueError
            raise HookStoreUnavailableError(f"Could not parse bus hooks listing: {e}") from e

    def add_registration(self, registration: HookRegistration) -> str:
        stdout = self._run(
            ["add", *build_add_arguments(registration)], "add bus hook"
        )
        return _parse_added_id(stdout)

    def remove_registration(self, hook_id: str) -> None:
        self._run(["remove", hook_id], f"remove bus hook {hook_id}")


def _parse_added_id(stdout: str) -> str:
    """Extract the new hook id from `bus hooks add` output.

    Accepts a JSON object with an "id" field, otherwise takes the last
    whitespace-separated token.
    """
    stripped = stdout.strip()
    if not stripped:
        return ""
    try:
        data = json.loads(stripped)
    except json.JSONDecodeError:
        return stripped.split()[-1]
    if isinstance(data, dict) and data.get("id") is not None:
        return str(data["id"])
    if isinstance(data, (int, str)) and not isinstance(data, bool):
        return str(data)
    logger.debug("bus hooks add returned no id: %s", stripped)
    return ""
