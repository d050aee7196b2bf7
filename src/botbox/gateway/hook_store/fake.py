"""Fake HookStore implementation for testing.

FakeHookStore keeps registrations in memory, can be configured to fail
specific calls, and records every call for test assertions.
"""

from botbox.gateway.hook_store.abc import HookStore, HookStoreUnavailableError
from botbox.gateway.hook_store.types import HookRegistration


class FakeHookStore(HookStore):
    """In-memory fake implementation that tracks mutations.

    This class has NO public setup methods beyond constructor.
    All state is provided via constructor or captured during execution.
    """

    def __init__(
        self,
        *,
        registrations: list[HookRegistration] | None = None,
        available: bool = True,
        fail_adds: int = 0,
        fail_removes: frozenset[str] = frozenset(),
    ) -> None:
        """Create FakeHookStore with optional initial state.

        Args:
            registrations: Registrations present before the test runs
            available: If False, every call raises HookStoreUnavailableError
            fail_adds: Number of add calls that fail before adds start succeeding
            fail_removes: Hook ids whose removal fails
        """
        self._registrations: dict[str, HookRegistration] = {}
        for registration in registrations or []:
            if registration.id is None:
                raise ValueError("Seeded registrations need an id")
            self._registrations[registration.id] = registration
        self._available = available
        self._fail_adds = fail_adds
        self._fail_removes = fail_removes
        self._next_id = 1
        self._calls: list[tuple[str, str]] = []
        self._added: list[HookRegistration] = []
        self._removed: list[str] = []

    # --- Test assertions ---

    @property
    def registrations(self) -> list[HookRegistration]:
        """Current registrations, in insertion order.

        This property is for test assertions only.
        """
        return list(self._registrations.values())

    @property
    def calls(self) -> list[tuple[str, str]]:
        """Every call made, as (operation, argument) pairs.

        This property is for test assertions only.
        """
        return list(self._calls)

    @property
    def added(self) -> list[HookRegistration]:
        """Registrations successfully added, in order.

        This property is for test assertions only.
        """
        return list(self._added)

    @property
    def removed(self) -> list[str]:
        """Ids successfully removed, in order.

        This property is for test assertions only.
        """
        return list(self._removed)

    # --- HookStore operations ---

    def list_registrations(self) -> list[HookRegistration]:
        self._calls.append(("list", ""))
        if not self._available:
            raise HookStoreUnavailableError("bus not found")
        return list(self._registrations.values())

    def add_registration(self, registration: HookRegistration) -> str:
        self._calls.append(("add", " ".join(registration.command)))
        if not self._available:
            raise HookStoreUnavailableError("bus not found")
        if self._fail_adds > 0:
            self._fail_adds -= 1
            raise HookStoreUnavailableError("bus hooks add failed")

        hook_id = f"hk-{self._next_id}"
        self._next_id += 1
        stored = registration.with_changes(id=hook_id)
        self._registrations[hook_id] = stored
        self._added.append(stored)
        return hook_id

    def remove_registration(self, hook_id: str) -> None:
        self._calls.append(("remove", hook_id))
        if not self._available:
            raise HookStoreUnavailableError("bus not found")
        if hook_id in self._fail_removes:
            raise HookStoreUnavailableError(f"bus hooks remove {hook_id} failed")
        if hook_id not in self._registrations:
            raise HookStoreUnavailableError(f"no hook with id {hook_id}")
        del self._registrations[hook_id]
        self._removed.append(hook_id)
