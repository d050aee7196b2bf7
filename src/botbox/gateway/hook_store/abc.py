"""Abstract interface for the external hook registry.

The hook service supports list, add and remove only. There is no in-place
update, so callers that need to change a registration remove it and add a
replacement (see botbox.hooks.reconcile).
"""

from abc import ABC, abstractmethod

from botbox.gateway.hook_store.types import HookRegistration


class HookStoreUnavailableError(Exception):
    """Raised when a hook service call fails, times out, or the service is absent."""


class HookStore(ABC):
    """Abstract interface for hook registry operations.

    All implementations (real, fake) must implement this interface.
    """

    @abstractmethod
    def list_registrations(self) -> list[HookRegistration]:
        """List every registration known to the service.

        Raises:
            HookStoreUnavailableError: If the listing cannot be obtained
        """
        ...

    @abstractmethod
    def add_registration(self, registration: HookRegistration) -> str:
        """Register a hook. The registration's id is ignored.

        Returns:
            The id assigned by the service (may be empty if it reports none)

        Raises:
            HookStoreUnavailableError: If the add fails
        """
        ...

    @abstractmethod
    def remove_registration(self, hook_id: str) -> None:
        """Remove a hook by id.

        Raises:
            HookStoreUnavailableError: If the remove fails
        """
        ...
