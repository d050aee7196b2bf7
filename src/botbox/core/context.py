"""BotboxContext - dependency injection container for botbox commands."""

from dataclasses import dataclass
from pathlib import Path

from botbox.gateway.bundle.abc import BundleCatalog
from botbox.gateway.bundle.fake import FakeBundleCatalog
from botbox.gateway.bundle.real import RealBundleCatalog
from botbox.gateway.hook_store.abc import HookStore
from botbox.gateway.hook_store.fake import FakeHookStore
from botbox.gateway.hook_store.real import BOTBOX_HOOK_TIMEOUT_SECONDS, RealBusHookStore
from botbox.gateway.vcs.abc import Vcs
from botbox.gateway.vcs.fake import FakeVcs
from botbox.gateway.vcs.real import RealVcs


@dataclass(frozen=True)
class BotboxContext:
    """Context container for botbox operations.

    All filesystem-external dependencies (bundled data, the hook service and
    version control) are accessed through this context.
    """

    cwd: Path
    bundle: BundleCatalog
    hook_store: HookStore
    vcs: Vcs
    debug: bool

    @staticmethod
    def for_test(
        *,
        cwd: Path | None = None,
        bundle: BundleCatalog | None = None,
        hook_store: HookStore | None = None,
        vcs: Vcs | None = None,
        debug: bool = False,
    ) -> "BotboxContext":
        """Create a context with fakes for any unspecified gateway.

        Args:
            cwd: Working directory (defaults to Path("/fake/project"))
            bundle: Optional BundleCatalog. If None, creates an empty FakeBundleCatalog.
            hook_store: Optional HookStore. If None, creates FakeHookStore.
            vcs: Optional Vcs. If None, creates FakeVcs.
            debug: Whether debug mode is enabled
        """
        return BotboxContext(
            cwd=cwd if cwd is not None else Path("/fake/project"),
            bundle=bundle if bundle is not None else FakeBundleCatalog(),
            hook_store=hook_store if hook_store is not None else FakeHookStore(),
            vcs=vcs if vcs is not None else FakeVcs(),
            debug=debug,
        )


def create_context(*, debug: bool) -> BotboxContext:
    """Create a BotboxContext with real gateway implementations."""
    return BotboxContext(
        cwd=Path.cwd(),
        bundle=RealBundleCatalog(),
        hook_store=RealBusHookStore(timeout_seconds=BOTBOX_HOOK_TIMEOUT_SECONDS),
        vcs=RealVcs(timeout_seconds=BOTBOX_HOOK_TIMEOUT_SECONDS),
        debug=debug,
    )
