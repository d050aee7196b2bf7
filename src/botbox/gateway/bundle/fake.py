"""Fake BundleCatalog implementation for testing.

FakeBundleCatalog holds bundled content in memory so fingerprint and sync
tests never depend on the real package data.
"""

from botbox.artifacts.models import ArtifactKind
from botbox.gateway.bundle.abc import BundleCatalog


class FakeBundleCatalog(BundleCatalog):
    """In-memory fake keyed by kind name.

    This class has NO public setup methods beyond constructor.
    """

    def __init__(self, *, items: dict[str, dict[str, str | bytes]] | None = None) -> None:
        """Create FakeBundleCatalog.

        Args:
            items: Mapping of kind name -> {item name -> content}
        """
        self._items: dict[str, dict[str, bytes]] = {}
        for kind_name, contents in (items or {}).items():
            self._items[kind_name] = {
                name: content.encode("utf-8") if isinstance(content, str) else content
                for name, content in contents.items()
            }

    def list_items(self, kind: ArtifactKind) -> list[str]:
        contents = self._items.get(kind.name, {})
        return sorted(name for name in contents if name.endswith(kind.item_suffix))

    def read_item(self, kind: ArtifactKind, name: str) -> bytes:
        contents = self._items.get(kind.name, {})
        if name not in contents:
            raise FileNotFoundError(f"No bundled {kind.name} item named {name}")
        return contents[name]
