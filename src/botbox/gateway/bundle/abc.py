"""Abstract base class for reading botbox's bundled artifacts.

The bundle is the read-only set of files shipped inside the botbox package
(workflow docs, loop scripts, prompts, hook scripts). Putting it behind a
gateway lets tests swap in in-memory content.
"""

from abc import ABC, abstractmethod

from botbox.artifacts.models import ArtifactKind


class BundleCatalog(ABC):
    """Abstract interface for bundled artifact lookup.

    All implementations (real, fake) must implement this interface.
    """

    @abstractmethod
    def list_items(self, kind: ArtifactKind) -> list[str]:
        """List bundled item names for a kind, sorted by name.

        Only names ending in the kind's item suffix are returned. A kind whose
        bundle directory does not exist has no items.
        """
        ...

    @abstractmethod
    def read_item(self, kind: ArtifactKind, name: str) -> bytes:
        """Read the raw content of one bundled item.

        Raises:
            FileNotFoundError: If the item is not part of the bundle
        """
        ...
