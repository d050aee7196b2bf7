"""Version control operations used by sync to commit updated files."""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from pathlib import Path


class Vcs(ABC):
    """Abstract interface for committing files in a jj or git checkout."""

    @abstractmethod
    def is_repo(self, root: Path) -> bool:
        """Check whether root is inside a jj or git repository."""
        ...

    @abstractmethod
    def commit(self, root: Path, message: str, paths: Sequence[Path]) -> None:
        """Commit the given paths with message.

        Raises:
            RuntimeError: If the commit command fails
        """
        ...
