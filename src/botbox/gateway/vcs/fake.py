"""Fake Vcs implementation for testing."""

from collections.abc import Sequence
from pathlib import Path

from botbox.gateway.vcs.abc import Vcs


class FakeVcs(Vcs):
    """In-memory fake that records commits.

    This class has NO public setup methods beyond constructor.
    """

    def __init__(self, *, is_repo: bool = True, commit_error: str | None = None) -> None:
        """Create FakeVcs.

        Args:
            is_repo: Value returned by is_repo()
            commit_error: If set, commit() raises RuntimeError with this message
        """
        self._is_repo = is_repo
        self._commit_error = commit_error
        self._commits: list[tuple[Path, str, tuple[Path, ...]]] = []

    @property
    def commits(self) -> list[tuple[Path, str, tuple[Path, ...]]]:
        """(root, message, paths) for each successful commit.

        This property is for test assertions only.
        """
        return list(self._commits)

    def is_repo(self, root: Path) -> bool:
        return self._is_repo

    def commit(self, root: Path, message: str, paths: Sequence[Path]) -> None:
        if self._commit_error is not None:
            raise RuntimeError(self._commit_error)
        self._commits.append((root, message, tuple(paths)))
