"""Production Vcs using the jj or git CLI."""

from collections.abc import Sequence
from pathlib import Path
from typing import Literal

from botbox.gateway.vcs.abc import Vcs
from botbox.subprocess_utils import run_subprocess_with_context

VcsKind = Literal["jj", "git"]


def detect_vcs(root: Path) -> VcsKind | None:
    """Detect the repository kind for root.

    A colocated jj repo also has .git; jj wins when both are present.
    """
    candidates = [root.resolve(), *root.resolve().parents]
    if any((directory / ".jj").is_dir() for directory in candidates):
        return "jj"
    if any((directory / ".git").exists() for directory in candidates):
        return "git"
    return None


class RealVcs(Vcs):
    """Production implementation shelling out to jj or git."""

    def __init__(self, *, timeout_seconds: float | None = None) -> None:
        self._timeout_seconds = timeout_seconds

    def is_repo(self, root: Path) -> bool:
        return detect_vcs(root) is not None

    def commit(self, root: Path, message: str, paths: Sequence[Path]) -> None:
        kind = detect_vcs(root)
        if kind is None:
            raise RuntimeError(f"{root} is not inside a jj or git repository")

        path_args = [str(path) for path in paths]
        if kind == "jj":
            run_subprocess_with_context(
                cmd=["jj", "commit", "-m", message, *path_args],
                operation_context="commit with jj",
                cwd=root,
                timeout=self._timeout_seconds,
            )
            return

        run_subprocess_with_context(
            cmd=["git", "add", "--", *path_args],
            operation_context="stage files with git",
            cwd=root,
            timeout=self._timeout_seconds,
        )
        # Exit 0 means nothing is staged
        staged = run_subprocess_with_context(
            cmd=["git", "diff", "--cached", "--quiet"],
            operation_context="check staged changes with git",
            cwd=root,
            timeout=self._timeout_seconds,
            check=False,
        )
        if staged.returncode == 0:
            return
        run_subprocess_with_context(
            cmd=["git", "commit", "-m", message],
            operation_context="commit with git",
            cwd=root,
            timeout=self._timeout_seconds,
        )
