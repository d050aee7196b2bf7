"""Subprocess helpers with consistent error reporting."""

import subprocess
from collections.abc import Sequence
from pathlib import Path


def run_subprocess_with_context(
    *,
    cmd: Sequence[str],
    operation_context: str,
    cwd: Path | None = None,
    timeout: float | None = None,
    check: bool = True,
) -> subprocess.CompletedProcess[str]:
    """Run a command, raising RuntimeError with context if it fails.

    A missing executable and a timeout are reported the same way as a
    non-zero exit, so callers handle a single error type.

    Args:
        cmd: Argument vector (never passed through a shell)
        operation_context: Short description used in the error message
        cwd: Working directory for the command
        timeout: Seconds before the command is killed
        check: Raise on a non-zero exit. When False the caller inspects
            the return code itself.

    Raises:
        RuntimeError: If the command cannot run, times out, or (with check)
            exits non-zero
    """
    try:
        result = subprocess.run(
            list(cmd),
            cwd=cwd,
            capture_output=True,
            text=True,
            timeout=timeout,
            check=False,
        )
    except FileNotFoundError as e:
        raise RuntimeError(f"Failed to {operation_context}: {cmd[0]} not found") from e
    except subprocess.TimeoutExpired as e:
        raise RuntimeError(
            f"Failed to {operation_context}: timed out after {timeout}s"
        ) from e

    if check and result.returncode != 0:
        stderr = result.stderr.strip()
        message = f"Failed to {operation_context} (exit {result.returncode})"
        if stderr:
            message = f"{message}: {stderr}"
        raise RuntimeError(message)

    return result
