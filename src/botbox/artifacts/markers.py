"""Version marker I/O.

Each artifact kind keeps a bare fingerprint string in a dotfile next to its
installed items (e.g. .agents/botbox/.version).
"""

from pathlib import Path

from botbox.artifacts.models import ArtifactKind


def load_marker(project_dir: Path, kind: ArtifactKind) -> str | None:
    """Load the installed fingerprint for a kind.

    Returns None if the marker does not exist (kind not under version
    management) or is empty.
    """
    path = kind.marker_path(project_dir)
    if not path.is_file():
        return None
    value = path.read_text(encoding="utf-8").strip()
    return value or None


def save_marker(project_dir: Path, kind: ArtifactKind, fingerprint: str) -> bool:
    """Write the fingerprint marker for a kind.

    Returns True if the file was written, False if it already held the value.
    """
    if load_marker(project_dir, kind) == fingerprint:
        return False
    path = kind.marker_path(project_dir)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(fingerprint, encoding="utf-8")
    return True
