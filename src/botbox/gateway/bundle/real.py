"""Production BundleCatalog reading package data from botbox/data/."""

from functools import cache
from pathlib import Path

from botbox.artifacts.models import ArtifactKind
from botbox.gateway.bundle.abc import BundleCatalog


@cache
def get_bundled_data_dir() -> Path:
    """Get path to the bundled data/ directory in the installed botbox package."""
    # __file__ is .../botbox/gateway/bundle/real.py, so parents[2] is botbox/
    return Path(__file__).parents[2] / "data"


class RealBundleCatalog(BundleCatalog):
    """Reads bundled items from the package's data directory."""

    def __init__(self, data_dir: Path | None = None) -> None:
        self._data_dir = data_dir if data_dir is not None else get_bundled_data_dir()

    def list_items(self, kind: ArtifactKind) -> list[str]:
        source_dir = self._data_dir / kind.bundle_dir
        if not source_dir.is_dir():
            return []
        return sorted(
            path.name
            for path in source_dir.iterdir()
            if path.is_file() and path.name.endswith(kind.item_suffix)
        )

    def read_item(self, kind: ArtifactKind, name: str) -> bytes:
        return (self._data_dir / kind.bundle_dir / name).read_bytes()
