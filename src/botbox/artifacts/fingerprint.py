"""Content fingerprints used as artifact kind versions."""

import hashlib

from botbox.artifacts.catalog import list_eligible_items
from botbox.artifacts.models import ArtifactKind
from botbox.config.project_config import ProjectSettings
from botbox.gateway.bundle.abc import BundleCatalog

FINGERPRINT_LENGTH = 12

# Fingerprint of a kind with no eligible items
EMPTY_FINGERPRINT = "0" * FINGERPRINT_LENGTH


def fingerprint_contents(contents: list[bytes]) -> str:
    """Hash already-ordered item contents into a short fingerprint.

    An empty list maps to EMPTY_FINGERPRINT rather than the hash of zero
    bytes, so "nothing eligible" differs from "one empty item".
    """
    if not contents:
        return EMPTY_FINGERPRINT
    digest = hashlib.sha256()
    for content in contents:
        digest.update(content)
    return digest.hexdigest()[:FINGERPRINT_LENGTH]


def compute_fingerprint(
    bundle: BundleCatalog, kind: ArtifactKind, settings: ProjectSettings
) -> str:
    """Compute the current version of a kind for a project.

    Items are sorted by name before hashing, so the result does not depend
    on the order the bundle enumerates them in.
    """
    names = sorted(list_eligible_items(bundle, kind, settings))
    return fingerprint_contents([bundle.read_item(kind, name) for name in names])
