"""Data models for config migrations."""

from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from botbox.gateway.bundle.abc import BundleCatalog
from botbox.gateway.hook_store.abc import HookStore


@dataclass
class MigrationContext:
    """Everything a migration's `up` may read or mutate.

    `config` is the live config dict; migrations edit it in place and the
    engine persists it after each successful migration. `lost_hooks` collects
    ids of hook registrations a migration removed and could not restore.
    """

    project_dir: Path
    agents_dir: Path
    config_path: Path
    config: dict[str, Any]
    bundle: BundleCatalog
    hook_store: HookStore
    log: Callable[[str], None]
    warn: Callable[[str], None]
    lost_hooks: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class Migration:
    """One ordered, one-way change to the project config.

    `id` is a dotted numeric version; migrations apply in numeric id order.
    """

    id: str
    title: str
    description: str
    up: Callable[[MigrationContext], None]
