"""Shared fixtures for botbox tests."""

import json
from pathlib import Path

import pytest

from botbox.gateway.bundle.fake import FakeBundleCatalog

BUNDLE_ITEMS: dict[str, dict[str, str | bytes]] = {
    "docs": {"triage.md": "# Triage\n", "finish.md": "# Finish\n"},
    "design-docs": {"cli-conventions.md": "# CLI Conventions\n"},
    "scripts": {
        "triage.mjs": "// triage\n",
        "respond.mjs": "// respond\n",
        "dev-loop.mjs": "// dev loop\n",
    },
    "prompts": {"reviewer.md": "review\n", "reviewer-security.md": "security\n"},
    "hooks": {"init-agent.sh": "#!/bin/bash\necho init\n", "check-jj.sh": "#!/bin/bash\necho jj\n"},
}


@pytest.fixture
def tmp_project(tmp_path: Path) -> Path:
    """Alias for tmp_path with semantic meaning as a project directory."""
    return tmp_path


@pytest.fixture
def bundle() -> FakeBundleCatalog:
    """Small in-memory bundle covering every artifact kind."""
    return FakeBundleCatalog(items=BUNDLE_ITEMS)


@pytest.fixture
def installed_project(tmp_project: Path) -> Path:
    """Project with .agents/botbox/ and a current-shape .botbox.json."""
    (tmp_project / ".agents" / "botbox").mkdir(parents=True)
    config = {
        "version": "1.0.8",
        "project": {"name": "myapp", "type": ["cli"], "default_agent": "myapp-dev"},
        "tools": {"bones": True, "botbus": True, "maw": True, "crit": True},
        "review": {"reviewers": ["security"]},
    }
    (tmp_project / ".botbox.json").write_text(json.dumps(config, indent=2) + "\n", encoding="utf-8")
    return tmp_project
