"""Registry of artifact kinds bundled with botbox.

Each kind pairs a bundled directory with an eligibility predicate over the
project's settings. Kinds are listed in the order sync applies them.
"""

from dataclasses import dataclass

from botbox.artifacts.models import AGENTS_DIR, ArtifactKind
from botbox.config.project_config import ProjectSettings
from botbox.gateway.bundle.abc import BundleCatalog


@dataclass(frozen=True)
class ScriptEntry:
    """A bundled loop script and the tools it needs."""

    description: str
    required_tools: frozenset[str]


@dataclass(frozen=True)
class HookEntry:
    """A bundled agent hook script and the events it is registered for."""

    description: str
    events: tuple[str, ...]
    required_tool: str


_FULL_STACK = frozenset({"bones", "maw", "crit", "botbus"})

SCRIPT_REGISTRY: dict[str, ScriptEntry] = {
    "agent-loop.mjs": ScriptEntry(
        description="Worker: sequential triage-start-work-finish",
        required_tools=_FULL_STACK,
    ),
    "dev-loop.mjs": ScriptEntry(
        description="Lead dev: triage, parallel dispatch, merge",
        required_tools=_FULL_STACK,
    ),
    "respond.mjs": ScriptEntry(
        description="Conversational responder for @mentions (legacy)",
        required_tools=frozenset({"botbus"}),
    ),
    "router.mjs": ScriptEntry(
        description="Message router with multi-lead support",
        required_tools=frozenset({"botbus"}),
    ),
    "reviewer-loop.mjs": ScriptEntry(
        description="Reviewer: review loop until queue empty",
        required_tools=frozenset({"crit", "botbus"}),
    ),
    "triage.mjs": ScriptEntry(
        description="Token-efficient triage output",
        required_tools=frozenset({"bones"}),
    ),
    "iteration-start.mjs": ScriptEntry(
        description="Combined status for iteration starts",
        required_tools=frozenset({"bones", "crit", "botbus"}),
    ),
}

HOOK_REGISTRY: dict[str, HookEntry] = {
    "init-agent.sh": HookEntry(
        description="Display agent identity from .botbox.json",
        events=("SessionStart", "PreCompact"),
        required_tool="botbus",
    ),
    "check-jj.sh": HookEntry(
        description="Remind agent to use jj commands in jj repos",
        events=("SessionStart", "PreCompact"),
        required_tool="maw",
    ),
    "check-bus-inbox.sh": HookEntry(
        description="Check for unread bus messages",
        events=("PostToolUse",),
        required_tool="botbus",
    ),
    "claim-agent.sh": HookEntry(
        description="Claim and refresh the agent:// advisory lock",
        events=("SessionStart", "PostToolUse"),
        required_tool="botbus",
    ),
}

# Design docs are only relevant to some project types
DESIGN_DOC_PROJECT_TYPES: dict[str, frozenset[str]] = {
    "cli-conventions.md": frozenset({"cli"}),
}


def _always(item_name: str, settings: ProjectSettings) -> bool:
    return True


def _script_eligible(item_name: str, settings: ProjectSettings) -> bool:
    entry = SCRIPT_REGISTRY.get(item_name)
    if entry is None:
        return False
    return entry.required_tools <= settings.tools


def _hook_eligible(item_name: str, settings: ProjectSettings) -> bool:
    entry = HOOK_REGISTRY.get(item_name)
    if entry is None:
        return False
    return entry.required_tool in settings.tools


def _design_doc_eligible(item_name: str, settings: ProjectSettings) -> bool:
    project_types = DESIGN_DOC_PROJECT_TYPES.get(item_name, frozenset())
    return bool(project_types.intersection(settings.project_types))


def _prompt_eligible(item_name: str, settings: ProjectSettings) -> bool:
    # reviewer.md is the generic prompt; reviewer-<role>.md needs that role
    if item_name == "reviewer.md":
        return True
    role = item_name.removeprefix("reviewer-").removesuffix(".md")
    return role in settings.reviewers


DOCS = ArtifactKind(
    name="docs",
    label="workflow docs",
    bundle_dir="docs",
    target_dir=AGENTS_DIR,
    marker_filename=".version",
    item_suffix=".md",
    apply_mode="install",
    required=True,
    executable=False,
    eligibility=_always,
)

DESIGN_DOCS = ArtifactKind(
    name="design-docs",
    label="design docs",
    bundle_dir="design",
    target_dir=AGENTS_DIR / "design",
    marker_filename=".design-docs-version",
    item_suffix=".md",
    apply_mode="install",
    required=True,
    executable=False,
    eligibility=_design_doc_eligible,
)

SCRIPTS = ArtifactKind(
    name="scripts",
    label="loop scripts",
    bundle_dir="scripts",
    target_dir=AGENTS_DIR / "scripts",
    marker_filename=".scripts-version",
    item_suffix=".mjs",
    apply_mode="update-existing",
    required=False,
    executable=True,
    eligibility=_script_eligible,
)

PROMPTS = ArtifactKind(
    name="prompts",
    label="reviewer prompts",
    bundle_dir="prompts",
    target_dir=AGENTS_DIR / "prompts",
    marker_filename=".prompts-version",
    item_suffix=".md",
    apply_mode="install",
    required=True,
    executable=False,
    eligibility=_prompt_eligible,
)

HOOKS = ArtifactKind(
    name="hooks",
    label="agent hooks",
    bundle_dir="hooks",
    target_dir=AGENTS_DIR / "hooks",
    marker_filename=".hooks-version",
    item_suffix=".sh",
    apply_mode="install",
    required=False,
    executable=True,
    eligibility=_hook_eligible,
)

DOCUMENTATION_KINDS: tuple[ArtifactKind, ...] = (DOCS, DESIGN_DOCS)
# Synced after the managed section of AGENTS.md
TOOLING_KINDS: tuple[ArtifactKind, ...] = (SCRIPTS, PROMPTS, HOOKS)
ARTIFACT_KINDS: tuple[ArtifactKind, ...] = DOCUMENTATION_KINDS + TOOLING_KINDS


def list_eligible_items(
    bundle: BundleCatalog, kind: ArtifactKind, settings: ProjectSettings
) -> list[str]:
    """List the bundled items of a kind that this project is eligible for."""
    return [name for name in bundle.list_items(kind) if kind.is_eligible(name, settings)]
