"""The botbox-owned section of a project's AGENTS.md.

Everything between the managed-start and managed-end comments is regenerated
on sync; text outside the markers belongs to the project and is kept as is.
The header lines above the first HTML comment are written by `botbox init`
and can be parsed back into project settings.
"""

from dataclasses import dataclass
from pathlib import Path

from botbox.artifacts.models import AGENTS_DIR

AGENTS_MD_FILENAME = "AGENTS.md"

MANAGED_START = "<!-- botbox:managed-start -->"
MANAGED_END = "<!-- botbox:managed-end -->"

DOC_DESCRIPTIONS = {
    "triage.md": "Find work from inbox and bones",
    "start.md": "Claim bone, create workspace, announce",
    "update.md": "Change bone status (open/in_progress/blocked/done)",
    "finish.md": "Close bone, merge workspace, release claims, sync",
    "worker-loop.md": "Full triage-work-finish lifecycle",
    "planning.md": "Turn specs/PRDs into actionable bones",
    "review-request.md": "Request a review",
    "review-response.md": "Handle reviewer feedback (fix/address/defer)",
    "review-loop.md": "Reviewer agent loop",
    "merge-check.md": "Verify approval before merge",
    "preflight.md": "Validate toolchain health",
    "report-issue.md": "Report bugs/features to other projects",
}

DESIGN_DOC_DESCRIPTIONS = {
    "cli-conventions.md": "CLI tool design for humans, agents, and machines",
}


def get_agents_md_path(project_dir: Path) -> Path:
    """Get path to the project's AGENTS.md."""
    return project_dir / AGENTS_MD_FILENAME


def _doc_link(name: str, descriptions: dict[str, str], directory: Path) -> str:
    description = descriptions.get(name, name.removesuffix(".md"))
    return f"- [{description}]({(directory / name).as_posix()})"


def render_managed_section(
    doc_names: list[str],
    design_doc_names: list[str],
    install_command: str | None = None,
) -> str:
    """Render the managed section body (without the marker comments)."""
    lines = [
        "## Botbox Workflow",
        "",
        f"**New here?** Read [worker-loop.md]({(AGENTS_DIR / 'worker-loop.md').as_posix()}) "
        "first. It covers the complete triage, start, work and finish cycle.",
        "",
        "**All tools have `--help`** with usage examples.",
        "",
        "### Identity",
        "",
        "Your agent name is set by the hook or script that launched you. "
        "Use `$AGENT` in commands.",
        "For manual sessions, use `<project>-dev` (e.g., `myapp-dev`).",
        "",
        "### Claims",
        "",
        "```bash",
        'bus claims stake --agent $AGENT "bone://<project>/<id>" -m "<id>"',
        'bus claims stake --agent $AGENT "workspace://<project>/<ws>" -m "<id>"',
        "bus claims release --agent $AGENT --all  # when done",
        "```",
        "",
        "### Conventions",
        "",
        "- Create a bone before starting work and post progress comments while working.",
        f"- **Push to main** after completing bones "
        f"(see [finish.md]({(AGENTS_DIR / 'finish.md').as_posix()})).",
    ]
    if install_command:
        lines.append(f"- **Install locally** after releasing: `{install_command}`")

    if design_doc_names:
        lines.extend(["", "### Design Guidelines", ""])
        lines.extend(
            _doc_link(name, DESIGN_DOC_DESCRIPTIONS, AGENTS_DIR / "design")
            for name in sorted(design_doc_names)
        )

    lines.extend(["", "### Workflow Docs", ""])
    lines.extend(_doc_link(name, DOC_DESCRIPTIONS, AGENTS_DIR) for name in sorted(doc_names))
    return "\n".join(lines)


def update_managed_section(
    content: str,
    doc_names: list[str],
    design_doc_names: list[str],
    install_command: str | None = None,
) -> str:
    """Return content with the managed section regenerated.

    If the markers are missing, unpaired or out of order, any stray marker is
    stripped and a fresh managed section is appended at the end.
    """
    body = render_managed_section(doc_names, design_doc_names, install_command)
    managed = f"{MANAGED_START}\n{body}\n{MANAGED_END}"

    start_index = content.find(MANAGED_START)
    end_index = content.find(MANAGED_END)
    if start_index == -1 or end_index == -1 or end_index < start_index:
        cleaned = content.replace(MANAGED_START, "", 1).replace(MANAGED_END, "", 1).rstrip()
        return f"{cleaned}\n\n{managed}\n"

    before = content[:start_index]
    after = content[end_index + len(MANAGED_END) :]
    return f"{before}{managed}{after}"


@dataclass(frozen=True)
class AgentsMdHeader:
    """Project settings detected from the header of a rendered AGENTS.md.

    Fields that were not found are None.
    """

    name: str | None
    project_types: tuple[str, ...] | None
    tools: tuple[str, ...] | None
    reviewers: tuple[str, ...] | None

    def as_config(self) -> dict:
        """Return the detected fields in .botbox.json shape."""
        config: dict = {"project": {}}
        if self.name is not None:
            config["project"]["name"] = self.name
        if self.project_types is not None:
            config["project"]["type"] = list(self.project_types)
        if self.tools is not None:
            config["tools"] = {tool: True for tool in self.tools}
        if self.reviewers is not None:
            config["review"] = {"reviewers": list(self.reviewers)}
        return config


def _split_list(value: str) -> tuple[str, ...]:
    return tuple(part.strip() for part in value.split(",") if part.strip())


def parse_agents_md_header(content: str) -> AgentsMdHeader:
    """Parse project settings from the header lines of AGENTS.md.

    Parsing stops at the first HTML comment. A header with a project name but
    no reviewer line means no reviewers are configured.
    """
    name: str | None = None
    project_types: tuple[str, ...] | None = None
    tools: tuple[str, ...] | None = None
    reviewers: tuple[str, ...] | None = None

    for line in content.splitlines():
        if line.startswith("<!--"):
            break
        if line.startswith("# "):
            name = line[2:].strip()
        elif line.startswith("Project type: "):
            project_types = _split_list(line.removeprefix("Project type: "))
        elif line.startswith("Tools: "):
            tools = _split_list(line.removeprefix("Tools: ").replace("`", ""))
        elif line.startswith("Reviewer roles: "):
            reviewers = _split_list(line.removeprefix("Reviewer roles: "))

    if name and reviewers is None:
        reviewers = ()

    return AgentsMdHeader(
        name=name,
        project_types=project_types,
        tools=tools,
        reviewers=reviewers,
    )
