"""Tests for the managed section of AGENTS.md."""

from botbox.templates.agents_md import (
    MANAGED_END,
    MANAGED_START,
    parse_agents_md_header,
    render_managed_section,
    update_managed_section,
)

HEADER = """# myapp

Project type: cli, api
Tools: `bones`, `maw`, `botbus`
Reviewer roles: security

<!-- Add project-specific context below -->
"""


def test_render_lists_docs_sorted() -> None:
    body = render_managed_section(["triage.md", "finish.md"], [])

    finish_index = body.index("(.agents/botbox/finish.md)\n")
    triage_index = body.index("(.agents/botbox/triage.md)")
    assert finish_index < triage_index
    assert "Find work from inbox and bones" in body
    assert "Design Guidelines" not in body


def test_render_design_docs_and_install_command() -> None:
    body = render_managed_section(["triage.md"], ["cli-conventions.md"], "just install")

    assert "### Design Guidelines" in body
    assert "(.agents/botbox/design/cli-conventions.md)" in body
    assert "`just install`" in body


def test_update_replaces_between_markers() -> None:
    content = f"{HEADER}\n{MANAGED_START}\nold body\n{MANAGED_END}\n\nProject notes\n"

    updated = update_managed_section(content, ["triage.md"], [])

    assert "old body" not in updated
    assert updated.startswith(HEADER)
    assert updated.endswith(f"{MANAGED_END}\n\nProject notes\n")


def test_update_is_stable() -> None:
    once = update_managed_section(HEADER, ["triage.md"], [])

    assert update_managed_section(once, ["triage.md"], []) == once


def test_update_appends_when_markers_missing() -> None:
    updated = update_managed_section("# myapp\n", ["triage.md"], [])

    assert updated.startswith("# myapp\n\n" + MANAGED_START)
    assert updated.endswith(MANAGED_END + "\n")


def test_update_repairs_out_of_order_markers() -> None:
    content = f"# myapp\n{MANAGED_END}\nstray\n{MANAGED_START}\n"

    updated = update_managed_section(content, ["triage.md"], [])

    assert updated.count(MANAGED_START) == 1
    assert updated.count(MANAGED_END) == 1
    assert updated.index(MANAGED_START) < updated.index(MANAGED_END)


def test_parse_header() -> None:
    header = parse_agents_md_header(HEADER)

    assert header.name == "myapp"
    assert header.project_types == ("cli", "api")
    assert header.tools == ("bones", "maw", "botbus")
    assert header.reviewers == ("security",)
    assert header.as_config() == {
        "project": {"name": "myapp", "type": ["cli", "api"]},
        "tools": {"bones": True, "maw": True, "botbus": True},
        "review": {"reviewers": ["security"]},
    }


def test_parse_header_without_reviewers() -> None:
    header = parse_agents_md_header("# myapp\nTools: `botbus`\n")

    assert header.reviewers == ()


def test_parse_header_stops_at_comment() -> None:
    header = parse_agents_md_header("<!-- generated -->\n# myapp\n")

    assert header.name is None
    assert header.reviewers is None
