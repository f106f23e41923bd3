"""Integration tests for template updates against a vault on disk.

Each test builds the vault below under tmp_path and runs the pipeline through
FileSystemStore. Read top-to-bottom as a reference for what a rule run does
to real files.

Vault layout
------------
    Templates/meeting.md      the template
    Meetings/2026-01-05.md    a note that already follows the template
    Meetings/2026-01-12.md    an empty note
    Meetings/old/2025-12.md   a nested note (only touched by recursive rules)
    Meetings/.trash/x.md      hidden; never listed

Template (Templates/meeting.md)
-------------------------------
    ---
    type: meeting
    attendees:
    - me
    ---
    date::

    # Agenda

    # Notes

    ## Decisions
"""

import pytest
import yaml

from mdsync.config import Rule
from mdsync.core.pipeline import UpdateStatus, count_statuses, run_all_rules, run_rule
from mdsync.core.sections import sectionize
from mdsync.store import FileSystemStore


TEMPLATE = """\
---
type: meeting
attendees:
- me
---
date::

# Agenda

# Notes

## Decisions"""

EXISTING = """\
---
attendees:
- me
- you
---
date:: 2026-01-05

# Notes
We talked.

## Decisions
Ship it."""


@pytest.fixture(name="vault")
def vault_fixture(tmp_path):
    files = {
        "Templates/meeting.md": TEMPLATE,
        "Meetings/2026-01-05.md": EXISTING,
        "Meetings/2026-01-12.md": "",
        "Meetings/old/2025-12.md": "# Notes\nold",
        "Meetings/.trash/x.md": "",
    }
    for rel, text in files.items():
        path = tmp_path / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    return tmp_path


def _read(vault, rel):
    return (vault / rel).read_text(encoding="utf-8")


def test_rule_fills_empty_note_with_template(vault):
    """An empty note becomes the rendered template."""
    run_rule(FileSystemStore(vault), "Templates/meeting.md", "Meetings")
    assert _read(vault, "Meetings/2026-01-12.md") == TEMPLATE


def test_rule_merges_existing_note(vault):
    """Existing values win; the missing key and the Agenda section come from the template."""
    run_rule(FileSystemStore(vault), "Templates/meeting.md", "Meetings")
    text = _read(vault, "Meetings/2026-01-05.md")
    assert text == (
        "---\n"
        "type: meeting\n"
        "attendees:\n"
        "- me\n"
        "- you\n"
        "---\n"
        "date:: 2026-01-05\n"
        "\n"
        "# Agenda\n"
        "\n"
        "# Notes\n"
        "We talked.\n"
        "\n"
        "## Decisions\n"
        "Ship it."
    )
    frontmatter = yaml.safe_load(text.split("---")[1])
    assert frontmatter == {"type": "meeting", "attendees": ["me", "you"]}


def test_flat_rule_skips_nested_and_hidden_notes(vault):
    """A flat rule touches only direct children and never hidden folders."""
    results = run_rule(FileSystemStore(vault), "Templates/meeting.md", "Meetings")
    assert [r.target for r in results] == ["Meetings/2026-01-05.md", "Meetings/2026-01-12.md"]
    assert _read(vault, "Meetings/old/2025-12.md") == "# Notes\nold"
    assert _read(vault, "Meetings/.trash/x.md") == ""


def test_recursive_rule_reaches_nested_notes(vault):
    """include_subfolders updates the nested note too."""
    results = run_rule(FileSystemStore(vault), "Templates/meeting.md", "Meetings", True)
    assert "Meetings/old/2025-12.md" in [r.target for r in results]
    assert [s.header for s in sectionize(_read(vault, "Meetings/old/2025-12.md")).top_sections] == [
        "Agenda", "Notes",
    ]


def test_second_run_changes_nothing(vault):
    """Rules converge: the second pass reports every note unchanged."""
    store = FileSystemStore(vault)
    rules = [Rule(template="Templates/meeting.md", folder="Meetings", include_subfolders=True)]
    first = run_all_rules(store, rules)
    second = run_all_rules(store, rules)
    assert count_statuses(first) == {"updated": 3, "unchanged": 0, "error": 0}
    assert {r.status for r in second} == {UpdateStatus.unchanged}


def test_dry_run_leaves_files_untouched(vault):
    """dry_run reports updates without writing."""
    results = run_rule(FileSystemStore(vault), "Templates/meeting.md", "Meetings", dry_run=True)
    assert {r.status for r in results} == {UpdateStatus.updated}
    assert _read(vault, "Meetings/2026-01-12.md") == ""
    assert _read(vault, "Meetings/2026-01-05.md") == EXISTING
