"""Conventional commit classification and note grouping.

Commit messages are turned into release notes in two stages:

1. Each commit's first line is classified (``kind(scope)!: description``)
   and its text appended to a section chosen from the commit kind.
2. Each section is deduplicated, keeping the first occurrence of every
   note after case and whitespace normalization.

Unlike the document parser, this pipeline never fails: a message that is
not a conventional commit becomes an "Other" note verbatim.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, NamedTuple

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping, Sequence

    from changelog_py.vcs.git import Commit

IGNORE_MARKERS: tuple[str, ...] = (
    "(skip changelog)",
    "(ignore changelog)",
    "!changelog",
    "!log",
)

OTHER_SECTION = "Other"

DEFAULT_SECTIONS: dict[str, str] = {
    "feat": "Added",
    "fix": "Fixed",
    "perf": "Changed",
    "refactor": "Changed",
    "docs": "Documentation",
    "test": "Maintenance",
    "chore": "Maintenance",
    "build": "Maintenance",
    "ci": "Maintenance",
}

GroupedNotes = dict[str, list[str]]


class ClassifiedCommit(NamedTuple):
    """Kind and description extracted from a conventional commit line."""

    kind: str
    description: str


def first_line(message: str) -> str:
    """Return the first line of a commit message, trimmed."""
    return message.split("\n", 1)[0].strip()


def should_ignore_commit(message: str) -> bool:
    """Check whether a commit carries a skip-changelog marker (case-insensitive)."""
    lower = message.lower()
    return any(marker in lower for marker in IGNORE_MARKERS)


def classify(message: str) -> ClassifiedCommit | None:
    """Classify the first line of a commit message.

    Args:
        message: Raw commit message

    Returns:
        ClassifiedCommit, or None if the line is not a conventional commit
        (no colon, empty description or empty kind)
    """
    head, sep, tail = first_line(message).partition(":")
    if not sep:
        return None

    description = tail.strip()
    if not description:
        return None

    kind = head.split("(", 1)[0].strip().removesuffix("!")
    if not kind:
        return None

    return ClassifiedCommit(kind, description)


def section_for_type(kind: str, type_map: Mapping[str, str] | None = None) -> str:
    """Resolve the changelog section for a commit kind.

    An explicit mapping entry wins over the built-in table.
    """
    if type_map and kind in type_map:
        return type_map[kind]
    return DEFAULT_SECTIONS.get(kind, OTHER_SECTION)


def canonical_note_key(note: str) -> str:
    """Normalize a note for duplicate detection (collapse whitespace, lowercase)."""
    return " ".join(note.split()).lower()


def dedupe_notes(notes: Iterable[str]) -> list[str]:
    seen: set[str] = set()
    result = []
    for note in notes:
        key = canonical_note_key(note)
        if key not in seen:
            seen.add(key)
            result.append(note)
    return result


def dedupe_grouped_notes(grouped: Mapping[str, Sequence[str]]) -> GroupedNotes:
    """Deduplicate every section independently, dropping sections left empty.

    Returns:
        New mapping with sections in alphabetical order
    """
    deduped: GroupedNotes = {}
    for section in sorted(grouped):
        notes = dedupe_notes(grouped[section])
        if notes:
            deduped[section] = notes
    return deduped


def group_notes(
    commits: Iterable[Commit],
    type_map: Mapping[str, str] | None = None,
) -> GroupedNotes:
    """Turn commits into deduplicated notes grouped by section.

    Args:
        commits: Commits in history order (oldest first)
        type_map: Optional commit kind -> section overrides

    Returns:
        Mapping of section name to notes, sections sorted alphabetically
    """
    grouped: GroupedNotes = {}

    for commit in commits:
        if should_ignore_commit(commit.message):
            continue

        line = first_line(commit.message)
        if not line:
            continue

        classified = classify(line)
        if classified is None:
            grouped.setdefault(OTHER_SECTION, []).append(line)
        else:
            section = section_for_type(classified.kind, type_map)
            grouped.setdefault(section, []).append(classified.description)

    return dedupe_grouped_notes(grouped)
