"""Render changelog documents back to markdown.

Rendering is a pure function of the document: releases are written in
their stored order and sections alphabetically. The output always ends
with exactly one newline.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from changelog_py.core.document import HeaderStyle

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from changelog_py.core.document import ChangelogDocument, Release

NO_CHANGES_FRAGMENT = "### Other\n- No user-facing changes detected\n"


def render_release_header(release: Release) -> str:
    """Render the ``## ...`` heading line for a release."""
    version = str(release.version)
    date = release.date or ""
    header = release.header

    match header.style:
        case HeaderStyle.DEFAULT:
            return f"## [{version}] - {date}" if release.date is not None else f"## [{version}]"
        case HeaderStyle.PLAIN:
            return f"## {version} - {date}" if release.date is not None else f"## {version}"
        case HeaderStyle.VERSION_ONLY:
            return f"## [{version}]"
        case _:
            template = header.template or ""
            return template.replace("{version}", version).replace("{date}", date)


def _render_sections(lines: list[str], sections: Mapping[str, Sequence[str]]) -> None:
    for name in sorted(sections):
        lines.append(f"### {name}")
        lines.extend(f"- {note}" for note in sections[name])
        lines.append("")


def render_document(document: ChangelogDocument) -> str:
    """Render a document to its canonical markdown text."""
    lines = [f"# {document.title}", ""]

    for release in document.releases:
        lines.append(render_release_header(release))
        lines.append("")
        _render_sections(lines, release.sections)

    return "\n".join(lines).rstrip() + "\n"


def render_grouped_notes(grouped: Mapping[str, Sequence[str]]) -> str:
    """Render grouped notes as a markdown fragment of sections and bullets.

    An empty mapping renders a placeholder "Other" section.
    """
    lines: list[str] = []
    _render_sections(lines, grouped)

    if not lines:
        return NO_CHANGES_FRAGMENT

    return "\n".join(lines).rstrip() + "\n"
