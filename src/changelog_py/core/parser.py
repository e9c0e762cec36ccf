"""Line-oriented parser for changelog markdown.

The accepted dialect is deliberately small::

    # Title

    ## [1.2.0] - 2026-01-01

    ### Added
    - a note

Parsing is a single forward pass. The first defect aborts the parse with
a ChangelogParseError carrying a ParseIssue; no partial documents are
ever returned.
"""

from __future__ import annotations

from changelog_py.core.document import (
    BARE_VERSION_HEADER,
    ChangelogDocument,
    HeaderFormat,
    ParseIssue,
    Release,
)
from changelog_py.core.version import Version
from changelog_py.exceptions import ChangelogParseError, VersionParseError

TITLE_PREFIX = "# "
RELEASE_PREFIX = "## "
SECTION_PREFIX = "### "
NOTE_PREFIX = "- "


def _fail(line: int, expected: str, found: str, fix: str) -> ChangelogParseError:
    return ChangelogParseError(ParseIssue(line=line, expected=expected, found=found, fix=fix))


def parse_changelog(text: str) -> ChangelogDocument:
    """Parse changelog markdown into a ChangelogDocument.

    Args:
        text: Full changelog file contents

    Returns:
        The parsed document

    Raises:
        ChangelogParseError: On the first line that does not fit the grammar
    """
    lines = [line.strip() for line in text.split("\n")]
    idx = _skip_blank(lines, 0)

    if idx >= len(lines):
        raise _fail(
            1,
            "a '# Changelog' title",
            "empty file",
            "create a file starting with '# Changelog'",
        )

    title_line = lines[idx]
    if not title_line.startswith(TITLE_PREFIX):
        raise _fail(
            idx + 1,
            "a level-1 heading like '# Changelog'",
            title_line,
            "replace the first non-empty line with '# Changelog'",
        )

    document = ChangelogDocument(title=title_line.removeprefix(TITLE_PREFIX).strip())
    idx += 1

    while (idx := _skip_blank(lines, idx)) < len(lines):
        line = lines[idx]
        if not line.startswith(RELEASE_PREFIX):
            raise _fail(
                idx + 1,
                "a release heading '## [x.y.z] - YYYY-MM-DD'",
                line,
                "add a release heading before sections and notes",
            )

        version, date, header = parse_release_heading(line, idx + 1)
        release = Release(version=version, date=date, header=header)
        idx = _parse_release_body(lines, idx + 1, release)
        document.releases.append(release)

    return document


def _skip_blank(lines: list[str], idx: int) -> int:
    while idx < len(lines) and not lines[idx]:
        idx += 1
    return idx


def _parse_release_body(lines: list[str], idx: int, release: Release) -> int:
    """Consume section headings and notes until the next release heading.

    Returns:
        Index of the first line not belonging to this release
    """
    current_section: str | None = None

    while (idx := _skip_blank(lines, idx)) < len(lines):
        line = lines[idx]
        lineno = idx + 1

        if line.startswith(RELEASE_PREFIX):
            break

        if line.startswith(SECTION_PREFIX):
            current_section = line.removeprefix(SECTION_PREFIX).strip()
            if not current_section:
                raise _fail(
                    lineno,
                    "a section title after '###'",
                    line,
                    "use section headings like '### Added' or '### Fixed'",
                )
            release.sections.setdefault(current_section, [])
        elif not line.startswith(NOTE_PREFIX):
            raise _fail(
                lineno,
                "a bullet note '- ...' or a section heading '### ...'",
                line,
                "prefix notes with '- ' and group them under '### <Section>'",
            )
        elif current_section is None:
            raise _fail(
                lineno,
                "a section heading before notes",
                line,
                "insert a heading like '### Added' above this note",
            )
        else:
            note = line.removeprefix(NOTE_PREFIX).strip()
            if not note:
                raise _fail(lineno, "a non-empty note", line, "write text after '- '")
            release.add_note(current_section, note)

        idx += 1

    return idx


def parse_release_heading(line: str, lineno: int) -> tuple[Version, str | None, HeaderFormat]:
    """Split a ``## ...`` heading into version, date and header format.

    Args:
        line: The heading line, including the ``## `` prefix
        lineno: 1-based line number used in errors

    Returns:
        Tuple of (version, date or None, header format)

    Raises:
        ChangelogParseError: If brackets are unbalanced or the version is invalid
    """
    rest = line.removeprefix(RELEASE_PREFIX).strip()

    if rest.startswith("["):
        close = rest.find("]")
        if close == -1:
            raise _fail(
                lineno,
                "closing ']' in release heading",
                rest,
                "use heading format like '## [1.2.3] - 2026-01-01'",
            )
        version_text = rest[1:close]
        trailing = rest[close + 1 :].strip()
        date = trailing[1:].strip() if trailing.startswith("-") else ""
        header = HeaderFormat.DEFAULT if date else HeaderFormat.VERSION_ONLY
    else:
        version_text, _, date = rest.partition(" - ")
        version_text = version_text.strip()
        date = date.strip()
        header = HeaderFormat.PLAIN if date else BARE_VERSION_HEADER

    try:
        version = Version.parse(version_text)
    except VersionParseError:
        raise _fail(
            lineno,
            "a semantic version (x.y.z)",
            version_text,
            "replace with a valid version like 1.4.2",
        ) from None

    return version, date or None, header
