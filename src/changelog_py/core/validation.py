"""Structural validation of a parsed changelog document.

Checks run in a fixed order and stop at the first failure. The
emptiness checks only apply in strict mode; the ordering check always
applies.
"""

from __future__ import annotations

from itertools import pairwise
from typing import TYPE_CHECKING

from changelog_py.core.document import ParseIssue
from changelog_py.exceptions import ChangelogParseError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from changelog_py.core.document import ChangelogDocument, Release
    from changelog_py.core.version import Version


def validate_document(document: ChangelogDocument, strict: bool = False) -> None:
    """Validate a document.

    Args:
        document: Document to check
        strict: Also require every release to have sections and every
            section to have notes

    Raises:
        ChangelogParseError: Describing the first violated rule
    """
    issue = find_issue(document, strict=strict)
    if issue is not None:
        raise ChangelogParseError(issue)


def find_issue(document: ChangelogDocument, strict: bool = False) -> ParseIssue | None:
    """Return the first problem in the document, or None if it is valid."""
    if not document.title.strip():
        return ParseIssue(
            line=1,
            expected="a non-empty title",
            found="empty title",
            fix="use '# Changelog' as the first heading",
        )

    seen: set[Version] = set()
    for index, release in enumerate(document.releases):
        # Releases have no source line here; report by position
        line = index + 2
        if release.version in seen:
            return ParseIssue(
                line=line,
                expected="unique release versions",
                found=f"duplicate {release.version}",
                fix="remove duplicates or merge notes into one release",
            )
        seen.add(release.version)

        issue = _check_sections(release, line, strict)
        if issue is not None:
            return issue

    if not is_semver_desc_sorted(document.releases):
        return ParseIssue(
            line=2,
            expected="releases sorted descending by SemVer",
            found="out-of-order versions",
            fix="sort releases so highest version comes first",
        )

    return None


def _check_sections(release: Release, line: int, strict: bool) -> ParseIssue | None:
    if strict and not release.sections:
        return ParseIssue(
            line=line,
            expected="at least one section per release in --strict mode",
            found=f"release {release.version} has no sections",
            fix="add a section like '### Added' with notes",
        )

    for name, notes in release.iter_sections():
        if not name.strip():
            return ParseIssue(
                line=line,
                expected="non-empty section headings",
                found="empty section heading",
                fix="rename section to something like 'Added'",
            )
        if strict and not notes:
            return ParseIssue(
                line=line,
                expected="non-empty section notes in --strict mode",
                found=f"section '{name}' has no notes",
                fix="add at least one note under this section",
            )

    return None


def is_semver_desc_sorted(releases: Sequence[Release]) -> bool:
    return all(a.version >= b.version for a, b in pairwise(releases))
