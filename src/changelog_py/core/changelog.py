"""Release building, selection and convergence.

These operations sit between the raw commit pipeline in
``changelog_py.core.commits`` and the document model: they build a
Release from commits, pick releases out of a document, and merge several
releases into one deduplicated view.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from changelog_py.core.commits import dedupe_grouped_notes, group_notes
from changelog_py.core.document import ChangelogDocument, HeaderFormat, Release, parse_header_format
from changelog_py.core.version import BumpType, Version
from changelog_py.exceptions import ReleaseNotFoundError

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping, Sequence

    from changelog_py.vcs.git import Commit

logger = logging.getLogger(__name__)

CONVERGED_HEADER = HeaderFormat.custom("## [converged]")
CONVERGED_VERSION = Version(0, 0, 0)


def build_release(
    version: Version,
    commits: Iterable[Commit],
    type_map: Mapping[str, str] | None = None,
    *,
    header: str = "default",
    date: str | None = None,
) -> Release:
    """Build a release whose sections are the grouped notes of the commits.

    Args:
        version: Version of the new release
        commits: Commits since the previous release, oldest first
        type_map: Commit kind -> section overrides
        header: Header format name (see parse_header_format)
        date: Release date; defaults to today (UTC)

    Returns:
        The new Release
    """
    release = Release.new(version)
    if date is not None:
        release.date = date
    release.header = parse_header_format(header)
    release.sections = group_notes(commits, type_map)

    logger.debug(
        "Built release %s with %d section(s)",
        version,
        len(release.sections),
    )
    return release


def next_version(document: ChangelogDocument, bump: BumpType | str) -> Version:
    """Bump the highest version in the document (0.0.0 when empty)."""
    if isinstance(bump, str):
        bump = BumpType.from_string(bump)
    base = document.latest_version or Version(0, 0, 0)
    return base.bump(bump)


def parse_version_range(text: str) -> tuple[Version, Version]:
    """Parse ``a..b`` into an inclusive (low, high) pair, in either order.

    Raises:
        ValueError: If the text is not of the form ``<a>..<b>``
        VersionParseError: If either bound is not a valid version
    """
    left, sep, right = text.partition("..")
    if not sep:
        raise ValueError("--range must use '<a>..<b>' format")
    a, b = Version.parse(left), Version.parse(right)
    return (a, b) if a <= b else (b, a)


def select_releases(
    document: ChangelogDocument,
    version: Version | None = None,
    version_range: str | None = None,
) -> list[Release]:
    """Pick releases by exact version or inclusive range.

    With neither argument every release is returned. The result is sorted
    by version, highest first.

    Raises:
        ReleaseNotFoundError: If nothing matches
    """
    if version is not None:
        selected = [r for r in document.releases if r.version == version]
    elif version_range is not None:
        low, high = parse_version_range(version_range)
        selected = [r for r in document.releases if low <= r.version <= high]
    else:
        selected = list(document.releases)

    if not selected:
        raise ReleaseNotFoundError("no matching releases found")

    return sorted(selected, key=lambda r: r.version, reverse=True)


def converge_releases(releases: Sequence[Release]) -> Release:
    """Merge the notes of several releases into one deduplicated release.

    Notes are concatenated release by release, in the given order, and
    then deduplicated exactly like freshly grouped commit notes.
    """
    merged = Release(version=CONVERGED_VERSION, date=None, header=CONVERGED_HEADER)
    for release in releases:
        for section, notes in release.iter_sections():
            for note in notes:
                merged.add_note(section, note)

    merged.sections = dedupe_grouped_notes(merged.sections)
    return merged


def converged_document(releases: Sequence[Release]) -> ChangelogDocument:
    """Wrap the converged release in a fresh document for rendering."""
    document = ChangelogDocument.scaffold()
    document.releases.append(converge_releases(releases))
    return document
