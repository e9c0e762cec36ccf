"""Changelog document model.

A ChangelogDocument is a title plus an ordered list of releases. Each
release holds a mapping of section name to notes. Sections are always
observed in alphabetical order; notes keep the order they were added in.

The document is a plain value: it is created by ``scaffold()`` or
``parse()``, changed through ``upsert_release``, ``remove_version`` and
``Release.add_note``, and turned back into text with ``to_markdown()``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum
from typing import ClassVar

from changelog_py.core.version import Version
from changelog_py.exceptions import ReleaseExistsError

DEFAULT_TITLE = "Changelog"


class HeaderStyle(StrEnum):
    """Shape of a release heading line."""

    DEFAULT = "default"
    PLAIN = "plain"
    VERSION_ONLY = "version-only"
    CUSTOM = "custom"


@dataclass(frozen=True)
class HeaderFormat:
    """How a release heading is rendered.

    Only CUSTOM carries a template; it may contain ``{version}`` and
    ``{date}`` placeholders.
    """

    style: HeaderStyle
    template: str | None = None

    DEFAULT: ClassVar[HeaderFormat]
    PLAIN: ClassVar[HeaderFormat]
    VERSION_ONLY: ClassVar[HeaderFormat]

    @classmethod
    def custom(cls, template: str) -> HeaderFormat:
        return cls(HeaderStyle.CUSTOM, template)


HeaderFormat.DEFAULT = HeaderFormat(HeaderStyle.DEFAULT)
HeaderFormat.PLAIN = HeaderFormat(HeaderStyle.PLAIN)
HeaderFormat.VERSION_ONLY = HeaderFormat(HeaderStyle.VERSION_ONLY)

# Bare "## x.y.z" headings are stored as this custom template
BARE_VERSION_HEADER = HeaderFormat.custom("## {version}")


def parse_header_format(name: str) -> HeaderFormat:
    """Map a header name (as given on the command line) to a HeaderFormat.

    Unknown names are treated as a literal custom template.
    """
    match name:
        case "default" | "brackets":
            return HeaderFormat.DEFAULT
        case "plain":
            return HeaderFormat.PLAIN
        case "version-only":
            return HeaderFormat.VERSION_ONLY
        case _:
            return HeaderFormat.custom(name)


@dataclass(frozen=True)
class ParseIssue:
    """A single defect in changelog text, with a suggested fix."""

    line: int
    expected: str
    found: str
    fix: str

    def message(self) -> str:
        return (
            f"Invalid changelog at line {self.line}: expected {self.expected}, "
            f"found {self.found}. Fix: {self.fix}"
        )


@dataclass
class Release:
    """One versioned entry in the changelog."""

    version: Version
    date: str | None = None
    header: HeaderFormat = HeaderFormat.DEFAULT
    sections: dict[str, list[str]] = field(default_factory=dict)

    @classmethod
    def new(cls, version: Version) -> Release:
        """Create a release dated today (UTC) with the default header."""
        return cls(version=version, date=datetime.now(UTC).strftime("%Y-%m-%d"))

    def add_note(self, section: str, note: str) -> None:
        self.sections.setdefault(section, []).append(note)

    def iter_sections(self):
        """Yield (name, notes) pairs in alphabetical section order."""
        for name in sorted(self.sections):
            yield name, self.sections[name]


@dataclass
class ChangelogDocument:
    """A whole changelog file."""

    title: str
    releases: list[Release] = field(default_factory=list)

    @classmethod
    def scaffold(cls) -> ChangelogDocument:
        """Return an empty changelog titled "Changelog"."""
        return cls(title=DEFAULT_TITLE)

    @classmethod
    def parse(cls, text: str) -> ChangelogDocument:
        """Parse changelog markdown.

        Raises:
            ChangelogParseError: On the first grammar violation
        """
        from changelog_py.core.parser import parse_changelog

        return parse_changelog(text)

    def validate(self, strict: bool = False) -> None:
        """Check document invariants.

        Raises:
            ChangelogParseError: On the first violated invariant
        """
        from changelog_py.core.validation import validate_document

        validate_document(self, strict=strict)

    def to_markdown(self) -> str:
        from changelog_py.core.renderer import render_document

        return render_document(self)

    def get_release(self, version: Version) -> Release | None:
        for release in self.releases:
            if release.version == version:
                return release
        return None

    @property
    def latest_version(self) -> Version | None:
        return max((r.version for r in self.releases), default=None)

    def sort_semver_desc(self) -> None:
        self.releases.sort(key=lambda r: r.version, reverse=True)

    def upsert_release(self, release: Release, override: bool = False) -> None:
        """Insert a release, or replace the one with the same version.

        The releases are re-sorted descending by version afterwards.

        Args:
            release: Release to store
            override: Allow replacing an existing release

        Raises:
            ReleaseExistsError: If the version exists and override is False
        """
        for index, existing in enumerate(self.releases):
            if existing.version == release.version:
                if not override:
                    raise ReleaseExistsError(
                        f"release {release.version} already exists (use --override to replace it)"
                    )
                self.releases[index] = release
                break
        else:
            self.releases.append(release)

        self.sort_semver_desc()

    def remove_version(self, version: Version) -> bool:
        """Drop every release with the given version.

        Returns:
            True if anything was removed
        """
        previous = len(self.releases)
        self.releases = [r for r in self.releases if r.version != version]
        return len(self.releases) != previous
