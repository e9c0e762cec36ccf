"""Semantic versioning (SemVer 2.0.0).

Versions are immutable values ordered by SemVer precedence. Build
metadata does not affect precedence, but it is kept as a final tie
breaker so that two versions differing only in build metadata are
still distinct releases.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import StrEnum
from functools import total_ordering

from changelog_py.exceptions import VersionParseError

_NUMERIC = r"0|[1-9][0-9]*"
_IDENT = r"[0-9A-Za-z-]+"

SEMVER_PATTERN = re.compile(
    rf"(?P<major>{_NUMERIC})\.(?P<minor>{_NUMERIC})\.(?P<patch>{_NUMERIC})"
    rf"(?:-(?P<prerelease>{_IDENT}(?:\.{_IDENT})*))?"
    rf"(?:\+(?P<build>{_IDENT}(?:\.{_IDENT})*))?"
)


class BumpType(StrEnum):
    """Which component of a version to increment."""

    MAJOR = "major"
    MINOR = "minor"
    PATCH = "patch"

    @classmethod
    def from_string(cls, value: str) -> BumpType:
        """Parse a bump name, raising ValueError for anything unknown."""
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise ValueError("bump must be one of: major, minor, patch") from None


def _prerelease_key(identifiers: tuple[str, ...]) -> tuple[tuple[int, int | str], ...]:
    # Numeric identifiers sort before alphanumeric ones
    return tuple((0, int(i)) if i.isdigit() else (1, i) for i in identifiers)


@total_ordering
@dataclass(frozen=True)
class Version:
    """A semantic version: major.minor.patch[-prerelease][+build]."""

    major: int
    minor: int
    patch: int
    prerelease: tuple[str, ...] = field(default=())
    build: tuple[str, ...] = field(default=())

    @classmethod
    def parse(cls, text: str) -> Version:
        """Parse a SemVer string.

        Args:
            text: Version text such as ``1.4.2`` or ``2.0.0-rc.1+build.5``

        Returns:
            Parsed Version

        Raises:
            VersionParseError: If the text is not a valid semantic version
        """
        match = SEMVER_PATTERN.fullmatch(text)
        if match is None:
            raise VersionParseError(text)

        prerelease = match.group("prerelease")
        pre_ids = tuple(prerelease.split(".")) if prerelease else ()
        for ident in pre_ids:
            if ident.isdigit() and len(ident) > 1 and ident.startswith("0"):
                raise VersionParseError(text)

        build = match.group("build")
        return cls(
            major=int(match.group("major")),
            minor=int(match.group("minor")),
            patch=int(match.group("patch")),
            prerelease=pre_ids,
            build=tuple(build.split(".")) if build else (),
        )

    def bump(self, bump_type: BumpType) -> Version:
        """Return the next version for the given bump type.

        Lower components are reset and pre-release/build metadata dropped.
        """
        if bump_type == BumpType.MAJOR:
            return Version(self.major + 1, 0, 0)
        if bump_type == BumpType.MINOR:
            return Version(self.major, self.minor + 1, 0)
        return Version(self.major, self.minor, self.patch + 1)

    def _sort_key(self) -> tuple:
        # A release (no pre-release) has higher precedence than any pre-release
        pre = (1,) if not self.prerelease else (0, _prerelease_key(self.prerelease))
        return (self.major, self.minor, self.patch, pre, self.build)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    def __str__(self) -> str:
        text = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            text += "-" + ".".join(self.prerelease)
        if self.build:
            text += "+" + ".".join(self.build)
        return text
