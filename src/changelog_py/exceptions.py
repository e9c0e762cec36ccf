"""Exception hierarchy for changelog-py.

Every error raised by the library derives from ChangelogPyError so that
callers (most notably the CLI) can catch a single base class and map it
to an exit code.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from changelog_py.core.document import ParseIssue


class ChangelogPyError(Exception):
    """Base class for all changelog-py errors."""

    exit_code: int = 99


class ChangelogParseError(ChangelogPyError):
    """Changelog text (or a document built from it) violates the grammar.

    Carries the ParseIssue describing the first defect found.
    """

    exit_code = 1

    def __init__(self, issue: ParseIssue) -> None:
        self.issue = issue
        super().__init__(issue.message())


class VersionParseError(ChangelogPyError, ValueError):
    """A string is not a valid semantic version."""

    exit_code = 5

    def __init__(self, text: str) -> None:
        self.text = text
        super().__init__(
            f"Invalid semantic version: {text!r}. Expected format: major.minor.patch"
        )


class ChangelogFileError(ChangelogPyError):
    """The changelog (or an output file) cannot be read or written."""

    exit_code = 1


class ReleaseError(ChangelogPyError):
    """A release cannot be added to or removed from a document."""

    exit_code = 1


class ReleaseExistsError(ReleaseError):
    """A release with the same version is already present."""


class ReleaseNotFoundError(ReleaseError):
    """No release matches the requested version or range."""


class ConfigError(ChangelogPyError):
    """Configuration could not be loaded."""

    exit_code = 3


class ConfigNotFoundError(ConfigError):
    """A configuration or mapping file does not exist."""


class ConfigValidationError(ConfigError):
    """A configuration or mapping file is malformed."""


class GitError(ChangelogPyError):
    """A git command failed."""

    exit_code = 2

    def __init__(self, message: str, stderr: str | None = None) -> None:
        self.stderr = stderr
        if stderr:
            message = f"{message}: {stderr.strip()}"
        super().__init__(message)
