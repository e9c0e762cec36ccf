"""Minimal git access via the ``git`` executable.

Only what changelog generation needs: listing tags and listing commits
(oldest first) in a revision range.
"""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path

from changelog_py.core.version import Version
from changelog_py.exceptions import GitError, VersionParseError

logger = logging.getLogger(__name__)

# Separates commits in `git log` output; unlikely to appear in messages
_RECORD_SEP = "\x1e"
_FIELD_SEP = "\x1f"


@dataclass(frozen=True)
class Commit:
    """A commit as consumed by the note grouper."""

    sha: str
    message: str


class GitRepository:
    """A git working tree on disk."""

    def __init__(self, path: Path | str = ".") -> None:
        self.path = Path(path)
        self._run("rev-parse", "--git-dir")

    def _run(self, *args: str) -> str:
        cmd = ["git", *args]
        logger.debug("Running %s in %s", " ".join(cmd), self.path)
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                check=True,
                cwd=self.path,
            )
        except FileNotFoundError as e:
            raise GitError("git executable not found") from e
        except subprocess.CalledProcessError as e:
            raise GitError(
                f"git {args[0]} failed with exit code {e.returncode}",
                stderr=e.stderr,
            ) from e
        return result.stdout

    def list_tags(self) -> list[str]:
        output = self._run("tag", "--list")
        return [line.strip() for line in output.splitlines() if line.strip()]

    def list_commits(
        self,
        since: str | None = None,
        until: str | None = None,
        specific: str | None = None,
    ) -> list[Commit]:
        """List commits, oldest first.

        Args:
            since: Exclusive lower bound revision
            until: Inclusive upper bound revision (defaults to HEAD)
            specific: A single revision; overrides since/until

        Returns:
            Commits in history order
        """
        fmt = f"--format=%H{_FIELD_SEP}%B{_RECORD_SEP}"
        if specific:
            args = ["log", "-1", fmt, specific]
        else:
            target = until or "HEAD"
            rev = f"{since}..{target}" if since else target
            args = ["log", "--reverse", fmt, rev]

        output = self._run(*args)
        commits = []
        for record in output.split(_RECORD_SEP):
            record = record.strip("\n")
            if not record:
                continue
            sha, _, message = record.partition(_FIELD_SEP)
            commits.append(Commit(sha=sha.strip(), message=message.strip()))

        logger.debug("Found %d commits", len(commits))
        return commits


def latest_semver_tag(tags: list[str]) -> str | None:
    """Return the tag with the highest semantic version.

    Tags may carry a leading ``v``. Tags that are not versions are ignored.
    """
    best: tuple[Version, str] | None = None
    for tag in tags:
        try:
            version = Version.parse(tag.removeprefix("v"))
        except VersionParseError:
            continue
        if best is None or version > best[0]:
            best = (version, tag)
    return best[1] if best else None
