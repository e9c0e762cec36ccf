"""Version control access."""

from __future__ import annotations

from changelog_py.vcs.git import Commit, GitRepository, latest_semver_tag

__all__ = ["Commit", "GitRepository", "latest_semver_tag"]
