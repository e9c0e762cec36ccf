"""Shared fixtures for changelog-py tests."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from changelog_py.vcs.git import Commit

if TYPE_CHECKING:
    from pathlib import Path


SAMPLE_CHANGELOG = """\
# Changelog

## [1.1.0] - 2026-01-01

### Added
- new export command
- support for TOML mappings

### Fixed
- crash on empty input

## 1.0.1 - 2025-12-15

### Fixed
- typo in help output

## [1.0.0]

### Added
- initial release

## 0.9.0

### Changed
"""


@pytest.fixture
def sample_changelog() -> str:
    return SAMPLE_CHANGELOG


@pytest.fixture
def changelog_file(tmp_path: Path) -> Path:
    """Write the sample changelog to a temporary file."""
    path = tmp_path / "CHANGELOG.md"
    path.write_text(SAMPLE_CHANGELOG)
    return path


@pytest.fixture
def feat_commit() -> Commit:
    return Commit("feat123", "feat: add user authentication")


@pytest.fixture
def fix_commit() -> Commit:
    return Commit("fix456", "fix(core): resolve memory leak")


@pytest.fixture
def breaking_commit() -> Commit:
    return Commit("brk789", "feat(api)!: remove deprecated endpoints")


@pytest.fixture
def sample_commits() -> list[Commit]:
    """A realistic, oldest-first slice of history."""
    return [
        Commit("a1", "feat: add user authentication"),
        Commit("a2", "fix(core): resolve memory leak"),
        Commit("a3", "docs: update README"),
        Commit("a4", "chore: bump dependencies (skip changelog)"),
        Commit("a5", "feat(api)!: remove deprecated endpoints\n\nBREAKING CHANGE: gone"),
        Commit("a6", "Merge branch 'main' into feature"),
        Commit("a7", "Feat:  Add   user authentication"),
        Commit("a8", "ci: cache pip downloads"),
    ]


@pytest.fixture
def temp_project_with_pyproject(tmp_path: Path) -> Path:
    """A project directory whose pyproject.toml configures changelog-py."""
    (tmp_path / "pyproject.toml").write_text(
        """\
[project]
name = "test-project"
version = "1.0.0"

[tool.changelog-py]
path = "docs/CHANGES.md"
header = "plain"
strict = true

[tool.changelog-py.types]
feat = "Features"
security = "Security"
"""
    )
    return tmp_path
