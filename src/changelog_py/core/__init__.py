"""Core business logic for changelog-py.

This module contains the fundamental building blocks:
- Semantic version parsing and comparison
- The changelog document model, parser, validator and renderer
- Conventional commit classification and note grouping
- Release building and convergence
"""

from __future__ import annotations

from changelog_py.core.changelog import (
    build_release,
    converge_releases,
    converged_document,
    next_version,
    select_releases,
)
from changelog_py.core.commits import (
    ClassifiedCommit,
    canonical_note_key,
    classify,
    dedupe_grouped_notes,
    group_notes,
    section_for_type,
    should_ignore_commit,
)
from changelog_py.core.document import (
    ChangelogDocument,
    HeaderFormat,
    HeaderStyle,
    ParseIssue,
    Release,
    parse_header_format,
)
from changelog_py.core.renderer import render_grouped_notes
from changelog_py.core.version import BumpType, Version

__all__ = [
    # Version
    "BumpType",
    # Document
    "ChangelogDocument",
    # Commits
    "ClassifiedCommit",
    "HeaderFormat",
    "HeaderStyle",
    "ParseIssue",
    "Release",
    "Version",
    # Changelog
    "build_release",
    "canonical_note_key",
    "classify",
    "converge_releases",
    "converged_document",
    "dedupe_grouped_notes",
    "group_notes",
    "next_version",
    "parse_header_format",
    "render_grouped_notes",
    "section_for_type",
    "select_releases",
    "should_ignore_commit",
]
