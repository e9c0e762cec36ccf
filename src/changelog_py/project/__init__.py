"""Project file access."""

from __future__ import annotations

from changelog_py.project.changelog_file import (
    load_or_scaffold,
    read_or_scaffold_text,
    save_document,
    write_changelog,
)

__all__ = [
    "load_or_scaffold",
    "read_or_scaffold_text",
    "save_document",
    "write_changelog",
]
