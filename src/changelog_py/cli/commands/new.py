"""Implementation of the 'new' command."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.markup import escape

from changelog_py.core.document import ChangelogDocument
from changelog_py.exceptions import ChangelogFileError
from changelog_py.project import save_document

if TYPE_CHECKING:
    from pathlib import Path

    from rich.console import Console

SUPPORTED_FORMATS = ("markdown",)


def run_new(file: Path, fmt: str, console: Console, err_console: Console) -> None:
    """Create a fresh changelog file containing only the title."""
    if fmt not in SUPPORTED_FORMATS:
        err_console.print(
            f"[red]Error:[/] unsupported format '{fmt}'; only 'markdown' is currently supported"
        )
        raise SystemExit(1)

    try:
        save_document(file, ChangelogDocument.scaffold())
    except ChangelogFileError as e:
        err_console.print(f"[red]Error:[/] {escape(str(e))}")
        raise SystemExit(e.exit_code) from e

    console.print(f"Created {file}")
