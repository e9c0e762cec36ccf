"""Implementation of the 'validate' command."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.markup import escape

from changelog_py.core.document import ChangelogDocument
from changelog_py.exceptions import ChangelogFileError, ChangelogParseError
from changelog_py.project import read_or_scaffold_text

if TYPE_CHECKING:
    from pathlib import Path

    from rich.console import Console


def run_validate(file: Path, strict: bool, console: Console, err_console: Console) -> None:
    """Parse and validate the changelog, exiting non-zero on the first defect."""
    try:
        content = read_or_scaffold_text(file)
    except ChangelogFileError as e:
        err_console.print(f"[red]Error:[/] {escape(str(e))}")
        raise SystemExit(e.exit_code) from e

    try:
        document = ChangelogDocument.parse(content)
        document.validate(strict=strict)
    except ChangelogParseError as e:
        err_console.print(f"[red]Validation failed:[/] {escape(e.issue.message())}")
        raise SystemExit(e.exit_code) from e

    mode = " (strict)" if strict else ""
    console.print(f"[green]✓[/] {file} is valid{mode}")
