"""Implementation of the 'remove' command."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.markup import escape

from changelog_py.core.version import Version
from changelog_py.exceptions import ChangelogPyError, ReleaseNotFoundError
from changelog_py.project import load_or_scaffold, save_document

if TYPE_CHECKING:
    from pathlib import Path

    from rich.console import Console


def run_remove(file: Path, version: str, yes: bool, console: Console, err_console: Console) -> None:
    """Remove a release from the changelog. Requires explicit confirmation."""
    if not yes:
        err_console.print("[red]Error:[/] remove requires --yes to apply file changes")
        raise SystemExit(1)

    try:
        document = load_or_scaffold(file)
        target = Version.parse(version)
        if not document.remove_version(target):
            raise ReleaseNotFoundError(f"release {target} was not found")
        save_document(file, document)
    except ChangelogPyError as e:
        err_console.print(f"[red]Error:[/] {escape(str(e))}")
        raise SystemExit(e.exit_code) from e

    console.print(f"Removed release {target} from {file}")
