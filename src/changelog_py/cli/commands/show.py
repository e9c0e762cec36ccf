"""Implementation of the 'show' command."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.markup import escape

from changelog_py.core.changelog import converged_document, select_releases
from changelog_py.core.document import ChangelogDocument
from changelog_py.core.version import Version
from changelog_py.exceptions import ChangelogPyError
from changelog_py.project import load_or_scaffold

if TYPE_CHECKING:
    from pathlib import Path

    from rich.console import Console


def run_show(
    file: Path,
    version: str | None,
    version_range: str | None,
    converge: bool,
    console: Console,
    err_console: Console,
) -> None:
    """Print selected releases, optionally merged into one converged view."""
    try:
        document = load_or_scaffold(file)
        target = Version.parse(version) if version else None
        selected = select_releases(document, version=target, version_range=version_range)
    except ChangelogPyError as e:
        err_console.print(f"[red]Error:[/] {escape(str(e))}")
        raise SystemExit(e.exit_code) from e
    except ValueError as e:
        err_console.print(f"[red]Error:[/] {escape(str(e))}")
        raise SystemExit(1) from e

    if converge:
        view = converged_document(selected)
    else:
        view = ChangelogDocument(title=document.title, releases=selected)

    console.print(view.to_markdown(), markup=False, highlight=False, end="", soft_wrap=True)
