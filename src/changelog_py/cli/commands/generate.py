"""Implementation of the 'generate' command.

Generate prints (or writes) grouped notes for a commit range without
touching the changelog itself.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from rich.markup import escape

from changelog_py.config.loader import load_type_mapping
from changelog_py.core.commits import group_notes
from changelog_py.core.renderer import render_grouped_notes
from changelog_py.exceptions import ChangelogPyError
from changelog_py.project import load_or_scaffold, write_changelog
from changelog_py.vcs import GitRepository

if TYPE_CHECKING:
    from rich.console import Console


def run_generate(
    file: Path,
    since: str | None,
    until: str | None,
    specific: str | None,
    map_file: Path | None,
    output: Path | None,
    type_map: dict[str, str],
    console: Console,
    err_console: Console,
    *,
    repo_path: Path | None = None,
) -> None:
    """Run the generate command.

    Args:
        file: Changelog file; it must parse if it exists
        since: Exclusive lower bound revision
        until: Inclusive upper bound revision
        specific: Single revision to generate notes for
        map_file: Optional mapping file merged over type_map
        output: Write the notes here instead of printing them
        type_map: Commit kind -> section overrides from configuration
        console: Console for standard output
        err_console: Console for error output
        repo_path: Git working tree (defaults to the current directory)
    """
    try:
        load_or_scaffold(file)
        mapping = {**type_map, **load_type_mapping(map_file)}
        repo = GitRepository(repo_path or Path.cwd())
        commits = repo.list_commits(since=since, until=until, specific=specific)
    except ChangelogPyError as e:
        err_console.print(f"[red]Error:[/] {escape(str(e))}")
        raise SystemExit(e.exit_code) from e

    markdown = render_grouped_notes(group_notes(commits, mapping))

    if output is not None:
        try:
            write_changelog(output, markdown)
        except ChangelogPyError as e:
            err_console.print(f"[red]Error:[/] {escape(str(e))}")
            raise SystemExit(e.exit_code) from e
        console.print(f"Wrote generated notes to {output}")
    else:
        console.print(markdown, markup=False, highlight=False, end="", soft_wrap=True)
