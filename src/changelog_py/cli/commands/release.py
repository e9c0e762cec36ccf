"""Implementation of the 'release' command.

The release command collects commits since the latest version tag,
turns them into a new release and stores it in the changelog.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from rich.markup import escape

from changelog_py.config.loader import load_type_mapping
from changelog_py.core.changelog import build_release, next_version
from changelog_py.core.version import Version
from changelog_py.exceptions import ChangelogPyError
from changelog_py.project import load_or_scaffold, save_document
from changelog_py.vcs import GitRepository, latest_semver_tag

if TYPE_CHECKING:
    from rich.console import Console


def run_release(
    file: Path,
    version: str | None,
    bump: str | None,
    header: str,
    override: bool,
    type_map: dict[str, str],
    console: Console,
    err_console: Console,
    *,
    repo_path: Path | None = None,
    map_file: Path | None = None,
) -> None:
    """Run the release command.

    Args:
        file: Changelog file
        version: Explicit version for the new release
        bump: Bump type applied to the highest existing version
        header: Header format name for the new release
        override: Replace an existing release with the same version
        type_map: Commit kind -> section overrides from configuration
        console: Console for standard output
        err_console: Console for error output
        repo_path: Git working tree (defaults to the current directory)
        map_file: Optional mapping file merged over type_map
    """
    if (version is None) == (bump is None):
        err_console.print("[red]Error:[/] use exactly one of --version or --bump")
        raise SystemExit(1)

    # Load the existing changelog
    try:
        document = load_or_scaffold(file)
    except ChangelogPyError as e:
        err_console.print(f"[red]Failed to parse {file}:[/] {escape(str(e))}")
        raise SystemExit(e.exit_code) from e

    # Resolve the new version
    try:
        new_version = Version.parse(version) if version else next_version(document, bump or "")
    except ChangelogPyError as e:
        err_console.print(f"[red]Invalid version format:[/] {escape(str(e))}")
        raise SystemExit(e.exit_code) from e
    except ValueError as e:
        err_console.print(f"[red]Error:[/] {escape(str(e))}")
        raise SystemExit(1) from e

    # Collect commits since the latest version tag
    try:
        repo = GitRepository(repo_path or Path.cwd())
        latest_tag = latest_semver_tag(repo.list_tags())
        commits = repo.list_commits(since=latest_tag)
        mapping = {**type_map, **load_type_mapping(map_file)}
    except ChangelogPyError as e:
        err_console.print(f"[red]Error:[/] {escape(str(e))}")
        raise SystemExit(e.exit_code) from e

    release = build_release(new_version, commits, mapping, header=header)

    try:
        document.upsert_release(release, override=override)
        document.validate(strict=False)
        save_document(file, document)
    except ChangelogPyError as e:
        err_console.print(f"[red]Error:[/] {escape(str(e))}")
        raise SystemExit(e.exit_code) from e

    since = f"since [cyan]{latest_tag}[/]" if latest_tag else "from the start of history"
    console.print(
        f"  [green]✓[/] Added release [green]{new_version}[/] "
        f"({len(commits)} commit(s) {since})"
    )
    console.print(f"Updated {file}")
