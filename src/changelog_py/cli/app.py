"""Command-line interface for changelog-py."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from changelog_py import __version__
from changelog_py.cli.commands.generate import run_generate
from changelog_py.cli.commands.new import run_new
from changelog_py.cli.commands.release import run_release
from changelog_py.cli.commands.remove import run_remove
from changelog_py.cli.commands.show import run_show
from changelog_py.cli.commands.validate import run_validate
from changelog_py.config import ChangelogConfig, find_pyproject_toml, load_config
from changelog_py.exceptions import ConfigError, ConfigNotFoundError

console = Console(soft_wrap=True)
err_console = Console(stderr=True, soft_wrap=True)


@dataclass
class CLIContext:
    """State shared by all subcommands."""

    config: ChangelogConfig = field(default_factory=ChangelogConfig)
    project_root: Path = field(default_factory=Path.cwd)

    def changelog_path(self, file: Path | None) -> Path:
        """Return --file as given, or the configured path relative to the project root."""
        return file if file is not None else self.project_root / self.config.path


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


file_option = click.option(
    "--file",
    "file",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Changelog file (default: CHANGELOG.md or [tool.changelog-py].path).",
)


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.version_option(version=__version__)
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """Generate and maintain changelogs from git history."""
    configure_logging(verbose)
    cwd = Path.cwd()
    try:
        pyproject = find_pyproject_toml(cwd)
    except ConfigNotFoundError:
        ctx.obj = CLIContext(project_root=cwd)
        return

    try:
        config = load_config(pyproject)
    except ConfigError as e:
        err_console.print(f"[red]Error loading config:[/] {escape(str(e))}")
        raise SystemExit(e.exit_code) from e
    ctx.obj = CLIContext(config=config, project_root=pyproject.parent)


@cli.command()
@file_option
@click.option("--format", "fmt", default="markdown", show_default=True, help="Output format.")
@click.pass_obj
def new(obj: CLIContext, file: Path | None, fmt: str) -> None:
    """Create a new, empty changelog."""
    run_new(obj.changelog_path(file), fmt, console, err_console)


@cli.command()
@file_option
@click.option("--strict", is_flag=True, help="Require sections and notes.")
@click.pass_obj
def validate(obj: CLIContext, file: Path | None, strict: bool) -> None:
    """Check that the changelog is well formed."""
    run_validate(obj.changelog_path(file), strict or obj.config.strict, console, err_console)


@cli.command()
@file_option
@click.option("--since", help="Exclusive lower bound revision.")
@click.option("--until", help="Inclusive upper bound revision (default: HEAD).")
@click.option("--specific", help="Generate notes for a single revision.")
@click.option(
    "--map",
    "map_file",
    type=click.Path(path_type=Path, dir_okay=False),
    help="JSON or TOML file with a [types] table mapping commit types to sections.",
)
@click.option(
    "--output",
    type=click.Path(path_type=Path, dir_okay=False),
    help="Write notes to this file instead of stdout.",
)
@click.pass_obj
def generate(
    obj: CLIContext,
    file: Path | None,
    since: str | None,
    until: str | None,
    specific: str | None,
    map_file: Path | None,
    output: Path | None,
) -> None:
    """Print grouped release notes for a range of commits."""
    run_generate(
        obj.changelog_path(file),
        since,
        until,
        specific,
        map_file,
        output,
        obj.config.types,
        console,
        err_console,
    )


@cli.command()
@file_option
@click.option("--version", "version", help="Version of the new release.")
@click.option(
    "--bump",
    type=click.Choice(["major", "minor", "patch"]),
    help="Bump the highest existing version.",
)
@click.option(
    "--header",
    default=None,
    help="Header format: default, plain, version-only or a template.",
)
@click.option("--override", is_flag=True, help="Replace an existing release with the same version.")
@click.option(
    "--map",
    "map_file",
    type=click.Path(path_type=Path, dir_okay=False),
    help="JSON or TOML file with a [types] table mapping commit types to sections.",
)
@click.pass_obj
def release(
    obj: CLIContext,
    file: Path | None,
    version: str | None,
    bump: str | None,
    header: str | None,
    override: bool,
    map_file: Path | None,
) -> None:
    """Add a release built from commits since the latest version tag."""
    run_release(
        obj.changelog_path(file),
        version,
        bump,
        header or obj.config.header,
        override,
        obj.config.types,
        console,
        err_console,
        map_file=map_file,
    )


@cli.command()
@file_option
@click.option("--version", "version", help="Show a single release.")
@click.option("--range", "version_range", help="Show releases in an inclusive range 'a..b'.")
@click.option("--converge", is_flag=True, help="Merge the selected releases into one view.")
@click.pass_obj
def show(
    obj: CLIContext,
    file: Path | None,
    version: str | None,
    version_range: str | None,
    converge: bool,
) -> None:
    """Print releases from the changelog."""
    if version and version_range:
        raise click.UsageError("Use only one of --version or --range.")
    run_show(obj.changelog_path(file), version, version_range, converge, console, err_console)


@cli.command()
@click.option("--version", "version", required=True, help="Version to remove.")
@file_option
@click.option("--yes", is_flag=True, help="Confirm the change.")
@click.pass_obj
def remove(obj: CLIContext, version: str, file: Path | None, yes: bool) -> None:
    """Remove a release from the changelog."""
    run_remove(obj.changelog_path(file), version, yes, console, err_console)


def main() -> None:
    cli()
