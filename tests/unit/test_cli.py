"""Tests for the command-line interface."""

from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import MagicMock, patch

import pytest
from click.testing import CliRunner

from changelog_py.cli.app import cli
from changelog_py.core.document import ChangelogDocument
from changelog_py.core.version import Version
from changelog_py.exceptions import GitError
from changelog_py.vcs.git import Commit, GitRepository

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture(autouse=True)
def in_tmp_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run every CLI test from an empty project directory."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


def _mock_repo(commits: list[Commit], tags: list[str] | None = None) -> MagicMock:
    repo = MagicMock(spec=GitRepository)
    repo.list_commits.return_value = commits
    repo.list_tags.return_value = tags or []
    return repo


class TestNewCommand:
    """Tests for 'changelog-py new'."""

    def test_creates_scaffold(self, runner: CliRunner, tmp_path: Path):
        result = runner.invoke(cli, ["new"])

        assert result.exit_code == 0, result.output
        assert (tmp_path / "CHANGELOG.md").read_text() == "# Changelog\n"
        assert "Created" in result.output

    def test_nested_path(self, runner: CliRunner, tmp_path: Path):
        result = runner.invoke(cli, ["new", "--file", "docs/CHANGES.md"])

        assert result.exit_code == 0, result.output
        assert (tmp_path / "docs" / "CHANGES.md").exists()

    def test_unsupported_format(self, runner: CliRunner):
        result = runner.invoke(cli, ["new", "--format", "json"])

        assert result.exit_code == 1
        assert "unsupported format" in result.output


class TestValidateCommand:
    """Tests for 'changelog-py validate'."""

    def test_valid(self, runner: CliRunner, changelog_file: Path):
        result = runner.invoke(cli, ["validate", "--file", str(changelog_file)])

        assert result.exit_code == 0, result.output
        assert "is valid" in result.output

    def test_strict_fails_on_empty_section(self, runner: CliRunner, changelog_file: Path):
        result = runner.invoke(cli, ["validate", "--strict", "--file", str(changelog_file)])

        assert result.exit_code == 1
        assert "section 'Changed' has no notes" in result.output

    def test_parse_error_reports_line(self, runner: CliRunner, tmp_path: Path):
        path = tmp_path / "CHANGELOG.md"
        path.write_text("# Changelog\n\n## [1.0.0]\n\n- orphan note\n")

        result = runner.invoke(cli, ["validate"])

        assert result.exit_code == 1
        assert "line 5" in result.output
        assert "Fix:" in result.output

    def test_missing_file_is_valid_scaffold(self, runner: CliRunner, tmp_path: Path):
        result = runner.invoke(cli, ["validate"])

        assert result.exit_code == 0, result.output
        assert not (tmp_path / "CHANGELOG.md").exists()

    def test_strict_from_config(self, runner: CliRunner, tmp_path: Path, changelog_file: Path):
        (tmp_path / "pyproject.toml").write_text("[tool.changelog-py]\nstrict = true\n")

        result = runner.invoke(cli, ["validate"])

        assert result.exit_code == 1


class TestReleaseCommand:
    """Tests for 'changelog-py release'."""

    def test_release_with_version(self, runner: CliRunner, tmp_path: Path):
        repo = _mock_repo([Commit("a", "feat: shiny"), Commit("b", "fix: broken thing")])

        with patch("changelog_py.cli.commands.release.GitRepository", return_value=repo):
            result = runner.invoke(cli, ["release", "--version", "1.0.0"])

        assert result.exit_code == 0, result.output
        doc = ChangelogDocument.parse((tmp_path / "CHANGELOG.md").read_text())
        assert [r.version for r in doc.releases] == [Version(1, 0, 0)]
        assert doc.releases[0].sections == {"Added": ["shiny"], "Fixed": ["broken thing"]}
        repo.list_commits.assert_called_once_with(since=None)

    def test_release_bump_since_latest_tag(self, runner: CliRunner, changelog_file: Path):
        repo = _mock_repo([Commit("a", "perf: faster")], tags=["v1.0.0", "v1.1.0", "junk"])

        with patch("changelog_py.cli.commands.release.GitRepository", return_value=repo):
            result = runner.invoke(
                cli,
                ["release", "--bump", "minor", "--header", "plain", "--file", str(changelog_file)],
            )

        assert result.exit_code == 0, result.output
        repo.list_commits.assert_called_once_with(since="v1.1.0")
        doc = ChangelogDocument.parse(changelog_file.read_text())
        assert doc.releases[0].version == Version(1, 2, 0)
        assert doc.releases[0].sections == {"Changed": ["faster"]}
        assert changelog_file.read_text().startswith("# Changelog\n\n## 1.2.0 - ")

    def test_release_requires_one_version_source(self, runner: CliRunner):
        result = runner.invoke(cli, ["release"])

        assert result.exit_code == 1
        assert "exactly one of --version or --bump" in result.output

    def test_release_existing_needs_override(self, runner: CliRunner, changelog_file: Path):
        repo = _mock_repo([Commit("a", "fix: again")])

        with patch("changelog_py.cli.commands.release.GitRepository", return_value=repo):
            refused = runner.invoke(
                cli, ["release", "--version", "1.0.0", "--file", str(changelog_file)]
            )
            allowed = runner.invoke(
                cli, ["release", "--version", "1.0.0", "--override", "--file", str(changelog_file)]
            )

        assert refused.exit_code == 1
        assert "already exists" in refused.output
        assert allowed.exit_code == 0, allowed.output
        doc = ChangelogDocument.parse(changelog_file.read_text())
        assert doc.get_release(Version(1, 0, 0)).sections == {"Fixed": ["again"]}

    def test_release_invalid_version(self, runner: CliRunner):
        result = runner.invoke(cli, ["release", "--version", "1.0"])

        assert result.exit_code == 5
        assert "Invalid" in result.output

    def test_release_uses_mapping_file(self, runner: CliRunner, tmp_path: Path):
        (tmp_path / "map.json").write_text('{"types": {"feat": "Features"}}')
        repo = _mock_repo([Commit("a", "feat: mapped")])

        with patch("changelog_py.cli.commands.release.GitRepository", return_value=repo):
            result = runner.invoke(cli, ["release", "--version", "0.1.0", "--map", "map.json"])

        assert result.exit_code == 0, result.output
        assert "### Features\n- mapped" in (tmp_path / "CHANGELOG.md").read_text()

    def test_release_git_failure(self, runner: CliRunner):
        with patch(
            "changelog_py.cli.commands.release.GitRepository",
            side_effect=GitError("git rev-parse failed with exit code 128"),
        ):
            result = runner.invoke(cli, ["release", "--version", "1.0.0"])

        assert result.exit_code == 2
        assert "rev-parse" in result.output


class TestGenerateCommand:
    """Tests for 'changelog-py generate'."""

    def test_generate_to_stdout(self, runner: CliRunner):
        repo = _mock_repo(
            [
                Commit("a", "feat: first"),
                Commit("b", "feat: First"),
                Commit("c", "chore: tidy !log"),
                Commit("d", "random message"),
            ]
        )

        with patch("changelog_py.cli.commands.generate.GitRepository", return_value=repo):
            result = runner.invoke(cli, ["generate", "--since", "v1.0.0"])

        assert result.exit_code == 0, result.output
        assert result.output == "### Added\n- first\n\n### Other\n- random message\n"
        repo.list_commits.assert_called_once_with(since="v1.0.0", until=None, specific=None)

    def test_generate_no_changes(self, runner: CliRunner):
        repo = _mock_repo([Commit("a", "feat: hidden (skip changelog)")])

        with patch("changelog_py.cli.commands.generate.GitRepository", return_value=repo):
            result = runner.invoke(cli, ["generate"])

        assert result.exit_code == 0, result.output
        assert result.output == "### Other\n- No user-facing changes detected\n"

    def test_generate_to_file(self, runner: CliRunner, tmp_path: Path):
        repo = _mock_repo([Commit("a", "docs: explain [links](x)")])

        with patch("changelog_py.cli.commands.generate.GitRepository", return_value=repo):
            result = runner.invoke(cli, ["generate", "--output", "notes.md"])

        assert result.exit_code == 0, result.output
        assert (tmp_path / "notes.md").read_text() == "### Documentation\n- explain [links](x)\n"

    def test_generate_bad_mapping(self, runner: CliRunner, tmp_path: Path):
        (tmp_path / "map.ini").write_text("")

        result = runner.invoke(cli, ["generate", "--map", "map.ini"])

        assert result.exit_code == 3
        assert "unsupported mapping extension" in result.output

    def test_generate_refuses_broken_changelog(self, runner: CliRunner, tmp_path: Path):
        (tmp_path / "CHANGELOG.md").write_text("not a changelog\n")

        result = runner.invoke(cli, ["generate"])

        assert result.exit_code == 1
        assert "line 1" in result.output


class TestShowCommand:
    """Tests for 'changelog-py show'."""

    def test_show_version(self, runner: CliRunner, changelog_file: Path):
        result = runner.invoke(cli, ["show", "--version", "1.0.1", "--file", str(changelog_file)])

        assert result.exit_code == 0, result.output
        assert result.output == (
            "# Changelog\n\n## 1.0.1 - 2025-12-15\n\n### Fixed\n- typo in help output\n"
        )

    def test_show_converged_range(self, runner: CliRunner, changelog_file: Path):
        result = runner.invoke(
            cli, ["show", "--range", "1.0.0..1.0.1", "--converge", "--file", str(changelog_file)]
        )

        assert result.exit_code == 0, result.output
        assert result.output == (
            "# Changelog\n\n## [converged]\n\n### Added\n- initial release\n\n"
            "### Fixed\n- typo in help output\n"
        )

    def test_show_no_match(self, runner: CliRunner, changelog_file: Path):
        result = runner.invoke(cli, ["show", "--version", "9.9.9", "--file", str(changelog_file)])

        assert result.exit_code == 1
        assert "no matching releases" in result.output

    def test_show_bad_range(self, runner: CliRunner, changelog_file: Path):
        result = runner.invoke(cli, ["show", "--range", "1.0.0", "--file", str(changelog_file)])

        assert result.exit_code == 1
        assert "<a>..<b>" in result.output

    def test_show_version_and_range_conflict(self, runner: CliRunner):
        result = runner.invoke(cli, ["show", "--version", "1.0.0", "--range", "1.0.0..2.0.0"])

        assert result.exit_code == 2


class TestRemoveCommand:
    """Tests for 'changelog-py remove'."""

    def test_remove_requires_yes(self, runner: CliRunner, changelog_file: Path):
        original = changelog_file.read_text()

        result = runner.invoke(cli, ["remove", "--version", "1.0.0", "--file", str(changelog_file)])

        assert result.exit_code == 1
        assert changelog_file.read_text() == original

    def test_remove(self, runner: CliRunner, changelog_file: Path):
        result = runner.invoke(
            cli, ["remove", "--version", "1.0.0", "--yes", "--file", str(changelog_file)]
        )

        assert result.exit_code == 0, result.output
        doc = ChangelogDocument.parse(changelog_file.read_text())
        assert Version(1, 0, 0) not in [r.version for r in doc.releases]
        assert len(doc.releases) == 3

    def test_remove_missing(self, runner: CliRunner, changelog_file: Path):
        result = runner.invoke(
            cli, ["remove", "--version", "4.0.0", "--yes", "--file", str(changelog_file)]
        )

        assert result.exit_code == 1
        assert "was not found" in result.output


class TestCliGroup:
    """Tests for the top-level group."""

    def test_version_option(self, runner: CliRunner):
        result = runner.invoke(cli, ["--version"])

        assert result.exit_code == 0
        assert "0.1.0" in result.output

    def test_invalid_config(self, runner: CliRunner, tmp_path: Path):
        (tmp_path / "pyproject.toml").write_text("[tool.changelog-py]\nheadr = 'plain'\n")

        result = runner.invoke(cli, ["validate"])

        assert result.exit_code == 3
        assert "Error loading config" in result.output

    def test_config_path_relative_to_pyproject(
        self, runner: CliRunner, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ):
        """The configured changelog path is resolved from the pyproject.toml directory."""
        (tmp_path / "pyproject.toml").write_text('[tool.changelog-py]\npath = "docs/CHANGES.md"\n')
        subdir = tmp_path / "src" / "pkg"
        subdir.mkdir(parents=True)
        monkeypatch.chdir(subdir)

        result = runner.invoke(cli, ["new"])

        assert result.exit_code == 0, result.output
        assert (tmp_path / "docs" / "CHANGES.md").read_text() == "# Changelog\n"
        assert not (subdir / "docs").exists()

    def test_file_option_stays_relative_to_cwd(
        self, runner: CliRunner, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ):
        (tmp_path / "pyproject.toml").write_text('[project]\nname = "x"\n')
        subdir = tmp_path / "sub"
        subdir.mkdir()
        monkeypatch.chdir(subdir)

        result = runner.invoke(cli, ["new", "--file", "LOG.md"])

        assert result.exit_code == 0, result.output
        assert (subdir / "LOG.md").exists()


class TestFileErrors:
    """Unreadable or unwritable files produce a clean error instead of a traceback."""

    def test_validate_invalid_utf8(self, runner: CliRunner, tmp_path: Path):
        path = tmp_path / "CHANGELOG.md"
        path.write_bytes(b"# Changelog\n\n## [1.0.0]\n### Added\n- caf\xe9\n")

        result = runner.invoke(cli, ["validate", "--file", str(path)])

        assert result.exit_code == 1
        assert "not valid UTF-8" in result.output
        assert not isinstance(result.exception, UnicodeDecodeError)

    def test_show_invalid_utf8(self, runner: CliRunner, tmp_path: Path):
        (tmp_path / "CHANGELOG.md").write_bytes(b"# Changelog\xff\n")

        result = runner.invoke(cli, ["show"])

        assert result.exit_code == 1
        assert "not valid UTF-8" in result.output

    def test_generate_unwritable_output(self, runner: CliRunner, tmp_path: Path):
        (tmp_path / "blocker").write_text("a file, not a directory")
        repo = _mock_repo([Commit("a", "feat: x")])

        with patch("changelog_py.cli.commands.generate.GitRepository", return_value=repo):
            result = runner.invoke(cli, ["generate", "--output", "blocker/notes.md"])

        assert result.exit_code == 1
        assert "cannot write" in result.output

    def test_new_unwritable_path(self, runner: CliRunner, tmp_path: Path):
        (tmp_path / "blocker").write_text("")

        result = runner.invoke(cli, ["new", "--file", "blocker/CHANGELOG.md"])

        assert result.exit_code == 1
        assert "cannot write" in result.output
