"""Configuration loading.

Reads ``[tool.changelog-py]`` from the nearest pyproject.toml and commit
type mapping files in JSON or TOML.
"""

from __future__ import annotations

import json
import logging
import tomllib
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from changelog_py.config.models import ChangelogConfig, TypeMapping
from changelog_py.exceptions import ConfigNotFoundError, ConfigValidationError

logger = logging.getLogger(__name__)

TOOL_NAME = "changelog-py"


def find_pyproject_toml(start: Path | None = None) -> Path:
    """Find pyproject.toml in start or any parent directory.

    Raises:
        ConfigNotFoundError: If no pyproject.toml is found
    """
    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / "pyproject.toml"
        if candidate.is_file():
            return candidate
    raise ConfigNotFoundError(f"No pyproject.toml found in {current} or its parents")


def load_pyproject_toml(path: Path) -> dict[str, Any]:
    """Load and parse a pyproject.toml file.

    Raises:
        ConfigNotFoundError: If the file does not exist
        ConfigValidationError: If the file is not valid TOML
    """
    if not path.is_file():
        raise ConfigNotFoundError(f"Configuration file not found: {path}")
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except (tomllib.TOMLDecodeError, UnicodeDecodeError) as e:
        raise ConfigValidationError(f"Invalid TOML in {path}: {e}") from e
    except OSError as e:
        raise ConfigValidationError(f"Cannot read {path}: {e.strerror or e}") from e


def extract_changelog_config(pyproject: dict[str, Any]) -> dict[str, Any]:
    """Return the ``[tool.changelog-py]`` table, or an empty dict."""
    return pyproject.get("tool", {}).get(TOOL_NAME, {})


def load_config(path: Path | None = None) -> ChangelogConfig:
    """Load configuration, falling back to defaults.

    Args:
        path: Project directory (or pyproject.toml) to start searching from

    Returns:
        ChangelogConfig; defaults when no pyproject.toml or no tool table

    Raises:
        ConfigValidationError: If the tool table has invalid values
    """
    if path is not None and path.is_file():
        pyproject_path = path
    else:
        try:
            pyproject_path = find_pyproject_toml(path)
        except ConfigNotFoundError:
            logger.debug("No pyproject.toml found, using default configuration")
            return ChangelogConfig()

    data = extract_changelog_config(load_pyproject_toml(pyproject_path))
    logger.debug("Loaded [tool.%s] from %s", TOOL_NAME, pyproject_path)

    try:
        return ChangelogConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigValidationError(f"Invalid [tool.{TOOL_NAME}] configuration: {e}") from e


def load_type_mapping(path: Path | None) -> dict[str, str]:
    """Load a commit type -> section mapping from a JSON or TOML file.

    Args:
        path: Mapping file, or None for no overrides

    Returns:
        The ``types`` table, or an empty dict if the file has none

    Raises:
        ConfigNotFoundError: If the file does not exist
        ConfigValidationError: If the file cannot be parsed or has an
            unsupported extension
    """
    if path is None:
        return {}

    if not path.is_file():
        raise ConfigNotFoundError(f"Mapping file not found: {path}")

    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigValidationError(f"cannot read mapping file {path}: {e}") from e

    extension = path.suffix.lower()

    try:
        if extension == ".json":
            raw = json.loads(content)
        elif extension == ".toml":
            raw = tomllib.loads(content)
        else:
            raise ConfigValidationError(
                f"unsupported mapping extension '{extension.lstrip('.')}'; use .json or .toml"
            )
        mapping = TypeMapping.model_validate(raw)
    except json.JSONDecodeError as e:
        raise ConfigValidationError(f"invalid JSON mapping file: {e}") from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigValidationError(f"invalid TOML mapping file: {e}") from e
    except ValidationError as e:
        raise ConfigValidationError(f"invalid mapping file {path}: {e}") from e

    logger.debug("Loaded %d type mapping(s) from %s", len(mapping.types or {}), path)
    return mapping.types or {}
