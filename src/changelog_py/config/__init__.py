"""Configuration management for changelog-py."""

from __future__ import annotations

from changelog_py.config.loader import find_pyproject_toml, load_config, load_type_mapping
from changelog_py.config.models import ChangelogConfig, TypeMapping

__all__ = [
    "ChangelogConfig",
    "TypeMapping",
    "find_pyproject_toml",
    "load_config",
    "load_type_mapping",
]
