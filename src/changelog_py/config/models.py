"""Pydantic models for changelog-py configuration.

Configuration lives in ``[tool.changelog-py]`` in pyproject.toml. Commit
type mappings may also come from a standalone JSON or TOML file with a
top-level ``types`` table.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TypeMapping(BaseModel):
    """Contents of a commit type mapping file."""

    model_config = ConfigDict(extra="ignore")

    types: dict[str, str] | None = None


class ChangelogConfig(BaseModel):
    """Settings for reading, validating and writing the changelog."""

    model_config = ConfigDict(extra="forbid")

    path: Path = Field(default=Path("CHANGELOG.md"), description="Changelog file path")
    header: str = Field(default="default", description="Header format for new releases")
    strict: bool = Field(default=False, description="Validate in strict mode by default")
    types: dict[str, str] = Field(
        default_factory=dict,
        description="Commit kind -> section overrides",
    )

    @field_validator("types")
    @classmethod
    def _sections_not_blank(cls, value: dict[str, str]) -> dict[str, str]:
        for kind, section in value.items():
            if not section.strip():
                raise ValueError(f"section for commit type '{kind}' must not be blank")
        return value
