"""Configuration models for release-planner.

All models are pydantic models with defaults matching the behaviour of
common conventional-commit release tooling, so an empty
``[tool.release-planner]`` table gives a working setup.

Example configuration in pyproject.toml:

    [tool.release-planner.commits.types]
    feat = { bump = "minor", section = "Features" }
    fix = { bump = "patch", section = "Bug Fixes" }
    chore = { bump = "none" }

    [tool.release-planner.version]
    bump_minor_pre_major = true
"""

from __future__ import annotations

import re
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

TypeBump = Literal["none", "patch", "minor"]


class _StrictModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)


class CommitTypeConfig(_StrictModel):
    """Behaviour of one commit type.

    Attributes:
        bump: Version bump triggered by a non-breaking commit of this type.
            Major bumps only come from breaking-change markers.
        section: Changelog section title, or None to leave the type out
            of the changelog.
    """

    bump: TypeBump = "none"
    section: str | None = None


def default_commit_types() -> dict[str, CommitTypeConfig]:
    """Default commit type mapping.

    Insertion order defines the order of changelog sections.
    """
    return {
        "feat": CommitTypeConfig(bump="minor", section="Features"),
        "fix": CommitTypeConfig(bump="patch", section="Bug Fixes"),
        "perf": CommitTypeConfig(bump="patch", section="Performance Improvements"),
        "revert": CommitTypeConfig(section="Reverts"),
        "docs": CommitTypeConfig(section="Documentation"),
        "style": CommitTypeConfig(),
        "refactor": CommitTypeConfig(),
        "test": CommitTypeConfig(),
        "build": CommitTypeConfig(),
        "ci": CommitTypeConfig(),
        "chore": CommitTypeConfig(),
    }


class CommitsConfig(_StrictModel):
    """Commit classification settings."""

    types: dict[str, CommitTypeConfig] = Field(default_factory=default_commit_types)
    breaking_pattern: str = r"^BREAKING[ -]CHANGE:"
    skip_release_patterns: list[str] = Field(
        default_factory=lambda: ["[skip release]", "[release skip]", "[no release]"]
    )
    scope_regex: str | None = None

    @field_validator("types")
    @classmethod
    def _normalize_types(cls, value: dict[str, CommitTypeConfig]) -> dict[str, CommitTypeConfig]:
        normalized: dict[str, CommitTypeConfig] = {}
        for name, type_config in value.items():
            key = name.strip().lower()
            if not re.fullmatch(r"[a-z][a-z0-9_-]*", key):
                raise ValueError(f"invalid commit type name: {name!r}")
            normalized[key] = type_config
        return normalized

    @field_validator("breaking_pattern", "scope_regex")
    @classmethod
    def _check_regex(cls, value: str | None) -> str | None:
        if value is not None:
            try:
                re.compile(value)
            except re.error as e:
                raise ValueError(f"invalid regular expression {value!r}: {e}") from e
        return value

    @property
    def allowed_types(self) -> frozenset[str]:
        return frozenset(self.types)


class ChangelogConfig(_StrictModel):
    """Changelog rendering settings."""

    include_header: bool = True
    include_sha: bool = False
    sha_length: int = Field(default=7, ge=4, le=40)


class VersionConfig(_StrictModel):
    """Version resolution settings.

    Attributes:
        bump_minor_pre_major: On 0.x versions, breaking changes bump the
            minor version instead of the major version.
        bump_patch_for_minor_pre_major: On 0.x versions, features bump the
            patch version instead of the minor version.
        pre_release: Pre-release label applied to every planned version.
    """

    bump_minor_pre_major: bool = False
    bump_patch_for_minor_pre_major: bool = False
    pre_release: str | None = None


class ReleasePlannerConfig(_StrictModel):
    """Root configuration."""

    commits: CommitsConfig = Field(default_factory=CommitsConfig)
    changelog: ChangelogConfig = Field(default_factory=ChangelogConfig)
    version: VersionConfig = Field(default_factory=VersionConfig)
