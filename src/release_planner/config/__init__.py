"""Configuration management for release-planner."""

from __future__ import annotations

from release_planner.config.loader import load_config
from release_planner.config.models import (
    ChangelogConfig,
    CommitsConfig,
    CommitTypeConfig,
    ReleasePlannerConfig,
    VersionConfig,
)

__all__ = [
    "ChangelogConfig",
    "CommitTypeConfig",
    "CommitsConfig",
    "ReleasePlannerConfig",
    "VersionConfig",
    "load_config",
]
