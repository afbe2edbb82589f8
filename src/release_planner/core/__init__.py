"""Core business logic for release-planner.

This module contains the fundamental building blocks:
- Semantic version parsing, ordering and bumping
- Conventional commit classification and bump calculation
- Changelog grouping and rendering
- Release planning
"""

from __future__ import annotations

from release_planner.core.changelog import (
    ChangelogEntry,
    ChangelogSection,
    build_sections,
    format_entry,
    render_changelog,
)
from release_planner.core.commits import (
    Commit,
    CommitRecord,
    ValidationResult,
    calculate_bump,
    classify_commit,
    commit_bump,
    filter_skip_release_commits,
    get_breaking_changes,
    parse_commits,
    validate_commit_message,
    validate_commit_messages,
)
from release_planner.core.planner import ReleasePlan, plan_release, resolve_bump
from release_planner.core.version import BumpType, Version, parse_version

__all__ = [
    # Version
    "BumpType",
    # Changelog
    "ChangelogEntry",
    "ChangelogSection",
    # Commits
    "Commit",
    "CommitRecord",
    # Planning
    "ReleasePlan",
    "ValidationResult",
    "Version",
    "build_sections",
    "calculate_bump",
    "classify_commit",
    "commit_bump",
    "filter_skip_release_commits",
    "format_entry",
    "get_breaking_changes",
    "parse_commits",
    "parse_version",
    "plan_release",
    "render_changelog",
    "resolve_bump",
    "validate_commit_message",
    "validate_commit_messages",
]
