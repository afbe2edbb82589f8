"""release-planner: conventional-commit release decisions.

Turns the commit messages made since the last release into a next
version and a grouped changelog.
"""

from __future__ import annotations

from release_planner.core import (
    BumpType,
    ChangelogEntry,
    ChangelogSection,
    Commit,
    CommitRecord,
    ReleasePlan,
    Version,
    calculate_bump,
    classify_commit,
    parse_version,
    plan_release,
    render_changelog,
)

__version__ = "0.1.0"

__all__ = [
    "BumpType",
    "ChangelogEntry",
    "ChangelogSection",
    "Commit",
    "CommitRecord",
    "ReleasePlan",
    "Version",
    "__version__",
    "calculate_bump",
    "classify_commit",
    "parse_version",
    "plan_release",
    "render_changelog",
]
