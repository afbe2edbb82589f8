"""Release planning: from commits and a previous version to a ReleasePlan.

The planner is a pure function. It does not read git, write files or
remember anything between calls; the caller passes in the previous
version and persists whatever it needs from the returned plan.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from release_planner.config.models import ChangelogConfig, ReleasePlannerConfig, VersionConfig
from release_planner.core.changelog import (
    ChangelogEntry,
    ChangelogSection,
    build_sections,
    render_changelog,
)
from release_planner.core.commits import (
    CommitInput,
    CommitRecord,
    calculate_bump,
    chronological_key,
    get_breaking_changes,
    parse_commits,
)
from release_planner.core.version import BumpType, Version, parse_version

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ReleasePlan:
    """Outcome of a planning run.

    Attributes:
        previous_version: Version the plan starts from
        next_version: Version to release (equal to previous_version when
            there is nothing to release)
        bump: Bump applied to previous_version
        sections: Changelog sections in rendering order
        has_releasable_change: Whether next_version differs from previous_version
        records: Conventional records that took part in the plan
        skipped: Number of inputs excluded (non-conventional or skip-marked)
    """

    previous_version: Version
    next_version: Version
    bump: BumpType
    sections: tuple[ChangelogSection, ...]
    has_releasable_change: bool
    records: tuple[CommitRecord, ...] = ()
    skipped: int = 0

    @property
    def entries(self) -> tuple[ChangelogEntry, ...]:
        return tuple(entry for section in self.sections for entry in section.entries)

    @property
    def breaking_changes(self) -> list[CommitRecord]:
        return get_breaking_changes(self.records)

    def changelog(self, config: ChangelogConfig | None = None) -> str:
        return render_changelog(self, config)

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready representation."""
        return {
            "previous_version": str(self.previous_version),
            "next_version": str(self.next_version),
            "bump": str(self.bump),
            "has_releasable_change": self.has_releasable_change,
            "skipped": self.skipped,
            "sections": [
                {
                    "title": section.title,
                    "entries": [
                        {
                            "type": entry.commit_type,
                            "scope": entry.scope,
                            "description": entry.description,
                            "sha": entry.sha,
                            "breaking": entry.is_breaking,
                        }
                        for entry in section.entries
                    ],
                }
                for section in self.sections
            ],
        }


def resolve_bump(bump: BumpType, previous: Version, config: VersionConfig | None = None) -> BumpType:
    """Adjust a bump for initial-development (0.x) versions.

    With default settings the bump is returned unchanged.
    """
    config = config or VersionConfig()
    if previous.major != 0:
        return bump
    if bump == BumpType.MAJOR and config.bump_minor_pre_major:
        return BumpType.MINOR
    if bump == BumpType.MINOR and config.bump_patch_for_minor_pre_major:
        return BumpType.PATCH
    return bump


def _release_as_override(records: Iterable[CommitRecord], previous: Version) -> Version | None:
    requested = [r for r in records if r.release_as is not None]
    if not requested:
        return None
    # Newest commit wins.
    latest = max(
        enumerate(requested),
        key=lambda pair: (*chronological_key(pair[1])[:2], pair[0]),
    )[1]
    if latest.release_as is not None and latest.release_as > previous:
        return latest.release_as
    logger.warning(
        "Ignoring Release-As %s from %s: not greater than %s",
        latest.release_as,
        latest.sha or latest.subject,
        previous,
    )
    return None


def plan_release(
    commits: Iterable[CommitInput],
    previous_version: Version | str,
    config: ReleasePlannerConfig | None = None,
    *,
    prerelease: str | None = None,
) -> ReleasePlan:
    """Plan the next release.

    Args:
        commits: Commits since the last release, oldest first. Plain
            strings, Commit objects and pre-classified CommitRecords are
            accepted.
        previous_version: Version of the last release
        config: Planner configuration (defaults when omitted)
        prerelease: Pre-release label for the next version; overrides
            ``config.version.pre_release``

    Returns:
        The release plan

    Raises:
        InvalidVersionError: If previous_version or the pre-release label
            is not valid semver
    """
    config = config or ReleasePlannerConfig()
    previous = parse_version(previous_version)

    inputs = list(commits)
    records = [r for r in parse_commits(inputs, config.commits) if r.is_conventional]

    bump = resolve_bump(calculate_bump(records, config.commits), previous, config.version)
    next_version = previous.bump(bump)

    override = _release_as_override(records, previous)
    if override is not None:
        next_version = override

    label = prerelease or config.version.pre_release
    if label and next_version > previous:
        labelled = next_version.with_prerelease(label)
        if labelled > previous:
            next_version = labelled
        else:
            logger.warning(
                "Pre-release %s is not newer than %s; keeping %s", labelled, previous, next_version
            )

    plan = ReleasePlan(
        previous_version=previous,
        next_version=next_version,
        bump=bump,
        sections=build_sections(records, config.commits),
        has_releasable_change=next_version > previous,
        records=tuple(records),
        skipped=len(inputs) - len(records),
    )
    logger.debug(
        "Planned %s -> %s (%s bump, %d commits, %d skipped)",
        plan.previous_version,
        plan.next_version,
        plan.bump,
        len(plan.records),
        plan.skipped,
    )
    return plan
