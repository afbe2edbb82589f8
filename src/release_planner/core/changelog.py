"""Changelog generation from classified commits.

Entries are grouped into sections by commit type. Section order follows
the order of the configured type mapping; inside a section entries are
ordered by commit time, then by sha. The output depends only on the
records and the configuration, so rendering the same plan twice gives
byte-identical text.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from release_planner.config.models import ChangelogConfig, CommitsConfig
from release_planner.core.commits import CommitRecord, chronological_key

if TYPE_CHECKING:
    from release_planner.core.planner import ReleasePlan


@dataclass(frozen=True, slots=True)
class ChangelogEntry:
    """One bullet of the changelog."""

    section: str
    commit_type: str
    description: str
    sha: str
    scope: str | None = None
    is_breaking: bool = False

    @classmethod
    def from_record(cls, record: CommitRecord, section: str) -> ChangelogEntry:
        if record.commit_type is None:
            raise ValueError("non-conventional commits have no changelog entry")
        return cls(
            section=section,
            commit_type=record.commit_type,
            description=record.description,
            sha=record.sha,
            scope=record.scope,
            is_breaking=record.is_breaking,
        )


@dataclass(frozen=True, slots=True)
class ChangelogSection:
    """A titled group of changelog entries."""

    title: str
    entries: tuple[ChangelogEntry, ...]


def build_sections(
    records: Iterable[CommitRecord],
    config: CommitsConfig | None = None,
) -> tuple[ChangelogSection, ...]:
    """Group changelog-visible records into ordered sections.

    Records whose type has no configured section are left out, as are
    non-conventional records.
    """
    config = config or CommitsConfig()

    titles: list[str] = []
    for type_config in config.types.values():
        if type_config.section is not None and type_config.section not in titles:
            titles.append(type_config.section)

    grouped: dict[str, list[CommitRecord]] = {title: [] for title in titles}
    for record in records:
        if record.commit_type is None or record.commit_type not in config.types:
            continue
        section = config.types[record.commit_type].section
        if section is None:
            continue
        grouped[section].append(record)

    return tuple(
        ChangelogSection(
            title=title,
            entries=tuple(
                ChangelogEntry.from_record(r, title)
                for r in sorted(grouped[title], key=chronological_key)
            ),
        )
        for title in titles
        if grouped[title]
    )


def format_entry(entry: ChangelogEntry, *, include_sha: bool = False, sha_length: int = 7) -> str:
    """Format an entry as a markdown bullet.

    Examples:
        "- fix: correct null pointer"
        "- feat(api): add export endpoint (abc1234)"
    """
    prefix = f"{entry.commit_type}({entry.scope})" if entry.scope else entry.commit_type
    line = f"- {prefix}: {entry.description}"
    if include_sha and entry.sha:
        line += f" ({entry.sha[:sha_length]})"
    return line


def render_sections(
    sections: Iterable[ChangelogSection],
    config: ChangelogConfig | None = None,
) -> list[str]:
    config = config or ChangelogConfig()
    lines: list[str] = []
    for section in sections:
        lines.append(f"### {section.title}")
        lines.append("")
        for entry in section.entries:
            lines.append(
                format_entry(entry, include_sha=config.include_sha, sha_length=config.sha_length)
            )
        lines.append("")
    return lines


def render_changelog(plan: ReleasePlan, config: ChangelogConfig | None = None) -> str:
    """Render a release plan as a markdown changelog fragment.

    Args:
        plan: Release plan to render
        config: Changelog settings (header, sha suffix)

    Returns:
        Markdown text, or an empty string when there is nothing to list
    """
    config = config or ChangelogConfig()
    if not plan.sections:
        return ""

    lines: list[str] = []
    if config.include_header:
        lines.append(f"## {plan.next_version}")
        lines.append("")
    lines.extend(render_sections(plan.sections, config))
    return "\n".join(lines).rstrip("\n") + "\n"
