"""Conventional commit parsing and bump calculation.

Parses commit messages following the Conventional Commits specification:
https://www.conventionalcommits.org/

Format: <type>[optional scope][!]: <description>

    [optional body]

    [optional footer(s)]

Commits that do not follow the convention, or whose type is not part of
the configured type mapping, are classified as non-conventional. They are
never an error: they simply take no part in the bump or the changelog.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import UTC, datetime
from functools import lru_cache

from release_planner.config.models import CommitsConfig
from release_planner.core.version import BumpType, Version
from release_planner.exceptions import InvalidVersionError

logger = logging.getLogger(__name__)

_SUBJECT_RE = re.compile(
    r"^(?P<type>[a-zA-Z][a-zA-Z0-9_-]*)"
    r"(?:\((?P<scope>[^()\r\n]+)\))?"
    r"(?P<breaking>!)?"
    r":[ \t]+(?P<description>\S.*?)\s*$"
)

# "Token: value" or "Token #value"; "BREAKING CHANGE" is the one token
# allowed to contain a space.
_FOOTER_RE = re.compile(r"^(?P<token>BREAKING CHANGE|[A-Za-z][\w-]*)(?::[ \t]+|[ \t]+#)(?P<value>.*)$")

RELEASE_AS_TOKEN = "release-as"

_DEFAULT_COMMITS_CONFIG = CommitsConfig()


@lru_cache(maxsize=32)
def _compile_multiline(pattern: str) -> re.Pattern[str]:
    return re.compile(pattern, re.MULTILINE)


@dataclass(frozen=True, slots=True)
class Commit:
    """A raw commit as read from version control.

    Attributes:
        sha: Commit identifier
        message: Full commit message (subject, body and footers)
        timestamp: Commit time, used to order changelog entries
    """

    sha: str
    message: str
    timestamp: datetime | None = None


@dataclass(frozen=True, slots=True)
class CommitRecord:
    """A classified commit.

    ``commit_type`` is None for non-conventional commits.
    """

    sha: str
    commit_type: str | None
    description: str
    scope: str | None = None
    body: str | None = None
    footers: tuple[tuple[str, str], ...] = ()
    is_breaking: bool = False
    release_as: Version | None = None
    timestamp: datetime | None = None
    raw: str = ""

    @property
    def is_conventional(self) -> bool:
        return self.commit_type is not None

    @property
    def subject(self) -> str:
        return self.raw.split("\n", 1)[0].strip()

    def footer(self, token: str) -> str | None:
        """Return the value of the last footer named ``token`` (case-insensitive)."""
        wanted = token.lower()
        for name, value in reversed(self.footers):
            if name.lower() == wanted:
                return value
        return None


CommitInput = str | Commit | CommitRecord


def chronological_key(record: CommitRecord) -> tuple[bool, float, str]:
    """Sort key ordering records by commit time, then sha.

    Records without a timestamp compare equal to each other and sort
    before timed ones, so a stable sort keeps their input order. Naive
    timestamps are read as UTC.
    """
    if record.timestamp is None:
        return (False, 0.0, "")
    timestamp = record.timestamp
    if timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=UTC)
    return (True, timestamp.timestamp(), record.sha)


def _split_body_and_footers(text: str) -> tuple[str | None, tuple[tuple[str, str], ...]]:
    """Split the text after the subject line into body and footers.

    The last paragraph is read as footers when its first line looks like
    a trailer and a body paragraph precedes it. A lone paragraph is only
    footers when every line is a trailer. Lines that do not start a new
    trailer continue the value of the previous one.
    """
    paragraphs = [p for p in re.split(r"\n\s*\n", text.strip("\n")) if p.strip()]
    if not paragraphs:
        return None, ()

    last_lines = paragraphs[-1].splitlines()
    if len(paragraphs) == 1:
        is_footer = all(_FOOTER_RE.match(line) for line in last_lines)
    else:
        is_footer = bool(_FOOTER_RE.match(last_lines[0]))
    if not is_footer:
        return "\n\n".join(paragraphs).strip() or None, ()

    footers: list[list[str]] = []
    for line in last_lines:
        match = _FOOTER_RE.match(line)
        if match:
            footers.append([match.group("token"), match.group("value").strip()])
        else:
            footers[-1][1] = f"{footers[-1][1]}\n{line.strip()}".strip()

    body = "\n\n".join(paragraphs[:-1]).strip() or None
    return body, tuple((token, value) for token, value in footers)


def _release_as(footers: Sequence[tuple[str, str]], sha: str) -> Version | None:
    for token, value in reversed(footers):
        if token.lower() != RELEASE_AS_TOKEN:
            continue
        try:
            return Version.parse(value)
        except InvalidVersionError:
            logger.warning("Ignoring invalid Release-As footer %r in commit %s", value, sha or "?")
            return None
    return None


def _as_commit(item: str | Commit) -> Commit:
    if isinstance(item, Commit):
        return item
    return Commit(sha="", message=item)


def classify_commit(
    commit: str | Commit,
    config: CommitsConfig | None = None,
) -> CommitRecord:
    """Classify a single commit message.

    Args:
        commit: Raw message text or a Commit
        config: Commit settings (type mapping, breaking pattern)

    Returns:
        A CommitRecord; non-conventional messages get ``commit_type=None``
    """
    config = config or _DEFAULT_COMMITS_CONFIG
    commit = _as_commit(commit)
    message = commit.message.replace("\r\n", "\n")

    subject, _, rest = message.strip().partition("\n")
    match = _SUBJECT_RE.match(subject.strip())
    commit_type = match.group("type").lower() if match else None

    if commit_type is None or commit_type not in config.types:
        if match:
            logger.debug("Unknown commit type %r in %s", commit_type, commit.sha or subject)
        else:
            logger.debug("Non-conventional commit %s: %r", commit.sha or "-", subject)
        return CommitRecord(
            sha=commit.sha,
            commit_type=None,
            description=subject.strip(),
            timestamp=commit.timestamp,
            raw=commit.message,
        )

    body, footers = _split_body_and_footers(rest)
    is_breaking = bool(match.group("breaking")) or bool(
        _compile_multiline(config.breaking_pattern).search(rest)
    )

    return CommitRecord(
        sha=commit.sha,
        commit_type=commit_type,
        description=match.group("description"),
        scope=match.group("scope").strip() if match.group("scope") else None,
        body=body,
        footers=footers,
        is_breaking=is_breaking,
        release_as=_release_as(footers, commit.sha),
        timestamp=commit.timestamp,
        raw=commit.message,
    )


def filter_skip_release_commits(
    commits: Iterable[str | Commit],
    skip_patterns: Sequence[str],
) -> list[str | Commit]:
    """Drop commits whose message contains a skip-release marker.

    Markers are matched case-insensitively anywhere in the message.
    """
    return [item for item in commits if not _has_skip_marker(_as_commit(item), skip_patterns)]


def _has_skip_marker(commit: Commit, skip_patterns: Sequence[str]) -> bool:
    message = commit.message.lower()
    if any(p.lower() in message for p in skip_patterns):
        logger.debug("Skipping commit %s with release skip marker", commit.sha or "-")
        return True
    return False


def parse_commits(
    commits: Iterable[CommitInput],
    config: CommitsConfig | None = None,
) -> list[CommitRecord]:
    """Classify a sequence of commits.

    Pre-classified CommitRecords pass through unchanged. Commits carrying
    a skip-release marker are dropped, and when ``config.scope_regex`` is
    set only records with a matching scope are kept.

    Returns:
        Records in input order, non-conventional ones included
    """
    config = config or _DEFAULT_COMMITS_CONFIG
    scope_re = re.compile(config.scope_regex) if config.scope_regex else None

    records: list[CommitRecord] = []
    for item in commits:
        if isinstance(item, CommitRecord):
            record = item
        else:
            commit = _as_commit(item)
            if _has_skip_marker(commit, config.skip_release_patterns):
                continue
            record = classify_commit(commit, config)

        if scope_re is not None and not (record.scope and scope_re.search(record.scope)):
            continue
        records.append(record)
    return records


def commit_bump(record: CommitRecord, config: CommitsConfig | None = None) -> BumpType:
    """Bump triggered by a single record."""
    config = config or _DEFAULT_COMMITS_CONFIG
    if record.commit_type is None or record.commit_type not in config.types:
        return BumpType.NONE
    if record.is_breaking:
        return BumpType.MAJOR
    return BumpType.from_name(config.types[record.commit_type].bump)


def calculate_bump(
    records: Iterable[CommitRecord],
    config: CommitsConfig | None = None,
) -> BumpType:
    """Reduce records to the strongest bump they trigger.

    Breaking changes give MAJOR, otherwise each type's configured bump
    applies. The result does not depend on record order, and an empty
    input gives ``BumpType.NONE``.
    """
    return max((commit_bump(r, config) for r in records), default=BumpType.NONE)


def get_breaking_changes(records: Iterable[CommitRecord]) -> list[CommitRecord]:
    """Return the conventional records that are breaking changes."""
    return [r for r in records if r.is_conventional and r.is_breaking]


# =============================================================================
# Commit message validation
# =============================================================================


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """Result of validating a commit message against the convention."""

    is_valid: bool
    error: str | None = None
    commit_type: str | None = None
    scope: str | None = None
    description: str | None = None
    is_breaking: bool = False


def validate_commit_message(
    message: str,
    *,
    config: CommitsConfig | None = None,
    max_length: int | None = None,
    require_scope: bool = False,
) -> ValidationResult:
    """Validate a commit message (or PR title) against the convention.

    Args:
        message: Message to validate; only the subject line is checked
        config: Commit settings providing the allowed types
        max_length: Maximum subject length
        require_scope: Whether a scope is mandatory

    Returns:
        ValidationResult with ``error`` set when invalid
    """
    config = config or _DEFAULT_COMMITS_CONFIG
    subject = message.strip().split("\n", 1)[0].strip()

    if not subject:
        return ValidationResult(is_valid=False, error="Commit message cannot be empty")

    if max_length is not None and len(subject) > max_length:
        return ValidationResult(
            is_valid=False,
            error=f"Subject exceeds {max_length} characters ({len(subject)})",
        )

    match = _SUBJECT_RE.match(subject)
    if match is None:
        return ValidationResult(
            is_valid=False,
            error=(
                "Subject does not follow conventional commit format: "
                "'type(scope): description' (e.g. 'feat(api): add endpoint')"
            ),
        )

    commit_type = match.group("type").lower()
    scope = match.group("scope")
    is_breaking = bool(match.group("breaking")) or bool(
        _compile_multiline(config.breaking_pattern).search(message)
    )

    if commit_type not in config.types:
        allowed = ", ".join(sorted(config.types))
        return ValidationResult(
            is_valid=False,
            error=f"Invalid commit type '{commit_type}'. Allowed types: {allowed}",
            commit_type=commit_type,
        )

    if require_scope and not scope:
        return ValidationResult(
            is_valid=False,
            error="Commit subject must include a scope, e.g. 'feat(api): ...'",
            commit_type=commit_type,
        )

    return ValidationResult(
        is_valid=True,
        commit_type=commit_type,
        scope=scope,
        description=match.group("description"),
        is_breaking=is_breaking,
    )


def validate_commit_messages(
    messages: Iterable[str],
    *,
    config: CommitsConfig | None = None,
    max_length: int | None = None,
    require_scope: bool = False,
) -> list[ValidationResult]:
    """Validate several messages with the same rules."""
    return [
        validate_commit_message(
            m, config=config, max_length=max_length, require_scope=require_scope
        )
        for m in messages
    ]
