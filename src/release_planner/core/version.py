"""Semantic version parsing, ordering and bumping.

Versions follow Semantic Versioning 2.0.0:

    MAJOR.MINOR.PATCH[-PRERELEASE][+BUILD]

Build metadata is kept for display but ignored for precedence, as the
standard requires.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from enum import IntEnum
from functools import total_ordering

from release_planner.exceptions import InvalidVersionError

# Official semver regex, with an optional leading "v" for tag-style input.
_SEMVER_RE = re.compile(
    r"^v?(?P<major>0|[1-9]\d*)\.(?P<minor>0|[1-9]\d*)\.(?P<patch>0|[1-9]\d*)"
    r"(?:-(?P<prerelease>(?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*)"
    r"(?:\.(?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*))*))?"
    r"(?:\+(?P<build>[0-9a-zA-Z-]+(?:\.[0-9a-zA-Z-]+)*))?$"
)

_PRERELEASE_RE = re.compile(
    r"^(?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*)(?:\.(?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*))*$"
)


class BumpType(IntEnum):
    """Magnitude of a version increment.

    Members are ordered so that ``max()`` picks the strongest bump:
    ``NONE < PATCH < MINOR < MAJOR``.
    """

    NONE = 0
    PATCH = 1
    MINOR = 2
    MAJOR = 3

    def __str__(self) -> str:
        return self.name.lower()

    @classmethod
    def from_name(cls, name: str) -> BumpType:
        """Look up a bump type by its lower-case name (``"minor"``)."""
        return cls[name.upper()]


def _prerelease_key(prerelease: str | None) -> tuple:
    # A release without a pre-release label outranks any pre-release.
    if prerelease is None:
        return (1,)
    identifiers = []
    for part in prerelease.split("."):
        if part.isdigit():
            identifiers.append((0, int(part), ""))
        else:
            identifiers.append((1, 0, part))
    return (0, tuple(identifiers))


@total_ordering
@dataclass(frozen=True, slots=True)
class Version:
    """An immutable semantic version.

    Attributes:
        major: Major version number
        minor: Minor version number
        patch: Patch version number
        prerelease: Optional pre-release label (e.g. ``"rc.1"``)
        build: Optional build metadata, ignored for comparison
    """

    major: int
    minor: int
    patch: int
    prerelease: str | None = None
    build: str | None = field(default=None, compare=False)

    @classmethod
    def parse(cls, value: str) -> Version:
        """Parse a version string.

        Args:
            value: Version string such as ``"1.2.3"``, ``"v2.0.0-rc.1"``

        Returns:
            Parsed Version

        Raises:
            InvalidVersionError: If the string is not a semantic version
        """
        match = _SEMVER_RE.match(value.strip())
        if match is None:
            raise InvalidVersionError(value)
        return cls(
            major=int(match.group("major")),
            minor=int(match.group("minor")),
            patch=int(match.group("patch")),
            prerelease=match.group("prerelease"),
            build=match.group("build"),
        )

    def __str__(self) -> str:
        result = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            result += f"-{self.prerelease}"
        if self.build:
            result += f"+{self.build}"
        return result

    def _precedence(self) -> tuple:
        return (self.major, self.minor, self.patch, _prerelease_key(self.prerelease))

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._precedence() < other._precedence()

    @property
    def is_prerelease(self) -> bool:
        return self.prerelease is not None

    def bump(self, bump_type: BumpType) -> Version:
        """Return the version that follows this one for ``bump_type``.

        Pre-release labels and build metadata are dropped by any real bump,
        so the result always has strictly higher precedence.
        ``BumpType.NONE`` returns ``self`` unchanged.
        """
        if bump_type == BumpType.MAJOR:
            return Version(self.major + 1, 0, 0)
        if bump_type == BumpType.MINOR:
            return Version(self.major, self.minor + 1, 0)
        if bump_type == BumpType.PATCH:
            return Version(self.major, self.minor, self.patch + 1)
        return self

    def with_prerelease(self, prerelease: str | None) -> Version:
        """Return a copy carrying ``prerelease`` as its pre-release label.

        Raises:
            InvalidVersionError: If the label is not valid semver
        """
        if prerelease is not None and not _PRERELEASE_RE.match(prerelease):
            raise InvalidVersionError(f"{self.major}.{self.minor}.{self.patch}-{prerelease}")
        return replace(self, prerelease=prerelease, build=None)


def parse_version(value: str | Version) -> Version:
    """Coerce ``value`` into a Version, parsing strings."""
    if isinstance(value, Version):
        return value
    return Version.parse(value)
