"""Exception hierarchy for release-planner.

Classification never raises: malformed commit messages are excluded from
the plan instead. Exceptions are reserved for the boundaries where the
caller hands us something we cannot work with (a broken version string,
invalid configuration, unreadable input).
"""

from __future__ import annotations


class ReleasePlannerError(Exception):
    """Base class for all release-planner errors."""


# Configuration


class ConfigError(ReleasePlannerError):
    """Configuration could not be loaded."""


class ConfigNotFoundError(ConfigError):
    """No pyproject.toml was found."""


class ConfigValidationError(ConfigError):
    """Configuration values are invalid."""


# Versions


class VersionError(ReleasePlannerError):
    """Version handling failed."""


class InvalidVersionError(VersionError):
    """A version string is not a valid semantic version."""

    def __init__(self, value: str) -> None:
        self.value = value
        super().__init__(f"Invalid semantic version: {value!r}")


# Input


class InputError(ReleasePlannerError):
    """Commit input could not be read or decoded."""
