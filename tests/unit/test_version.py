"""Tests for semantic version parsing, ordering and bumping."""

from __future__ import annotations

import pytest

from release_planner.core.version import BumpType, Version, parse_version
from release_planner.exceptions import InvalidVersionError


class TestVersionParse:
    """Tests for Version.parse()."""

    def test_parse_simple(self):
        """Parse a plain major.minor.patch version."""
        assert Version.parse("1.2.3") == Version(1, 2, 3)

    def test_parse_with_v_prefix(self):
        """Leading v from tag names is accepted."""
        assert Version.parse("v2.0.0") == Version(2, 0, 0)

    def test_parse_prerelease_and_build(self):
        """Pre-release and build metadata are split out."""
        v = Version.parse("1.0.0-rc.1+build.5")
        assert v.prerelease == "rc.1"
        assert v.build == "build.5"
        assert str(v) == "1.0.0-rc.1+build.5"

    @pytest.mark.parametrize("value", ["", "1.2", "1.2.3.4", "01.2.3", "1.2.3-", "abc", "1.2.3-rc..1"])
    def test_parse_invalid_raises(self, value: str):
        """Invalid strings raise InvalidVersionError."""
        with pytest.raises(InvalidVersionError):
            Version.parse(value)

    def test_parse_version_passes_through_instances(self):
        """parse_version accepts existing Version objects."""
        v = Version(1, 2, 3)
        assert parse_version(v) is v
        assert parse_version("1.2.3") == v


class TestVersionOrdering:
    """Tests for semantic version precedence."""

    def test_numeric_ordering(self):
        """Major, then minor, then patch decide precedence."""
        assert Version(1, 0, 0) < Version(2, 0, 0)
        assert Version(1, 2, 0) < Version(1, 10, 0)
        assert Version(1, 2, 3) < Version(1, 2, 4)

    def test_prerelease_lower_than_release(self):
        """A pre-release has lower precedence than its release."""
        assert Version.parse("1.0.0-alpha") < Version.parse("1.0.0")

    def test_semver_spec_precedence_chain(self):
        """The example chain from the semver specification is ordered."""
        chain = [
            "1.0.0-alpha",
            "1.0.0-alpha.1",
            "1.0.0-alpha.beta",
            "1.0.0-beta",
            "1.0.0-beta.2",
            "1.0.0-beta.11",
            "1.0.0-rc.1",
            "1.0.0",
        ]
        versions = [Version.parse(v) for v in chain]
        assert versions == sorted(reversed(versions))

    def test_build_metadata_ignored(self):
        """Build metadata does not affect equality or ordering."""
        assert Version.parse("1.0.0+a") == Version.parse("1.0.0+b")


class TestVersionBump:
    """Tests for Version.bump()."""

    def test_bump_major(self):
        assert Version(1, 2, 3).bump(BumpType.MAJOR) == Version(2, 0, 0)

    def test_bump_minor(self):
        assert Version(1, 2, 3).bump(BumpType.MINOR) == Version(1, 3, 0)

    def test_bump_patch(self):
        assert Version(1, 2, 3).bump(BumpType.PATCH) == Version(1, 2, 4)

    def test_bump_none_is_identity(self):
        """NONE returns the version unchanged."""
        v = Version(1, 2, 3)
        assert v.bump(BumpType.NONE) == v

    def test_bump_drops_prerelease(self):
        """A bump from a pre-release yields a plain, higher version."""
        v = Version.parse("1.2.3-rc.1")
        bumped = v.bump(BumpType.PATCH)
        assert bumped == Version(1, 2, 4)
        assert bumped > v

    @pytest.mark.parametrize("bump", [BumpType.PATCH, BumpType.MINOR, BumpType.MAJOR])
    @pytest.mark.parametrize("value", ["0.0.0", "0.4.0", "1.2.3", "2.0.0-beta.3"])
    def test_bump_always_increases(self, value: str, bump: BumpType):
        """Every real bump yields a strictly greater version."""
        v = Version.parse(value)
        assert v.bump(bump) > v

    def test_with_prerelease(self):
        """with_prerelease attaches a label."""
        assert str(Version(1, 3, 0).with_prerelease("rc.1")) == "1.3.0-rc.1"

    def test_with_invalid_prerelease_raises(self):
        with pytest.raises(InvalidVersionError):
            Version(1, 3, 0).with_prerelease("rc..1")


class TestBumpType:
    """Tests for BumpType ordering."""

    def test_total_order(self):
        """MAJOR > MINOR > PATCH > NONE."""
        assert BumpType.MAJOR > BumpType.MINOR > BumpType.PATCH > BumpType.NONE

    def test_max(self):
        assert max([BumpType.PATCH, BumpType.MAJOR, BumpType.NONE]) == BumpType.MAJOR

    def test_str_and_from_name(self):
        assert str(BumpType.MINOR) == "minor"
        assert BumpType.from_name("patch") is BumpType.PATCH
