"""Shared fixtures for release-planner tests."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING

import pytest

from release_planner.core.commits import Commit

if TYPE_CHECKING:
    from pathlib import Path

BASE_TIME = datetime(2024, 1, 1, 12, 0, tzinfo=UTC)


def make_commit(sha: str, message: str, minutes: int = 0) -> Commit:
    """Build a Commit with a timestamp ``minutes`` after BASE_TIME."""
    return Commit(sha=sha, message=message, timestamp=BASE_TIME + timedelta(minutes=minutes))


@pytest.fixture
def feat_commit() -> Commit:
    return make_commit("feat123", "feat: add user authentication", 1)


@pytest.fixture
def fix_commit() -> Commit:
    return make_commit("fix456", "fix(core): handle empty config", 2)


@pytest.fixture
def breaking_commit() -> Commit:
    return make_commit("break789", "feat(api)!: remove v1 endpoints", 3)


@pytest.fixture
def sample_commits() -> list[Commit]:
    """A typical mix of commits since the last release."""
    return [
        make_commit("a1", "feat: add export endpoint", 1),
        make_commit("b2", "fix(api): handle null response", 2),
        make_commit("c3", "docs: update readme", 3),
        make_commit("d4", "chore: update dependencies", 4),
        make_commit("e5", "refactor!: drop python 3.10\n\nBREAKING CHANGE: 3.11 is required", 5),
        make_commit("f6", "Merge branch 'main' into feature", 6),
    ]


@pytest.fixture
def temp_project_with_pyproject(tmp_path: Path) -> Path:
    """A project directory with a configured pyproject.toml."""
    (tmp_path / "pyproject.toml").write_text(
        """\
[project]
name = "test-project"
version = "1.2.3"

[tool.release-planner.changelog]
include_header = false
"""
    )
    return tmp_path
