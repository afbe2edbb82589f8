"""Tests for the command line interface."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from release_planner import __version__
from release_planner.cli.app import app
from release_planner.cli.input import parse_commit_input
from release_planner.exceptions import InputError

runner = CliRunner()


class TestParseCommitInput:
    """Tests for parse_commit_input()."""

    def test_json_strings(self):
        commits = parse_commit_input('["feat: a", "fix: b"]')
        assert [c.message for c in commits] == ["feat: a", "fix: b"]

    def test_json_objects(self):
        commits = parse_commit_input(
            '[{"sha": "abc", "message": "fix: b", "timestamp": "2024-01-01T10:00:00+00:00"}]'
        )
        assert commits[0].sha == "abc"
        assert commits[0].timestamp is not None
        assert commits[0].timestamp.year == 2024

    def test_nul_separated(self):
        commits = parse_commit_input("feat: a\n\nbody\n\x00fix: b\n\x00")
        assert [c.message for c in commits] == ["feat: a\n\nbody", "fix: b"]

    def test_one_subject_per_line(self):
        commits = parse_commit_input("feat: a\nfix: b\n\n")
        assert [c.message for c in commits] == ["feat: a", "fix: b"]

    def test_empty(self):
        assert parse_commit_input("  \n") == []

    def test_text_starting_with_bracket(self):
        """Subjects like "[WIP] ..." are text, not JSON."""
        commits = parse_commit_input("[WIP] tidy\nfix: real bug\n")
        assert [c.message for c in commits] == ["[WIP] tidy", "fix: real bug"]

    def test_nul_separated_starting_with_bracket(self):
        commits = parse_commit_input("[skip release] feat: x\x00fix: real bug\x00")
        assert [c.message for c in commits] == ["[skip release] feat: x", "fix: real bug"]

    def test_plan_with_bracket_subject(self, tmp_path: Path):
        result = runner.invoke(
            app,
            ["plan", "--previous", "1.0.0", "--format", "json", "--path", str(tmp_path)],
            input="[WIP] tidy\nfix: real bug\n",
        )

        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout)["next_version"] == "1.0.1"

    @pytest.mark.parametrize("text", ['[{"sha": "x"}]', "[1, 2]", '[{"message": "a", "timestamp": "x"}]'])
    def test_bad_json_entries(self, text: str):
        with pytest.raises(InputError):
            parse_commit_input(text)


class TestPlanCommand:
    """Tests for `release-planner plan`."""

    def test_json_output(self, tmp_path: Path):
        source = tmp_path / "commits.json"
        source.write_text(json.dumps(["feat: add export endpoint", "fix: typo"]))

        result = runner.invoke(
            app,
            ["plan", "--input", str(source), "--previous", "0.4.0", "--format", "json",
             "--path", str(tmp_path)],
        )  # fmt: skip

        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data["next_version"] == "0.5.0"
        assert data["bump"] == "minor"

    def test_markdown_from_stdin(self, temp_project_with_pyproject: Path):
        """Previous version and config come from pyproject.toml."""
        result = runner.invoke(
            app,
            ["plan", "--format", "markdown", "--path", str(temp_project_with_pyproject)],
            input="fix: correct null pointer\ndocs: update readme\n",
        )

        assert result.exit_code == 0, result.output
        assert result.stdout == (
            "### Bug Fixes\n\n- fix: correct null pointer\n\n"
            "### Documentation\n\n- docs: update readme\n"
        )

    def test_text_summary(self, temp_project_with_pyproject: Path):
        result = runner.invoke(
            app,
            ["plan", "--path", str(temp_project_with_pyproject)],
            input="feat!: remove legacy endpoint\n",
        )

        assert result.exit_code == 0, result.output
        assert "2.0.0" in result.output
        assert "remove legacy endpoint" in result.output

    def test_nothing_to_release(self, temp_project_with_pyproject: Path):
        result = runner.invoke(
            app,
            ["plan", "--path", str(temp_project_with_pyproject)],
            input="chore: update deps\n",
        )

        assert result.exit_code == 0
        assert "No releasable changes" in result.output

    def test_invalid_previous_version(self, temp_project_with_pyproject: Path):
        result = runner.invoke(
            app,
            ["plan", "--previous", "one", "--path", str(temp_project_with_pyproject)],
            input="fix: a\n",
        )

        assert result.exit_code == 1
        assert "Invalid semantic version" in result.output


class TestLintCommand:
    """Tests for `release-planner lint`."""

    def test_valid_messages(self, temp_project_with_pyproject: Path):
        result = runner.invoke(
            app, ["lint", "feat: a", "fix(api): b", "--path", str(temp_project_with_pyproject)]
        )
        assert result.exit_code == 0, result.output

    def test_invalid_message_fails(self, temp_project_with_pyproject: Path):
        result = runner.invoke(
            app, ["lint", "feat: a", "oops", "--path", str(temp_project_with_pyproject)]
        )

        assert result.exit_code == 1
        assert "1 of 2 message(s) failed validation" in result.output

    def test_reads_stdin(self, temp_project_with_pyproject: Path):
        result = runner.invoke(
            app,
            ["lint", "--require-scope", "--path", str(temp_project_with_pyproject)],
            input="feat: missing scope\n",
        )

        assert result.exit_code == 1
        assert "must include a scope" in result.output


def test_version_option():
    result = runner.invoke(app, ["--version"])

    assert result.exit_code == 0
    assert result.output.strip() == __version__
