"""Implementation of the 'plan' command.

The plan command reads commit messages, decides the next version and
prints the plan. It never modifies the repository.
"""

from __future__ import annotations

import json
import logging
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from release_planner.cli.input import load_commits
from release_planner.config.loader import get_project_version, load_config
from release_planner.config.models import ReleasePlannerConfig
from release_planner.core.planner import plan_release
from release_planner.exceptions import ConfigNotFoundError, ReleasePlannerError

if TYPE_CHECKING:
    from rich.console import Console

    from release_planner.core.planner import ReleasePlan

logger = logging.getLogger(__name__)


class OutputFormat(str, Enum):
    TEXT = "text"
    JSON = "json"
    MARKDOWN = "markdown"


def _load_config(project_path: Path, have_previous: bool) -> ReleasePlannerConfig:
    try:
        return load_config(project_path)
    except ConfigNotFoundError:
        # An explicit --previous makes pyproject.toml optional.
        if not have_previous:
            raise
        logger.debug("No pyproject.toml under %s, using default configuration", project_path)
        return ReleasePlannerConfig()


def run_plan(
    path: str | None,
    input_path: Path | None,
    previous: str | None,
    prerelease: str | None,
    output_format: OutputFormat,
    console: Console,
    err_console: Console,
) -> None:
    """Run the plan command.

    Args:
        path: Optional path to project directory
        input_path: Commit input file (stdin when None or "-")
        previous: Previous version; read from pyproject.toml when None
        prerelease: Pre-release identifier (e.g. "alpha", "rc.1")
        output_format: How to print the plan
        console: Console for standard output
        err_console: Console for error output
    """
    project_path = Path(path) if path else Path.cwd()

    try:
        config = _load_config(project_path, previous is not None)
        previous_version = previous or get_project_version(project_path)
        commits = load_commits(input_path)
        plan = plan_release(commits, previous_version, config, prerelease=prerelease)
    except ReleasePlannerError as e:
        err_console.print(f"[red]Error:[/] {e}")
        raise SystemExit(1) from e

    if output_format is OutputFormat.JSON:
        console.print_json(json.dumps(plan.to_dict()))
    elif output_format is OutputFormat.MARKDOWN:
        console.out(plan.changelog(config.changelog), end="", highlight=False)
    else:
        _print_summary(plan, config, console)


def _print_summary(plan: ReleasePlan, config: ReleasePlannerConfig, console: Console) -> None:
    if not plan.has_releasable_change:
        console.print(
            f"[yellow]No releasable changes since {plan.previous_version}.[/]"
            f" [dim]({len(plan.records)} conventional, {plan.skipped} skipped)[/]"
        )
        return

    table = Table(title="Release Plan", show_header=False)
    table.add_column("Field", style="dim")
    table.add_column("Value")
    table.add_row("Previous version", f"[cyan]{plan.previous_version}[/]")
    table.add_row("Next version", f"[green]{plan.next_version}[/]")
    table.add_row("Bump", str(plan.bump))
    table.add_row("Commits", str(len(plan.records)))
    table.add_row("Skipped", str(plan.skipped))
    table.add_row("Breaking changes", str(len(plan.breaking_changes)))
    console.print(table)

    changelog = plan.changelog(config.changelog)
    if changelog:
        console.print(Panel(escape(changelog.rstrip()), title="Changelog", border_style="green"))
