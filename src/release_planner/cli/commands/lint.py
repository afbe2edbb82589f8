"""Implementation of the 'lint' command.

Checks commit messages (or PR titles) against the conventional commit
format, using the commit types configured for the project.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import TYPE_CHECKING

from rich.markup import escape

from release_planner.config.loader import load_config
from release_planner.config.models import ReleasePlannerConfig
from release_planner.core.commits import validate_commit_messages
from release_planner.exceptions import ConfigNotFoundError, ReleasePlannerError

if TYPE_CHECKING:
    from rich.console import Console


def run_lint(
    messages: list[str],
    path: str | None,
    max_length: int | None,
    require_scope: bool,
    console: Console,
    err_console: Console,
) -> None:
    """Run the lint command.

    Exits with status 1 when any message is invalid. With no messages the
    whole of stdin is checked as a single message, which suits a
    ``commit-msg`` git hook.
    """
    project_path = Path(path) if path else Path.cwd()

    try:
        config = load_config(project_path)
    except ConfigNotFoundError:
        config = ReleasePlannerConfig()
    except ReleasePlannerError as e:
        err_console.print(f"[red]Error loading config:[/] {e}")
        raise SystemExit(1) from e

    if not messages:
        messages = [sys.stdin.read()]

    results = validate_commit_messages(
        messages,
        config=config.commits,
        max_length=max_length,
        require_scope=require_scope,
    )

    failed = 0
    for message, result in zip(messages, results, strict=True):
        subject = escape(message.strip().split("\n", 1)[0])
        if result.is_valid:
            console.print(f"  [green]✓[/] {subject}")
        else:
            failed += 1
            err_console.print(f"  [red]✗[/] {subject}\n    [red]{escape(result.error or '')}[/]")

    if failed:
        err_console.print(f"[red]{failed} of {len(messages)} message(s) failed validation.[/]")
        raise SystemExit(1)
