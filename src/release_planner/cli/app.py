"""Command line interface for release-planner."""

from __future__ import annotations

import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler

from release_planner import __version__
from release_planner.cli.commands.lint import run_lint
from release_planner.cli.commands.plan import OutputFormat, run_plan

app = typer.Typer(
    name="release-planner",
    help="Plan the next release from conventional commits.",
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)

console = Console()
err_console = Console(stderr=True)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=0)


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    _configure_logging(verbose)


@app.command()
def plan(
    input_path: Path | None = typer.Option(
        None,
        "--input",
        "-i",
        help="Commit input: JSON list or NUL-separated messages, oldest first. Defaults to stdin.",
    ),
    previous: str | None = typer.Option(
        None,
        "--previous",
        "-p",
        help="Previous release version. Defaults to [project].version in pyproject.toml.",
    ),
    prerelease: str | None = typer.Option(
        None, "--prerelease", help="Pre-release label for the next version (e.g. rc.1)."
    ),
    output_format: OutputFormat = typer.Option(
        OutputFormat.TEXT, "--format", "-f", help="Output format."
    ),
    path: str | None = typer.Option(None, "--path", help="Project directory."),
) -> None:
    """Compute the next version and changelog from commit messages."""
    run_plan(path, input_path, previous, prerelease, output_format, console, err_console)


@app.command()
def lint(
    messages: list[str] | None = typer.Argument(
        None, help="Messages to check. Reads one message from stdin when omitted."
    ),
    max_length: int | None = typer.Option(None, "--max-length", help="Maximum subject length."),
    require_scope: bool = typer.Option(False, "--require-scope", help="Require a scope."),
    path: str | None = typer.Option(None, "--path", help="Project directory."),
) -> None:
    """Check commit messages against the conventional commit format."""
    run_lint(list(messages or []), path, max_length, require_scope, console, err_console)


def main() -> None:
    app()
