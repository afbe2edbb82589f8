"""Command line interface for release-planner."""

from __future__ import annotations

from release_planner.cli.app import app, main

__all__ = ["app", "main"]
