"""Reading commit input for the CLI.

Two formats are accepted:

- JSON: a list of message strings, or of objects with a ``message`` key
  and optional ``sha`` and ``timestamp`` (ISO 8601) keys.
- Text: messages separated by NUL bytes, as produced by
  ``git log --format=%B%x00``. Text without any NUL byte is read as one
  subject line per line (``git log --format=%s``).

Input is JSON only when it decodes as a JSON list; anything else is text.
"""

from __future__ import annotations

import json
import sys
from datetime import datetime
from pathlib import Path
from typing import Any

from release_planner.core.commits import Commit
from release_planner.exceptions import InputError


def read_source(source: Path | None) -> str:
    """Read raw input text from a file, or stdin for None / ``-``."""
    if source is None or str(source) == "-":
        return sys.stdin.read()
    try:
        return source.read_text(encoding="utf-8")
    except OSError as e:
        raise InputError(f"Cannot read commit input {source}: {e}") from e


def _commit_from_json(item: Any, index: int) -> Commit:
    if isinstance(item, str):
        return Commit(sha="", message=item)
    if not isinstance(item, dict) or not isinstance(item.get("message"), str):
        raise InputError(f"Entry {index}: expected a string or an object with a 'message' string")

    timestamp = item.get("timestamp")
    if timestamp is not None:
        try:
            timestamp = datetime.fromisoformat(str(timestamp))
        except ValueError as e:
            raise InputError(f"Entry {index}: invalid timestamp {timestamp!r}") from e

    return Commit(sha=str(item.get("sha") or ""), message=item["message"], timestamp=timestamp)


def parse_commit_input(text: str) -> list[Commit]:
    """Decode commit input text into Commits (oldest first).

    Raises:
        InputError: If JSON input has an unexpected shape
    """
    stripped = text.strip()
    if not stripped:
        return []

    # Text input may also open with "[", e.g. "[WIP] tidy".
    if stripped.startswith("[") and "\x00" not in text:
        try:
            data = json.loads(stripped)
        except json.JSONDecodeError:
            data = None
        if isinstance(data, list):
            return [_commit_from_json(item, i) for i, item in enumerate(data)]

    if "\x00" in text:
        chunks = text.split("\x00")
    else:
        chunks = text.splitlines()
    return [Commit(sha="", message=chunk.strip()) for chunk in chunks if chunk.strip()]


def load_commits(source: Path | None) -> list[Commit]:
    return parse_commit_input(read_source(source))
