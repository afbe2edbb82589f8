"""Load release-planner configuration from pyproject.toml."""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from release_planner.config.models import ReleasePlannerConfig
from release_planner.exceptions import ConfigError, ConfigNotFoundError, ConfigValidationError

logger = logging.getLogger(__name__)

TOOL_KEY = "release-planner"


def find_pyproject_toml(start: Path | None = None) -> Path:
    """Find pyproject.toml in ``start`` or any parent directory.

    Args:
        start: Directory to start from (defaults to the working directory)

    Returns:
        Path to the nearest pyproject.toml

    Raises:
        ConfigNotFoundError: If no pyproject.toml is found
    """
    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / "pyproject.toml"
        if candidate.is_file():
            return candidate
    raise ConfigNotFoundError(f"No pyproject.toml found in {current} or its parents")


def load_pyproject_toml(path: Path) -> dict[str, Any]:
    """Read and parse a pyproject.toml file.

    Raises:
        ConfigNotFoundError: If the file does not exist
        ConfigError: If the file is not valid TOML
    """
    if not path.is_file():
        raise ConfigNotFoundError(f"Configuration file not found: {path}")
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}") from e


def extract_release_planner_config(pyproject: dict[str, Any]) -> dict[str, Any]:
    """Return the ``[tool.release-planner]`` table, or an empty dict."""
    return pyproject.get("tool", {}).get(TOOL_KEY, {})


def parse_config(data: dict[str, Any], source: str = "<config>") -> ReleasePlannerConfig:
    """Validate raw configuration data.

    Raises:
        ConfigValidationError: If the data does not match the schema
    """
    try:
        return ReleasePlannerConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigValidationError(f"Invalid configuration in {source}:\n{e}") from e


def load_config(path: Path | None = None) -> ReleasePlannerConfig:
    """Load configuration for the project at ``path``.

    Falls back to the defaults when there is no ``[tool.release-planner]``
    table.

    Args:
        path: pyproject.toml file or a directory to search from

    Raises:
        ConfigNotFoundError: If no pyproject.toml is found
        ConfigValidationError: If the configuration is invalid
    """
    pyproject_path = path if path is not None and path.is_file() else find_pyproject_toml(path)
    data = extract_release_planner_config(load_pyproject_toml(pyproject_path))
    if not data:
        logger.debug("No [tool.%s] table in %s, using defaults", TOOL_KEY, pyproject_path)
    return parse_config(data, source=str(pyproject_path))


def get_project_version(path: Path | None = None) -> str:
    """Read ``[project].version`` (or ``[tool.poetry].version``).

    Raises:
        ConfigNotFoundError: If no pyproject.toml is found
        ConfigValidationError: If no version is declared
    """
    pyproject_path = path if path is not None and path.is_file() else find_pyproject_toml(path)
    data = load_pyproject_toml(pyproject_path)

    version = data.get("project", {}).get("version")
    if version is None:
        version = data.get("tool", {}).get("poetry", {}).get("version")
    if not isinstance(version, str):
        raise ConfigValidationError(
            f"Could not find version in {pyproject_path}. "
            "Expected [project].version or [tool.poetry].version."
        )
    return version
