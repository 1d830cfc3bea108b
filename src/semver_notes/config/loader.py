"""Configuration loading from pyproject.toml.

Settings live in the ``[tool.semver-notes]`` table::

    [tool.semver-notes.commits]
    ignored_scopes = ["deps"]

    [tool.semver-notes.changelog]
    format = "slack"
    commit_url = "https://github.com/owner/repo/commit"
"""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from semver_notes.config.models import SemverNotesConfig
from semver_notes.exceptions import ConfigNotFoundError, ConfigValidationError
from semver_notes.logging import get_logger

logger = get_logger(__name__)

TOOL_NAME = "semver-notes"


def find_pyproject_toml(start: Path | None = None) -> Path:
    """Find pyproject.toml in ``start`` or one of its parents.

    Args:
        start: Directory to start from, defaults to the working directory

    Returns:
        Path to the nearest pyproject.toml

    Raises:
        ConfigNotFoundError: If no pyproject.toml exists up to the root
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
        ConfigValidationError: If the file is not valid TOML
    """
    if not path.is_file():
        raise ConfigNotFoundError(f"Configuration file not found: {path}")

    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigValidationError(f"Invalid TOML in {path}: {e}") from e


def extract_tool_config(pyproject: dict[str, Any]) -> dict[str, Any]:
    """Return the ``[tool.semver-notes]`` table, or an empty dict."""
    return pyproject.get("tool", {}).get(TOOL_NAME, {})


def load_config(path: Path | None = None) -> SemverNotesConfig:
    """Load configuration for the project at ``path``.

    A pyproject.toml without a ``[tool.semver-notes]`` table yields the
    default configuration.

    Args:
        path: Project directory or pyproject.toml path

    Returns:
        Validated configuration

    Raises:
        ConfigNotFoundError: If no pyproject.toml is found
        ConfigValidationError: If the configuration is invalid
    """
    if path is not None and path.is_file():
        pyproject_path = path
    else:
        pyproject_path = find_pyproject_toml(path)

    raw = extract_tool_config(load_pyproject_toml(pyproject_path))

    try:
        config = SemverNotesConfig.model_validate(raw)
    except ValidationError as e:
        raise ConfigValidationError(f"Invalid [tool.{TOOL_NAME}] configuration:\n{e}") from e

    logger.debug("loaded configuration", path=str(pyproject_path), configured=bool(raw))
    return config
