"""Configuration management for semver-notes."""

from __future__ import annotations

from semver_notes.config.loader import load_config
from semver_notes.config.models import (
    ChangelogConfig,
    CommitsConfig,
    SemverNotesConfig,
    VersionConfig,
)

__all__ = [
    "ChangelogConfig",
    "CommitsConfig",
    "SemverNotesConfig",
    "VersionConfig",
    "load_config",
]
