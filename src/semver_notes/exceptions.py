"""Exception hierarchy for semver-notes.

Every error raised on purpose by the package derives from
:class:`SemverNotesError`, so callers can catch a single type.
"""

from __future__ import annotations


class SemverNotesError(Exception):
    """Base class for all semver-notes errors."""


# =============================================================================
# Versions
# =============================================================================


class VersionError(SemverNotesError):
    """A version could not be determined."""


class TagVersionError(VersionError):
    """The current release tag does not contain a version."""

    def __init__(self, tag: str, pattern: str) -> None:
        self.tag = tag
        self.pattern = pattern
        super().__init__(
            f"Tag {tag!r} does not match the version pattern {pattern!r}. "
            "Cannot determine the current version."
        )


# =============================================================================
# Configuration
# =============================================================================


class ConfigError(SemverNotesError):
    """Configuration could not be loaded."""


class ConfigNotFoundError(ConfigError):
    """No pyproject.toml was found."""


class ConfigValidationError(ConfigError):
    """Configuration values are invalid."""


# =============================================================================
# Git
# =============================================================================


class GitError(SemverNotesError):
    """A git command failed."""

    def __init__(self, message: str, stderr: str | None = None) -> None:
        self.stderr = stderr
        if stderr:
            message = f"{message}: {stderr.strip()}"
        super().__init__(message)
