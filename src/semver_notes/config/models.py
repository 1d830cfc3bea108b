"""Configuration models.

All models are frozen: analysis code receives them read-only. Values come
from the ``[tool.semver-notes]`` table of ``pyproject.toml``; every field
has a default so an empty table is valid.
"""

from __future__ import annotations

import re
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from semver_notes.core.changelog import DEFAULT_ORDER, DEFAULT_SECTIONS, ChangelogFormat
from semver_notes.core.commits import (
    BREAKING_CHANGE_PATTERN,
    DEFAULT_COMMIT_PATTERN,
    DEFAULT_RELEASE_LEVELS,
)
from semver_notes.core.version import DEFAULT_TAG_VERSION_PATTERN, BumpType
from semver_notes.exceptions import ConfigValidationError

COMMIT_PATTERN_GROUPS = 4


def _check_regex(value: str, *, groups: int = 0) -> str:
    try:
        compiled = re.compile(value)
    except re.error as e:
        raise ValueError(f"invalid regular expression {value!r}: {e}") from e
    if compiled.groups < groups:
        raise ValueError(f"pattern {value!r} must have at least {groups} capture groups")
    return value


class _FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class CommitsConfig(_FrozenModel):
    """How commits are classified and which ones count towards a release."""

    pattern: str = DEFAULT_COMMIT_PATTERN
    breaking_pattern: str = BREAKING_CHANGE_PATTERN
    release_levels: dict[str, BumpType] = Field(
        default_factory=lambda: dict(DEFAULT_RELEASE_LEVELS)
    )
    ignored_scopes: list[str] = Field(default_factory=list)

    @field_validator("pattern")
    @classmethod
    def _check_pattern(cls, value: str) -> str:
        return _check_regex(value, groups=COMMIT_PATTERN_GROUPS)

    @field_validator("breaking_pattern")
    @classmethod
    def _check_breaking_pattern(cls, value: str) -> str:
        return _check_regex(value, groups=1)

    @property
    def compiled_pattern(self) -> re.Pattern[str]:
        return re.compile(self.pattern)

    @property
    def compiled_breaking_pattern(self) -> re.Pattern[str]:
        return re.compile(self.breaking_pattern)


class VersionConfig(_FrozenModel):
    """How the current version is located in git tags."""

    tag_match: str = "v*"
    tag_version_pattern: str = DEFAULT_TAG_VERSION_PATTERN

    @field_validator("tag_version_pattern")
    @classmethod
    def _check_tag_version_pattern(cls, value: str) -> str:
        return _check_regex(value)


class ChangelogConfig(_FrozenModel):
    """How release notes are rendered."""

    format: ChangelogFormat = ChangelogFormat.MARKDOWN
    order: list[str] = Field(default_factory=lambda: list(DEFAULT_ORDER))
    sections: dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_SECTIONS))
    title: str | None = None
    commit_url: str | None = None
    display_title: bool = True
    display_links: bool = True
    display_author: bool = False

    @field_validator("format", mode="before")
    @classmethod
    def _coerce_format(cls, value: Any) -> ChangelogFormat:
        return ChangelogFormat(value)

    def section_title(self, commit_type: str) -> str:
        """Heading used for ``commit_type``; the type itself when unmapped."""
        return self.sections.get(commit_type, commit_type)


class SemverNotesConfig(_FrozenModel):
    """Root configuration for semver-notes."""

    commits: CommitsConfig = Field(default_factory=CommitsConfig)
    version: VersionConfig = Field(default_factory=VersionConfig)
    changelog: ChangelogConfig = Field(default_factory=ChangelogConfig)

    def with_overrides(self, **sections: dict[str, Any]) -> SemverNotesConfig:
        """Return a copy with some fields of the nested configs replaced.

        ``None`` values are skipped so unset CLI options keep the
        configured value.

        Example::

            config.with_overrides(changelog={"format": "slack"})

        Raises:
            ConfigValidationError: If an overridden value is invalid
        """
        data = self.model_dump()
        for section, values in sections.items():
            data[section].update({k: v for k, v in values.items() if v is not None})
        try:
            return SemverNotesConfig.model_validate(data)
        except ValidationError as e:
            raise ConfigValidationError(f"Invalid configuration override:\n{e}") from e
