"""Semantic version arithmetic.

Versions here are plain ``major.minor.patch`` triples. Parsing is lenient:
missing segments count as 0 and each segment uses its leading digits only,
so ``"2"`` is ``2.0.0`` and ``"1.4rc1"`` is ``1.4.0``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

from semver_notes.exceptions import TagVersionError
from semver_notes.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from semver_notes.core.commits import ParsedCommit

logger = get_logger(__name__)

DEFAULT_VERSION = "0.0.0"
DEFAULT_TAG_VERSION_PATTERN = r"\d+\.\d+\.\d+"

_LEADING_DIGITS = re.compile(r"\d+")


class BumpType(StrEnum):
    """Version component a change bumps."""

    NONE = "none"
    PATCH = "patch"
    MINOR = "minor"
    MAJOR = "major"


def _segment(value: str | None) -> int:
    if not value:
        return 0
    match = _LEADING_DIGITS.match(value.strip())
    return int(match.group(0)) if match else 0


@dataclass(frozen=True, order=True)
class Version:
    """A ``major.minor.patch`` version, ordered lexicographically."""

    major: int = 0
    minor: int = 0
    patch: int = 0

    @classmethod
    def parse(cls, value: str) -> Version:
        """Parse a dotted version string.

        Args:
            value: Version string such as ``"1.2.3"``

        Returns:
            Parsed version; absent or unparsable segments are 0
        """
        parts = value.split(".")
        padded = [*parts[:3], *([None] * (3 - len(parts[:3])))]
        return cls(*(_segment(part) for part in padded))

    def bump(self, bump_type: BumpType) -> Version:
        """Return the version after applying ``bump_type``."""
        if bump_type == BumpType.MAJOR:
            return Version(self.major + 1, 0, 0)
        if bump_type == BumpType.MINOR:
            return Version(self.major, self.minor + 1, 0)
        if bump_type == BumpType.PATCH:
            return Version(self.major, self.minor, self.patch + 1)
        return self

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


def parse_version(value: str) -> Version:
    """Parse a version string. Shorthand for :meth:`Version.parse`."""
    return Version.parse(value)


def semver_gt(first: str, second: str) -> bool:
    """Check whether ``first`` is strictly greater than ``second``."""
    return Version.parse(first) > Version.parse(second)


def semver_lt(first: str, second: str) -> bool:
    """Check whether ``first`` is not greater than ``second``.

    Note that equal versions count as "less than" here.
    """
    return not semver_gt(first, second)


def calculate_bump(
    commits: Iterable[ParsedCommit],
    ignored_scopes: Iterable[str] = (),
) -> BumpType:
    """Determine the bump warranted by a set of commits.

    The highest release level wins regardless of how many commits carry
    lower levels. Commits whose scope is in ``ignored_scopes`` are skipped;
    merge and non-conventional commits have no release level and never
    contribute.

    Args:
        commits: Parsed commits
        ignored_scopes: Scopes excluded from the calculation

    Returns:
        The bump type to apply
    """
    ignored = frozenset(ignored_scopes)
    levels = {
        commit.release_level
        for commit in commits
        if commit.release_level is not None
        and not (commit.scope is not None and commit.scope in ignored)
    }

    for bump_type in (BumpType.MAJOR, BumpType.MINOR, BumpType.PATCH):
        if bump_type in levels:
            return bump_type
    return BumpType.NONE


def next_version(
    current: str,
    commits: Iterable[ParsedCommit],
    ignored_scopes: Iterable[str] = (),
) -> str:
    """Calculate the version that follows ``current``.

    Args:
        current: Current version string
        commits: Parsed commits since the current version
        ignored_scopes: Scopes excluded from the calculation

    Returns:
        Next version string; equal to the normalized current version when
        no commit warrants a release
    """
    bump_type = calculate_bump(commits, ignored_scopes)
    result = str(Version.parse(current).bump(bump_type))
    logger.debug("version calculated", current=current, bump=str(bump_type), next=result)
    return result


def version_from_tags(
    tags: Sequence[str],
    pattern: str = DEFAULT_TAG_VERSION_PATTERN,
) -> str:
    """Extract the current version from the most recent tag.

    Args:
        tags: Tag names, most recent first
        pattern: Regex locating the version inside a tag name

    Returns:
        The version found in the first tag, or ``"0.0.0"`` without tags

    Raises:
        TagVersionError: If the first tag does not contain a version
    """
    if not tags:
        return DEFAULT_VERSION

    tag = tags[0]
    match = re.search(pattern, tag)
    if match is None:
        raise TagVersionError(tag, pattern)
    return match.group(0)
