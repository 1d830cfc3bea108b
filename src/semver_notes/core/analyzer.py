"""Release analysis.

Combines commit parsing and version calculation into a single result that
both the release decision and the changelog are derived from.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from semver_notes.core.commits import parse_commits, split_commit_log
from semver_notes.core.version import (
    DEFAULT_TAG_VERSION_PATTERN,
    next_version,
    semver_gt,
    version_from_tags,
)
from semver_notes.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from semver_notes.config.models import CommitsConfig
    from semver_notes.core.commits import ParsedCommit

logger = get_logger(__name__)


@dataclass(frozen=True)
class ReleaseCalculationResult:
    """Outcome of analysing the commits since the last release."""

    commits: tuple[ParsedCommit, ...]
    current_version: str
    next_version: str

    @property
    def is_releasable(self) -> bool:
        """Whether the next version is higher than the current one."""
        return semver_gt(self.next_version, self.current_version)

    def to_dict(self) -> dict[str, Any]:
        return {
            "current_version": self.current_version,
            "next_version": self.next_version,
            "is_releasable": self.is_releasable,
            "commits": len(self.commits),
        }


def analyze_release(
    tags: Sequence[str],
    commit_lines: Iterable[str],
    config: CommitsConfig | None = None,
    *,
    tag_version_pattern: str = DEFAULT_TAG_VERSION_PATTERN,
) -> ReleaseCalculationResult:
    """Analyse commits to decide the next version.

    Args:
        tags: Release tags, most recent first; the first one holds the
            current version
        commit_lines: Delimited commit records since that tag
        config: Commit configuration; defaults are used when omitted
        tag_version_pattern: Regex locating the version in a tag name

    Returns:
        The calculation result

    Raises:
        TagVersionError: If the current tag does not contain a version
    """
    current = version_from_tags(tags, tag_version_pattern)
    commits = tuple(parse_commits(commit_lines, config))
    ignored_scopes = config.ignored_scopes if config is not None else ()

    result = ReleaseCalculationResult(
        commits=commits,
        current_version=current,
        next_version=next_version(current, commits, ignored_scopes),
    )

    if result.is_releasable:
        logger.info(
            "next version is higher than last version, this version should be released",
            current_version=result.current_version,
            next_version=result.next_version,
        )
    else:
        logger.info(
            "no release needed",
            current_version=result.current_version,
            commits=len(commits),
        )
    return result


def analyze_log(
    tags: Sequence[str],
    log_text: str,
    config: CommitsConfig | None = None,
    *,
    tag_version_pattern: str = DEFAULT_TAG_VERSION_PATTERN,
) -> ReleaseCalculationResult:
    """Analyse a raw ``|>``-separated commit stream. See :func:`analyze_release`."""
    return analyze_release(
        tags,
        split_commit_log(log_text),
        config,
        tag_version_pattern=tag_version_pattern,
    )
