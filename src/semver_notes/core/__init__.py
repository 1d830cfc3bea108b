"""Core business logic for semver-notes.

This module contains the fundamental building blocks:
- Conventional commit parsing
- Version calculation
- Changelog rendering
- Release analysis
"""

from __future__ import annotations

from semver_notes.core.analyzer import ReleaseCalculationResult, analyze_log, analyze_release
from semver_notes.core.changelog import ChangelogFormat, render_changelog
from semver_notes.core.commits import (
    NO_TYPE,
    ParsedCommit,
    get_breaking_changes,
    group_commits_by_type,
    parse_commit,
    parse_commit_log,
    parse_commits,
)
from semver_notes.core.version import (
    BumpType,
    Version,
    calculate_bump,
    next_version,
    parse_version,
    semver_gt,
    semver_lt,
    version_from_tags,
)

__all__ = [
    "NO_TYPE",
    # Version
    "BumpType",
    # Changelog
    "ChangelogFormat",
    # Commits
    "ParsedCommit",
    # Analysis
    "ReleaseCalculationResult",
    "Version",
    "analyze_log",
    "analyze_release",
    "calculate_bump",
    "get_breaking_changes",
    "group_commits_by_type",
    "next_version",
    "parse_commit",
    "parse_commit_log",
    "parse_commits",
    "parse_version",
    "render_changelog",
    "semver_gt",
    "semver_lt",
    "version_from_tags",
]
