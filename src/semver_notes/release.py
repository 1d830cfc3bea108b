"""Release scanning against a git repository.

Glue between :class:`~semver_notes.vcs.git.GitRepository` and the pure
analysis in :mod:`semver_notes.core`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from semver_notes.core.analyzer import analyze_log
from semver_notes.core.changelog import render_changelog
from semver_notes.vcs.git import HEAD

if TYPE_CHECKING:
    from datetime import date

    from semver_notes.config.models import SemverNotesConfig
    from semver_notes.core.analyzer import ReleaseCalculationResult
    from semver_notes.vcs.git import GitRepository


def scan_release(
    repo: GitRepository,
    config: SemverNotesConfig,
    *,
    released: bool = False,
) -> ReleaseCalculationResult:
    """Analyse the commits of the pending or the latest release.

    Unreleased mode looks at the commits since the newest matching tag.
    Released mode looks at the commits between the two newest tags, or at
    the whole history up to the only tag there is. That tag is not compared
    against HEAD, since commits after it belong to no release yet.

    Args:
        repo: Repository to read tags and commits from
        config: Configuration
        released: Scan the latest released version instead of pending
            changes

    Returns:
        The calculation result

    Raises:
        GitError: If reading from git fails
        TagVersionError: If the newest tag does not contain a version
    """
    if released:
        tags = repo.get_release_tags(config.version.tag_match)
        since = tags[1] if len(tags) > 1 else None
        until = tags[0] if tags else HEAD
    else:
        tags = repo.get_latest_tags(config.version.tag_match)
        since = tags[0] if tags else None
        until = HEAD

    log_text = repo.get_commit_log(since, until)
    return analyze_log(
        tags,
        log_text,
        config.commits,
        tag_version_pattern=config.version.tag_version_pattern,
    )


def build_release_notes(
    repo: GitRepository,
    config: SemverNotesConfig,
    *,
    released: bool = False,
    release_date: date | None = None,
) -> str:
    """Render release notes for the pending or the latest release.

    Pending changes are titled with the next version, a released scan
    with the version of its tag.
    """
    result = scan_release(repo, config, released=released)
    version = result.current_version if released else result.next_version
    return render_changelog(
        result.commits,
        version,
        config.changelog,
        ignored_scopes=config.commits.ignored_scopes,
        release_date=release_date,
    )
