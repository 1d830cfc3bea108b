"""Release notes rendering.

Commits are grouped into one section per commit type, in the order the
caller configures, followed by a section listing breaking changes. The
same notes can be rendered as Markdown, Slack mrkdwn or plain text.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import StrEnum
from typing import TYPE_CHECKING

from semver_notes.core.commits import NO_TYPE, filter_ignored_scopes
from semver_notes.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Iterable

    from semver_notes.config.models import ChangelogConfig
    from semver_notes.core.commits import ParsedCommit

logger = get_logger(__name__)

BREAKING_CHANGES_HEADING = "BREAKING CHANGES"

DEFAULT_ORDER = [
    "feat",
    "fix",
    "refactor",
    "perf",
    "chore",
    "test",
    "docs",
    "build",
    "style",
    NO_TYPE,
]

DEFAULT_SECTIONS = {
    "feat": "Features",
    "fix": "Bug fixes",
    "refactor": "Code refactoring",
    "perf": "Performance improvement",
    "chore": "Building system",
    "test": "Testing",
    "docs": "Documentation",
    "build": "Build",
    "style": "Code style",
    NO_TYPE: "Other work",
}


class ChangelogFormat(StrEnum):
    """Output format of the rendered changelog."""

    MARKDOWN = "markdown"
    SLACK = "slack"
    PLAIN = "plain"

    @classmethod
    def _missing_(cls, value: object) -> ChangelogFormat:
        if isinstance(value, str):
            for member in cls:
                if member.value == value.lower():
                    return member
        # Anything unknown renders without styling.
        return cls.PLAIN

    @property
    def style(self) -> TextStyle:
        return _STYLES[self]


@dataclass(frozen=True)
class TextStyle:
    """Format strings applied to each element of the notes."""

    title: str
    heading: str
    bold: str
    link: str

    def commit_link(self, commit: ParsedCommit, commit_url: str | None) -> str:
        url = f"{commit_url or ''}/{commit.sha or ''}"
        return self.link.format(url=url, short_sha=commit.short_sha or "")


_STYLES = {
    ChangelogFormat.MARKDOWN: TextStyle(
        title="## [{}]",
        heading="### {}",
        bold="**{}**",
        link="[{short_sha}]({url})",
    ),
    ChangelogFormat.SLACK: TextStyle(
        title="*{}*",
        heading="*{}*",
        bold="*{}*",
        link="<{url}|{short_sha}>",
    ),
    ChangelogFormat.PLAIN: TextStyle(
        title="{}",
        heading="{}:",
        bold="{}",
        link="{url}",
    ),
}


def _entry_suffix(commit: ParsedCommit, style: TextStyle, config: ChangelogConfig) -> str:
    suffix = ""
    if config.display_links:
        suffix += f" ({style.commit_link(commit, config.commit_url)})"
    if config.display_author and commit.author_name:
        suffix += f" - {commit.author_name}"
    return suffix


def render_changelog(
    commits: Iterable[ParsedCommit],
    version: str,
    config: ChangelogConfig,
    *,
    ignored_scopes: Iterable[str] = (),
    release_date: date | None = None,
) -> str:
    """Render release notes for ``version``.

    Args:
        commits: Parsed commits included in the release
        version: Version the notes are written for
        config: Format, section order and titles, display toggles
        ignored_scopes: Scopes left out of the notes
        release_date: Date printed in the title, defaults to today

    Returns:
        The notes, without trailing whitespace. Empty when there is nothing
        to show.
    """
    commits = filter_ignored_scopes(commits, ignored_scopes)
    style = config.format.style
    lines: list[str] = []

    if config.display_title:
        title = style.title.format(version)
        if config.title:
            title += f" - {config.title}"
        title += f" - ({(release_date or date.today()).isoformat()})"
        lines.extend([title, ""])

    for commit_type in config.order:
        of_type = [pc for pc in commits if pc.commit_type == commit_type]
        if not of_type:
            continue

        lines.extend([style.heading.format(config.section_title(commit_type)), ""])
        for pc in of_type:
            if pc.is_merge:
                continue
            scope = f"{style.bold.format(f'{pc.scope}:')} " if pc.scope else ""
            lines.append(f"- {scope}{pc.description}{_entry_suffix(pc, style, config)}")
        lines.append("")

    breaking = [pc for pc in commits if pc.is_breaking]
    if breaking:
        lines.extend([style.heading.format(BREAKING_CHANGES_HEADING), ""])
        for pc in breaking:
            lines.append(f"- {pc.breaking_text}{_entry_suffix(pc, style, config)}")
        lines.append("")

    logger.debug(
        "rendered changelog",
        version=version,
        format=str(config.format),
        commits=len(commits),
        breaking=len(breaking),
    )
    return "\n".join(lines).rstrip()
