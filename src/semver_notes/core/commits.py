"""Conventional commit parsing.

A commit reaches this module as one ``|``-delimited record, the shape
produced by ``git log --pretty='%s|%b|%H|%h|%an|%cI|>'``::

    subject|body|sha|short sha|author name|date

Only the subject is required. Several records concatenated in one stream
are separated by the ``|>`` sentinel, see :func:`parse_commit_log`.

The commit pattern must expose four capture groups, in order: type,
scope (optional), breaking-change marker (optional, ``!``) and
description. The default pattern recognizes::

    type(scope)!: description
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

from semver_notes.core.version import BumpType
from semver_notes.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from semver_notes.config.models import CommitsConfig

logger = get_logger(__name__)

FIELD_DELIMITER = "|"
RECORD_SEPARATOR = "|>"
NO_TYPE = "no_type"
BREAKING_MARKER = "!"

DEFAULT_COMMIT_TYPES = (
    "build",
    "docs",
    "fix",
    "feat",
    "chore",
    "style",
    "refactor",
    "perf",
    "test",
)
DEFAULT_COMMIT_PATTERN = rf"^({'|'.join(DEFAULT_COMMIT_TYPES)})(?:\((.*)\))?(!?): (.*)"
BREAKING_CHANGE_PATTERN = r"BREAKING CHANGES?: (.*)"
DEFAULT_RELEASE_LEVELS: Mapping[str, BumpType] = {
    "fix": BumpType.PATCH,
    "feat": BumpType.MINOR,
}

_FIELD_COUNT = 6


def _optional(value: str | None) -> str | None:
    return value or None


@dataclass(frozen=True)
class ParsedCommit:
    """A commit record classified against the conventional commit format."""

    raw_subject: str
    raw_body: str | None
    sha: str | None
    short_sha: str | None
    author_name: str | None
    date: str | None
    is_conventional: bool
    commit_type: str
    scope: str | None
    description: str
    is_merge: bool
    is_breaking: bool
    has_breaking_marker: bool
    breaking_description: str | None
    release_level: BumpType | None

    @classmethod
    def from_line(
        cls,
        line: str,
        pattern: str | re.Pattern[str] = DEFAULT_COMMIT_PATTERN,
        release_levels: Mapping[str, BumpType | str] = DEFAULT_RELEASE_LEVELS,
        breaking_pattern: str | re.Pattern[str] = BREAKING_CHANGE_PATTERN,
    ) -> ParsedCommit:
        """Parse one delimited commit record.

        Args:
            line: ``subject|body|sha|short sha|author|date``; trailing
                fields may be missing
            pattern: Commit pattern with type, scope, marker and
                description groups
            release_levels: Release level for each commit type; types not
                listed do not trigger a release
            breaking_pattern: Pattern searched in the body to detect a
                breaking change; its first group is the description

        Returns:
            The parsed commit. A subject that does not match ``pattern``
            yields a non-conventional commit of type ``no_type``.
        """
        fields = line.split(FIELD_DELIMITER)
        fields += [None] * (_FIELD_COUNT - len(fields))
        subject = fields[0].strip()
        body, sha, short_sha, author_name, date = (_optional(f) for f in fields[1:_FIELD_COUNT])

        common = {
            "raw_subject": subject,
            "raw_body": body,
            "sha": sha,
            "short_sha": short_sha,
            "author_name": author_name,
            "date": date,
            "is_merge": subject.startswith("Merge"),
        }

        match = re.search(pattern, subject)
        if match is None:
            return cls(
                **common,
                is_conventional=False,
                commit_type=NO_TYPE,
                scope=None,
                description=subject,
                is_breaking=False,
                has_breaking_marker=False,
                breaking_description=None,
                release_level=None,
            )

        commit_type, scope, marker, description = match.group(1, 2, 3, 4)
        has_marker = marker == BREAKING_MARKER

        breaking_description = None
        body_breaking = False
        if body:
            breaking_match = re.search(breaking_pattern, body)
            if breaking_match is not None:
                body_breaking = True
                breaking_description = _optional(breaking_match.group(1))

        is_breaking = body_breaking or has_marker
        if is_breaking:
            release_level = BumpType.MAJOR
        else:
            release_level = BumpType(release_levels.get(commit_type, BumpType.NONE))

        return cls(
            **common,
            is_conventional=True,
            commit_type=commit_type,
            scope=_optional(scope),
            description=description or "",
            is_breaking=is_breaking,
            has_breaking_marker=has_marker,
            breaking_description=breaking_description,
            release_level=release_level,
        )

    @property
    def breaking_text(self) -> str:
        """Text describing the breaking change.

        Falls back to the description when the change was only flagged
        with the ``!`` marker.
        """
        return self.breaking_description or self.description

    def to_line(self) -> str:
        """Rebuild the delimited record this commit was parsed from."""
        fields = [
            self.raw_subject,
            self.raw_body,
            self.sha,
            self.short_sha,
            self.author_name,
            self.date,
        ]
        while len(fields) > 2 and fields[-1] is None:
            fields.pop()
        return FIELD_DELIMITER.join(field or "" for field in fields)


def parse_commit(
    line: str,
    pattern: str | re.Pattern[str] = DEFAULT_COMMIT_PATTERN,
    release_levels: Mapping[str, BumpType | str] = DEFAULT_RELEASE_LEVELS,
    breaking_pattern: str | re.Pattern[str] = BREAKING_CHANGE_PATTERN,
) -> ParsedCommit:
    """Parse one delimited commit record. See :meth:`ParsedCommit.from_line`."""
    return ParsedCommit.from_line(line, pattern, release_levels, breaking_pattern)


def split_commit_log(text: str) -> list[str]:
    """Split a ``|>``-separated commit stream into records.

    Blank records, such as the one after the final sentinel, are dropped.
    """
    return [record for record in text.strip().split(RECORD_SEPARATOR) if record.strip()]


def parse_commits(
    lines: Iterable[str],
    config: CommitsConfig | None = None,
) -> list[ParsedCommit]:
    """Parse commit records with the patterns from ``config``.

    Args:
        lines: Delimited commit records
        config: Commit configuration; defaults are used when omitted

    Returns:
        Parsed commits in input order
    """
    if config is None:
        parsed = [ParsedCommit.from_line(line) for line in lines]
    else:
        parsed = [
            ParsedCommit.from_line(
                line,
                config.compiled_pattern,
                config.release_levels,
                config.compiled_breaking_pattern,
            )
            for line in lines
        ]

    logger.debug(
        "parsed commits",
        total=len(parsed),
        conventional=sum(pc.is_conventional for pc in parsed),
        breaking=sum(pc.is_breaking for pc in parsed),
    )
    return parsed


def parse_commit_log(
    text: str,
    config: CommitsConfig | None = None,
) -> list[ParsedCommit]:
    """Parse a ``|>``-separated commit stream."""
    return parse_commits(split_commit_log(text), config)


def group_commits_by_type(commits: Iterable[ParsedCommit]) -> dict[str, list[ParsedCommit]]:
    """Group commits by type, keeping input order within each group."""
    grouped: dict[str, list[ParsedCommit]] = {}
    for pc in commits:
        grouped.setdefault(pc.commit_type, []).append(pc)
    return grouped


def get_breaking_changes(commits: Iterable[ParsedCommit]) -> list[ParsedCommit]:
    """Return only the breaking change commits."""
    return [pc for pc in commits if pc.is_breaking]


def filter_ignored_scopes(
    commits: Iterable[ParsedCommit],
    ignored_scopes: Iterable[str],
) -> list[ParsedCommit]:
    """Drop commits whose scope is listed in ``ignored_scopes``."""
    ignored = frozenset(ignored_scopes)
    return [pc for pc in commits if pc.scope is None or pc.scope not in ignored]
