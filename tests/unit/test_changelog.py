"""Unit tests for changelog rendering."""

from __future__ import annotations

from datetime import date
from unittest.mock import patch

import pytest

from semver_notes.config.models import ChangelogConfig, CommitsConfig
from semver_notes.core.changelog import ChangelogFormat, render_changelog
from semver_notes.core.commits import NO_TYPE, parse_commits

SECTION_COMMITS = [
    "docs: sub|body|long_hash|short_hash|Jiri Otahal|time",
    "fix: sub||long_hash|short_hash|Jiri Otahal|time",
]
BREAKING_COMMIT = ["fix: sub|BREAKING CHANGE: Test|long_hash|short_hash|Jiri Otahal|time"]
MARKER_COMMIT = ["fix!: sub|Test|long_hash|short_hash|Jiri Otahal|time"]
MERGE_COMMITS = [
    "Merge ...||long_hash|short_hash|Jiri Otahal|time",
    "Custom Merge...||long_hash|short_hash|Jiri Otahal|time",
    "fix(test): sub||long_hash|short_hash|Jiri Otahal|time",
]


def render(lines: list[str], release_date: date, version: str = "1.0.2", **options) -> str:
    return render_changelog(
        parse_commits(lines),
        version,
        ChangelogConfig(**options),
        release_date=release_date,
    )


class TestSections:
    """Sections are emitted in the configured order."""

    def test_markdown(self, release_date: date):
        """Generate sections in markdown format."""
        result = render(
            ["docs: sub|body|H|h|Author|t", "fix: sub||H|h|Author|t"],
            release_date,
            order=["fix", "docs"],
            sections={"fix": "Bug fixes", "docs": "Documentation"},
        )

        assert result == (
            "## [1.0.2] - (2019-05-25)\n\n"
            "### Bug fixes\n\n- sub ([h](/H))\n\n"
            "### Documentation\n\n- sub ([h](/H))"
        )

    def test_plain(self, release_date: date):
        """Create sections in plain format."""
        result = render(SECTION_COMMITS, release_date, format="plain")

        assert result == (
            "1.0.2 - (2019-05-25)\n\n"
            "Bug fixes:\n\n- sub (/long_hash)\n\n"
            "Documentation:\n\n- sub (/long_hash)"
        )

    def test_slack(self, release_date: date):
        """Create sections in Slack format."""
        result = render(SECTION_COMMITS, release_date, format="slack")

        assert result == (
            "*1.0.2* - (2019-05-25)\n\n"
            "*Bug fixes*\n\n- sub (</long_hash|short_hash>)\n\n"
            "*Documentation*\n\n- sub (</long_hash|short_hash>)"
        )

    def test_unknown_format_is_plain(self, release_date: date):
        """Unknown formats render like plain text."""
        assert render(SECTION_COMMITS, release_date, format="html") == render(
            SECTION_COMMITS, release_date, format="plain"
        )

    def test_order_controls_inclusion(self, release_date: date):
        """Types missing from the order are not rendered."""
        result = render(SECTION_COMMITS, release_date, order=["docs"])

        assert "Bug fixes" not in result
        assert "### Documentation" in result

    def test_missing_section_title_uses_type(self, release_date: date):
        """A type without a title uses the type itself as heading."""
        result = render(["perf: faster|"], release_date, order=["perf"], sections={})

        assert "### perf" in result

    def test_empty_when_nothing_to_show(self, release_date: date):
        """No title and no matching commits gives empty notes."""
        assert render(["docs: x|"], release_date, order=["feat"], display_title=False) == ""

    def test_title_only(self, release_date: date):
        """The title is emitted even without sections."""
        assert render([], release_date) == "## [1.0.2] - (2019-05-25)"

    def test_release_title(self, release_date: date):
        """A release title is added between version and date."""
        result = render(SECTION_COMMITS, release_date, title="Spring release")

        assert result.startswith("## [1.0.2] - Spring release - (2019-05-25)\n\n")

    def test_defaults_to_today(self):
        """The title date defaults to today."""
        with patch("semver_notes.core.changelog.date") as mock_date:
            mock_date.today.return_value = date(2024, 2, 29)
            result = render_changelog(parse_commits(SECTION_COMMITS), "1.0.0", ChangelogConfig())

        assert result.startswith("## [1.0.0] - (2024-02-29)")

    def test_commit_url(self, release_date: date):
        """Links are prefixed with the commit URL."""
        result = render(["fix: sub||abc123|abc|A|t"], release_date, commit_url="https://x.io/c")

        assert "- sub ([abc](https://x.io/c/abc123))" in result


class TestDisplayToggles:
    """Title, links and authors can be switched on and off."""

    @pytest.mark.parametrize(
        ("fmt", "expected"),
        [
            (
                "markdown",
                "### Bug fixes\n\n- sub ([short_hash](/long_hash))\n\n"
                "### BREAKING CHANGES\n\n- Test ([short_hash](/long_hash))",
            ),
            (
                "plain",
                "Bug fixes:\n\n- sub (/long_hash)\n\nBREAKING CHANGES:\n\n- Test (/long_hash)",
            ),
            (
                "slack",
                "*Bug fixes*\n\n- sub (</long_hash|short_hash>)\n\n"
                "*BREAKING CHANGES*\n\n- Test (</long_hash|short_hash>)",
            ),
        ],
    )
    def test_hide_title(self, release_date: date, fmt: str, expected: str):
        """Hide the title if display_title is false."""
        assert render(BREAKING_COMMIT, release_date, format=fmt, display_title=False) == expected

    def test_show_author(self, release_date: date):
        """Show the author if display_author is true."""
        result = render(BREAKING_COMMIT, release_date, display_author=True)

        assert result == (
            "## [1.0.2] - (2019-05-25)\n\n"
            "### Bug fixes\n\n- sub ([short_hash](/long_hash)) - Jiri Otahal\n\n"
            "### BREAKING CHANGES\n\n- Test ([short_hash](/long_hash)) - Jiri Otahal"
        )

    def test_author_missing(self, release_date: date):
        """Commits without an author get no author suffix."""
        result = render(["fix: sub|"], release_date, display_author=True, display_links=False)

        assert result.endswith("- sub")

    def test_hide_links_markdown(self, release_date: date):
        """Hide links if display_links is false."""
        result = render(SECTION_COMMITS, release_date, display_links=False)

        assert result == (
            "## [1.0.2] - (2019-05-25)\n\n### Bug fixes\n\n- sub\n\n### Documentation\n\n- sub"
        )

    def test_hide_links_slack(self, release_date: date):
        """Hide links in Slack format."""
        result = render(SECTION_COMMITS, release_date, format="slack", display_links=False)

        assert result == "*1.0.2* - (2019-05-25)\n\n*Bug fixes*\n\n- sub\n\n*Documentation*\n\n- sub"


class TestBreakingChanges:
    """The breaking changes section."""

    def test_markdown(self, release_date: date):
        """Display a breaking change in markdown format."""
        assert render(BREAKING_COMMIT, release_date) == (
            "## [1.0.2] - (2019-05-25)\n\n"
            "### Bug fixes\n\n- sub ([short_hash](/long_hash))\n\n"
            "### BREAKING CHANGES\n\n- Test ([short_hash](/long_hash))"
        )

    def test_slack(self, release_date: date):
        """Display a breaking change in slack format."""
        assert render(BREAKING_COMMIT, release_date, format="slack") == (
            "*1.0.2* - (2019-05-25)\n\n"
            "*Bug fixes*\n\n- sub (</long_hash|short_hash>)\n\n"
            "*BREAKING CHANGES*\n\n- Test (</long_hash|short_hash>)"
        )

    def test_exclamation_uses_description(self, release_date: date):
        """Breaking changes flagged with ! are listed with their description."""
        assert render(MARKER_COMMIT, release_date) == (
            "## [1.0.2] - (2019-05-25)\n\n"
            "### Bug fixes\n\n- sub ([short_hash](/long_hash))\n\n"
            "### BREAKING CHANGES\n\n- sub ([short_hash](/long_hash))"
        )

    def test_breaking_merge_commit_is_listed(self, release_date: date):
        """Merge commits are skipped in sections but not in breaking changes."""
        pattern = r"^(Merge|fix)(?:\((.*)\))?(!?): (.*)"
        commits = parse_commits(
            ["Merge!: pull request #1||H|h|A|t"], CommitsConfig(pattern=pattern)
        )
        result = render_changelog(
            commits,
            "2.0.0",
            ChangelogConfig(order=["Merge"], display_title=False, display_links=False),
        )

        assert result == "### Merge\n\n\n### BREAKING CHANGES\n\n- pull request #1"


class TestMergeAndScopes:
    """Merge commits, scopes and the catch-all section."""

    def test_skip_merge_markdown(self, release_date: date):
        """Merge commits are left out of their section."""
        assert render(MERGE_COMMITS, release_date) == (
            "## [1.0.2] - (2019-05-25)\n\n"
            "### Bug fixes\n\n- **test:** sub ([short_hash](/long_hash))\n\n"
            "### Other work\n\n- Custom Merge... ([short_hash](/long_hash))"
        )

    def test_skip_merge_slack(self, release_date: date):
        """Merge commits are left out in slack format too."""
        assert render(MERGE_COMMITS, release_date, format="slack") == (
            "*1.0.2* - (2019-05-25)\n\n"
            "*Bug fixes*\n\n- *test:* sub (</long_hash|short_hash>)\n\n"
            "*Other work*\n\n- Custom Merge... (</long_hash|short_hash>)"
        )

    def test_scope_plain(self, release_date: date):
        """Scopes are not styled in plain format."""
        result = render(["fix(test): sub|"], release_date, format="plain", display_links=False)

        assert result.endswith("- test: sub")

    def test_ignored_scopes(self, release_date: date):
        """Commits with ignored scopes are left out of the notes."""
        commits = parse_commits(
            [
                "Merge ...||long_hash|short_hash|Jiri Otahal|time",
                "Custom Merge...||long_hash|short_hash|Jiri Otahal|time",
                "fix(bump): sub||long_hash|short_hash|Jiri Otahal|time",
            ]
        )
        result = render_changelog(
            commits,
            "1.0.2",
            ChangelogConfig(),
            ignored_scopes=["bump"],
            release_date=release_date,
        )

        assert result == (
            "## [1.0.2] - (2019-05-25)\n\n"
            "### Other work\n\n- Custom Merge... ([short_hash](/long_hash))"
        )

    def test_custom_commit_format(self, release_date: date):
        """Sections follow a custom commit pattern and the no_type bucket."""
        commits = parse_commits(
            [
                "prefix-foo: sub|body|long_hash|short_hash|Jiri Otahal|time",
                "prefix-bar: sub|body|long_hash|short_hash|Jiri Otahal|time",
                "prefix-baz.android: sub|body|long_hash|short_hash|Jiri Otahal|time",
                "prefix-qux: sub|body|long_hash|short_hash|Jiri Otahal|time",
            ],
            CommitsConfig(pattern=r"^prefix-(foo|bar|baz)(?:\.(.*))?(): (.*)"),
        )
        config = ChangelogConfig(
            order=["baz", "foo", "bar", NO_TYPE],
            sections={"foo": "Foo", "bar": "Bar", "baz": "Bazz", NO_TYPE: "Other"},
        )

        assert render_changelog(commits, "1.0.2", config, release_date=release_date) == (
            "## [1.0.2] - (2019-05-25)\n\n"
            "### Bazz\n\n- **android:** sub ([short_hash](/long_hash))\n\n"
            "### Foo\n\n- sub ([short_hash](/long_hash))\n\n"
            "### Bar\n\n- sub ([short_hash](/long_hash))\n\n"
            "### Other\n\n- prefix-qux: sub ([short_hash](/long_hash))"
        )


class TestFormatStyling:
    """Each format only uses its own styling tokens."""

    LINES = ["feat(ui): a|BREAKING CHANGE: b|H|h|A|t", "fix: c||H|h|A|t"]

    def test_markdown_has_no_slack_markers(self, release_date: date):
        """Markdown never emits single-asterisk slack styling."""
        result = render(self.LINES, release_date, format="markdown")

        assert "*" not in result.replace("**", "")

    def test_slack_has_no_markdown_markers(self, release_date: date):
        """Slack never emits markdown headings or double asterisks."""
        result = render(self.LINES, release_date, format="slack")

        assert "#" not in result
        assert "**" not in result

    def test_format_enum_coercion(self):
        """Format values are case-insensitive and default to plain."""
        assert ChangelogFormat("SLACK") is ChangelogFormat.SLACK
        assert ChangelogFormat("unknown") is ChangelogFormat.PLAIN
