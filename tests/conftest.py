"""Shared fixtures."""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING

import pytest
from structlog.testing import capture_logs

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

RELEASE_DATE = date(2019, 5, 25)


@pytest.fixture(autouse=True)
def captured_logs() -> Iterator[list[dict]]:
    """Capture structlog events instead of printing them."""
    with capture_logs() as logs:
        yield logs


@pytest.fixture
def release_date() -> date:
    return RELEASE_DATE


@pytest.fixture
def feat_line() -> str:
    return "feat: add user authentication|body|feat123456|feat123|Test Author|2024-01-01T10:00:00Z"


@pytest.fixture
def fix_line() -> str:
    return "fix(core): handle null response||fix123456|fix123|Test Author|2024-01-02T10:00:00Z"


@pytest.fixture
def breaking_line() -> str:
    return (
        "feat(api): redesign endpoints|BREAKING CHANGE: v1 endpoints removed"
        "|brk123456|brk123|Test Author|2024-01-03T10:00:00Z"
    )


@pytest.fixture
def sample_lines(feat_line: str, fix_line: str, breaking_line: str) -> list[str]:
    return [
        feat_line,
        fix_line,
        "docs: update readme||doc123456|doc123|Test Author|2024-01-04T10:00:00Z",
        "chore(deps): bump click||chr123456|chr123|Test Author|2024-01-05T10:00:00Z",
        breaking_line,
        "Merge branch 'main' into feature||mrg123456|mrg123|Test Author|2024-01-06T10:00:00Z",
        "Updated the build script||upd123456|upd123|Test Author|2024-01-07T10:00:00Z",
    ]


@pytest.fixture
def project_with_pyproject(tmp_path: Path) -> Path:
    """A project directory whose pyproject.toml configures semver-notes."""
    (tmp_path / "pyproject.toml").write_text(
        """\
[project]
name = "test-project"
version = "1.0.0"

[tool.semver-notes.commits]
ignored_scopes = ["deps"]

[tool.semver-notes.version]
tag_match = "release-*"

[tool.semver-notes.changelog]
format = "slack"
order = ["feat", "fix"]
commit_url = "https://example.com/commit"
"""
    )
    return tmp_path
