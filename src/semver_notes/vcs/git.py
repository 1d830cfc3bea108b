"""Git access for tags and commit logs.

git is called as a subprocess and its output is returned as text for the
parsing layer. Commits are emitted in the delimited record format that
:mod:`semver_notes.core.commits` expects.
"""

from __future__ import annotations

import subprocess
from pathlib import Path

from semver_notes.core.commits import FIELD_DELIMITER, RECORD_SEPARATOR
from semver_notes.exceptions import GitError
from semver_notes.logging import get_logger

logger = get_logger(__name__)

HEAD = "HEAD"
COMMIT_LOG_FORMAT = FIELD_DELIMITER.join(["%s", "%b", "%H", "%h", "%an", "%cI"]) + RECORD_SEPARATOR


class GitRepository:
    """A local git repository."""

    def __init__(self, path: Path | str | None = None) -> None:
        self.path = Path(path) if path else Path.cwd()

    def _run(self, *args: str) -> str:
        """Run a git command in the repository and return its stdout.

        Raises:
            GitError: If git is missing or the command fails
        """
        cmd = ["git", *args]
        logger.debug("git command", cmd=" ".join(cmd), cwd=str(self.path))

        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                check=True,
                cwd=self.path,
            )
        except FileNotFoundError as e:
            raise GitError("git not found. Install git and make sure it is on PATH") from e
        except subprocess.CalledProcessError as e:
            raise GitError(
                f"git {args[0]} failed with exit code {e.returncode}",
                stderr=e.stderr,
            ) from e
        return result.stdout

    def get_tags(self, match: str, limit: int) -> list[str]:
        """List tags matching a glob, most recently tagged first.

        Args:
            match: Glob such as ``"v*"``
            limit: Maximum number of tags to return

        Returns:
            Tag names
        """
        output = self._run("tag", "--sort=-taggerdate", "--list", match)
        tags = [line.strip() for line in output.splitlines() if line.strip()]
        return tags[:limit]

    def get_latest_tags(self, match: str) -> list[str]:
        """Return the newest matching tag, for changes not released yet."""
        return self.get_tags(match, limit=1)

    def get_release_tags(self, match: str) -> list[str]:
        """Return the two newest matching tags, for the latest release."""
        return self.get_tags(match, limit=2)

    def get_commit_log(self, since: str | None = None, until: str = HEAD) -> str:
        """Return the commits in ``since..until`` as a record stream.

        Args:
            since: Exclusive start of the range; full history when omitted
            until: Inclusive end of the range

        Returns:
            Records separated by ``|>``
        """
        revision = f"{since}..{until}" if since else until
        if since:
            logger.info("comparing commits", since=since, until=until)
        return self._run("log", f"--pretty=format:{COMMIT_LOG_FORMAT}", revision)
