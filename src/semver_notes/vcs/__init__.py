"""Version control access."""

from __future__ import annotations

from semver_notes.vcs.git import GitRepository

__all__ = ["GitRepository"]
