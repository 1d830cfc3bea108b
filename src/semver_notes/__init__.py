"""semver-notes: semantic version bumps and release notes from conventional commits."""

from __future__ import annotations

__version__ = "0.1.0"
