"""Command-line interface for semver-notes."""

from __future__ import annotations

from semver_notes.cli.app import cli, main

__all__ = ["cli", "main"]
