"""Implementation of the 'changelog' command.

The changelog command prints release notes for pending changes, or for the
latest release with ``--released``. The notes go to stdout untouched so
they can be piped into a file or a chat message.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

import click
from rich.markup import escape

from semver_notes.config import load_config
from semver_notes.exceptions import SemverNotesError
from semver_notes.release import build_release_notes
from semver_notes.vcs import GitRepository

if TYPE_CHECKING:
    from collections.abc import Sequence

    from rich.console import Console


def run_changelog(
    path: str | None,
    released: bool,
    changelog_options: dict[str, Any],
    ignore_scopes: Sequence[str],
    console: Console,
    err_console: Console,
) -> None:
    """Run the changelog command.

    Args:
        path: Optional path to project directory
        released: Render the latest released version instead of pending
            changes
        changelog_options: Changelog settings overriding the configured
            ones; ``None`` values are ignored
        ignore_scopes: Scopes left out of the notes, added to the
            configured ones
        console: Console for standard output
        err_console: Console for error output
    """
    project_path = Path(path) if path else Path.cwd()

    try:
        config = load_config(project_path)
        config = config.with_overrides(
            changelog=changelog_options,
            commits={
                "ignored_scopes": [*config.commits.ignored_scopes, *ignore_scopes]
                if ignore_scopes
                else None
            },
        )
    except SemverNotesError as e:
        err_console.print(f"[red]Error loading config:[/] {escape(str(e))}")
        raise SystemExit(1) from e

    try:
        notes = build_release_notes(GitRepository(project_path), config, released=released)
    except SemverNotesError as e:
        err_console.print(f"[red]Error generating changelog:[/] {escape(str(e))}")
        raise SystemExit(1) from e

    if not notes:
        err_console.print("[yellow]No changes to include in the changelog.[/]")
        return

    click.echo(notes)
