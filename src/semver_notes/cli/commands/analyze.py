"""Implementation of the 'analyze' command.

The analyze command decides whether the commits since the last release
tag warrant a new version, and which one.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING

import click
from rich.markup import escape
from rich.panel import Panel

from semver_notes.config import load_config
from semver_notes.exceptions import SemverNotesError
from semver_notes.release import scan_release
from semver_notes.vcs import GitRepository

if TYPE_CHECKING:
    from collections.abc import Sequence

    from rich.console import Console


def run_analyze(
    path: str | None,
    match: str | None,
    ignore_scopes: Sequence[str],
    as_json: bool,
    console: Console,
    err_console: Console,
) -> None:
    """Run the analyze command.

    Args:
        path: Optional path to project directory
        match: Tag glob overriding the configured one
        ignore_scopes: Scopes excluded from the calculation, added to the
            configured ones
        as_json: Print the result as JSON instead of a panel
        console: Console for standard output
        err_console: Console for error output
    """
    project_path = Path(path) if path else Path.cwd()

    try:
        config = load_config(project_path)
        config = config.with_overrides(
            version={"tag_match": match},
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
        result = scan_release(GitRepository(project_path), config)
    except SemverNotesError as e:
        err_console.print(f"[red]Error:[/] {escape(str(e))}")
        raise SystemExit(1) from e

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    if result.is_releasable:
        console.print(
            Panel(
                f"Current version: [cyan]{result.current_version}[/]\n"
                f"Next version:    [green]{result.next_version}[/]\n\n"
                f"Next version ({result.next_version}) is higher than last version "
                f"({result.current_version}). This version should be released.",
                title="[green]Release Needed[/]",
                border_style="green",
            )
        )
    else:
        console.print(
            f"[yellow]No releasable changes found since {result.current_version} "
            f"({len(result.commits)} commits analysed).[/]"
        )
