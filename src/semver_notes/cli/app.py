"""Command-line interface for semver-notes."""

from __future__ import annotations

import click
from rich.console import Console

from semver_notes import __version__
from semver_notes.cli.commands.analyze import run_analyze
from semver_notes.cli.commands.changelog import run_changelog
from semver_notes.core.changelog import ChangelogFormat
from semver_notes.logging import configure_logging

console = Console()
err_console = Console(stderr=True)

_path_argument = click.argument(
    "path",
    required=False,
    type=click.Path(exists=True, file_okay=False),
)
_ignore_scope_option = click.option(
    "--ignore-scope",
    "ignore_scopes",
    multiple=True,
    help="Scope to exclude. Can be repeated.",
)


@click.group()
@click.version_option(__version__, "-V", "--version")
@click.option("-v", "--verbose", is_flag=True, help="Show debug output.")
@click.option("-q", "--quiet", is_flag=True, help="Only show warnings and errors.")
@click.option("--json-log", is_flag=True, help="Write logs as JSON lines.")
def cli(verbose: bool, quiet: bool, json_log: bool) -> None:
    """Semantic version bumps and release notes from conventional commits."""
    configure_logging(verbose=verbose, quiet=quiet, json_log=json_log)


@cli.command()
@_path_argument
@click.option("--match", default=None, help="Glob selecting release tags, e.g. 'v*'.")
@_ignore_scope_option
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON.")
def analyze(
    path: str | None,
    match: str | None,
    ignore_scopes: tuple[str, ...],
    as_json: bool,
) -> None:
    """Decide the next version from the commits since the last release."""
    run_analyze(path, match, ignore_scopes, as_json, console, err_console)


@cli.command()
@_path_argument
@click.option(
    "--released",
    is_flag=True,
    help="Notes for the latest released version instead of pending changes.",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice([f.value for f in ChangelogFormat]),
    default=None,
    help="Output format.",
)
@click.option("--title", default=None, help="Title appended to the version heading.")
@click.option("--commit-url", default=None, help="Base URL for commit links.")
@click.option(
    "--heading/--no-heading", "display_title", default=None, help="Show the version heading."
)
@click.option("--links/--no-links", "display_links", default=None, help="Show commit links.")
@click.option("--author/--no-author", "display_author", default=None, help="Show commit authors.")
@_ignore_scope_option
def changelog(
    path: str | None,
    released: bool,
    output_format: str | None,
    title: str | None,
    commit_url: str | None,
    display_title: bool | None,
    display_links: bool | None,
    display_author: bool | None,
    ignore_scopes: tuple[str, ...],
) -> None:
    """Print release notes grouped by commit type."""
    run_changelog(
        path,
        released,
        {
            "format": output_format,
            "title": title,
            "commit_url": commit_url,
            "display_title": display_title,
            "display_links": display_links,
            "display_author": display_author,
        },
        ignore_scopes,
        console,
        err_console,
    )


def main() -> None:
    cli()
