"""metascore CLI — look up game scores from the command line.

Usage:
    python cli/main.py --help

Commands:
    search     → every game found for a title on a platform
    best       → the single closest match for a title
    platforms  → the platform names accepted by --platform
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that `from metascore.xxx import ...`
# works when the CLI is invoked as `python cli/main.py` from any directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import json
from typing import Optional

import typer

from cli.rendering import format_record, records_to_json
from metascore.config import settings
from metascore.errors import ConfigurationError, SearchError, UnknownPlatformError
from metascore.log import configure_logging
from metascore.matcher import best_match, rank
from metascore.platforms import PLATFORM_NAMES, PLATFORMS
from metascore.search import MetacriticClient

app = typer.Typer(
    name="metascore",
    help="Look up critic and user scores on Metacritic.",
    no_args_is_help=True,
)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug output to stderr."),
) -> None:
    """Configure logging before any command runs."""
    configure_logging("DEBUG" if verbose else settings.log_level)


def _client(concurrency: Optional[int]) -> MetacriticClient:
    try:
        return MetacriticClient(concurrency=concurrency)
    except ConfigurationError as exc:
        typer.echo(f"[error] {exc}", err=True)
        raise typer.Exit(1)


# ---------------------------------------------------------------------------
# Search commands
# ---------------------------------------------------------------------------
@app.command("search")
def search_cmd(
    title: str = typer.Argument(..., help="Game title to search for."),
    platform: str = typer.Option(..., "--platform", "-p", help="Platform name, e.g. switch, ps4, pc."),
    as_json: bool = typer.Option(False, "--json", help="Print results as JSON."),
    concurrency: Optional[int] = typer.Option(None, help="Maximum parallel requests."),
) -> None:
    """List every game found for TITLE, ranked by similarity."""
    with _client(concurrency) as client:
        try:
            records = client.search(title, platform)
        except (SearchError, UnknownPlatformError) as exc:
            typer.echo(f"[search] {exc}", err=True)
            raise typer.Exit(1)

    if as_json:
        typer.echo(records_to_json(records))
        return
    if not records:
        typer.echo(f"[search] No games found for {title!r}.")
        return
    typer.echo(f"[search] {len(records)} game(s) found for {title!r}:")
    for record, similarity in rank(title, records):
        typer.echo(format_record(record, similarity))


@app.command("best")
def best_cmd(
    title: str = typer.Argument(..., help="Game title to search for."),
    platform: str = typer.Option(..., "--platform", "-p", help="Platform name, e.g. switch, ps4, pc."),
    as_json: bool = typer.Option(False, "--json", help="Print the match as JSON."),
    concurrency: Optional[int] = typer.Option(None, help="Maximum parallel requests."),
) -> None:
    """Print the single game whose title is closest to TITLE."""
    with _client(concurrency) as client:
        try:
            records = client.search(title, platform)
        except (SearchError, UnknownPlatformError) as exc:
            typer.echo(f"[best] {exc}", err=True)
            raise typer.Exit(1)

    record = best_match(title, records)
    if record is None:
        typer.echo(f"[best] No match for {title!r}.", err=True)
        raise typer.Exit(1)

    if as_json:
        typer.echo(json.dumps(record.to_dict(), indent=2))
    else:
        typer.echo(format_record(record))


@app.command("platforms")
def platforms_cmd() -> None:
    """List the platform names accepted by --platform."""
    for name in PLATFORM_NAMES:
        typer.echo(f"  {name:<8} {PLATFORMS[name]}")


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()
