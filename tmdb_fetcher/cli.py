"""Command line entry point for the TMDB data fetcher."""
import asyncio
import logging
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError

from tmdb_fetcher.core.app import configure_logging, run_fetcher
from tmdb_fetcher.core.config import settings
from tmdb_fetcher.core.exceptions import FatalFailure
from tmdb_fetcher.models.config import FetcherConfig, load_categories

logger = logging.getLogger(__name__)

HELP = """
Fetches movie and TV show data from The Movie Database (TMDB) API
and saves it as JSON.

Environment variables:

  TMDB_API_KEY  Your TMDB API key (required)

Example:

  export TMDB_API_KEY=your_api_key_here

  tmdb-fetcher ./public/data/movies.json
"""

app = typer.Typer(add_completion=False)


@app.command(help=HELP)
def fetch(
    ctx: typer.Context,
    output_path: Optional[Path] = typer.Argument(
        None,
        help="Path where the output JSON will be saved (defaults to 'movies.json').",
        show_default=False,
    ),
    categories_file: Optional[Path] = typer.Option(
        None,
        "--categories",
        help="JSON file with the categories to fetch instead of the built-in list.",
    ),
    no_credits: bool = typer.Option(
        False,
        "--no-credits",
        help="Skip cast/director lookups.",
    ),
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        help="Logging level (defaults to LOG_LEVEL or INFO).",
    ),
) -> None:
    """Fetch TMDB categories into a single JSON document."""

    configure_logging(log_level or settings.LOG_LEVEL)

    if not settings.TMDB_API_KEY:
        typer.echo("Error: TMDB_API_KEY environment variable is not set.", err=True)
        typer.echo("Please set it to your TMDB API key.", err=True)
        typer.echo("Example: export TMDB_API_KEY=your_api_key_here", err=True)
        typer.echo("", err=True)
        typer.echo(ctx.get_help(), err=True)
        raise typer.Exit(code=1)

    output_path = output_path or Path(settings.OUTPUT_PATH)

    try:
        categories = load_categories(categories_file) if categories_file else None
        config = FetcherConfig.from_settings(
            settings,
            categories=categories,
            include_credits=False if no_credits else None,
        )
    except (OSError, ValidationError) as e:
        typer.echo(f"Error: invalid categories configuration: {e}", err=True)
        raise typer.Exit(code=1)

    try:
        asyncio.run(run_fetcher(config, output_path))
    except FatalFailure as e:
        logger.error(f"Error: {e}")
        raise typer.Exit(code=1)


def main() -> None:
    """Execute the Typer application."""

    app()


if __name__ == "__main__":
    main()
