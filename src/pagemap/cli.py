"""CLI interface for pagemap.

Command-line tool for serving and inspecting documentation page maps.
"""

import json
import logging
import sys
from pathlib import Path
from typing import NoReturn

import click

from pagemap.config import Config
from pagemap.core.index import PageIndex
from pagemap.core.loader import PageMapLoader
from pagemap.core.query import (
    PageSummary,
    get_all_pages,
    get_current_level_pages,
    get_pages_under_route,
)


@click.group()
def cli() -> None:
    """pagemap - Navigation data for documentation sites."""


@cli.command()
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to configuration file (default: auto-discover pagemap.toml)",
)
@click.option(
    "--source",
    "-s",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Page map JSON file (overrides config)",
)
@click.option(
    "--host",
    default=None,
    help="Host to bind to (overrides config)",
)
@click.option(
    "--port",
    "-p",
    type=int,
    default=None,
    help="Port to bind to (overrides config)",
)
@click.option(
    "--default-locale",
    default=None,
    help="Default locale (overrides config)",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output (debug logging)",
)
@click.option(
    "--live-reload/--no-live-reload",
    default=None,
    help="Enable/disable live reload (overrides config, default: enabled)",
)
def serve(
    config_path: Path | None,
    source: Path | None,
    host: str | None,
    port: int | None,
    default_locale: str | None,
    verbose: bool,
    live_reload: bool | None,
) -> None:
    """Start the navigation server."""
    from pagemap.server import run_server

    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO)

    try:
        config = Config.load(config_path).with_overrides(
            host=host,
            port=port,
            source=source,
            default_locale=default_locale,
            live_reload_enabled=live_reload,
        )
    except (OSError, ValueError) as e:
        _fail(e)

    click.echo(f"Starting server on {config.server.host}:{config.server.port}")
    click.echo(f"Page map: {config.pagemap.source}")
    if config.i18n.locales:
        click.echo(f"Locales: {', '.join(config.i18n.locales)}")
    if config.live_reload.enabled:
        click.echo("Live reload: enabled")
    else:
        click.echo("Live reload: disabled")

    try:
        run_server(config)
    except (OSError, ValueError) as e:
        _fail(e)


@cli.command()
@click.argument("pagemap_file", type=click.Path(exists=True, path_type=Path))
@click.option(
    "--route",
    "-r",
    default="/",
    help="Route to resolve as the active page (default: /)",
)
@click.option(
    "--locale",
    "-l",
    default=None,
    help="Locale to normalize for (default: the page map's default locale)",
)
@click.option(
    "--default-locale",
    default=None,
    help="Default locale (overrides the page map file)",
)
def normalize(
    pagemap_file: Path,
    route: str,
    locale: str | None,
    default_locale: str | None,
) -> None:
    """Print normalized navigation for ROUTE as JSON."""
    index = _load_index(pagemap_file, default_locale)
    try:
        result = index.normalize(route, locale)
    except ValueError as e:
        _fail(e)

    click.echo(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))


@cli.command()
@click.argument("pagemap_file", type=click.Path(exists=True, path_type=Path))
@click.option(
    "--under",
    "under_route",
    default=None,
    help="Only list pages at or below this route",
)
@click.option(
    "--level",
    "level_route",
    default=None,
    help="List the pages on the same level as this route",
)
@click.option(
    "--locale",
    "-l",
    default=None,
    help="Locale to list pages for (default: the page map's default locale)",
)
@click.option(
    "--default-locale",
    default=None,
    help="Default locale (overrides the page map file)",
)
@click.option(
    "--json",
    "as_json",
    is_flag=True,
    help="Print pages as JSON instead of route/title lines",
)
def pages(
    pagemap_file: Path,
    under_route: str | None,
    level_route: str | None,
    locale: str | None,
    default_locale: str | None,
    as_json: bool,
) -> None:
    """List pages from PAGEMAP_FILE in navigation order."""
    if under_route is not None and level_route is not None:
        raise click.UsageError("--under and --level are mutually exclusive")

    index = _load_index(pagemap_file, default_locale)
    try:
        if under_route is not None:
            summaries = get_pages_under_route(index, under_route, locale)
        elif level_route is not None:
            summaries = get_current_level_pages(index, level_route, locale)
        else:
            summaries = get_all_pages(index, locale)
    except ValueError as e:
        _fail(e)

    if as_json:
        payload = {"pages": [page.to_dict() for page in summaries]}
        click.echo(json.dumps(payload, indent=2, ensure_ascii=False))
        return

    for page in summaries:
        _print_summary(page)


def _load_index(pagemap_file: Path, default_locale: str | None) -> PageIndex:
    """Load a page map file or exit with error."""
    loader = PageMapLoader(pagemap_file, default_locale=default_locale)
    try:
        return loader.load()
    except (OSError, ValueError) as e:
        _fail(e)


def _print_summary(page: PageSummary, indent: int = 0) -> None:
    title = page.title or ""
    click.echo(f"{'  ' * indent}{page.route}\t{title}")
    for child in page.children:
        _print_summary(child, indent + 1)


def _fail(error: Exception) -> NoReturn:
    click.echo(click.style(f"Error: {error}", fg="red"), err=True)
    sys.exit(1)


if __name__ == "__main__":
    cli()
