"""Command-line interface for mal-list."""

import logging
import sys
from datetime import date, datetime
from typing import Optional

import click

from .base_client import MALTransport
from .config import Settings, load_settings
from .constants import Category
from .enums import ReadStatus, WatchStatus
from .exceptions import ConfigError, MALError
from .mal_client import MALClient
from .models import AnimeValues, MangaValues
from .tracking import TrackedValues

logger = logging.getLogger(__name__)

CATEGORY_CHOICE = click.Choice([c.value for c in Category])


def setup_logging(level: str):
    """Configure logging for the application."""
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
        force=True,
    )


def _make_client(settings: Settings) -> MALClient:
    if not settings.mal.username:
        click.echo("Error: no MyAnimeList username configured (mal.username or MAL_USERNAME)", err=True)
        sys.exit(1)
    transport = MALTransport(
        settings.mal.username,
        settings.mal.password or "",
        base_url=settings.mal.base_url,
        timeout=settings.http.timeout,
        max_retries=settings.http.max_retries,
    )
    return MALClient(settings.mal.username, transport=transport)


def _parse_date_option(value: Optional[str]) -> Optional[date]:
    if value is None or value.lower() == "none":
        return None
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        raise click.BadParameter(f"'{value}' is not a YYYY-MM-DD date or 'none'")


def _build_values(
    category: Category,
    status: Optional[str],
    progress: Optional[int],
    volumes: Optional[int],
    score: Optional[int],
    start: Optional[str],
    finish: Optional[str],
    redo: Optional[bool],
    tags: tuple[str, ...],
) -> TrackedValues:
    """Build values where only the options actually given are flagged as changed."""
    if category is Category.ANIME:
        values: TrackedValues = AnimeValues()
        status_enum, progress_field, redo_field = WatchStatus, "watched_episodes", "rewatching"
        if volumes is not None:
            raise click.BadParameter("--volumes only applies to manga")
    else:
        values = MangaValues()
        status_enum, progress_field, redo_field = ReadStatus, "chapter", "rereading"
        if volumes is not None:
            values.volume = volumes

    if status is not None:
        member = status_enum.from_label(status.replace("_", " "))
        if member is None:
            labels = ", ".join(str(m) for m in status_enum)
            raise click.BadParameter(f"'{status}' is not one of: {labels}")
        values.status = member
    if progress is not None:
        setattr(values, progress_field, progress)
    if score is not None:
        values.score = score
    if start is not None:
        values.start_date = _parse_date_option(start)
    if finish is not None:
        values.finish_date = _parse_date_option(finish)
    if redo is not None:
        setattr(values, redo_field, redo)
    if tags:
        values.tags = list(tags)
    return values


def _values_options(func):
    """Options shared by add and update."""
    options = [
        click.option("--status", help="List status, e.g. watching, completed, 'plan to watch'"),
        click.option("--progress", type=int, help="Watched episodes / read chapters"),
        click.option("--volumes", type=int, help="Read volumes (manga only)"),
        click.option("--score", type=click.IntRange(0, 10), help="Score from 0 to 10"),
        click.option("--start", help="Start date (YYYY-MM-DD, or 'none' to clear)"),
        click.option("--finish", help="Finish date (YYYY-MM-DD, or 'none' to clear)"),
        click.option("--redo/--no-redo", default=None, help="Mark as re-watching / re-reading"),
        click.option("--tag", "tags", multiple=True, help="Tag (repeatable, replaces existing tags)"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _fail(error: Exception):
    logger.debug("Command failed", exc_info=error)
    click.echo(f"Error: {error}", err=True)
    sys.exit(1)


@click.group()
@click.version_option(version="0.1.0")
@click.option("--config", "config_path", type=click.Path(dir_okay=False), help="Path to config.yaml")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"]),
    default=None,
    help="Logging level (overrides config)",
)
@click.pass_context
def main(ctx: click.Context, config_path: Optional[str], log_level: Optional[str]):
    """Manage a MyAnimeList anime or manga list."""
    try:
        settings = load_settings(config_path)
    except ConfigError as e:
        _fail(e)
    setup_logging(log_level or settings.log_level)
    ctx.obj = settings


@main.command()
@click.argument("category", type=CATEGORY_CHOICE)
@click.argument("name")
@click.pass_obj
def search(settings: Settings, category: str, name: str):
    """Search for a series by NAME."""
    client = _make_client(settings)
    try:
        results = client.search(name, Category(category))
    except MALError as e:
        _fail(e)

    if not results:
        click.echo("No results.")
        return
    for info in results:
        click.echo(f"{info.id:>8}  {info.title}")


@main.command(name="list")
@click.argument("category", type=CATEGORY_CHOICE)
@click.option("--user", help="Read another user's list")
@click.pass_obj
def list_entries(settings: Settings, category: str, user: Optional[str]):
    """Show every entry on a list."""
    client = _make_client(settings)
    try:
        result = client.list_for(Category(category)).read_entries(user)
    except MALError as e:
        _fail(e)

    click.echo(f"=== {user or client.username}'s {category} list ({len(result.entries)} entries) ===")
    for entry in result.entries:
        values = entry.values
        progress = values.watched_episodes if isinstance(values, AnimeValues) else values.chapter
        click.echo(f"{entry.id:>8}  {str(values.status):<14} {progress:>5}  {values.score:>2}  {entry.series_info.title}")


@main.command()
@click.argument("category", type=CATEGORY_CHOICE)
@click.argument("series_id", type=int)
@_values_options
@click.pass_obj
def add(settings: Settings, category: str, series_id: int, **options):
    """Add SERIES_ID to a list."""
    values = _build_values(Category(category), **options)
    client = _make_client(settings)
    try:
        client.list_for(Category(category)).add_id(series_id, values)
    except MALError as e:
        _fail(e)
    click.echo(f"Added {category} {series_id}.")


@main.command()
@click.argument("category", type=CATEGORY_CHOICE)
@click.argument("series_id", type=int)
@_values_options
@click.pass_obj
def update(settings: Settings, category: str, series_id: int, **options):
    """Update SERIES_ID on a list. Only the given options are changed."""
    values = _build_values(Category(category), **options)
    if not values.is_changed():
        click.echo("Nothing to update.", err=True)
        sys.exit(1)
    changed = values.changed_fields()
    client = _make_client(settings)
    try:
        client.list_for(Category(category)).update_id(series_id, values)
    except MALError as e:
        _fail(e)
    click.echo(f"Updated {category} {series_id}: {', '.join(changed)}.")


@main.command()
@click.argument("category", type=CATEGORY_CHOICE)
@click.argument("series_id", type=int)
@click.pass_obj
def delete(settings: Settings, category: str, series_id: int):
    """Remove SERIES_ID from a list."""
    client = _make_client(settings)
    try:
        client.list_for(Category(category)).delete_id(series_id)
    except MALError as e:
        _fail(e)
    click.echo(f"Deleted {category} {series_id}.")


@main.command()
@click.pass_obj
def verify(settings: Settings):
    """Check that the configured credentials are accepted."""
    client = _make_client(settings)
    try:
        valid = client.verify_credentials()
    except MALError as e:
        _fail(e)

    if valid:
        click.echo(f"Credentials for {client.username} are valid.")
    else:
        click.echo(f"Credentials for {client.username} were rejected.", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
