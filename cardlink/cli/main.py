"""Typer entry-point wiring for the cardlink CLI."""

from __future__ import annotations

import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from .. import database, deck, source
from ..links import build_forest
from ..render import render_forest
from .views import forest_summary

app = typer.Typer(add_completion=False, rich_markup_mode="rich")
console = Console()
err_console = Console(stderr=True)
logger = logging.getLogger(__name__)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def _fail(message: str) -> typer.Exit:
    err_console.print(f"[bold red]{escape(message)}[/bold red]")
    return typer.Exit(code=1)


def _source_config(archive_url: str, checksum_url: str, timeout: float) -> source.SourceConfig:
    return source.SourceConfig(archive_url=archive_url, checksum_url=checksum_url, timeout=timeout)


def _load_text(cache_path: Path, config: source.SourceConfig, offline: bool) -> str:
    try:
        return source.load_database_text(cache_path, config, offline=offline)
    except (source.SourceUnavailable, source.ArchiveError) as exc:
        logger.debug("Database unavailable: %s", exc)
        raise _fail(
            "Could not download or open the card database. Download it manually from\n"
            f"{config.archive_url}\nand place it at\n{cache_path}"
        ) from exc


ARCHIVE_URL_OPTION = typer.Option(
    source.DEFAULT_ARCHIVE_URL,
    "--archive-url",
    envvar="CARDLINK_ARCHIVE_URL",
    help="URL of the card database archive.",
)
CHECKSUM_URL_OPTION = typer.Option(
    source.DEFAULT_CHECKSUM_URL,
    "--checksum-url",
    envvar="CARDLINK_CHECKSUM_URL",
    help="URL publishing the archive's MD5 checksum.",
)
TIMEOUT_OPTION = typer.Option(30.0, min=0.1, help="HTTP timeout in seconds.")
VERBOSE_OPTION = typer.Option(False, "--verbose", "-v", help="Log progress to stderr.")


@app.command()
def analyze(
    deck_path: Path = typer.Argument(..., help="Deck file (.ydk)."),
    cache_dir: Path | None = typer.Option(
        None,
        file_okay=False,
        help="Directory holding cards.zip (default: the deck's directory).",
    ),
    archive_url: str = ARCHIVE_URL_OPTION,
    checksum_url: str = CHECKSUM_URL_OPTION,
    timeout: float = TIMEOUT_OPTION,
    offline: bool = typer.Option(False, "--offline", help="Use the cached archive without checking for updates."),
    summary: bool = typer.Option(False, "--summary", help="Also print a table of link counts per card."),
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Print the link forest for every card in a deck."""

    _configure_logging(verbose)
    if not deck_path.is_file():
        raise _fail(f"Deck file does not exist: {deck_path}")
    config = _source_config(archive_url, checksum_url, timeout)
    cache_path = config.cache_path(cache_dir if cache_dir is not None else deck_path.parent)

    text = _load_text(cache_path, config, offline)
    try:
        cards_by_id = database.parse_database(text)
    except database.DatabaseFormatError as exc:
        raise _fail(f"The card database is malformed: {exc}") from exc
    try:
        cards = deck.read_deck(deck_path, cards_by_id)
    except deck.DeckFormatError as exc:
        raise _fail(f"Could not read the deck, please check its format ({exc}).") from exc

    forest = build_forest(cards)
    typer.echo(render_forest(forest), nl=False)
    if summary:
        console.print(forest_summary(forest))


@app.command()
def fetch(
    cache_dir: Path = typer.Argument(Path("."), file_okay=False, help="Directory to store cards.zip in."),
    archive_url: str = ARCHIVE_URL_OPTION,
    checksum_url: str = CHECKSUM_URL_OPTION,
    timeout: float = TIMEOUT_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Download or refresh the cached card database."""

    _configure_logging(verbose)
    config = _source_config(archive_url, checksum_url, timeout)
    cache_path = config.cache_path(cache_dir)

    text = _load_text(cache_path, config, offline=False)
    try:
        cards_by_id = database.parse_database(text)
    except database.DatabaseFormatError as exc:
        raise _fail(f"The card database is malformed: {exc}") from exc
    console.print(f"[cyan]{len(cards_by_id)} cards available in {escape(str(cache_path))}[/cyan]")


def main() -> None:
    """Entry-point for ``python -m cardlink.cli``."""

    app()


if __name__ == "__main__":  # pragma: no cover - CLI invocation
    main()
