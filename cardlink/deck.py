"""Deck-list reading: turns a ``.ydk`` main deck into a ``CardSet``."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Final, Iterator, Mapping

from .cards import Card, CardSet

__all__ = ["DeckFormatError", "EmptyDeck", "iter_deck_ids", "parse_deck", "read_deck"]

logger = logging.getLogger(__name__)

HEADER_LINES: Final[int] = 2
SECTION_PREFIX: Final[str] = "#"


class DeckFormatError(ValueError):
    """Raised when a deck list cannot be interpreted."""


class EmptyDeck(DeckFormatError):
    """Raised when no deck entry matches a known card."""


def iter_deck_ids(text: str) -> Iterator[int]:
    """Yield the main-deck card ids listed in ``text``."""

    for number, raw in enumerate(text.splitlines()[HEADER_LINES:], start=HEADER_LINES + 1):
        line = raw.strip()
        if line.startswith(SECTION_PREFIX):
            return
        if not line:
            continue
        try:
            yield int(line)
        except ValueError as exc:
            raise DeckFormatError(f"line {number}: {line!r} is not a card id") from exc


def parse_deck(text: str, database: Mapping[int, Card]) -> CardSet:
    """Select the deck's cards from ``database``; unknown ids are ignored."""

    selected: list[Card] = []
    for card_id in iter_deck_ids(text):
        card = database.get(card_id)
        if card is None:
            logger.debug("Card %d not in database, ignoring", card_id)
            continue
        selected.append(card)
    cards = CardSet(selected)
    if not len(cards):
        raise EmptyDeck("deck contains no known cards")
    logger.info("Deck resolved to %d distinct cards", len(cards))
    return cards


def read_deck(path: Path, database: Mapping[int, Card]) -> CardSet:
    """Read the deck file at ``path`` and resolve it against ``database``."""

    try:
        text = path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as exc:
        raise DeckFormatError(f"cannot read deck file {path}: {exc}") from exc
    return parse_deck(text, database)
