"""Parsing of the raw ``cards.json`` card database."""

from __future__ import annotations

import json
import logging
from typing import Any, Final

from .cards import ATTRIBUTE_COUNT, Card

__all__ = ["DatabaseFormatError", "parse_database", "card_from_entry"]

logger = logging.getLogger(__name__)

# Leading ``data`` fields that precede the five compared attributes.
SKIPPED_DATA_FIELDS: Final[int] = 3
NAME_FIELD: Final[str] = "nwbbs_n"


class DatabaseFormatError(ValueError):
    """Raised when the card database does not have the expected shape."""


def card_from_entry(entry: Any) -> Card | None:
    """Convert one database entry into a ``Card``.

    Returns ``None`` for entries the analysis ignores: the placeholder id 0
    and cards whose attributes are all zero.
    """

    if not isinstance(entry, dict):
        raise DatabaseFormatError(f"entry is not an object: {entry!r}")
    try:
        card_id = entry["id"]
        data = entry["data"]
    except KeyError as exc:
        raise DatabaseFormatError(f"entry missing field {exc.args[0]!r}") from exc
    if not isinstance(card_id, int) or isinstance(card_id, bool):
        raise DatabaseFormatError(f"card id {card_id!r} is not an integer")
    if card_id == 0:
        return None
    if not isinstance(data, dict):
        raise DatabaseFormatError(f"card {card_id} has no data object")

    stats = list(data.values())[SKIPPED_DATA_FIELDS:]
    if len(stats) != ATTRIBUTE_COUNT:
        raise DatabaseFormatError(
            f"card {card_id} has {len(stats)} attributes, expected {ATTRIBUTE_COUNT}"
        )
    if not all(isinstance(value, int) and not isinstance(value, bool) for value in stats):
        raise DatabaseFormatError(f"card {card_id} has non-integer attributes {stats!r}")
    if sum(stats) == 0:
        return None

    name = entry.get(NAME_FIELD)
    return Card(
        id=card_id,
        name=name if isinstance(name, str) else "",
        attributes=tuple(stats),  # type: ignore[arg-type]
    )


def parse_database(text: str) -> dict[int, Card]:
    """Parse ``cards.json`` text into a mapping of card id to ``Card``."""

    try:
        document = json.loads(text)
    except json.JSONDecodeError as exc:
        raise DatabaseFormatError(f"card database is not valid JSON: {exc}") from exc
    if not isinstance(document, dict):
        raise DatabaseFormatError("card database must be a JSON object")

    database: dict[int, Card] = {}
    skipped = 0
    for entry in document.values():
        card = card_from_entry(entry)
        if card is None:
            skipped += 1
            continue
        database[card.id] = card
    logger.info("Loaded %d cards (%d skipped)", len(database), skipped)
    return database
