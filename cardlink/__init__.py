"""Top-level package for the cardlink deck connectivity analyser."""

from . import cards, database, deck, links, render, source

__all__ = [
    "cards",
    "database",
    "deck",
    "links",
    "render",
    "source",
]
