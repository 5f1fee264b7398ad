"""Card abstractions and the connectivity relation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final, Iterable, Iterator

ATTRIBUTE_COUNT: Final[int] = 5

__all__ = ["ATTRIBUTE_COUNT", "Card", "CardSet", "connected"]


@dataclass(frozen=True, slots=True)
class Card:
    """Value object describing a single card and its comparable attributes."""

    id: int
    name: str
    attributes: tuple[int, int, int, int, int]

    def __post_init__(self) -> None:
        if not isinstance(self.attributes, tuple):
            object.__setattr__(self, "attributes", tuple(self.attributes))

    def label(self) -> str:
        """Return the display name, falling back to the decimal id."""

        if self.name:
            return self.name
        return str(self.id)

    def sort_key(self) -> tuple[int, str, tuple[int, ...]]:
        """Return the key defining canonical card order."""

        return (self.id, self.name, self.attributes)


def connected(a: Card, b: Card) -> bool:
    """Return ``True`` when exactly one attribute position matches."""

    same = 0
    for left, right in zip(a.attributes, b.attributes):
        if left == right:
            same += 1
    return same == 1


class CardSet:
    """Deduplicating, read-only collection iterated in canonical order.

    Canonical order is ascending ``(id, name, attributes)`` so that every
    consumer enumerates the same cards in the same sequence regardless of how
    the collection was assembled.
    """

    __slots__ = ("_cards",)

    def __init__(self, cards: Iterable[Card] = ()) -> None:
        self._cards: tuple[Card, ...] = tuple(sorted(set(cards), key=Card.sort_key))

    def __iter__(self) -> Iterator[Card]:
        return iter(self._cards)

    def __len__(self) -> int:
        return len(self._cards)

    def __contains__(self, card: object) -> bool:
        return card in self._cards

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CardSet):
            return NotImplemented
        return self._cards == other._cards

    def __hash__(self) -> int:
        return hash(self._cards)

    def __repr__(self) -> str:
        labels = ", ".join(card.label() for card in self._cards)
        return f"CardSet([{labels}])"

    def ordered(self) -> tuple[Card, ...]:
        """Return the cards as a tuple in canonical order."""

        return self._cards
