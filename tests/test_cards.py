from __future__ import annotations

import itertools

from cardlink.cards import Card, CardSet, connected


def _card(card_id: int, name: str, *stats: int) -> Card:
    return Card(id=card_id, name=name, attributes=tuple(stats))  # type: ignore[arg-type]


A = _card(1, "A", 1, 2, 3, 4, 5)
B = _card(2, "B", 1, 9, 9, 9, 9)
C = _card(3, "C", 9, 9, 9, 9, 9)


def test_connected_requires_exactly_one_match() -> None:
    assert connected(A, B)
    assert not connected(A, C)
    assert not connected(B, C)


def test_connected_is_symmetric() -> None:
    pool = [A, B, C, _card(4, "D", 1, 2, 0, 0, 0), _card(5, "E", 0, 2, 7, 7, 7)]
    for left, right in itertools.product(pool, repeat=2):
        assert connected(left, right) == connected(right, left)


def test_connected_is_irreflexive_even_for_equal_twins() -> None:
    twin = _card(1, "A", 1, 2, 3, 4, 5)

    assert twin == A
    assert twin is not A
    assert not connected(A, A)
    assert not connected(A, twin)


def test_label_falls_back_to_id() -> None:
    assert A.label() == "A"
    assert _card(89631139, "", 3000, 2500, 8, 1, 32).label() == "89631139"


def test_card_equality_covers_all_fields() -> None:
    assert _card(1, "A", 1, 2, 3, 4, 5) == A
    assert hash(_card(1, "A", 1, 2, 3, 4, 5)) == hash(A)
    assert _card(1, "A2", 1, 2, 3, 4, 5) != A
    assert _card(1, "A", 1, 2, 3, 4, 6) != A


def test_card_set_deduplicates_and_orders_canonically() -> None:
    cards = CardSet([C, A, B, _card(1, "A", 1, 2, 3, 4, 5), C])

    assert len(cards) == 3
    assert list(cards) == [A, B, C]
    assert cards.ordered() == (A, B, C)
    assert A in cards
    assert cards == CardSet([B, C, A])


def test_card_set_orders_same_id_by_name_then_attributes() -> None:
    first = _card(7, "", 1, 1, 1, 1, 1)
    second = _card(7, "x", 0, 0, 0, 0, 1)
    third = _card(7, "x", 0, 0, 0, 0, 2)

    assert CardSet([third, second, first]).ordered() == (first, second, third)


def test_empty_card_set() -> None:
    cards = CardSet()

    assert len(cards) == 0
    assert list(cards) == []


def test_card_coerces_attribute_sequence_to_tuple() -> None:
    card = Card(1, "A", [1, 2, 3, 4, 5])  # type: ignore[arg-type]

    assert card.attributes == (1, 2, 3, 4, 5)
    assert card == A
    assert len(CardSet([card, A])) == 1
