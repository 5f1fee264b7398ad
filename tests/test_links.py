from __future__ import annotations

import itertools

from cardlink.cards import Card, CardSet, connected
from cardlink.links import Branch, LinkTree, build_forest, link_matrix


def _card(card_id: int, name: str, *stats: int) -> Card:
    return Card(id=card_id, name=name, attributes=tuple(stats))  # type: ignore[arg-type]


A = _card(1, "A", 1, 2, 3, 4, 5)
B = _card(2, "B", 1, 9, 9, 9, 9)
C = _card(3, "C", 9, 9, 9, 9, 9)

# Every pair of these three shares exactly one position.
TRI_A = _card(10, "TA", 1, 2, 3, 4, 5)
TRI_B = _card(11, "TB", 1, 7, 8, 9, 0)
TRI_C = _card(12, "TC", 6, 2, 8, 5, 4)


def test_build_forest_reference_scenario() -> None:
    forest = build_forest(CardSet([C, B, A]))

    assert forest == (
        LinkTree(root=A, branches=(Branch(card=B, leaves=()),)),
        LinkTree(root=B, branches=(Branch(card=A, leaves=()),)),
        LinkTree(root=C, branches=()),
    )


def test_build_forest_empty() -> None:
    assert build_forest(CardSet()) == ()


def test_root_exclusion_only_removes_direct_bounce() -> None:
    forest = build_forest(CardSet([TRI_A, TRI_B, TRI_C]))
    root_a = forest[0]

    assert root_a.root == TRI_A
    assert root_a.branches == (
        Branch(card=TRI_B, leaves=(TRI_C,)),
        Branch(card=TRI_C, leaves=(TRI_B,)),
    )
    assert root_a.line_count == 5


def test_card_may_recur_within_a_tree_through_different_children() -> None:
    # X links to both Y and Z, and both Y and Z link to W.
    x = _card(1, "X", 1, 0, 0, 0, 0)
    y = _card(2, "Y", 1, 5, 5, 5, 5)
    z = _card(3, "Z", 1, 6, 6, 6, 6)
    w = _card(4, "W", 2, 5, 6, 7, 7)

    assert connected(y, w) and connected(z, w)
    assert not connected(x, w)

    tree = build_forest(CardSet([w, z, y, x]))[0]

    assert tree.root == x
    leaves = {branch.card: branch.leaves for branch in tree.branches}
    assert w in leaves[y]
    assert w in leaves[z]


def test_link_matrix_agrees_with_connected() -> None:
    pool = [A, B, C, TRI_A, TRI_B, TRI_C, _card(20, "", 0, 2, 3, 4, 1)]
    links = link_matrix(pool)

    assert links.shape == (len(pool), len(pool))
    for i, j in itertools.product(range(len(pool)), repeat=2):
        assert bool(links[i, j]) == connected(pool[i], pool[j])


def test_link_matrix_empty() -> None:
    assert link_matrix([]).shape == (0, 0)


def test_build_forest_ignores_input_order() -> None:
    pool = [A, B, C, TRI_A, TRI_B, TRI_C]

    assert build_forest(CardSet(pool)) == build_forest(CardSet(reversed(pool)))


def test_link_matrix_handles_attributes_beyond_int64() -> None:
    huge = 2**63
    first = _card(1, "H1", huge, 1, 2, 3, 4)
    second = _card(2, "H2", huge, 9, 9, 9, 9)
    third = _card(3, "H3", -huge - 1, 1, 0, 0, 0)
    pool = [first, second, third]

    links = link_matrix(pool)

    for i, j in itertools.product(range(len(pool)), repeat=2):
        assert bool(links[i, j]) == connected(pool[i], pool[j])
    forest = build_forest(CardSet(pool))
    assert forest[0].branches == (Branch(card=second, leaves=()), Branch(card=third, leaves=()))
