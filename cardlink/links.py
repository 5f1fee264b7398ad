"""Forest construction over the card connectivity relation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Sequence

import numpy as np

from .cards import Card, CardSet

if TYPE_CHECKING:  # pragma: no cover - typing helper
    from numpy.typing import NDArray

__all__ = ["Branch", "LinkTree", "Forest", "link_matrix", "build_tree", "build_forest"]


@dataclass(frozen=True, slots=True)
class Branch:
    """A card directly linked to a root, with its own onward links."""

    card: Card
    leaves: tuple[Card, ...]


@dataclass(frozen=True, slots=True)
class LinkTree:
    """Depth-3 tree rooted at a single card."""

    root: Card
    branches: tuple[Branch, ...]

    @property
    def line_count(self) -> int:
        """Number of report lines this tree renders to."""

        return 1 + sum(1 + len(branch.leaves) for branch in self.branches)


Forest = tuple[LinkTree, ...]


def _attribute_array(cards: Sequence[Card]) -> NDArray[np.generic]:
    rows = [card.attributes for card in cards]
    try:
        return np.array(rows, dtype=np.int64)
    except OverflowError:
        # Values beyond int64 are compared as Python ints.
        return np.array(rows, dtype=object)


def link_matrix(cards: Sequence[Card]) -> NDArray[np.bool_]:
    """Return the square matrix whose entry (i, j) is ``connected(cards[i], cards[j])``."""

    if not cards:
        return np.zeros((0, 0), dtype=np.bool_)
    stats = _attribute_array(cards)
    matches = (stats[:, np.newaxis, :] == stats[np.newaxis, :, :]).sum(axis=2)
    return np.asarray(matches == 1, dtype=np.bool_)


def _linked(links: NDArray[np.bool_], index: int) -> list[int]:
    return [int(idx) for idx in np.flatnonzero(links[index])]


def build_tree(root_index: int, ordered: Sequence[Card], links: NDArray[np.bool_]) -> LinkTree:
    """Build the tree for ``ordered[root_index]`` from a precomputed link matrix.

    Grandchildren exclude the root card itself; any other repeat, including a
    card reached again through a different child, is kept.
    """

    branches = []
    for child_index in _linked(links, root_index):
        leaves = tuple(
            ordered[leaf_index]
            for leaf_index in _linked(links, child_index)
            if leaf_index != root_index
        )
        branches.append(Branch(card=ordered[child_index], leaves=leaves))
    return LinkTree(root=ordered[root_index], branches=tuple(branches))


def build_forest(cards: CardSet) -> Forest:
    """Return one tree per card, in the set's canonical order."""

    ordered = cards.ordered()
    links = link_matrix(ordered)
    return tuple(build_tree(idx, ordered, links) for idx in range(len(ordered)))
