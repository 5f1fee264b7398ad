"""Plain-text rendering of link forests."""

from __future__ import annotations

from typing import Final

from .links import Forest, LinkTree

BRANCH: Final[str] = "├──"
TERMINAL: Final[str] = "└──"
CONTINUATION: Final[str] = "│"
BLANK: Final[str] = " "
INDENT: Final[str] = "    "


def _connector(is_last: bool) -> str:
    return TERMINAL if is_last else BRANCH


def render_tree(tree: LinkTree) -> list[str]:
    """Render a single tree as report lines without trailing newlines."""

    lines = [tree.root.label()]
    for i, branch in enumerate(tree.branches):
        is_last = i == len(tree.branches) - 1
        lines.append(INDENT + _connector(is_last) + branch.card.label())
        rail = BLANK if is_last else CONTINUATION
        for j, leaf in enumerate(branch.leaves):
            connector = _connector(j == len(branch.leaves) - 1)
            lines.append(INDENT + rail + INDENT + connector + leaf.label())
    return lines


def render_forest(forest: Forest) -> str:
    """Render every tree in order, each line newline-terminated."""

    return "".join(line + "\n" for tree in forest for line in render_tree(tree))
