"""Rich views for the cardlink CLI."""

from __future__ import annotations

from rich import box
from rich.markup import escape
from rich.table import Table

from ..links import Forest


def forest_summary(forest: Forest) -> Table:
    """Return a Rich table listing each root with its link statistics."""

    table = Table(title="Link Summary", box=box.SIMPLE_HEAVY)
    table.add_column("Card", justify="left")
    table.add_column("Id", justify="right")
    table.add_column("Links", justify="right")
    table.add_column("Second hop", justify="right")
    table.add_column("Lines", justify="right")

    most_links = max((len(tree.branches) for tree in forest), default=0)

    for tree in forest:
        links = len(tree.branches)
        second_hop = sum(len(branch.leaves) for branch in tree.branches)
        label = escape(tree.root.label())
        if links == 0:
            label = f"[dim]{label}[/dim]"
        elif links == most_links:
            label = f"[bold green]{label}[/bold green]"
        table.add_row(label, str(tree.root.id), str(links), str(second_hop), str(tree.line_count))

    return table
