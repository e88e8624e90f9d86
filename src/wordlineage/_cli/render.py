"""Rich rendering utilities for lineage commands."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.markup import escape
from rich.table import Table

if TYPE_CHECKING:
    from rich.console import Console

    from wordlineage._graph import SortOutcome, WordFamily, WordNode


def _labels(words: tuple[WordNode, ...]) -> str:
    return ", ".join(escape(word.label) for word in words)


def render_family_table(family: WordFamily, console: Console) -> None:
    """Render the words of a family with their relations.

    Args:
        family: Family to render.
        console: Rich Console to output to.

    """
    if not len(family):
        console.print(f"[bold]{escape(family.name)}[/bold] [dim](no words)[/dim]")
        return

    table = Table(title=escape(family.name), show_header=True, header_style="bold cyan")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Word", style="bold")
    table.add_column("Parents")
    table.add_column("Children")

    for position, word in enumerate(family.order, start=1):
        table.add_row(str(position), escape(word.label), _labels(word.parents), _labels(word.children))

    console.print(table)


def render_sort_outcome(family: WordFamily, outcome: SortOutcome[WordNode], console: Console) -> None:
    """Render the result of sorting a family.

    Args:
        family: The family that was sorted.
        outcome: The result of `family.sort()`.
        console: Rich Console to output to.

    """
    name = escape(family.name)
    if outcome.succeeded:
        order = " → ".join(escape(word.label) for word in outcome.order)
        console.print(f"[green]✓[/green] [bold]{name}[/bold]: {order or '[dim](empty)[/dim]'}")
        return

    console.print(f"[red]✗[/red] [bold]{name}[/bold]: cycle detected")
    for word in outcome.problems:
        console.print(f"  [red]•[/red] {escape(word.label)}")


def render_check_table(results: list[tuple[WordFamily, SortOutcome[WordNode]]], console: Console) -> None:
    """Render a summary of which families are acyclic."""
    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Family", style="bold")
    table.add_column("Words", justify="right")
    table.add_column("Status")
    table.add_column("Problem words")

    for family, outcome in results:
        status = "[green]OK[/green]" if outcome.succeeded else "[red]CYCLE[/red]"
        table.add_row(escape(family.name), str(len(family)), status, _labels(outcome.problems))

    console.print(table)
