"""Rich-based rendering of locator results."""

from __future__ import annotations

import json
from typing import Optional

from rich.console import Console
from rich.table import Table
from rich.text import Text

from pymodfind.locator.models import AggregateResult

# Status icons and colors
_FOUND = ("✓", "green")
_MISSING = ("✗", "red")


def build_results_table(aggregate: AggregateResult) -> Table:
    """Build a table with one row per requested module."""
    table = Table(title="Python modules", show_lines=False)
    table.add_column("", width=1)
    table.add_column("Module", style="bold")
    table.add_column("Directory")
    table.add_column("Source", style="dim")

    for name, result in aggregate.per_module.items():
        icon, color = _FOUND if result.found else _MISSING
        table.add_row(
            Text(icon, style=color),
            name,
            result.directory or Text("NOTFOUND", style=color),
            str(result.source) if result.source else "",
        )
    return table


def render_aggregate(
    aggregate: AggregateResult,
    console: Optional[Console] = None,
    fmt: str = "table",
) -> None:
    """Print ``aggregate`` as a table or as JSON."""
    console = console or Console()
    if fmt == "json":
        console.print_json(json.dumps(aggregate.to_dict()))
        return

    console.print(build_results_table(aggregate))
    console.print(Text("PYTHONPATH: ", style="bold") + Text(aggregate.pythonpath or "-"))
    if aggregate.missing:
        console.print(Text(aggregate.hint, style="yellow"))


def render_store(store, console: Optional[Console] = None) -> None:
    """Print the entries of a result store."""
    console = console or Console()
    table = Table(title=f"Result cache ({store.path or 'in-memory'})")
    table.add_column("Module", style="bold")
    table.add_column("Value")
    for name, value in store.items():
        table.add_row(name, value or Text("<blank>", style="dim"))
    console.print(table)
