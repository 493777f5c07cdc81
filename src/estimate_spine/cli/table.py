"""
CLI: ``estimate-spine table`` / ``estimate-spine lookup``: inspect the cost model.
"""

from __future__ import annotations

import typer
from rich.markup import escape
from rich.table import Table

from estimate_spine.cli.utils import EXIT_FATAL, console, err_console, print_json
from estimate_spine.core.errors import EvaluationError
from estimate_spine.domain.codes import RiskCode
from estimate_spine.domain.cost_model import DEFAULT_COST_MODEL


def table_command(
    json_out: bool = typer.Option(False, "--json", help="Print the table as JSON"),
) -> None:
    """Show the Size x Risk cost table (days)."""
    rows = list(DEFAULT_COST_MODEL.rows())

    if json_out:
        print_json({size.value: {risk.value: days for risk, days in cells.items()} for size, cells in rows})
        return

    table = Table(title="Estimated cost in days")
    table.add_column("Size", style="bold")
    for risk in RiskCode:
        table.add_column(risk.value.title(), justify="right")
    for size, cells in rows:
        table.add_row(size.value, *(f"{cells[risk]:g}" for risk in RiskCode))
    console.print(table)


def lookup_command(
    size: str = typer.Argument(..., help='Size label, e.g. "M (3-5 days)"'),
    risk: str = typer.Argument(..., help='Risk label, e.g. "High: significant unknowns"'),
) -> None:
    """Compute the estimate for one Size / Risk pair."""
    try:
        days = DEFAULT_COST_MODEL.lookup_or_raise(size, risk)
    except EvaluationError as e:
        err_console.print(f"[bold red]Error[/bold red]: {escape(e.message)}")
        raise typer.Exit(code=EXIT_FATAL)
    console.print(f"{days:g}")
