"""
CLI utility helpers: consoles and report rendering.
"""

from __future__ import annotations

import json
from typing import Any

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from estimate_spine.core.errors import SpineError
from estimate_spine.domain.models import ItemOutcome, RunReport

console = Console()
err_console = Console(stderr=True)

# Exit codes
EXIT_FATAL = 1
EXIT_ITEM_ERRORS = 2


def fail(error: SpineError) -> typer.Exit:
    """Print ``error`` to stderr and return the exit to raise."""
    err_console.print(
        f"[bold red]Error[/bold red] ({error.category.value}): {escape(error.message)}"
    )
    return typer.Exit(code=EXIT_FATAL)


def print_json(payload: Any) -> None:
    console.print_json(json.dumps(payload, default=str))


def render_report(report: RunReport, *, verbose: bool = False) -> None:
    """Print the run summary, plus the items that did not end up unchanged."""
    stats = report.statistics
    title = "Dry run" if report.dry_run else "Reconciliation"

    summary = Table(title=f"{title}: {escape(report.project.estimate_field.name)}", show_header=False)
    summary.add_column("Counter", style="bold")
    summary.add_column("Value", justify="right")
    summary.add_row("Total items", str(stats.total))
    if report.dry_run:
        summary.add_row("Would change", str(stats.would_change))
    else:
        summary.add_row("Changed", str(stats.changed))
    summary.add_row("Errored", str(stats.errored))
    summary.add_row("Unchanged", str(stats.unchanged))
    summary.add_row("Missing Size", str(stats.missing_size))
    summary.add_row("Missing Risk", str(stats.missing_risk))
    console.print(summary)

    shown = [
        r for r in report.results
        if verbose or r.outcome not in (ItemOutcome.UNCHANGED, ItemOutcome.MISSING_SIZE, ItemOutcome.MISSING_RISK)
    ]
    if not shown:
        return

    items = Table(title="Items")
    items.add_column("Outcome")
    items.add_column("Item")
    items.add_column("Title")
    items.add_column("Estimate", justify="right")
    items.add_column("Detail", style="dim")
    for result in shown:
        style = "red" if result.outcome.is_error else "green" if result.outcome is ItemOutcome.UPDATED else ""
        before = "-" if result.item.current_estimate is None else f"{result.item.current_estimate:g}"
        after = "-" if result.computed is None else f"{result.computed:g}"
        items.add_row(
            f"[{style}]{result.outcome.value}[/{style}]" if style else result.outcome.value,
            escape(result.item.id),
            escape(result.item.title),
            f"{before} -> {after}",
            escape(result.error.message) if result.error else "",
        )
    console.print(items)
