"""
CLI: ``estimate-spine run``: reconcile the target board once.
"""

from __future__ import annotations

import asyncio

import typer

from estimate_spine.cli.utils import (
    EXIT_ITEM_ERRORS,
    err_console,
    fail,
    print_json,
    render_report,
)
from estimate_spine.core.errors import ConfigError, SpineError
from estimate_spine.core.logging import configure_logging, get_logger
from estimate_spine.core.settings import EstimateSettings, load_settings
from estimate_spine.domain.models import RunReport
from estimate_spine.engine.reconcile import ReconciliationEngine
from estimate_spine.gateway.board import BoardGateway
from estimate_spine.transport.graphql import HttpxGraphQLTransport

logger = get_logger(__name__)


async def execute(settings: EstimateSettings, *, dry_run: bool = False) -> RunReport:
    """Wire transport, gateway and engine for ``settings`` and run once."""
    async with HttpxGraphQLTransport.from_settings(settings) as transport:
        gateway = BoardGateway(transport, settings)
        engine = ReconciliationEngine(gateway, dry_run=dry_run)
        return await engine.run()


def run_command(
    owner_type: str | None = typer.Option(None, "--owner-type", help="organization or user"),
    owner: str | None = typer.Option(None, "--owner", help="Project owner login"),
    project: int | None = typer.Option(None, "--project", "-p", help="Project number"),
    field: str | None = typer.Option(None, "--field", "-f", help="Estimate field to write"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Evaluate items without writing"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="List every item in the summary"),
    json_out: bool = typer.Option(False, "--json", help="Print the report as JSON"),
    fail_on_errors: bool = typer.Option(
        False, "--fail-on-errors", help="Exit with status 2 when any item errored"
    ),
) -> None:
    """Recompute estimates from Size and Risk and write back the ones that differ."""
    try:
        settings = load_settings(
            owner_type=owner_type,
            owner_name=owner,
            project_number=project,
            target_field=field,
        )
    except ConfigError as e:
        raise fail(e)

    configure_logging(level=settings.log_level, json_format=settings.log_json)

    try:
        report = asyncio.run(execute(settings, dry_run=dry_run))
    except SpineError as e:
        logger.error("run_failed", **e.to_dict())
        raise fail(e)

    if json_out:
        print_json(report.to_dict(include_items=True))
    else:
        render_report(report, verbose=verbose)

    if fail_on_errors and report.statistics.errored:
        err_console.print(f"[yellow]{report.statistics.errored} item(s) errored.[/yellow]")
        raise typer.Exit(code=EXIT_ITEM_ERRORS)
