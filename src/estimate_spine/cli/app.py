"""
Root Typer application for the estimate-spine CLI.
"""

from __future__ import annotations

import typer
from typer import Typer

from estimate_spine.cli.run import run_command
from estimate_spine.cli.table import lookup_command, table_command

app = Typer(
    name="estimate-spine",
    help="estimate-spine: keep project board estimates in line with Size and Risk.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# ── Version callback ─────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        from estimate_spine import __version__

        typer.echo(f"estimate-spine {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(  # noqa: UP007
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """estimate-spine CLI: reconcile estimates, inspect the cost table."""


# ── Commands ─────────────────────────────────────────────────────────────

app.command("run")(run_command)
app.command("table")(table_command)
app.command("lookup")(lookup_command)
