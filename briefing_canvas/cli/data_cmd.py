"""CLI commands that print the canned fact and action generators directly."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

import click
from rich.console import Console
from rich.table import Table

from briefing_canvas.content.actions import generate_actions, generate_follow_up_actions
from briefing_canvas.content.calendar import aggregate

console = Console()


@click.command("calendar")
@click.argument("query", required=False, default="")
@click.option("--date", "on", type=click.DateTime(formats=["%Y-%m-%d"]), default=None, help="Day to aggregate (YYYY-MM-DD)")
def calendar(query: str, on: Optional[datetime]):
    """Show the aggregated calendar items for a query.

    \b
    Examples:
        briefing-canvas calendar
        briefing-canvas calendar "ekadashi fasting schedule"
    """
    items = aggregate(query, on.date() if on else None)
    if not items:
        console.print("[yellow]No calendar items for this query.[/yellow]")
        return

    table = Table(title=f"Calendar: {query}" if query else "Calendar")
    table.add_column("Time", style="cyan", no_wrap=True)
    table.add_column("Description")
    table.add_column("Source", style="dim")
    for item in items:
        table.add_row(item.time, item.description, item.source)
    console.print(table)


@click.command("actions")
@click.argument("query", required=False, default="")
@click.option(
    "--follow-up",
    type=click.Choice(["info", "summary", "general"]),
    default=None,
    help="Print follow-up actions of this kind instead",
)
def actions(query: str, follow_up: Optional[str]):
    """Show the decision-level actions generated for a query."""
    items = generate_follow_up_actions(query, follow_up) if follow_up else generate_actions(query)
    for item in items:
        console.print(item, markup=False, highlight=False)
