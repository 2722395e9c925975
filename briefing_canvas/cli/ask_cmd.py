"""CLI commands that dispatch queries: one-shot ``ask`` and the ``chat`` loop."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.live import Live
from rich.panel import Panel

from briefing_canvas.config import load_settings
from briefing_canvas.content.visits import ParsedVisit
from briefing_canvas.core.clock import ManualClock, RealtimeClock
from briefing_canvas.core.engine import CanvasEngine
from briefing_canvas.render import render_canvas

console = Console()
logger = logging.getLogger(__name__)

CHAT_HELP = "Type a query. Prefix with /rec to pick it as a recommendation. /reset, /clear-planner, /quit"


def _build_engine(config_path: Optional[Path], instant: bool) -> CanvasEngine:
    try:
        settings = load_settings(config_path)
    except ValueError as exc:
        raise click.ClickException(str(exc))
    clock = ManualClock() if instant else RealtimeClock()
    return CanvasEngine(clock=clock, settings=settings)


def _report_visit(visit: ParsedVisit) -> None:
    console.print(
        f"[dim]Visit parsed:[/dim] {visit.visitor} on {visit.display_date} at "
        f"{visit.display_time} ({visit.location}, {visit.protocol_level} protocol)"
    )


def _report_module(module: str) -> None:
    console.print(f"[dim]Module:[/dim] [bold]{module}[/bold]")


def play(engine: CanvasEngine, instant: bool, since: int = 0) -> None:
    """Run the engine's clock to idle, redrawing the canvas as it goes.

    ``since`` skips chat messages from earlier turns.
    """
    def frame():
        return render_canvas(engine.sections, engine.messages[since:])

    if instant:
        engine.run_until_idle()
        console.print(frame())
        return

    with Live(frame(), console=console, refresh_per_second=30, transient=False) as live:
        while engine.clock.pending:
            engine.clock.run_pending()
            live.update(frame())


@click.command("ask")
@click.argument("query")
@click.option("--rec", is_flag=True, help="Treat the query as a picked recommendation")
@click.option("--instant", is_flag=True, help="Skip the reveal animation")
@click.option("--config", "config_path", type=click.Path(path_type=Path), default=None, help="Settings file")
def ask(query: str, rec: bool, instant: bool, config_path: Optional[Path]):
    """Dispatch one query and reveal the resulting canvas.

    \b
    Examples:
        briefing-canvas ask "Show pending approvals"
        briefing-canvas ask "add buy flowers to plan"
        briefing-canvas ask "government auditor is visiting tomorrow" --instant
    """
    engine = _build_engine(config_path, instant)
    handler = engine.dispatch(
        query,
        is_recommendation=rec,
        on_vip_visit_parsed=_report_visit,
        on_module_detected=_report_module,
    )
    logger.debug("Handled by %s", handler)
    play(engine, instant)


@click.command("chat")
@click.option("--instant", is_flag=True, help="Skip the reveal animation")
@click.option("--config", "config_path", type=click.Path(path_type=Path), default=None, help="Settings file")
def chat(instant: bool, config_path: Optional[Path]):
    """Interactive session on a single canvas."""
    engine = _build_engine(config_path, instant)
    console.print(Panel(CHAT_HELP, title="[bold green]Briefing Canvas[/bold green]", border_style="green"))

    while True:
        try:
            line = console.input("[bold cyan]>[/bold cyan] ").strip()
        except (EOFError, KeyboardInterrupt):
            console.print()
            break

        if not line:
            continue
        if line == "/quit":
            break
        if line == "/reset":
            engine.reset()
            console.print("[dim]Canvas cleared[/dim]")
            continue
        if line == "/clear-planner":
            engine.clear_planner()
            console.print("[dim]Planner cleared[/dim]")
            continue

        rec = line.startswith("/rec ")
        if rec:
            line = line[len("/rec "):].strip()

        since = len(engine.messages)
        engine.dispatch(
            line,
            is_recommendation=rec,
            on_vip_visit_parsed=_report_visit,
            on_module_detected=_report_module,
        )
        play(engine, instant, since=since)
