"""CLI commands for the settings file."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.table import Table

from briefing_canvas.config import EngineSettings, load_settings, resolve_config_path, save_settings

console = Console()


@click.group("config")
def config():
    """Inspect or create the settings file."""
    pass


@config.command("show")
@click.option("--path", type=click.Path(path_type=Path), default=None, help="Settings file")
def show(path: Optional[Path]):
    """Print the effective settings."""
    try:
        settings = load_settings(path)
    except ValueError as exc:
        raise click.ClickException(str(exc))

    target = resolve_config_path(path)
    source = str(target) if target.exists() else "defaults"
    table = Table(title=f"Settings ({source})")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", justify="right")
    for name, value in settings.model_dump().items():
        table.add_row(name, str(value))
    console.print(table)


@config.command("init")
@click.option("--path", type=click.Path(path_type=Path), default=None, help="Settings file")
@click.option("--force", is_flag=True, help="Overwrite an existing file")
def init(path: Optional[Path], force: bool):
    """Write a settings file with the default values."""
    target = resolve_config_path(path)
    if target.exists() and not force:
        raise click.ClickException(f"{target} already exists (use --force to overwrite)")
    written = save_settings(EngineSettings(), target)
    console.print(f"[green]✓[/green] Wrote {written}")
