"""Briefing Canvas CLI: dispatch queries and watch the canvas fill in."""

import logging

import click
from rich.logging import RichHandler

from briefing_canvas.cli.ask_cmd import ask, chat
from briefing_canvas.cli.config_cmd import config
from briefing_canvas.cli.data_cmd import actions, calendar


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Debug logging")
def cli(verbose: bool):
    """Briefing Canvas: route queries to briefs and reveal them live."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True)],
    )


cli.add_command(ask)
cli.add_command(chat)
cli.add_command(calendar)
cli.add_command(actions)
cli.add_command(config)


if __name__ == "__main__":
    cli()
