#!/usr/bin/env python3
"""
azopsman - Azure Operations Manager

A CLI tool for creating Azure Data Share triggers and restoring Azure Backup items.
"""
from typing import Optional

import typer
from rich.console import Console

from . import __version__
from .commands import backup, profile, trigger
from .commands.common import config
from .utils.logging_config import LoggingConfig, LogLevel, setup_logging

app = typer.Typer(
    help="Azure Operations Manager - create Data Share triggers and restore Azure Backup items.",
    add_completion=True,
    no_args_is_help=True,
)
console = Console()

# Add subcommands
app.add_typer(profile.app, name="profile")
app.add_typer(trigger.app, name="trigger")
app.add_typer(backup.app, name="backup")


@app.callback()
def main(
    debug: bool = typer.Option(False, "--debug", help="Show debug logging on standard error"),
    log_file: Optional[str] = typer.Option(
        None, "--log-file", help="Also write detailed JSON logs to this file"
    ),
):
    """Azure Operations Manager."""
    logging_config = LoggingConfig.from_dict(config.get_logging_config())
    if debug:
        logging_config.level = LogLevel.DEBUG
    if log_file:
        logging_config.log_file = log_file
    setup_logging(logging_config)


@app.command()
def version():
    """Show the application version and exit."""
    console.print(f"azopsman version: {__version__}")
    raise typer.Exit()


if __name__ == "__main__":
    app()
