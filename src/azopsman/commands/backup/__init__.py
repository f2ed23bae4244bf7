"""Backup commands for azopsman.

Commands:
    restore: Restore a backed-up item from a recovery point
"""

import typer

from . import helpers, restore
from .restore import restore_backup_item

app = typer.Typer(help="Restore Azure Backup items from recovery points.")


@app.callback()
def backup_callback():
    """Restore Azure Backup items from recovery points."""


app.command("restore")(restore_backup_item)

__all__ = ["app", "restore", "helpers"]
