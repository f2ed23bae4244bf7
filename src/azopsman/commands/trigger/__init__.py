"""Data Share trigger commands for azopsman.

Commands:
    create: Create a scheduled trigger on a share subscription
"""

import typer

from . import create, helpers
from .create import create_trigger

app = typer.Typer(help="Manage Azure Data Share triggers.")


@app.callback()
def trigger_callback():
    """Manage Azure Data Share triggers."""


app.command("create")(create_trigger)

__all__ = ["app", "create", "helpers"]
