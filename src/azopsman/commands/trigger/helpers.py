"""Shared utilities for Data Share trigger commands."""

from datetime import datetime, timezone

import typer
from rich.table import Table

from ...datashare.models import TriggerView
from ..common import console


def parse_synchronization_time(value: str) -> datetime:
    """
    Parse an ISO 8601 synchronization time.

    A trailing "Z" is accepted and naive times are taken as UTC.

    Raises:
        typer.BadParameter: If the value is not a valid ISO 8601 timestamp
    """
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        raise typer.BadParameter(
            f"'{value}' is not an ISO 8601 timestamp, e.g. 2024-01-01T00:00:00Z"
        )
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def display_trigger(trigger: TriggerView) -> None:
    """Display a trigger as a table."""
    table = Table(title=f"Trigger: {trigger.name}", show_header=False)
    table.add_column("Field", style="cyan")
    table.add_column("Value")

    for key, value in trigger.to_dict().items():
        if value is not None:
            table.add_row(key.replace("_", " ").title(), str(value))

    console.print(table)
