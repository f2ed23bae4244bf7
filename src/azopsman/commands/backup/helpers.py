"""Shared utilities for backup commands."""

import json
from pathlib import Path

import typer
import yaml
from rich.table import Table

from ...backup_restore.models import JobHandle, RecoveryPoint
from ..common import console


def load_recovery_point(path: Path) -> RecoveryPoint:
    """
    Load a recovery point reference from a JSON or YAML file.

    Raises:
        typer.BadParameter: If the file cannot be read or parsed
        ValidationError: If a mandatory recovery point field is missing
    """
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise typer.BadParameter(f"Cannot read recovery point file {path}: {e}")

    try:
        if path.suffix.lower() in (".yaml", ".yml"):
            data = yaml.safe_load(text)
        else:
            data = json.loads(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise typer.BadParameter(f"Recovery point file {path} is not valid: {e}")

    return RecoveryPoint.from_dict(data)


def display_job(job: JobHandle) -> None:
    """Display a submitted job as a table."""
    table = Table(title="Restore Job", show_header=False)
    table.add_column("Field", style="cyan")
    table.add_column("Value")

    table.add_row("Operation", job.operation)
    table.add_row("Operation ID", job.operation_id)
    if job.vault_name:
        table.add_row("Vault", f"{job.vault_name} ({job.vault_resource_group})")
    table.add_row("Submitted At", job.submitted_at.strftime("%Y-%m-%d %H:%M:%S %Z"))
    if job.tracking_url:
        table.add_row("Tracking URL", job.tracking_url)

    console.print(table)
