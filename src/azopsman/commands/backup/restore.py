"""Restore backup item command for azopsman."""

from pathlib import Path
from typing import Optional

import typer

from ...backup_restore.identity import StorageIdentityResolver
from ...backup_restore.models import RestoreRequest
from ...backup_restore.providers import ProviderRegistry
from ...backup_restore.restore_submitter import RestoreSubmitter
from ...utils.error_handler import handle_command_error
from ..common import console, create_client_manager, print_json, profile_option
from .helpers import display_job, load_recovery_point


def restore_backup_item(
    recovery_point_file: Path = typer.Argument(
        ...,
        exists=True,
        dir_okay=False,
        readable=True,
        help="JSON or YAML file describing the recovery point to restore from",
    ),
    storage_account_name: str = typer.Option(
        ...,
        "--storage-account-name",
        help="Storage account the disks are restored into",
    ),
    storage_account_resource_group: str = typer.Option(
        ...,
        "--storage-account-resource-group",
        help="Resource group of the storage account",
    ),
    output_format: str = typer.Option(
        "table", "--format", "-f", help="Output format: table or json"
    ),
    profile: Optional[str] = profile_option(),
):
    """
    Restore a backed-up item from a recovery point.

    Resolves the target storage account (classic storage first, then current
    storage), selects the backup provider for the recovery point's workload and
    submits the restore. The restore job is not awaited; its handle is printed.

    Examples:
        # Restore VM disks into a storage account
        $ azopsman backup restore rp.json --storage-account-name mystorage \\
            --storage-account-resource-group storage-rg

        # Print the job handle as JSON
        $ azopsman backup restore rp.yaml --storage-account-name mystorage \\
            --storage-account-resource-group storage-rg --format json
    """
    if output_format.lower() not in ("table", "json"):
        console.print(f"[red]Error: Invalid output format '{output_format}'.[/red]")
        console.print("[yellow]Valid formats: table, json[/yellow]")
        raise typer.Exit(1)

    try:
        recovery_point = load_recovery_point(recovery_point_file)
        request = RestoreRequest(
            recovery_point=recovery_point,
            storage_account_name=storage_account_name,
            storage_account_resource_group_name=storage_account_resource_group,
        )

        client_manager = create_client_manager(profile)
        submitter = RestoreSubmitter(
            resolver=StorageIdentityResolver(client_manager.get_resource_client()),
            registry=ProviderRegistry(client_manager.get_backup_client()),
        )
        job = submitter.submit(request)

    except (typer.Exit, typer.BadParameter):
        raise
    except Exception as e:
        handle_command_error(e, "RestoreBackupItem")
        raise typer.Exit(1)

    if output_format.lower() == "json":
        print_json(job.to_dict())
        return

    console.print("[green]Restore submitted.[/green]")
    display_job(job)
