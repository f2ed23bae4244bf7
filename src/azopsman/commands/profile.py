"""Profile management commands for azopsman."""

from typing import Optional

import typer
from rich.table import Table

from .common import config, console

app = typer.Typer(help="Manage subscription profiles for azopsman operations.")


@app.command("list")
def list_profiles():
    """List all configured profiles."""
    profiles = config.get("profiles", {})

    if not profiles:
        console.print("No profiles configured. Use 'azopsman profile add' to add a profile.")
        return

    table = Table(title="Profiles")
    table.add_column("Name", style="cyan")
    table.add_column("Subscription", style="green")
    table.add_column("Tenant")
    table.add_column("Default", style="yellow")

    default_profile = config.get("default_profile")

    for name, profile_data in profiles.items():
        is_default = "✓" if name == default_profile else ""
        table.add_row(
            name,
            profile_data.get("subscription_id", ""),
            profile_data.get("tenant_id") or "",
            is_default,
        )

    console.print(table)


@app.command("add")
def add_profile(
    name: str = typer.Argument(...),
    subscription: str = typer.Option(..., "--subscription", "-s", help="Azure subscription ID"),
    tenant: Optional[str] = typer.Option(None, "--tenant", "-t", help="Azure tenant ID"),
    set_default: bool = typer.Option(False, "--default", "-d", help="Set as default profile"),
):
    """Add a new profile."""
    profiles = config.get("profiles", {}) or {}

    if name in profiles:
        console.print(
            f"[yellow]Profile '{name}' already exists. Use 'azopsman profile update' to modify it.[/yellow]"
        )
        return

    profiles[name] = {"subscription_id": subscription}
    if tenant:
        profiles[name]["tenant_id"] = tenant

    config.set("profiles", profiles)

    if set_default or not config.get("default_profile"):
        config.set("default_profile", name)
        console.print(f"[green]Profile '{name}' added and set as default.[/green]")
    else:
        console.print(f"[green]Profile '{name}' added.[/green]")


@app.command("update")
def update_profile(
    name: str = typer.Argument(...),
    subscription: Optional[str] = typer.Option(
        None, "--subscription", "-s", help="Azure subscription ID"
    ),
    tenant: Optional[str] = typer.Option(None, "--tenant", "-t", help="Azure tenant ID"),
    set_default: bool = typer.Option(False, "--default", "-d", help="Set as default profile"),
):
    """Update an existing profile."""
    profiles = config.get("profiles", {}) or {}

    if name not in profiles:
        console.print(
            f"[red]Profile '{name}' does not exist. Use 'azopsman profile add' to create it.[/red]"
        )
        raise typer.Exit(1)

    if subscription:
        profiles[name]["subscription_id"] = subscription
    if tenant:
        profiles[name]["tenant_id"] = tenant

    config.set("profiles", profiles)

    if set_default:
        config.set("default_profile", name)
        console.print(f"[green]Profile '{name}' updated and set as default.[/green]")
    else:
        console.print(f"[green]Profile '{name}' updated.[/green]")


@app.command("remove")
def remove_profile(
    name: str = typer.Argument(...),
    force: bool = typer.Option(False, "--force", "-f", help="Force removal without confirmation"),
):
    """Remove a profile."""
    profiles = config.get("profiles", {}) or {}

    if name not in profiles:
        console.print(f"[red]Profile '{name}' does not exist.[/red]")
        raise typer.Exit(1)

    if not force:
        confirm = typer.confirm(f"Are you sure you want to remove profile '{name}'?")
        if not confirm:
            console.print("Operation cancelled.")
            return

    del profiles[name]
    config.set("profiles", profiles)

    if config.get("default_profile") == name:
        if profiles:
            new_default = next(iter(profiles.keys()))
            config.set("default_profile", new_default)
            console.print(f"[yellow]Default profile changed to '{new_default}'.[/yellow]")
        else:
            config.delete("default_profile")

    console.print(f"[green]Profile '{name}' removed.[/green]")


@app.command("set-default")
def set_default_profile(
    name: str = typer.Argument(...),
):
    """Set the default profile."""
    profiles = config.get("profiles", {}) or {}

    if name not in profiles:
        console.print(
            f"[red]Profile '{name}' does not exist. Use 'azopsman profile add' to create it.[/red]"
        )
        raise typer.Exit(1)

    config.set("default_profile", name)
    console.print(f"[green]Default profile set to '{name}'.[/green]")
