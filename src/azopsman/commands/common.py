"""Common command infrastructure for azopsman CLI commands.

This module provides shared functionality for all CLI commands including:
- Standard options
- Profile resolution
- Azure client manager creation
- Confirmation prompts
"""

import json
import logging
import os
from typing import Any, Dict, Optional, Tuple

import typer
from rich.console import Console

from ..azure_clients.manager import AzureClientManager
from ..utils.config import Config

# Shared instances
console = Console()
config = Config()
logger = logging.getLogger(__name__)

SUBSCRIPTION_ENV_VAR = "AZURE_SUBSCRIPTION_ID"


def profile_option() -> Any:
    """
    Create a standardized --profile option for commands.

    Returns:
        Typer option for azopsman profile selection
    """
    return typer.Option(
        None, "--profile", "-p", help="Profile to use (uses default profile if not specified)"
    )


def force_option() -> Any:
    """Create a --force option that skips confirmation prompts."""
    return typer.Option(False, "--force", "-f", help="Skip confirmation prompts")


def validate_profile(profile: Optional[str] = None) -> Tuple[Optional[str], Dict[str, Any]]:
    """
    Resolve the profile to use and return its name and data.

    Resolution order: the explicit profile, the configured default profile,
    then the AZURE_SUBSCRIPTION_ID environment variable.

    Args:
        profile: Profile name given on the command line

    Returns:
        Tuple of (profile_name, profile_data); profile_name is None when the
        subscription comes from the environment

    Raises:
        typer.Exit: If no subscription can be determined
    """
    profile_name = profile or config.get("default_profile")
    profiles = config.get("profiles", {}) or {}

    if profile_name:
        if profile_name not in profiles:
            console.print(f"[red]Error: Profile '{profile_name}' does not exist.[/red]")
            console.print("Use 'azopsman profile add' to create a new profile.")
            raise typer.Exit(1)
        profile_data = profiles[profile_name]
        if not profile_data.get("subscription_id"):
            console.print(
                f"[red]Error: Profile '{profile_name}' has no subscription configured.[/red]"
            )
            console.print(
                f"Use 'azopsman profile update {profile_name} --subscription <id>' to set one."
            )
            raise typer.Exit(1)
        return profile_name, profile_data

    subscription_id = os.environ.get(SUBSCRIPTION_ENV_VAR)
    if subscription_id:
        logger.debug(f"Using subscription from {SUBSCRIPTION_ENV_VAR}")
        return None, {"subscription_id": subscription_id}

    console.print("[red]Error: No profile specified and no default profile set.[/red]")
    console.print(
        f"Use --profile, set a default profile with 'azopsman profile set-default', "
        f"or export {SUBSCRIPTION_ENV_VAR}."
    )
    raise typer.Exit(1)


def create_client_manager(profile: Optional[str] = None) -> AzureClientManager:
    """
    Validate the profile and create an Azure client manager for it.

    Args:
        profile: Profile name given on the command line

    Returns:
        AzureClientManager for the profile's subscription
    """
    profile_name, profile_data = validate_profile(profile)
    logger.debug(
        f"Created Azure client manager: profile={profile_name}, "
        f"subscription={profile_data['subscription_id']}"
    )
    return AzureClientManager(subscription_id=profile_data["subscription_id"], profile=profile_name)


def confirm_action(force: bool, message: str) -> None:
    """
    Ask the user to confirm an action unless --force was given.

    Raises:
        typer.Exit: If the user declines
    """
    if force:
        return
    if not typer.confirm(message):
        console.print("Operation cancelled.")
        raise typer.Exit(0)


def print_json(data: Dict[str, Any]) -> None:
    """Print a dictionary as JSON on standard output."""
    typer.echo(json.dumps(data, indent=2, default=str))
