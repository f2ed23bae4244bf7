"""Create trigger command for azopsman."""

from typing import Optional

import typer

from ...datashare.models import RecurrenceInterval, TriggerRequest
from ...datashare.trigger_creator import TriggerCreator
from ...utils.error_handler import handle_command_error
from ..common import (
    confirm_action,
    console,
    create_client_manager,
    force_option,
    print_json,
    profile_option,
)
from .helpers import display_trigger, parse_synchronization_time


def create_trigger(
    resource_group: str = typer.Option(
        ...,
        "--resource-group",
        "-g",
        help="The resource group name of the Data Share account",
    ),
    account_name: str = typer.Option(..., "--account-name", "-a", help="Data Share account name"),
    share_subscription_name: Optional[str] = typer.Option(
        None, "--share-subscription-name", "-s", help="Data Share subscription name"
    ),
    name: str = typer.Option(..., "--name", "-n", help="Data Share trigger name"),
    recurrence_interval: RecurrenceInterval = typer.Option(
        ...,
        "--recurrence-interval",
        "-i",
        case_sensitive=False,
        help="The recurrence interval for the trigger (Day or Hour)",
    ),
    synchronization_time: str = typer.Option(
        ...,
        "--synchronization-time",
        "-t",
        help="The start time of the scheduled synchronization (ISO 8601)",
    ),
    as_job: bool = typer.Option(
        False, "--as-job", help="Submit the trigger and return without waiting for provisioning"
    ),
    pass_thru: bool = typer.Option(
        False, "--pass-thru", help="Write the created trigger to standard output as JSON"
    ),
    force: bool = force_option(),
    profile: Optional[str] = profile_option(),
):
    """
    Create a scheduled trigger on a Data Share subscription.

    The trigger synchronizes the share subscription incrementally every hour or
    every day, starting at the given synchronization time.

    Examples:
        # Create a daily trigger
        $ azopsman trigger create -g rg1 -a account1 -s subscription1 -n daily \\
            --recurrence-interval Day --synchronization-time 2024-01-01T00:00:00Z

        # Submit without waiting and print the trigger as JSON
        $ azopsman trigger create -g rg1 -a account1 -s subscription1 -n hourly \\
            -i Hour -t 2024-01-01T06:30:00Z --as-job --pass-thru --force
    """
    sync_time = parse_synchronization_time(synchronization_time)

    try:
        request = TriggerRequest(
            resource_group_name=resource_group,
            account_name=account_name,
            share_subscription_name=share_subscription_name,
            name=name,
            recurrence_interval=recurrence_interval,
            synchronization_time=sync_time,
            as_job=as_job,
        )
        request.validate()

        confirm_action(force, f"Create trigger '{name}' on Data Share account '{account_name}'?")

        client_manager = create_client_manager(profile)
        creator = TriggerCreator(client_manager.get_datashare_client())
        trigger = creator.create(request)

    except (typer.Exit, typer.Abort):
        raise
    except Exception as e:
        handle_command_error(e, "CreateTrigger")
        raise typer.Exit(1)

    if pass_thru:
        print_json(trigger.to_dict())
        return

    if as_job:
        console.print(f"[green]Trigger '{name}' submitted.[/green]")
    else:
        console.print(f"[green]Trigger '{name}' created successfully![/green]")
    display_trigger(trigger)
