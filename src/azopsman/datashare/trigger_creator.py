"""Scheduled trigger creation for Data Share accounts."""

import logging
from enum import Enum
from typing import Any, Callable, Optional, Protocol

from .models import TriggerRequest, TriggerSpec, TriggerView

logger = logging.getLogger(__name__)

SubmitTrigger = Callable[[str, str, Optional[str], str, TriggerSpec], Any]


class TriggerClient(Protocol):
    """Operations of the Data Share service used to create triggers."""

    def create(
        self,
        resource_group_name: str,
        account_name: str,
        share_subscription_name: Optional[str],
        trigger_name: str,
        trigger: TriggerSpec,
    ) -> Any:
        """Create a trigger and wait for the service to finish provisioning it."""
        ...

    def begin_create(
        self,
        resource_group_name: str,
        account_name: str,
        share_subscription_name: Optional[str],
        trigger_name: str,
        trigger: TriggerSpec,
    ) -> Any:
        """Submit a trigger and return it as accepted, without waiting."""
        ...


class SubmissionMode(Enum):
    """How a trigger is submitted to the service."""

    SYNCHRONOUS = "synchronous"
    JOB = "job"

    @classmethod
    def from_as_job(cls, as_job: bool) -> "SubmissionMode":
        return cls.JOB if as_job else cls.SYNCHRONOUS

    def strategy(self, client: TriggerClient) -> SubmitTrigger:
        """Return the client call used for this mode."""
        if self is SubmissionMode.JOB:
            return client.begin_create
        return client.create


class TriggerCreator:
    """Builds scheduled triggers and submits them to a Data Share account."""

    def __init__(self, client: TriggerClient):
        """
        Initialize the trigger creator.

        Args:
            client: Data Share trigger client
        """
        self.client = client

    def create(self, request: TriggerRequest) -> TriggerView:
        """
        Create a scheduled trigger.

        Args:
            request: Trigger parameters

        Returns:
            TriggerView of the trigger returned by the service

        Raises:
            ValidationError: If the request is invalid; raised before any network call
        """
        request.validate()
        spec = request.to_spec()
        mode = SubmissionMode.from_as_job(request.as_job)

        logger.debug(
            f"Creating trigger {request.name} on account {request.account_name} "
            f"(interval={spec.recurrence_interval.value}, mode={mode.value})"
        )

        submit = mode.strategy(self.client)
        trigger = submit(
            request.resource_group_name,
            request.account_name,
            request.share_subscription_name,
            request.name,
            spec,
        )

        logger.debug(f"Trigger {request.name} submitted")
        return TriggerView.from_trigger(trigger)
