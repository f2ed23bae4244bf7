"""Data Share trigger creation."""

from .models import (
    RecurrenceInterval,
    SynchronizationMode,
    TriggerRequest,
    TriggerSpec,
    TriggerView,
)
from .trigger_creator import SubmissionMode, TriggerClient, TriggerCreator

__all__ = [
    "RecurrenceInterval",
    "SynchronizationMode",
    "TriggerSpec",
    "TriggerRequest",
    "TriggerView",
    "SubmissionMode",
    "TriggerClient",
    "TriggerCreator",
]
