"""
Data models for Data Share trigger operations.

This module defines the scheduled-trigger description submitted to a Data Share
account, the request collected from the command line, and the projection of the
trigger returned by the service.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional, Union

from ..exceptions import ValidationError


class RecurrenceInterval(str, Enum):
    """Intervals at which a scheduled trigger synchronizes a share."""

    HOUR = "Hour"
    DAY = "Day"

    @classmethod
    def parse(cls, value: Union[str, "RecurrenceInterval"]) -> "RecurrenceInterval":
        """Parse an interval case-insensitively."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            for member in cls:
                if member.value.lower() == value.strip().lower():
                    return member
        valid = ", ".join(member.value for member in cls)
        raise ValidationError("RecurrenceInterval", f"'{value}' is not one of: {valid}")


class SynchronizationMode(str, Enum):
    """Synchronization modes supported for scheduled triggers."""

    INCREMENTAL = "Incremental"


@dataclass(frozen=True)
class TriggerSpec:
    """Scheduled trigger description sent to the Data Share service."""

    recurrence_interval: RecurrenceInterval
    synchronization_time: datetime
    synchronization_mode: SynchronizationMode = field(
        default=SynchronizationMode.INCREMENTAL, init=False
    )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the REST representation of a scheduled trigger."""
        return {
            "kind": "ScheduleBased",
            "properties": {
                "recurrenceInterval": self.recurrence_interval.value,
                "synchronizationTime": self.synchronization_time.isoformat(),
                "synchronizationMode": self.synchronization_mode.value,
            },
        }


@dataclass
class TriggerRequest:
    """Parameters for creating a scheduled trigger."""

    resource_group_name: str
    account_name: str
    name: str
    recurrence_interval: Union[str, RecurrenceInterval]
    synchronization_time: Optional[datetime]
    share_subscription_name: Optional[str] = None
    as_job: bool = False

    def validate(self) -> None:
        """
        Validate mandatory fields and normalise the recurrence interval.

        Raises:
            ValidationError: If a mandatory field is empty or the interval is unknown
        """
        for field_name, value in (
            ("ResourceGroupName", self.resource_group_name),
            ("AccountName", self.account_name),
            ("Name", self.name),
        ):
            if not value or not str(value).strip():
                raise ValidationError(field_name, "value cannot be empty")

        if self.share_subscription_name is not None and not self.share_subscription_name.strip():
            raise ValidationError("ShareSubscriptionName", "value cannot be empty")

        if self.synchronization_time is None:
            raise ValidationError("SynchronizationTime", "value cannot be empty")

        self.recurrence_interval = RecurrenceInterval.parse(self.recurrence_interval)

    def to_spec(self) -> TriggerSpec:
        """Build the trigger description for this request."""
        return TriggerSpec(
            recurrence_interval=RecurrenceInterval.parse(self.recurrence_interval),
            synchronization_time=self.synchronization_time,
        )


def _enum_value(value: Any) -> Any:
    return getattr(value, "value", value)


@dataclass
class TriggerView:
    """Output representation of a Data Share trigger."""

    name: Optional[str]
    recurrence_interval: Optional[str]
    synchronization_time: Optional[datetime]
    synchronization_mode: Optional[str]
    id: Optional[str] = None
    type: Optional[str] = None
    provisioning_state: Optional[str] = None
    trigger_status: Optional[str] = None
    created_at: Optional[datetime] = None
    user_name: Optional[str] = None

    @classmethod
    def from_trigger(cls, trigger: Any) -> "TriggerView":
        """Project a trigger object returned by the service."""
        return cls(
            name=getattr(trigger, "name", None),
            recurrence_interval=_enum_value(getattr(trigger, "recurrence_interval", None)),
            synchronization_time=getattr(trigger, "synchronization_time", None),
            synchronization_mode=_enum_value(getattr(trigger, "synchronization_mode", None)),
            id=getattr(trigger, "id", None),
            type=getattr(trigger, "type", None),
            provisioning_state=_enum_value(getattr(trigger, "provisioning_state", None)),
            trigger_status=_enum_value(getattr(trigger, "trigger_status", None)),
            created_at=getattr(trigger, "created_at", None),
            user_name=getattr(trigger, "user_name", None),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type,
            "recurrence_interval": self.recurrence_interval,
            "synchronization_mode": self.synchronization_mode,
            "synchronization_time": (
                self.synchronization_time.isoformat() if self.synchronization_time else None
            ),
            "provisioning_state": self.provisioning_state,
            "trigger_status": self.trigger_status,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "user_name": self.user_name,
        }
