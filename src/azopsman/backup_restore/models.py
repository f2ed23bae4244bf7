"""
Data models for backup item restore operations.

This module defines the recovery point reference a restore starts from, the
storage account identity used to resolve the restore target, and the job handle
returned once the restore has been submitted.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional
from urllib.parse import urlparse

from ..exceptions import ValidationError


class WorkloadType(str, Enum):
    """Workload types a recovery point can belong to."""

    AZURE_VM = "AzureVM"
    AZURE_SQL_DATABASE = "AzureSQLDatabase"
    AZURE_FILES = "AzureFiles"
    WINDOWS_SERVER = "WindowsServer"


class BackupManagementType(str, Enum):
    """Backup management types that protect a workload."""

    AZURE_VM = "AzureVM"
    AZURE_SQL = "AzureSQL"
    AZURE_STORAGE = "AzureStorage"
    MAB = "MAB"
    DPM = "DPM"
    AZURE_BACKUP_SERVER = "AzureBackupServer"


@dataclass(frozen=True)
class ResourceIdentity:
    """Identity used to look up a resource through the resource manager."""

    resource_name: str
    resource_provider_namespace: str
    resource_provider_api_version: str
    resource_type: str = ""


@dataclass
class RecoveryPoint:
    """Reference to a backed-up state of a workload."""

    recovery_point_id: str
    workload_type: str
    backup_management_type: str
    vault_name: str
    vault_resource_group: str
    container_name: str
    item_name: str
    source_resource_id: Optional[str] = None
    fabric_name: str = "Azure"
    recovery_point_time: Optional[datetime] = None

    REQUIRED_FIELDS = (
        "recovery_point_id",
        "workload_type",
        "backup_management_type",
        "vault_name",
        "vault_resource_group",
        "container_name",
        "item_name",
    )

    # camelCase keys as found in exported recovery points
    KEY_ALIASES = {
        "recoveryPointId": "recovery_point_id",
        "workloadType": "workload_type",
        "backupManagementType": "backup_management_type",
        "vaultName": "vault_name",
        "vaultResourceGroup": "vault_resource_group",
        "containerName": "container_name",
        "itemName": "item_name",
        "sourceResourceId": "source_resource_id",
        "fabricName": "fabric_name",
        "recoveryPointTime": "recovery_point_time",
    }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RecoveryPoint":
        """
        Create from dictionary.

        Raises:
            ValidationError: If a mandatory field is missing or empty
        """
        if not isinstance(data, dict):
            raise ValidationError("RecoveryPoint", "expected a mapping of recovery point fields")

        values = {cls.KEY_ALIASES.get(key, key): value for key, value in data.items()}

        for name in cls.REQUIRED_FIELDS:
            if not values.get(name):
                raise ValidationError("RecoveryPoint", f"missing required field '{name}'")

        recovery_point_time = values.get("recovery_point_time")
        if isinstance(recovery_point_time, str):
            try:
                recovery_point_time = datetime.fromisoformat(
                    recovery_point_time.replace("Z", "+00:00")
                )
            except ValueError:
                raise ValidationError(
                    "RecoveryPoint", f"invalid recovery_point_time '{recovery_point_time}'"
                )

        return cls(
            recovery_point_id=str(values["recovery_point_id"]),
            workload_type=str(values["workload_type"]),
            backup_management_type=str(values["backup_management_type"]),
            vault_name=str(values["vault_name"]),
            vault_resource_group=str(values["vault_resource_group"]),
            container_name=str(values["container_name"]),
            item_name=str(values["item_name"]),
            source_resource_id=values.get("source_resource_id"),
            fabric_name=values.get("fabric_name") or "Azure",
            recovery_point_time=recovery_point_time,
        )


@dataclass
class RestoreRequest:
    """Parameters for restoring a backup item to a storage account."""

    recovery_point: RecoveryPoint
    storage_account_name: str
    storage_account_resource_group_name: str

    def __post_init__(self):
        """Validate mandatory fields and lowercase the storage account name."""
        if self.recovery_point is None:
            raise ValidationError("RecoveryPoint", "value cannot be empty")
        if not self.storage_account_name or not self.storage_account_name.strip():
            raise ValidationError("StorageAccountName", "value cannot be empty")
        if (
            not self.storage_account_resource_group_name
            or not self.storage_account_resource_group_name.strip()
        ):
            raise ValidationError("StorageAccountResourceGroupName", "value cannot be empty")
        self.storage_account_name = self.storage_account_name.strip().lower()


@dataclass(frozen=True)
class StorageAccountInfo:
    """Resolved storage account used as the restore target."""

    id: str
    location: str
    type: str
    identity: Optional[ResourceIdentity] = None

    @property
    def is_classic(self) -> bool:
        return (self.type or "").lower().startswith("microsoft.classicstorage/")


@dataclass(frozen=True)
class RestoreContext:
    """Everything a backup provider needs to build a restore request."""

    recovery_point: RecoveryPoint
    storage_account: StorageAccountInfo


@dataclass
class JobHandle:
    """Handle of an asynchronous operation submitted to the backup service."""

    operation_id: str
    tracking_url: Optional[str] = None
    operation: str = "Restore"
    vault_name: Optional[str] = None
    vault_resource_group: Optional[str] = None
    submitted_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def from_tracking_url(cls, tracking_url: str, **kwargs: Any) -> "JobHandle":
        """Build a handle from an Azure-AsyncOperation or Location URL."""
        path = urlparse(tracking_url).path.rstrip("/")
        operation_id = path.rsplit("/", 1)[-1]
        return cls(operation_id=operation_id, tracking_url=tracking_url, **kwargs)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "operation_id": self.operation_id,
            "operation": self.operation,
            "tracking_url": self.tracking_url,
            "vault_name": self.vault_name,
            "vault_resource_group": self.vault_resource_group,
            "submitted_at": self.submitted_at.isoformat(),
        }
