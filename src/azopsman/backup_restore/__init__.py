"""
Backup item restore.

This package resolves the storage account a backup item is restored into,
selects the backup provider for the recovery point's workload and submits the
restore job.
"""

from .identity import STORAGE_IDENTITY_CANDIDATES, ResourceLookupClient, StorageIdentityResolver
from .models import (
    BackupManagementType,
    JobHandle,
    RecoveryPoint,
    ResourceIdentity,
    RestoreContext,
    RestoreRequest,
    StorageAccountInfo,
    WorkloadType,
)
from .providers import BackupProvider, BackupServiceClient, IaasVmProvider, ProviderRegistry
from .restore_submitter import RestoreSubmitter

__all__ = [
    "STORAGE_IDENTITY_CANDIDATES",
    "ResourceLookupClient",
    "StorageIdentityResolver",
    "BackupManagementType",
    "JobHandle",
    "RecoveryPoint",
    "ResourceIdentity",
    "RestoreContext",
    "RestoreRequest",
    "StorageAccountInfo",
    "WorkloadType",
    "BackupProvider",
    "BackupServiceClient",
    "IaasVmProvider",
    "ProviderRegistry",
    "RestoreSubmitter",
]
