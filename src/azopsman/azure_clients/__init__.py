"""Azure service client management.

This package provides the Azure SDK clients used by azopsman commands, wrapped
in adapters that expose only the operations the commands need.
"""

from .manager import (
    AzureClientManager,
    AzureResourceLookupClient,
    DataShareTriggerClient,
    RecoveryServicesBackupAdapter,
)

__all__ = [
    "AzureClientManager",
    "AzureResourceLookupClient",
    "DataShareTriggerClient",
    "RecoveryServicesBackupAdapter",
]
