"""
Backup providers for restore operations.

A backup provider builds the restore request for one kind of protected workload
and submits it to the backup service. Providers are selected through an explicit
table keyed by (workload type, backup management type); every pair maps to at
most one provider and an unknown pair is an error.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Optional, Protocol, Tuple

from ..exceptions import UnsupportedProviderError, ValidationError
from .models import BackupManagementType, JobHandle, RestoreContext, WorkloadType

logger = logging.getLogger(__name__)


class BackupServiceClient(Protocol):
    """Backup service operation used to submit restores."""

    def trigger_restore(
        self,
        vault_name: str,
        vault_resource_group: str,
        fabric_name: str,
        container_name: str,
        item_name: str,
        recovery_point_id: str,
        payload: Dict[str, Any],
    ) -> JobHandle:
        """Submit a restore request and return the handle of the created job."""
        ...


class BackupProvider(ABC):
    """Builds and submits workload-specific restore requests."""

    def __init__(self, client: BackupServiceClient):
        self.client = client

    @abstractmethod
    def build_restore_request(self, context: RestoreContext) -> Dict[str, Any]:
        """
        Build the restore request payload for a recovery point.

        Args:
            context: Recovery point and resolved storage account

        Returns:
            Restore request resource in its REST representation
        """
        pass

    def trigger_restore(self, context: RestoreContext) -> JobHandle:
        """
        Submit a restore for the recovery point in ``context``.

        Args:
            context: Recovery point and resolved storage account

        Returns:
            JobHandle of the submitted restore
        """
        payload = self.build_restore_request(context)
        rp = context.recovery_point
        return self.client.trigger_restore(
            rp.vault_name,
            rp.vault_resource_group,
            rp.fabric_name,
            rp.container_name,
            rp.item_name,
            rp.recovery_point_id,
            payload,
        )


class IaasVmProvider(BackupProvider):
    """Restores Azure IaaS virtual machine disks into a storage account."""

    CLASSIC = "Classic"
    COMPUTE = "Compute"

    @classmethod
    def vm_flavour(cls, container_name: str) -> str:
        """
        Return Classic or Compute for an IaaS VM container name.

        Full names carry the flavour in the second segment
        ("IaasVMContainer;iaasvmcontainerv2;rg;vm"); short names carry it in
        the first ("iaasvmcontainerv2;rg;vm").
        """
        segments = [segment.lower() for segment in container_name.split(";")]
        container_type = segments[0]
        if container_type == "iaasvmcontainer" and len(segments) > 1:
            if segments[1] in ("iaasvmcontainer", "iaasvmcontainerv2"):
                container_type = segments[1]
        if container_type == "iaasvmcontainer":
            return cls.CLASSIC
        return cls.COMPUTE

    def build_restore_request(self, context: RestoreContext) -> Dict[str, Any]:
        rp = context.recovery_point
        storage = context.storage_account

        vm_type = self.vm_flavour(rp.container_name)
        storage_type = self.CLASSIC if storage.is_classic else self.COMPUTE
        if vm_type != storage_type:
            raise ValidationError(
                "StorageAccountName",
                f"storage account type should match the virtual machine type ({vm_type})",
            )

        return {
            "properties": {
                "objectType": "IaasVMRestoreRequest",
                "recoveryPointId": rp.recovery_point_id,
                "recoveryType": "RestoreDisks",
                "sourceResourceId": rp.source_resource_id,
                "storageAccountId": storage.id,
                "region": storage.location,
                "createNewCloudService": False,
                "originalStorageAccountOption": False,
            }
        }


ProviderFactory = Callable[[BackupServiceClient], BackupProvider]

DEFAULT_PROVIDERS: Dict[Tuple[str, str], ProviderFactory] = {
    (WorkloadType.AZURE_VM.value, BackupManagementType.AZURE_VM.value): IaasVmProvider,
}


def _key(workload_type: Any, backup_management_type: Any) -> Tuple[str, str]:
    return (
        str(getattr(workload_type, "value", workload_type)),
        str(getattr(backup_management_type, "value", backup_management_type)),
    )


class ProviderRegistry:
    """Maps (workload type, backup management type) pairs to backup providers."""

    def __init__(
        self,
        client: BackupServiceClient,
        providers: Optional[Dict[Tuple[str, str], ProviderFactory]] = None,
    ):
        """
        Initialize the registry.

        Args:
            client: Backup service client handed to every provider
            providers: Provider factories keyed by (workload type, management type)
        """
        self.client = client
        self._providers: Dict[Tuple[str, str], ProviderFactory] = {}
        for (workload_type, management_type), factory in (
            providers if providers is not None else DEFAULT_PROVIDERS
        ).items():
            self.register(workload_type, management_type, factory)

    def register(
        self, workload_type: Any, backup_management_type: Any, factory: ProviderFactory
    ) -> None:
        """Register the provider for a workload/management pair."""
        key = _key(workload_type, backup_management_type)
        if key in self._providers:
            raise ValueError(f"A provider is already registered for {key}")
        self._providers[key] = factory

    def get_provider(self, workload_type: Any, backup_management_type: Any) -> BackupProvider:
        """
        Select the provider for a workload/management pair.

        Raises:
            UnsupportedProviderError: If no provider is registered for the pair
        """
        key = _key(workload_type, backup_management_type)
        factory = self._providers.get(key)
        if factory is None:
            raise UnsupportedProviderError(*key)

        logger.debug(f"Selected {getattr(factory, '__name__', factory)} for {key}")
        return factory(self.client)
