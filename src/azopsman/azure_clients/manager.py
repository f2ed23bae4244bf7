"""Azure client utilities for azopsman."""

import logging
from typing import Any, Dict, Optional

from azure.identity import DefaultAzureCredential
from azure.mgmt.datashare import DataShareManagementClient
from azure.mgmt.datashare.models import ScheduledTrigger
from azure.mgmt.recoveryservicesbackup.activestamp import RecoveryServicesBackupClient
from azure.mgmt.recoveryservicesbackup.activestamp.models import RestoreRequestResource
from azure.mgmt.resource import ResourceManagementClient

from ..backup_restore.models import JobHandle, ResourceIdentity
from ..datashare.models import TriggerSpec
from ..exceptions import SubmissionError, ValidationError

logger = logging.getLogger(__name__)


def _response_headers(pipeline_response: Any, deserialized: Any, response_headers: Any) -> Any:
    return pipeline_response.http_response.headers


class AzureResourceLookupClient:
    """Looks up resources through the Azure Resource Manager generic resource API."""

    def __init__(self, client: ResourceManagementClient):
        self._client = client

    def get_resource(self, resource_group_name: str, identity: ResourceIdentity) -> Any:
        """
        Get a resource by identity.

        The provider namespace may carry the resource type
        ("Microsoft.Storage/storageAccounts"); it is split into the namespace and
        type path segments expected by the API.
        """
        namespace, _, namespace_type = identity.resource_provider_namespace.partition("/")
        resource_type = identity.resource_type or namespace_type

        return self._client.resources.get(
            resource_group_name=resource_group_name,
            resource_provider_namespace=namespace,
            parent_resource_path="",
            resource_type=resource_type,
            resource_name=identity.resource_name,
            api_version=identity.resource_provider_api_version,
        )


class DataShareTriggerClient:
    """Creates Data Share triggers."""

    def __init__(self, client: DataShareManagementClient):
        self._client = client

    @staticmethod
    def _to_model(trigger: TriggerSpec) -> ScheduledTrigger:
        return ScheduledTrigger(
            recurrence_interval=trigger.recurrence_interval.value,
            synchronization_time=trigger.synchronization_time,
            synchronization_mode=trigger.synchronization_mode.value,
        )

    def _begin(
        self,
        resource_group_name: str,
        account_name: str,
        share_subscription_name: Optional[str],
        trigger_name: str,
        trigger: TriggerSpec,
        **kwargs: Any,
    ) -> Any:
        if not share_subscription_name:
            raise ValidationError(
                "ShareSubscriptionName", "a share subscription is required to create a trigger"
            )
        return self._client.triggers.begin_create(
            resource_group_name=resource_group_name,
            account_name=account_name,
            share_subscription_name=share_subscription_name,
            trigger_name=trigger_name,
            trigger=self._to_model(trigger),
            **kwargs,
        )

    def create(
        self,
        resource_group_name: str,
        account_name: str,
        share_subscription_name: Optional[str],
        trigger_name: str,
        trigger: TriggerSpec,
    ) -> Any:
        """Create a trigger and wait until provisioning finishes."""
        poller = self._begin(
            resource_group_name, account_name, share_subscription_name, trigger_name, trigger
        )
        return poller.result()

    def begin_create(
        self,
        resource_group_name: str,
        account_name: str,
        share_subscription_name: Optional[str],
        trigger_name: str,
        trigger: TriggerSpec,
    ) -> Any:
        """Submit a trigger and return it as accepted by the service."""
        poller = self._begin(
            resource_group_name,
            account_name,
            share_subscription_name,
            trigger_name,
            trigger,
            polling=False,
        )
        return poller.result()


class RecoveryServicesBackupAdapter:
    """Submits restores to a Recovery Services vault."""

    def __init__(self, client: RecoveryServicesBackupClient):
        self._client = client

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
        """
        Trigger a restore and return the handle of the created job.

        The operation is not polled; the job handle is read from the
        Azure-AsyncOperation (or Location) header of the accepted response.
        """
        poller = self._client.restores.begin_trigger(
            vault_name=vault_name,
            resource_group_name=vault_resource_group,
            fabric_name=fabric_name,
            container_name=container_name,
            protected_item_name=item_name,
            recovery_point_id=recovery_point_id,
            parameters=RestoreRequestResource.from_dict(payload),
            polling=False,
            cls=_response_headers,
        )
        headers = poller.result() or {}

        tracking_url = headers.get("Azure-AsyncOperation") or headers.get("Location")
        if not tracking_url:
            raise SubmissionError(
                "Restore", RuntimeError("service response did not include an operation URL")
            )

        return JobHandle.from_tracking_url(
            tracking_url, vault_name=vault_name, vault_resource_group=vault_resource_group
        )


class AzureClientManager:
    """Manages Azure management clients for a subscription."""

    def __init__(
        self,
        subscription_id: str,
        credential: Optional[Any] = None,
        profile: Optional[str] = None,
    ):
        """
        Initialize the Azure client manager.

        Args:
            subscription_id: Azure subscription to operate on
            credential: Token credential; DefaultAzureCredential when not given
            profile: Name of the azopsman profile the subscription came from
        """
        if not subscription_id:
            raise ValidationError("SubscriptionId", "value cannot be empty")
        self.subscription_id = subscription_id
        self.profile = profile
        self._credential = credential

    @property
    def credential(self) -> Any:
        if self._credential is None:
            logger.debug("Creating DefaultAzureCredential")
            self._credential = DefaultAzureCredential()
        return self._credential

    def get_resource_client(self) -> AzureResourceLookupClient:
        """Get the resource lookup client."""
        return AzureResourceLookupClient(
            ResourceManagementClient(self.credential, self.subscription_id)
        )

    def get_datashare_client(self) -> DataShareTriggerClient:
        """Get the Data Share trigger client."""
        return DataShareTriggerClient(
            DataShareManagementClient(self.credential, self.subscription_id)
        )

    def get_backup_client(self) -> RecoveryServicesBackupAdapter:
        """Get the Recovery Services backup client."""
        return RecoveryServicesBackupAdapter(
            RecoveryServicesBackupClient(self.credential, self.subscription_id)
        )
