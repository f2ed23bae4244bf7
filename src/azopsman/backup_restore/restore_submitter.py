"""Restore submission for backup items."""

import logging

from ..exceptions import AzOpsError, SubmissionError
from .identity import StorageIdentityResolver
from .models import JobHandle, RestoreContext, RestoreRequest
from .providers import ProviderRegistry

logger = logging.getLogger(__name__)


class RestoreSubmitter:
    """
    Submits backup item restores.

    A restore resolves the target storage account, selects the backup provider
    for the recovery point's workload and submits the restore job. The job is
    not polled; its handle is returned for reporting.
    """

    def __init__(self, resolver: StorageIdentityResolver, registry: ProviderRegistry):
        """
        Initialize the restore submitter.

        Args:
            resolver: Storage account identity resolver
            registry: Backup provider registry
        """
        self.resolver = resolver
        self.registry = registry

    def submit(self, request: RestoreRequest) -> JobHandle:
        """
        Submit a restore of ``request.recovery_point`` into the storage account.

        Args:
            request: Restore parameters

        Returns:
            JobHandle of the submitted restore

        Raises:
            ResolutionExhaustedError: If the storage account could not be resolved
            UnsupportedProviderError: If no provider handles the recovery point
            SubmissionError: If the backup service rejected the restore
        """
        storage_account = self.resolver.resolve(
            request.storage_account_resource_group_name, request.storage_account_name
        )

        rp = request.recovery_point
        provider = self.registry.get_provider(rp.workload_type, rp.backup_management_type)
        context = RestoreContext(recovery_point=rp, storage_account=storage_account)

        try:
            job = provider.trigger_restore(context)
        except AzOpsError:
            raise
        except Exception as e:
            raise SubmissionError("Restore", e) from e

        logger.debug("Restore submitted")
        logger.info(f"Restore job {job.operation_id} submitted for {rp.item_name}")
        return job
