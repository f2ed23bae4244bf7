"""Storage account identity resolution for restore operations."""

import logging
from typing import Any, List, Protocol, Tuple

from ..exceptions import ResolutionExhaustedError
from .models import ResourceIdentity, StorageAccountInfo

logger = logging.getLogger(__name__)

# (provider namespace, api version) pairs tried in order; classic storage first
STORAGE_IDENTITY_CANDIDATES: Tuple[Tuple[str, str], ...] = (
    ("Microsoft.ClassicStorage/storageAccounts", "2015-12-01"),
    ("Microsoft.Storage/storageAccounts", "2016-01-01"),
)


class ResourceLookupClient(Protocol):
    """Resource manager operation used to look up a resource by identity."""

    def get_resource(self, resource_group_name: str, identity: ResourceIdentity) -> Any:
        """Return the resource with ``id``, ``location`` and ``type`` attributes."""
        ...


class StorageIdentityResolver:
    """Resolves a storage account against the classic and current storage providers."""

    def __init__(
        self,
        client: ResourceLookupClient,
        candidates: Tuple[Tuple[str, str], ...] = STORAGE_IDENTITY_CANDIDATES,
    ):
        """
        Initialize the resolver.

        Args:
            client: Resource manager lookup client
            candidates: Ordered (namespace, api version) pairs to try
        """
        self.client = client
        self.candidates = candidates

    def resolve(self, resource_group_name: str, storage_account_name: str) -> StorageAccountInfo:
        """
        Resolve a storage account to its id, location and type.

        Each candidate is tried once, in order, and the first success wins. A
        candidate fails when the lookup raises or when the returned resource
        belongs to a different provider.

        Args:
            resource_group_name: Resource group of the storage account
            storage_account_name: Storage account name (already lowercased)

        Returns:
            StorageAccountInfo of the resolved account

        Raises:
            ResolutionExhaustedError: If every candidate failed
        """
        attempts: List[Tuple[ResourceIdentity, Exception]] = []

        for namespace, api_version in self.candidates:
            identity = ResourceIdentity(
                resource_name=storage_account_name,
                resource_provider_namespace=namespace,
                resource_provider_api_version=api_version,
            )
            logger.debug(f"Query {namespace} with name = {storage_account_name}")

            try:
                resource = self.client.get_resource(resource_group_name, identity)
                info = self._to_storage_info(resource, identity)
            except Exception as e:
                logger.debug(f"Storage account lookup via {namespace} failed: {e}")
                attempts.append((identity, e))
                continue

            logger.debug(f"StorageId = {info.id}")
            return info

        last_error = attempts[-1][1] if attempts else None
        raise ResolutionExhaustedError(storage_account_name, attempts) from last_error

    @staticmethod
    def _to_storage_info(resource: Any, identity: ResourceIdentity) -> StorageAccountInfo:
        resource_type = getattr(resource, "type", None) or ""
        if resource_type.lower() != identity.resource_provider_namespace.lower():
            raise LookupError(
                f"Resource type '{resource_type}' does not match "
                f"{identity.resource_provider_namespace}"
            )

        return StorageAccountInfo(
            id=resource.id,
            location=resource.location,
            type=resource_type,
            identity=identity,
        )
