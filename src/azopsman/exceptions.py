"""Custom exception classes for azopsman operations."""

from typing import Any, Dict, List, Optional, Tuple

from azure.core.exceptions import AzureError

# Transport and service failures are raised by the Azure SDK itself and are
# never wrapped on their way to the caller.
TransportError = AzureError


class AzOpsError(Exception):
    """Base exception for azopsman operations."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        """Initialize azopsman error.

        Args:
            message: Error message
            context: Additional context information
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}


class ValidationError(AzOpsError):
    """Exception raised when a mandatory field is missing or invalid."""

    def __init__(self, field: str, message: str):
        """Initialize validation error.

        Args:
            field: Name of the offending field
            message: Description of the problem
        """
        super().__init__(f"Invalid value for {field}: {message}", context={"field": field})
        self.field = field


class ResolutionExhaustedError(AzOpsError):
    """Exception raised when every storage account identity candidate failed."""

    def __init__(self, storage_account_name: str, attempts: List[Tuple[Any, Exception]]):
        """Initialize resolution exhausted error.

        Args:
            storage_account_name: Storage account that could not be resolved
            attempts: (identity, error) pairs in the order they were tried
        """
        tried = ", ".join(
            f"{identity.resource_provider_namespace}@{identity.resource_provider_api_version}"
            for identity, _ in attempts
        )
        last_error = attempts[-1][1] if attempts else None
        message = f"Could not resolve storage account '{storage_account_name}' (tried {tried})"
        if last_error is not None:
            message += f": {last_error}"

        super().__init__(
            message,
            context={
                "storage_account_name": storage_account_name,
                "attempts": [
                    {
                        "namespace": identity.resource_provider_namespace,
                        "api_version": identity.resource_provider_api_version,
                        "error": str(error),
                    }
                    for identity, error in attempts
                ],
            },
        )
        self.storage_account_name = storage_account_name
        self.attempts = attempts


class UnsupportedProviderError(AzOpsError):
    """Exception raised when no backup provider handles a workload/management pair."""

    def __init__(self, workload_type: str, backup_management_type: str):
        """Initialize unsupported provider error.

        Args:
            workload_type: Workload type of the recovery point
            backup_management_type: Backup management type of the recovery point
        """
        super().__init__(
            f"Unsupported workload/provider combination: workload type '{workload_type}' "
            f"with backup management type '{backup_management_type}'",
            context={
                "workload_type": workload_type,
                "backup_management_type": backup_management_type,
            },
        )
        self.workload_type = workload_type
        self.backup_management_type = backup_management_type


class SubmissionError(AzOpsError):
    """Exception raised when a job submission call fails."""

    def __init__(self, operation: str, cause: Exception):
        """Initialize submission error.

        Args:
            operation: Name of the submitted operation
            cause: The service error returned by the submission call
        """
        super().__init__(
            f"{operation} submission failed: {cause}",
            context={"operation": operation, "cause_type": type(cause).__name__},
        )
        self.operation = operation
        self.cause = cause
