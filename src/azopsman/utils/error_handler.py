"""Error reporting for azopsman commands."""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Type

from azure.core.exceptions import (
    ClientAuthenticationError,
    HttpResponseError,
    ResourceExistsError,
    ResourceNotFoundError,
    ServiceRequestError,
    ServiceResponseError,
)
from rich.console import Console
from rich.markup import escape

from ..exceptions import (
    AzOpsError,
    ResolutionExhaustedError,
    SubmissionError,
    UnsupportedProviderError,
    ValidationError,
)

console = Console(stderr=True)


class ErrorSeverity(str, Enum):
    """Error severity levels for categorizing errors."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """Categories of errors for better organization and handling."""

    CONNECTION = "connection"
    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    RESOLUTION = "resolution"
    UNSUPPORTED = "unsupported"
    SUBMISSION = "submission"
    SERVICE_ERROR = "service_error"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Context information for errors to aid in debugging and resolution."""

    component: str
    operation: str
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    request_id: Optional[str] = None
    resource_id: Optional[str] = None
    additional_context: Dict[str, Any] = field(default_factory=dict)


@dataclass
class RemediationStep:
    """A single remediation step."""

    description: str
    command: Optional[str] = None
    documentation_url: Optional[str] = None


@dataclass
class CommandError:
    """Error information with context and remediation guidance."""

    error_id: str
    message: str
    category: ErrorCategory
    severity: ErrorSeverity
    context: ErrorContext
    original_exception: Optional[Exception] = None
    remediation_steps: List[RemediationStep] = field(default_factory=list)

    def get_error_code(self) -> str:
        """Generate an error code for tracking."""
        return f"{self.category.value.upper()}_{self.error_id}"

    def get_user_message(self) -> str:
        """Get a user-friendly error message."""
        base_message = self.message

        if self.remediation_steps:
            primary_step = self.remediation_steps[0]
            base_message += f"\n\nRecommended action: {primary_step.description}"
            if primary_step.command:
                base_message += f"\n  {primary_step.command}"

        return base_message

    def get_technical_details(self) -> Dict[str, Any]:
        """Get technical details for debugging."""
        details = {
            "error_id": self.error_id,
            "error_code": self.get_error_code(),
            "category": self.category.value,
            "severity": self.severity.value,
            "component": self.context.component,
            "operation": self.context.operation,
            "timestamp": self.context.timestamp.isoformat(),
        }

        if self.context.request_id:
            details["request_id"] = self.context.request_id

        if self.original_exception:
            details["exception_type"] = type(self.original_exception).__name__
            details["exception_message"] = str(self.original_exception)

        if self.context.additional_context:
            details["additional_context"] = self.context.additional_context

        return details


def _request_id(exception: Exception) -> Optional[str]:
    response = getattr(exception, "response", None)
    headers = getattr(response, "headers", None) or {}
    return headers.get("x-ms-request-id") or headers.get("x-ms-correlation-request-id")


class CommandErrorHandler:
    """
    Centralized error handler for azopsman commands.

    Converts exceptions into CommandError objects with remediation steps and
    logs their technical details.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the error handler.

        Args:
            logger: Logger instance to use for error logging
        """
        self.logger = logger or logging.getLogger(__name__)
        self._error_mappings: Dict[
            Type[BaseException], Callable[[Any, ErrorContext], CommandError]
        ] = {
            ValidationError: self._handle_validation_error,
            ResolutionExhaustedError: self._handle_resolution_error,
            UnsupportedProviderError: self._handle_unsupported_provider_error,
            SubmissionError: self._handle_submission_error,
            AzOpsError: self._handle_generic_error,
            ClientAuthenticationError: self._handle_authentication_error,
            ServiceRequestError: self._handle_connection_error,
            ServiceResponseError: self._handle_connection_error,
            ResourceNotFoundError: self._handle_resource_not_found_error,
            ResourceExistsError: self._handle_conflict_error,
            HttpResponseError: self._handle_http_response_error,
            Exception: self._handle_generic_error,
        }

    def handle_error(self, exception: Exception, context: ErrorContext) -> CommandError:
        """
        Convert an exception to a CommandError and log it.

        Args:
            exception: The exception that occurred
            context: Context information about where the error occurred

        Returns:
            CommandError with remediation guidance
        """
        handler = self._find_error_handler(type(exception))
        command_error = handler(exception, context)
        self._log_error(command_error)
        return command_error

    def _find_error_handler(
        self, exception_type: Type[BaseException]
    ) -> Callable[[Any, ErrorContext], CommandError]:
        """Find the handler of the most specific mapped base class."""
        for klass in exception_type.__mro__:
            if klass in self._error_mappings:
                return self._error_mappings[klass]
        return self._error_mappings[Exception]

    def _handle_validation_error(
        self, exception: ValidationError, context: ErrorContext
    ) -> CommandError:
        return CommandError(
            error_id="VAL_001",
            message=str(exception),
            category=ErrorCategory.VALIDATION,
            severity=ErrorSeverity.MEDIUM,
            context=context,
            original_exception=exception,
            remediation_steps=[
                RemediationStep(description=f"Check the value passed for {exception.field}"),
            ],
        )

    def _handle_resolution_error(
        self, exception: ResolutionExhaustedError, context: ErrorContext
    ) -> CommandError:
        context.additional_context.update(exception.context)
        return CommandError(
            error_id="RES_002",
            message=str(exception),
            category=ErrorCategory.RESOLUTION,
            severity=ErrorSeverity.HIGH,
            context=context,
            original_exception=exception,
            remediation_steps=[
                RemediationStep(
                    description="Verify the storage account name and its resource group",
                    command="az storage account show --name <name> --resource-group <group>",
                ),
                RemediationStep(
                    description="Check that the active profile points at the right subscription"
                ),
            ],
        )

    def _handle_unsupported_provider_error(
        self, exception: UnsupportedProviderError, context: ErrorContext
    ) -> CommandError:
        return CommandError(
            error_id="UNS_001",
            message=str(exception),
            category=ErrorCategory.UNSUPPORTED,
            severity=ErrorSeverity.MEDIUM,
            context=context,
            original_exception=exception,
            remediation_steps=[
                RemediationStep(
                    description="Restore of this workload is not supported; use a recovery "
                    "point of an Azure virtual machine"
                ),
            ],
        )

    def _handle_submission_error(
        self, exception: SubmissionError, context: ErrorContext
    ) -> CommandError:
        context.request_id = _request_id(exception.cause)
        return CommandError(
            error_id="SUB_001",
            message=str(exception),
            category=ErrorCategory.SUBMISSION,
            severity=ErrorSeverity.HIGH,
            context=context,
            original_exception=exception,
            remediation_steps=[
                RemediationStep(
                    description="Check that the recovery point still exists in the vault"
                ),
                RemediationStep(description="Review the vault's backup jobs for a conflicting job"),
            ],
        )

    def _handle_authentication_error(
        self, exception: ClientAuthenticationError, context: ErrorContext
    ) -> CommandError:
        return CommandError(
            error_id="AUTH_001",
            message=f"Azure authentication failed: {exception.message}",
            category=ErrorCategory.AUTHENTICATION,
            severity=ErrorSeverity.CRITICAL,
            context=context,
            original_exception=exception,
            remediation_steps=[
                RemediationStep(description="Sign in with the Azure CLI", command="az login"),
                RemediationStep(
                    description="Or set AZURE_CLIENT_ID, AZURE_TENANT_ID and AZURE_CLIENT_SECRET"
                ),
            ],
        )

    def _handle_connection_error(self, exception: Exception, context: ErrorContext) -> CommandError:
        return CommandError(
            error_id="CONN_001",
            message=f"Cannot connect to Azure: {exception}",
            category=ErrorCategory.CONNECTION,
            severity=ErrorSeverity.HIGH,
            context=context,
            original_exception=exception,
            remediation_steps=[
                RemediationStep(description="Check internet connectivity and proxy settings"),
            ],
        )

    def _handle_resource_not_found_error(
        self, exception: ResourceNotFoundError, context: ErrorContext
    ) -> CommandError:
        context.request_id = _request_id(exception)
        return CommandError(
            error_id="RES_001",
            message=f"Resource not found in {context.operation}: {exception.message}",
            category=ErrorCategory.RESOURCE_NOT_FOUND,
            severity=ErrorSeverity.MEDIUM,
            context=context,
            original_exception=exception,
            remediation_steps=[
                RemediationStep(description="Verify the resource group and resource names"),
            ],
        )

    def _handle_conflict_error(
        self, exception: ResourceExistsError, context: ErrorContext
    ) -> CommandError:
        context.request_id = _request_id(exception)
        return CommandError(
            error_id="CONF_001",
            message=f"Resource already exists in {context.operation}: {exception.message}",
            category=ErrorCategory.CONFLICT,
            severity=ErrorSeverity.MEDIUM,
            context=context,
            original_exception=exception,
            remediation_steps=[RemediationStep(description="Choose a different name")],
        )

    def _handle_http_response_error(
        self, exception: HttpResponseError, context: ErrorContext
    ) -> CommandError:
        context.request_id = _request_id(exception)
        status_code = exception.status_code

        if status_code == 403:
            return CommandError(
                error_id="PERM_001",
                message=f"Insufficient permissions for {context.operation}: {exception.message}",
                category=ErrorCategory.AUTHORIZATION,
                severity=ErrorSeverity.HIGH,
                context=context,
                original_exception=exception,
                remediation_steps=[
                    RemediationStep(
                        description="Ask a subscription owner for the required role assignment"
                    ),
                ],
            )

        return CommandError(
            error_id="SVC_001",
            message=f"Azure API error in {context.operation} ({status_code}): {exception.message}",
            category=ErrorCategory.SERVICE_ERROR,
            severity=ErrorSeverity.HIGH,
            context=context,
            original_exception=exception,
            remediation_steps=[
                RemediationStep(description="Verify the request parameters are correct"),
            ],
        )

    def _handle_generic_error(self, exception: Exception, context: ErrorContext) -> CommandError:
        return CommandError(
            error_id="GEN_001",
            message=f"Unexpected error in {context.operation}: {exception}",
            category=ErrorCategory.INTERNAL,
            severity=ErrorSeverity.HIGH,
            context=context,
            original_exception=exception,
            remediation_steps=[
                RemediationStep(description="Re-run with --debug for more details"),
            ],
        )

    def _log_error(self, command_error: CommandError) -> None:
        """Log the error with a level matching its severity."""
        details = command_error.get_technical_details()
        if command_error.severity in (ErrorSeverity.CRITICAL, ErrorSeverity.HIGH):
            self.logger.error(command_error.message, extra=details)
        else:
            self.logger.warning(command_error.message, extra=details)


# Global error handler instance
_global_error_handler: Optional[CommandErrorHandler] = None


def get_error_handler() -> CommandErrorHandler:
    """Get the global error handler instance."""
    global _global_error_handler
    if _global_error_handler is None:
        _global_error_handler = CommandErrorHandler()
    return _global_error_handler


def handle_command_error(exception: Exception, operation: str) -> CommandError:
    """
    Report an error raised by a command to the user.

    Args:
        exception: The exception that occurred
        operation: Name of the operation that failed

    Returns:
        The CommandError that was displayed
    """
    context = ErrorContext(component="azopsman", operation=operation)
    command_error = get_error_handler().handle_error(exception, context)
    console.print(f"[red]Error: {escape(command_error.get_user_message())}[/red]")
    return command_error
