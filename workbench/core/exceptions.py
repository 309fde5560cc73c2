"""
Exception hierarchy for the Workbench backend.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class WorkbenchException(Exception):
    """Base exception for all Workbench errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ValidationError(WorkbenchException):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Field name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class ResourceNotFoundError(WorkbenchException):
    """Raised when a required record cannot be found."""

    def __init__(
        self,
        resource: str,
        identifier: Any,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize not found error.

        Args:
            resource: Kind of record that is missing (workspace, user, ...)
            identifier: Identifier that was looked up
            details: Additional context
        """
        details = details or {}
        details[f"{resource}_id"] = str(identifier)
        self.resource = resource
        super().__init__(f"Could not find {resource} for id {identifier}.", details)


class DataSourceError(WorkbenchException):
    """Raised when a single call to the data source index fails."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize data source error.

        Args:
            message: Error message
            operation: Operation that failed (upsert, delete)
            status_code: HTTP status returned by the index, if any
            details: Additional context
        """
        details = details or {}
        if operation:
            details["operation"] = operation
        if status_code is not None:
            details["status_code"] = status_code
        self.status_code = status_code
        super().__init__(message, details)


class UpsertRetriesExhaustedError(WorkbenchException):
    """Raised when every upsert attempt failed; carries all attempt errors."""

    def __init__(self, errors: list[BaseException]) -> None:
        self.errors = list(errors)
        super().__init__(
            "\n".join(str(error) for error in self.errors),
            {"attempts": len(self.errors)},
        )

    def __str__(self) -> str:
        return self.message


class ProviderError(WorkbenchException):
    """Raised when a transcript provider call fails."""

    def __init__(
        self,
        provider: str,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        details["provider"] = provider
        super().__init__(message, details)


class AssistantApiError(WorkbenchException):
    """Raised when the conversation/agent API returns an error."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if status_code is not None:
            details["status_code"] = status_code
        self.status_code = status_code
        super().__init__(message, details)


class EmailDeliveryError(WorkbenchException):
    """Raised when the mail API rejects a message."""

    pass
