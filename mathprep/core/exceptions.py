"""
Exception hierarchy for the MathPrep application.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class MathPrepException(Exception):
    """Base exception for all MathPrep application errors."""

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


class ValidationError(MathPrepException):
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


class NotFoundError(MathPrepException):
    """Raised when a requested row does not exist."""

    def __init__(
        self,
        resource: str,
        resource_id: Any,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize not found error.

        Args:
            resource: Kind of resource (question, profile, flag, ...)
            resource_id: Identifier that was looked up
            details: Additional context
        """
        details = details or {}
        details[f"{resource}_id"] = str(resource_id)
        self.resource = resource
        super().__init__(f"{resource.capitalize()} {resource_id} not found", details)


class ConflictError(MathPrepException):
    """Raised when a write collides with existing state (duplicates, races)."""

    pass


class PermissionDeniedError(MathPrepException):
    """Raised when the caller may not perform the operation."""

    pass


class InsufficientQuestionsError(MathPrepException):
    """Raised when no questions match the requested filters."""

    def __init__(self, message: str = "No questions available for the selected filters", details: dict[str, Any] | None = None) -> None:
        super().__init__(message, details)
