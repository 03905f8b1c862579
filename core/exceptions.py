"""Custom exception classes for the application.

Defines domain-specific exceptions that can be raised throughout the
application and handled consistently by exception handlers.
"""

from typing import Optional, Any, Dict


class AppException(Exception):
    """Base exception class for all application exceptions.

    Attributes:
        message: Human-readable error message.
        status_code: HTTP status code to return.
        details: Optional additional error details.
    """

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None
    ):
        """Initialize application exception.

        Args:
            message: Error message.
            status_code: HTTP status code (default: 500).
            details: Optional dictionary with additional error context.
        """
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class NotFoundError(AppException):
    """Exception raised when a requested resource is not found.

    The message never reveals whether the resource exists for another user.
    """

    def __init__(self, resource: str, identifier: Any = None):
        """Initialize not found error.

        Args:
            resource: Type of resource (e.g., 'Menu', 'Meal').
            identifier: ID or identifier that was not found.
        """
        message = f"{resource} not found"
        details = {"resource": resource}
        if identifier is not None:
            details["id"] = identifier
        super().__init__(message, status_code=404, details=details)


class ValidationError(AppException):
    """Exception raised when input validation fails."""

    def __init__(self, message: str, field: Optional[str] = None):
        """Initialize validation error.

        Args:
            message: Validation error message.
            field: Optional field name that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, status_code=400, details=details)


class AuthenticationError(AppException):
    """Exception raised when a request carries no valid credentials."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, status_code=401)


class QuestionnaireMissingError(AppException):
    """Raised when an operation needs the onboarding questionnaire."""

    def __init__(self):
        super().__init__(
            "Please complete your questionnaire first before generating a menu",
            status_code=400,
            details={"reason": "questionnaire not found"},
        )


class BudgetMissingError(AppException):
    """Raised when budget-driven preferences are chosen without a budget."""

    def __init__(self):
        super().__init__(
            "Please set a daily food budget in your questionnaire",
            status_code=400,
            details={"reason": "budget not set"},
        )


class UpstreamServiceError(AppException):
    """Raised when a hosted AI provider fails; the caller may retry."""

    def __init__(self, message: str, provider: Optional[str] = None):
        details = {"retryable": True}
        if provider:
            details["provider"] = provider
        super().__init__(message, status_code=503, details=details)


class DatabaseError(AppException):
    """Exception raised when database operations fail."""

    def __init__(self, message: str, operation: Optional[str] = None):
        """Initialize database error.

        Args:
            message: Database error message.
            operation: Optional operation that failed (e.g., 'create', 'update').
        """
        details = {"operation": operation} if operation else {}
        super().__init__(message, status_code=500, details=details)


class InsufficientDataError(AppException):
    """Exception raised when insufficient data is available for an operation."""

    def __init__(self, message: str, minimum_required: Optional[int] = None):
        """Initialize insufficient data error.

        Args:
            message: Error message.
            minimum_required: Optional minimum number of records required.
        """
        details = {"minimum_required": minimum_required} if minimum_required else {}
        super().__init__(message, status_code=400, details=details)
