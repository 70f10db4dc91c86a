"""Domain exceptions for TaskDesk.

Defines domain-level exceptions that represent business rule violations
and the failure taxonomy of the session-gating flow. These exceptions are
independent of infrastructure concerns. Presentation layer maps them to
HTTP responses in exception handlers.
"""

from typing import Any


class TaskDeskException(Exception):
    """Base exception for all TaskDesk application errors.

    All custom exceptions should inherit from this class to allow
    consistent error handling and logging. Presentation layer maps
    these to HTTP responses using message, error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON error body used by the exception handlers."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(TaskDeskException):
    """Raised when input validation fails (e.g. invalid format or range)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class AuthenticationException(TaskDeskException):
    """Raised when there is no valid session (Unauthenticated).

    Carries the login entry point so the caller can redirect, replacing history.
    """

    def __init__(
        self,
        message: str = "Not authenticated",
        redirect_to: str | None = None,
    ) -> None:
        """Initialize with optional message and redirect target.

        Args:
            message: Description of the authentication failure.
            redirect_to: Where the client should navigate (the login page).
        """
        details: dict[str, Any] = {}
        if redirect_to:
            details = {"redirect_to": redirect_to, "replace": True}
        super().__init__(message, "AUTHENTICATION_ERROR", details)


class AuthorizationException(TaskDeskException):
    """Raised when the session is valid but its role is insufficient (Unauthorized)."""

    def __init__(
        self,
        message: str = "Permission denied",
        redirect_to: str | None = None,
        resource: str | None = None,
        action: str | None = None,
    ) -> None:
        """Initialize with message, optional redirect target, resource and action.

        Args:
            message: Human-readable notice shown to the user.
            redirect_to: Default authorized landing page (never login).
            resource: Optional resource type (e.g. 'task').
            action: Optional action that was attempted (e.g. 'delete').
        """
        if resource and action:
            message = f"Permission denied: {action} on {resource}"
        details: dict[str, Any] = {}
        if redirect_to:
            details["redirect_to"] = redirect_to
            details["replace"] = True
        if resource:
            details["resource"] = resource
        if action:
            details["action"] = action
        super().__init__(message, "PERMISSION_DENIED", details)


class ResourceNotFoundException(TaskDeskException):
    """Raised when a requested resource (profile, task) is not found."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'profile', 'task').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class InvalidTransitionException(TaskDeskException):
    """Raised when a task status change is not a legal forward step."""

    def __init__(self, current: str, target: str, task_id: str | None = None) -> None:
        """Initialize with the current and requested status.

        Args:
            current: Status the task is in.
            target: Status that was requested.
            task_id: Optional task identifier.
        """
        details: dict[str, Any] = {"current": current, "target": target}
        if task_id:
            details["task_id"] = task_id
        super().__init__(
            f"Cannot move task from '{current}' to '{target}'",
            "INVALID_TRANSITION",
            details,
        )


class RemoteFailureException(TaskDeskException):
    """Raised when a call to the backend (database, cache) fails."""

    def __init__(self, operation: str, reason: str | None = None) -> None:
        """Initialize with the failed operation and optional reason.

        Args:
            operation: Short name of the backend call (e.g. 'task.list').
            reason: Optional underlying error text (not shown to clients unless debug).
        """
        details: dict[str, Any] = {"operation": operation}
        if reason:
            details["reason"] = reason
        super().__init__(
            f"Backend call failed: {operation}",
            "REMOTE_FAILURE",
            details,
        )


class ReportRenderingException(TaskDeskException):
    """Raised when a PDF report cannot be produced."""

    def __init__(self, message: str = "Report rendering failed") -> None:
        super().__init__(message, "REPORT_RENDERING_ERROR")
