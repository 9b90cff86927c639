"""Domain exceptions for the task manager.

Defines domain-level exceptions that represent business rule violations and
storage outcomes. They are independent of the web framework; the task
service converts them into OperationResult failures and the presentation
layer maps any that escape to HTTP responses in exception handlers.
"""

from typing import Any


class TaskManagerException(Exception):
    """Base exception for all task manager errors.

    Attributes:
        message: Human-readable, caller-safe error description.
        error_code: Machine-readable error code (stable kind identifier).
        details: Additional error context (e.g. field, task_id).
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
        """Return the JSON error body: error, message, details."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(TaskManagerException):
    """Raised when a task payload or list query fails validation.

    Carries every field violation so callers can report them together.
    """

    def __init__(
        self,
        violations: list[dict[str, str]],
        message: str = "Request validation failed",
    ) -> None:
        """Initialize with the field violations.

        Args:
            violations: List of {"field", "message"} entries.
            message: Summary shown to the caller.
        """
        super().__init__(message, "VALIDATION_ERROR", {"violations": violations})


class AuthenticationException(TaskManagerException):
    """Raised when the bearer token is missing, invalid or expired."""

    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(message, "AUTHENTICATION_ERROR")


class TaskNotFoundException(TaskManagerException):
    """Raised when no task matches the id for the requesting owner."""

    def __init__(self, task_id: str) -> None:
        """Initialize with the task id that was not found.

        Args:
            task_id: The ID that was not found (or is not visible to the owner).
        """
        super().__init__(
            f"Task not found: {task_id}",
            "NOT_FOUND",
            {"resource_type": "task", "resource_id": task_id},
        )


class TaskConflictException(TaskManagerException):
    """Raised when a write violates a storage constraint (unique, foreign key, check)."""

    def __init__(self, message: str = "Task conflicts with existing data") -> None:
        super().__init__(message, "CONFLICT")


class StorageFailureException(TaskManagerException):
    """Raised for any other backend fault. Carries no backend error text."""

    def __init__(self, operation: str) -> None:
        """Initialize with the repository operation that failed.

        Args:
            operation: Repository operation name (e.g. 'update').
        """
        super().__init__(
            "The task store could not complete the request",
            "STORAGE_FAILURE",
            {"operation": operation},
        )


class SqlNotConfiguredException(TaskManagerException):
    """Raised when a request needs the database but no engine was initialized."""

    def __init__(self) -> None:
        super().__init__(
            message="This operation requires a SQL database that is not configured.",
            error_code="SERVICE_UNAVAILABLE",
        )
