"""Result contracts returned by the application layer.

Both are tagged unions of frozen dataclasses, so exactly one variant is ever
populated:

- ValidationResult = Valid[P] | Invalid  (validation layer)
- OperationResult  = Success[T] | Failure (task service)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, TypeAlias, TypeVar, Union

from task_manager.domain.exceptions import TaskManagerException, ValidationException

P = TypeVar("P")
T = TypeVar("T")


class ErrorKind(str, Enum):
    """Stable error kind identifiers exposed to callers."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    FORBIDDEN = "FORBIDDEN"
    CONFLICT = "CONFLICT"
    STORAGE_FAILURE = "STORAGE_FAILURE"


@dataclass(frozen=True)
class FieldViolation:
    """One field-level validation failure."""

    field: str
    message: str

    def to_dict(self) -> dict[str, str]:
        return {"field": self.field, "message": self.message}


@dataclass(frozen=True)
class Valid(Generic[P]):
    """Validated, normalized payload."""

    payload: P


@dataclass(frozen=True)
class Invalid:
    """Non-empty list of field violations."""

    violations: tuple[FieldViolation, ...]

    def __post_init__(self) -> None:
        if not self.violations:
            raise ValueError("Invalid requires at least one violation")


ValidationResult: TypeAlias = Union[Valid[P], Invalid]


@dataclass(frozen=True)
class Success(Generic[T]):
    """Successful operation carrying the affected task(s)."""

    value: T


@dataclass(frozen=True)
class Failure:
    """Failed operation: stable kind plus caller-safe message."""

    kind: ErrorKind
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_exception(cls, exc: TaskManagerException) -> Failure:
        """Map a domain exception to a Failure (error_code -> ErrorKind, 1:1)."""
        return cls(kind=ErrorKind(exc.error_code), message=exc.message, details=dict(exc.details))

    @classmethod
    def from_violations(cls, violations: tuple[FieldViolation, ...]) -> Failure:
        """Build a VALIDATION_ERROR failure citing each violating field."""
        return cls.from_exception(ValidationException([v.to_dict() for v in violations]))

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON error body: error, message, details."""
        return {"error": self.kind.value, "message": self.message, "details": self.details}


OperationResult: TypeAlias = Union[Success[T], Failure]
