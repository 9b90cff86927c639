"""Task payload validation.

Turns raw, untyped request payloads into typed DTOs or a list of field
violations. Never raises for malformed input: a bad payload is a validation
failure, not a fault. Unknown fields are ignored so older and newer clients
can share the endpoint.
"""

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from task_manager.application.dtos.task import TaskCreate, TaskListQuery, TaskUpdate
from task_manager.application.results import (
    FieldViolation,
    Invalid,
    Valid,
    ValidationResult,
)
from task_manager.core.constants import (
    TASK_DESCRIPTION_MAX_LENGTH,
    TASK_LIST_DEFAULT_LIMIT,
    TASK_LIST_MAX_LIMIT,
    TASK_TITLE_MAX_LENGTH,
)
from task_manager.domain.enums import TaskStatus

_UPDATABLE_FIELDS = frozenset({"title", "description", "status"})


def _normalize_title(value: str | None) -> str:
    if value is None:
        raise ValueError("must not be null")
    title = value.strip()
    if not title:
        raise ValueError("must not be empty")
    if len(title) > TASK_TITLE_MAX_LENGTH:
        raise ValueError(f"must be at most {TASK_TITLE_MAX_LENGTH} characters")
    return title


def _normalize_description(value: str | None) -> str | None:
    """Trim; blank descriptions are stored as null."""
    if value is None:
        return None
    description = value.strip()
    if len(description) > TASK_DESCRIPTION_MAX_LENGTH:
        raise ValueError(f"must be at most {TASK_DESCRIPTION_MAX_LENGTH} characters")
    return description or None


class _TaskCreateInput(BaseModel):
    model_config = ConfigDict(extra="ignore")

    title: str
    description: str | None = None
    status: TaskStatus = TaskStatus.PENDING

    @field_validator("title")
    @classmethod
    def _title(cls, v: str) -> str:
        return _normalize_title(v)

    @field_validator("description")
    @classmethod
    def _description(cls, v: str | None) -> str | None:
        return _normalize_description(v)


class _TaskUpdateInput(BaseModel):
    model_config = ConfigDict(extra="ignore")

    title: str | None = None
    description: str | None = None
    status: TaskStatus | None = None

    @field_validator("title")
    @classmethod
    def _title(cls, v: str | None) -> str:
        # Only runs for values the client sent, so None here is an explicit null.
        return _normalize_title(v)

    @field_validator("status")
    @classmethod
    def _status(cls, v: TaskStatus | None) -> TaskStatus:
        if v is None:
            raise ValueError("must not be null")
        return v

    @field_validator("description")
    @classmethod
    def _description(cls, v: str | None) -> str | None:
        return _normalize_description(v)


class _TaskListInput(BaseModel):
    model_config = ConfigDict(extra="ignore")

    status: TaskStatus | None = None
    skip: int = Field(default=0, ge=0)
    limit: int = Field(default=TASK_LIST_DEFAULT_LIMIT, ge=1, le=TASK_LIST_MAX_LIMIT)


def _violations(exc: ValidationError) -> tuple[FieldViolation, ...]:
    """Flatten pydantic errors to (field, message) pairs."""
    out: list[FieldViolation] = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err.get("loc", ())) or "body"
        message = str(err.get("msg", "invalid value")).removeprefix("Value error, ")
        out.append(FieldViolation(field=loc, message=message))
    return tuple(out)


def _not_an_object() -> Invalid:
    return Invalid((FieldViolation(field="body", message="must be a JSON object"),))


def validate_create(raw: Any) -> ValidationResult[TaskCreate]:
    """Validate a create payload. Status defaults to pending."""
    if not isinstance(raw, Mapping):
        return _not_an_object()
    try:
        parsed = _TaskCreateInput.model_validate(dict(raw))
    except ValidationError as e:
        return Invalid(_violations(e))
    return Valid(
        TaskCreate(title=parsed.title, description=parsed.description, status=parsed.status)
    )


def validate_update(raw: Any) -> ValidationResult[TaskUpdate]:
    """Validate a partial update; at least one updatable field must be present."""
    if not isinstance(raw, Mapping):
        return _not_an_object()
    try:
        parsed = _TaskUpdateInput.model_validate(dict(raw))
    except ValidationError as e:
        return Invalid(_violations(e))
    sent = frozenset(parsed.model_fields_set) & _UPDATABLE_FIELDS
    if not sent:
        return Invalid(
            (
                FieldViolation(
                    field="body",
                    message="at least one of description, status, title is required",
                ),
            )
        )
    return Valid(
        TaskUpdate(
            title=parsed.title,
            description=parsed.description,
            status=parsed.status,
            fields_set=sent,
        )
    )


def validate_list_query(raw: Any) -> ValidationResult[TaskListQuery]:
    """Validate listing options (status filter, skip, limit)."""
    if raw is None:
        raw = {}
    if not isinstance(raw, Mapping):
        return _not_an_object()
    params = {k: v for k, v in raw.items() if v is not None}
    try:
        parsed = _TaskListInput.model_validate(params)
    except ValidationError as e:
        return Invalid(_violations(e))
    return Valid(TaskListQuery(status=parsed.status, skip=parsed.skip, limit=parsed.limit))
