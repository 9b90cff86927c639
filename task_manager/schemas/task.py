"""Task API schemas.

Request bodies are read as raw JSON and validated by the task validator, so
only response and error models live here (they drive the OpenAPI document).
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from task_manager.domain.enums import TaskStatus


class TaskResponse(BaseModel):
    """Task as returned by every task endpoint."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    owner_id: str
    title: str
    description: str | None = None
    status: str
    created_at: datetime
    updated_at: datetime

    @field_validator("status", mode="before")
    @classmethod
    def _status_to_str(cls, v: TaskStatus | str) -> str:
        """Accept TaskStatus from DTO; serialize to str for JSON."""
        return v.value if isinstance(v, TaskStatus) else v


class ErrorResponse(BaseModel):
    """Structured error body: stable kind, safe message, optional details."""

    error: str = Field(..., description="Error kind, e.g. NOT_FOUND")
    message: str
    details: dict[str, Any] = Field(default_factory=dict)


TASK_ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    400: {"model": ErrorResponse, "description": "Validation error"},
    401: {"model": ErrorResponse, "description": "Missing or invalid bearer token"},
    404: {"model": ErrorResponse, "description": "Task not found, or owned by another identity"},
    409: {"model": ErrorResponse, "description": "Conflict"},
    429: {"model": ErrorResponse, "description": "Rate limit exceeded (write endpoints)"},
    500: {"model": ErrorResponse, "description": "Storage failure"},
}
