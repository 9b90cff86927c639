"""DTOs for task use cases (no dependency on ORM)."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from task_manager.core.constants import TASK_LIST_DEFAULT_LIMIT
from task_manager.domain.enums import TaskStatus


@dataclass(frozen=True)
class TaskResult:
    """Task read-model returned by the repository and the task service."""

    id: str
    owner_id: str
    title: str
    description: str | None
    status: TaskStatus
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class TaskCreate:
    """Validated create payload (title trimmed, status defaulted)."""

    title: str
    description: str | None = None
    status: TaskStatus = TaskStatus.PENDING


@dataclass(frozen=True)
class TaskUpdate:
    """Validated partial update. Only names in fields_set are applied.

    description=None with "description" in fields_set clears the description.
    """

    title: str | None = None
    description: str | None = None
    status: TaskStatus | None = None
    fields_set: frozenset[str] = field(default_factory=frozenset)

    def changes(self) -> dict[str, Any]:
        """Return {column: value} for the fields the caller actually sent."""
        return {name: getattr(self, name) for name in sorted(self.fields_set)}


@dataclass(frozen=True)
class TaskListQuery:
    """Validated listing options (newest first)."""

    status: TaskStatus | None = None
    skip: int = 0
    limit: int = TASK_LIST_DEFAULT_LIMIT
