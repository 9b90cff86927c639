"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs only; no infrastructure imports.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from task_manager.application.dtos.task import (
        TaskCreate,
        TaskListQuery,
        TaskResult,
        TaskUpdate,
    )


class ITaskRepository(Protocol):
    """Protocol for task repository (DIP).

    Every method is scoped by owner_id. Implementations raise
    TaskNotFoundException when no row matches id and owner,
    TaskConflictException on constraint violations and
    StorageFailureException for any other backend error.
    """

    async def create(self, owner_id: str, data: TaskCreate) -> TaskResult:
        """Persist a new task owned by owner_id."""

    async def get(self, task_id: str, owner_id: str) -> TaskResult:
        """Return the task if it exists and belongs to owner_id."""

    async def list(self, owner_id: str, query: TaskListQuery) -> list[TaskResult]:
        """Return owner_id's tasks, newest first, filtered and paginated."""

    async def update(self, task_id: str, owner_id: str, patch: TaskUpdate) -> TaskResult:
        """Apply patch to the owned task and bump updated_at."""

    async def delete(self, task_id: str, owner_id: str) -> TaskResult:
        """Delete the owned task and return it as it was."""
