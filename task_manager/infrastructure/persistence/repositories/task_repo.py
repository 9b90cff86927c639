"""Task repository: owner-scoped CRUD returning TaskResult DTOs.

Backend errors are translated at this boundary: IntegrityError becomes
TaskConflictException, any other SQLAlchemyError becomes
StorageFailureException. The backend error is logged, never returned.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from task_manager.application.dtos.task import (
    TaskCreate,
    TaskListQuery,
    TaskResult,
    TaskUpdate,
)
from task_manager.domain.enums import TaskStatus
from task_manager.domain.exceptions import (
    StorageFailureException,
    TaskConflictException,
    TaskNotFoundException,
)
from task_manager.infrastructure.persistence.models.task import Task
from task_manager.infrastructure.persistence.repositories.base import (
    OwnerScopedRepository,
)
from task_manager.shared.utils.datetime import ensure_utc, utc_now

logger = logging.getLogger(__name__)


def _to_result(t: Task) -> TaskResult:
    """Map Task ORM to TaskResult DTO."""
    return TaskResult(
        id=t.id,
        owner_id=t.owner_id,
        title=t.title,
        description=t.description,
        status=TaskStatus(t.status),
        created_at=ensure_utc(t.created_at),
        updated_at=ensure_utc(t.updated_at),
    )


class TaskRepository(OwnerScopedRepository[Task]):
    """Task repository. Implements ITaskRepository."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Task)

    @asynccontextmanager
    async def _storage_errors(self, operation: str) -> AsyncIterator[None]:
        try:
            yield
        except IntegrityError as e:
            logger.info("Task %s rejected by constraint: %s", operation, e.orig)
            raise TaskConflictException() from e
        except SQLAlchemyError as e:
            logger.exception("Task %s failed in storage", operation)
            raise StorageFailureException(operation) from e

    async def create(self, owner_id: str, data: TaskCreate) -> TaskResult:  # type: ignore[override]
        """Insert a task owned by owner_id (inside a savepoint)."""
        async with self._storage_errors("create"):
            async with self.db.begin_nested():
                task = Task(
                    owner_id=owner_id,
                    title=data.title,
                    description=data.description,
                    status=data.status.value,
                )
                created = await super().create(task)
                return _to_result(created)

    async def get(self, task_id: str, owner_id: str) -> TaskResult:
        """Return the owned task or raise TaskNotFoundException."""
        async with self._storage_errors("get"):
            task = await self.get_owned(task_id, owner_id)
        if task is None:
            raise TaskNotFoundException(task_id)
        return _to_result(task)

    async def list(self, owner_id: str, query: TaskListQuery) -> list[TaskResult]:
        """Return owner_id's tasks, newest first."""
        stmt = select(Task).where(Task.owner_id == owner_id)
        if query.status is not None:
            stmt = stmt.where(Task.status == query.status.value)
        stmt = (
            stmt.order_by(Task.created_at.desc(), Task.id.desc())
            .offset(query.skip)
            .limit(query.limit)
        )
        async with self._storage_errors("list"):
            result = await self.db.execute(stmt)
            rows = result.scalars().all()
        return [_to_result(t) for t in rows]

    async def update(  # type: ignore[override]
        self, task_id: str, owner_id: str, patch: TaskUpdate
    ) -> TaskResult:
        """Apply the sent fields and bump updated_at. owner_id is never written."""
        async with self._storage_errors("update"):
            async with self.db.begin_nested():
                task = await self.get_owned(task_id, owner_id)
                if task is None:
                    raise TaskNotFoundException(task_id)
                for name, value in patch.changes().items():
                    setattr(task, name, value.value if isinstance(value, TaskStatus) else value)
                task.updated_at = utc_now()
                updated = await super().update(task)
                return _to_result(updated)

    async def delete(self, task_id: str, owner_id: str) -> TaskResult:  # type: ignore[override]
        """Delete the owned task; return it as it was before deletion."""
        async with self._storage_errors("delete"):
            async with self.db.begin_nested():
                task = await self.get_owned(task_id, owner_id)
                if task is None:
                    raise TaskNotFoundException(task_id)
                snapshot = _to_result(task)
                await super().delete(task)
                return snapshot
