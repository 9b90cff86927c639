"""Task operations: create, get, list, update, delete.

Each operation runs validation, then the access guard, then exactly one
repository write or read, and returns an OperationResult. Domain exceptions
raised by the repository are converted here, so callers only ever see
Success or Failure.
"""

from __future__ import annotations

import logging
from typing import Any

from task_manager.application.dtos.task import TaskResult
from task_manager.application.interfaces.repositories import ITaskRepository
from task_manager.application.results import (
    Failure,
    Invalid,
    OperationResult,
    Success,
)
from task_manager.application.services.authorization_service import TaskAccessGuard
from task_manager.application.services.task_validator import (
    validate_create,
    validate_list_query,
    validate_update,
)
from task_manager.domain.enums import TaskAction
from task_manager.domain.exceptions import (
    TaskManagerException,
    TaskNotFoundException,
)
from task_manager.domain.value_objects.identity import Identity

logger = logging.getLogger(__name__)


class TaskService:
    """Single entry point for task CRUD on behalf of an authenticated identity.

    Stateless: holds only its collaborators, so one instance per request
    (or a shared one) is safe under concurrent use.
    """

    def __init__(
        self,
        task_repo: ITaskRepository,
        guard: TaskAccessGuard | None = None,
    ) -> None:
        self.task_repo = task_repo
        self.guard = guard or TaskAccessGuard()

    async def _load_authorized(
        self, identity: Identity, task_id: str, action: TaskAction
    ) -> TaskResult | Failure:
        """Fetch the target task and run the access guard on its owner."""
        try:
            task = await self.task_repo.get(task_id, identity.id)
        except TaskManagerException as e:
            return Failure.from_exception(e)
        decision = self.guard.authorize(identity, action, task.owner_id)
        if not decision.allowed:
            return Failure.from_exception(TaskNotFoundException(task_id))
        return task

    async def create_task(
        self, identity: Identity, payload: Any
    ) -> OperationResult[TaskResult]:
        """Create a task owned by identity. Status defaults to pending."""
        validated = validate_create(payload)
        if isinstance(validated, Invalid):
            return Failure.from_violations(validated.violations)
        try:
            created = await self.task_repo.create(identity.id, validated.payload)
        except TaskManagerException as e:
            return Failure.from_exception(e)
        logger.debug("Task created: id=%s owner=%s", created.id, identity.id)
        return Success(created)

    async def get_task(
        self, identity: Identity, task_id: str
    ) -> OperationResult[TaskResult]:
        """Return one task owned by identity."""
        loaded = await self._load_authorized(identity, task_id, TaskAction.READ)
        if isinstance(loaded, Failure):
            return loaded
        return Success(loaded)

    async def list_tasks(
        self, identity: Identity, query: Any = None
    ) -> OperationResult[list[TaskResult]]:
        """Return identity's tasks (newest first) filtered by optional status."""
        validated = validate_list_query(query)
        if isinstance(validated, Invalid):
            return Failure.from_violations(validated.violations)
        try:
            tasks = await self.task_repo.list(identity.id, validated.payload)
        except TaskManagerException as e:
            return Failure.from_exception(e)
        # The storage filter already scopes by owner; the guard re-checks each row.
        visible = [
            t
            for t in tasks
            if self.guard.authorize(identity, TaskAction.READ, t.owner_id).allowed
        ]
        return Success(visible)

    async def update_task(
        self, identity: Identity, task_id: str, payload: Any
    ) -> OperationResult[TaskResult]:
        """Apply a partial update to a task owned by identity. Status is freely settable."""
        validated = validate_update(payload)
        if isinstance(validated, Invalid):
            return Failure.from_violations(validated.violations)
        loaded = await self._load_authorized(identity, task_id, TaskAction.UPDATE)
        if isinstance(loaded, Failure):
            return loaded
        try:
            updated = await self.task_repo.update(task_id, identity.id, validated.payload)
        except TaskManagerException as e:
            return Failure.from_exception(e)
        logger.debug(
            "Task updated: id=%s fields=%s", task_id, sorted(validated.payload.fields_set)
        )
        return Success(updated)

    async def delete_task(
        self, identity: Identity, task_id: str
    ) -> OperationResult[TaskResult]:
        """Delete a task owned by identity and return it. A second delete is NOT_FOUND."""
        loaded = await self._load_authorized(identity, task_id, TaskAction.DELETE)
        if isinstance(loaded, Failure):
            return loaded
        try:
            deleted = await self.task_repo.delete(task_id, identity.id)
        except TaskManagerException as e:
            return Failure.from_exception(e)
        logger.debug("Task deleted: id=%s owner=%s", task_id, identity.id)
        return Success(deleted)
