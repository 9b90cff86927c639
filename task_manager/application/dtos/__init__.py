"""Application DTOs (no dependency on ORM or web framework)."""

from task_manager.application.dtos.task import (
    TaskCreate,
    TaskListQuery,
    TaskResult,
    TaskUpdate,
)

__all__ = ["TaskCreate", "TaskListQuery", "TaskResult", "TaskUpdate"]
