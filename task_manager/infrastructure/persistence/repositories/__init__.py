"""Repositories (SQLAlchemy implementations of application ports)."""

from task_manager.infrastructure.persistence.repositories.base import (
    OwnerScopedRepository,
)
from task_manager.infrastructure.persistence.repositories.task_repo import (
    TaskRepository,
)

__all__ = ["OwnerScopedRepository", "TaskRepository"]
