"""Persistence models: ORM entities and mixins."""

from task_manager.infrastructure.persistence.models.mixins import (
    CuidMixin,
    OwnedModel,
    OwnerMixin,
    TimestampMixin,
)
from task_manager.infrastructure.persistence.models.task import Task

__all__ = [
    "Task",
    "CuidMixin",
    "OwnerMixin",
    "TimestampMixin",
    "OwnedModel",
]
