"""Domain value objects."""

from task_manager.domain.value_objects.identity import Identity

__all__ = ["Identity"]
