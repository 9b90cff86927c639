"""Domain enumerations for the task manager.

Enums represent fixed sets of domain values (task status, access actions).
"""

from enum import Enum


class TaskStatus(str, Enum):
    """Task status. Freely settable: no transition workflow is enforced."""

    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    DONE = "done"

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid status values as strings.

        Returns:
            List of enum value strings (e.g. for validation messages).
        """
        return [status.value for status in cls]


class TaskAction(str, Enum):
    """Action an identity attempts on a task (authorization input)."""

    CREATE = "create"
    READ = "read"
    UPDATE = "update"
    DELETE = "delete"
