"""Application services: payload validation and task access authorization."""

from task_manager.application.services.authorization_service import (
    AccessDecision,
    TaskAccessGuard,
)
from task_manager.application.services.task_validator import (
    validate_create,
    validate_list_query,
    validate_update,
)

__all__ = [
    "AccessDecision",
    "TaskAccessGuard",
    "validate_create",
    "validate_list_query",
    "validate_update",
]
