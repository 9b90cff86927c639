"""Task access authorization: ownership checks independent of storage RLS."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from task_manager.application.results import ErrorKind
from task_manager.domain.enums import TaskAction
from task_manager.domain.value_objects.identity import Identity

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AccessDecision:
    """Outcome of an authorization check. denial_kind is set only when denied."""

    allowed: bool
    denial_kind: ErrorKind | None = None

    @classmethod
    def allow(cls) -> AccessDecision:
        return cls(allowed=True)


class TaskAccessGuard:
    """Ownership policy for tasks.

    Any authenticated identity may create (the new task is owned by it);
    read, update and delete require identity.id == owner_id. Every denial is
    NOT_FOUND, the same answer the owner-scoped repository and the RLS
    policy give, so a foreign task is indistinguishable from a missing one.
    """

    def authorize(
        self,
        identity: Identity,
        action: TaskAction,
        owner_id: str | None = None,
    ) -> AccessDecision:
        """Return whether identity may perform action on a task owned by owner_id.

        owner_id is None only for CREATE (no target task yet).
        """
        if action == TaskAction.CREATE:
            return AccessDecision.allow()
        if owner_id is not None and owner_id == identity.id:
            return AccessDecision.allow()
        logger.info(
            "Task access denied: action=%s identity=%s", action.value, identity.id
        )
        return AccessDecision(allowed=False, denial_kind=ErrorKind.NOT_FOUND)
