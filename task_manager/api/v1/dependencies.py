"""Presentation-layer dependency injection (composition root).

Identity -> storage session -> repository -> service. The session factory
comes from app.state (built in the lifespan); nothing here is a module-level
client, and tests swap any link via app.dependency_overrides.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from task_manager.application.interfaces.repositories import ITaskRepository
from task_manager.application.use_cases.tasks import TaskService
from task_manager.domain.exceptions import (
    AuthenticationException,
    SqlNotConfiguredException,
)
from task_manager.domain.value_objects.identity import Identity
from task_manager.infrastructure.persistence.database import (
    is_valid_user_id,
    open_user_session,
)
from task_manager.infrastructure.persistence.repositories import TaskRepository
from task_manager.infrastructure.security.jwt import verify_token

_http_bearer = HTTPBearer(auto_error=False)


async def get_current_identity(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_http_bearer)],
) -> Identity:
    """Return the identity from the bearer JWT; raise 401 if missing or invalid."""
    if credentials is None:
        raise AuthenticationException("Not authenticated")
    try:
        payload = verify_token(credentials.credentials)
    except ValueError as e:
        raise AuthenticationException("Invalid or expired token") from e
    subject = str(payload["sub"])
    if not is_valid_user_id(subject):
        raise AuthenticationException("Invalid token subject")
    return Identity(id=subject, email=payload.get("email"), role=payload.get("role"))


def get_session_factory(request: Request) -> async_sessionmaker[AsyncSession]:
    """Session factory built by the lifespan; 503 when the database is not set up."""
    factory = getattr(request.app.state, "session_factory", None)
    if factory is None:
        raise SqlNotConfiguredException()
    return factory


async def get_task_session(
    identity: Annotated[Identity, Depends(get_current_identity)],
    factory: Annotated[async_sessionmaker[AsyncSession], Depends(get_session_factory)],
) -> AsyncIterator[AsyncSession]:
    """One transaction per request with app.current_user_id set for RLS."""
    async with open_user_session(factory, identity.id) as session:
        yield session


async def get_task_repository(
    session: Annotated[AsyncSession, Depends(get_task_session)],
) -> ITaskRepository:
    """Task repository bound to the request session."""
    return TaskRepository(session)


async def get_task_service(
    repo: Annotated[ITaskRepository, Depends(get_task_repository)],
) -> TaskService:
    """Build TaskService for this request."""
    return TaskService(task_repo=repo)
