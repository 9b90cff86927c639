"""Persistence: async engine, session factory, and Base for SQLAlchemy ORM.

Schema is managed by Alembic migrations. The engine and session factory are
built by the application lifespan and stored on app.state; nothing here
holds a process-wide client, so tests can pass their own factory (or no
database at all).

Every request session runs in one transaction and first sets
app.current_user_id via set_config(..., is_local => true) so the task RLS
policy only exposes the requesting identity's rows.
"""

import logging
import re
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from task_manager.core.config import Settings
from task_manager.core.constants import RLS_CURRENT_USER_SETTING

logger = logging.getLogger(__name__)

# Identity ids are opaque (UUID for Supabase); bound the format before sending.
_USER_ID_MAX_LENGTH = 128
_USER_ID_RE = re.compile(r"^[a-zA-Z0-9_.:@|-]{1," + str(_USER_ID_MAX_LENGTH) + r"}$")


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy declarative models."""


def create_engine_from_settings(settings: Settings) -> AsyncEngine:
    """Build the async engine from settings (pool sizes, asyncpg timeouts)."""
    pool_size = settings.db_pool_size if settings.db_pool_size is not None else 10
    max_overflow = (
        settings.db_max_overflow if settings.db_max_overflow is not None else 20
    )
    command_timeout = (
        settings.db_command_timeout
        if settings.db_command_timeout is not None
        else 30
    )
    connect_args: dict[str, Any] = {}
    if "asyncpg" in settings.database_url:
        connect_args["command_timeout"] = command_timeout
    return create_async_engine(
        settings.database_url,
        echo=settings.database_echo,
        pool_pre_ping=True,
        pool_size=pool_size,
        max_overflow=max_overflow,
        pool_recycle=3600,
        connect_args=connect_args,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to engine (no autoflush, no expire on commit)."""
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


def is_valid_user_id(value: str) -> bool:
    """Return True if value is an acceptable identity id for the RLS setting."""
    if not value or len(value) > _USER_ID_MAX_LENGTH:
        return False
    return bool(_USER_ID_RE.fullmatch(value))


async def set_current_user(session: AsyncSession, user_id: str) -> None:
    """Set app.current_user_id for the current transaction (RLS input).

    Uses set_config with bound parameters; is_local=true scopes the value to
    the transaction so pooled connections never carry it over.

    Raises:
        ValueError: If user_id fails format validation.
    """
    if not is_valid_user_id(user_id):
        logger.warning(
            "Refusing to set %s: user id failed format validation (length=%d)",
            RLS_CURRENT_USER_SETTING,
            len(user_id or ""),
        )
        raise ValueError("Invalid user id for row-level security context")
    await session.execute(
        text("SELECT set_config(:name, :value, true)"),
        {"name": RLS_CURRENT_USER_SETTING, "value": user_id},
    )


@asynccontextmanager
async def open_user_session(
    session_factory: async_sessionmaker[AsyncSession], user_id: str
) -> AsyncIterator[AsyncSession]:
    """Yield a session inside one transaction scoped to user_id.

    Commits on success, rolls back on exception.
    """
    async with session_factory() as session:
        async with session.begin():
            await set_current_user(session, user_id)
            yield session
