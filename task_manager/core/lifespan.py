"""Application lifespan: startup and shutdown.

Single place for startup/shutdown wiring: logging, the SQL engine and
session factory (kept on app.state and handed to request dependencies),
and telemetry hooks that need the engine.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from task_manager.core.config import get_settings
from task_manager.infrastructure.persistence.database import (
    create_engine_from_settings,
    create_session_factory,
)
from task_manager.shared.telemetry import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup order: logging, SQL engine + session factory, SQLAlchemy
    instrumentation (when telemetry was configured by create_app).
    Shutdown order: telemetry flush, SQL engine dispose.
    """
    settings = get_settings()
    setup_logging(settings)

    # ---- Startup ----
    engine = create_engine_from_settings(settings)
    app.state.db_engine = engine
    app.state.session_factory = create_session_factory(engine)
    logger.info("Database engine created")

    telemetry = getattr(app.state, "telemetry", None)
    if telemetry is not None:
        telemetry.instrument_sqlalchemy(engine)

    yield

    # ---- Shutdown ----
    if telemetry is not None:
        telemetry.shutdown()

    app.state.session_factory = None
    app.state.db_engine = None
    await engine.dispose()
    logger.info("Database engine disposed")
