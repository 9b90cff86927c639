"""Liveness and readiness probes. Neither requires a bearer token."""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from task_manager.core.config import get_settings
from task_manager.infrastructure.persistence.rls_check import run_rls_check
from task_manager.schemas.health import (
    HealthResponse,
    ReadinessErrorResponse,
    ReadinessResponse,
)

router = APIRouter()


def _not_ready(message: str) -> JSONResponse:
    return JSONResponse(
        status_code=503, content=ReadinessErrorResponse(message=message).model_dump()
    )


@router.get("", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Return ok and the running version."""
    return HealthResponse(version=get_settings().app_version)


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    responses={503: {"description": "Database or RLS setup not ready", "model": ReadinessErrorResponse}},
)
async def readiness_check(request: Request) -> ReadinessResponse | JSONResponse:
    """Return 200 when the database answers; 503 otherwise.

    With RLS_READINESS_CHECK set, also require that the app role has no
    BYPASSRLS and (RLS_CHECK_POLICIES) that the task ownership policy exists.
    """
    engine = getattr(request.app.state, "db_engine", None)
    if engine is None:
        return _not_ready("Database engine not initialized")
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except (OSError, SQLAlchemyError):
        return _not_ready("Database not reachable")

    settings = get_settings()
    if settings.rls_readiness_check:
        result = await run_rls_check(
            database_url=settings.database_url,
            app_role=settings.rls_check_app_role,
            check_policies=settings.rls_check_policies,
        )
        if not result.ok:
            return _not_ready(result.message)
    return ReadinessResponse()
