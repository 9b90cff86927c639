"""Health probe schemas."""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Liveness: the process is serving requests."""

    status: str = "ok"
    version: str = Field(..., description="Running application version")


class ReadinessResponse(BaseModel):
    status: str = "ok"


class ReadinessErrorResponse(BaseModel):
    """503 body when the database or the RLS setup is not ready."""

    status: str = "not_ready"
    message: str
