"""API v1."""

from task_manager.api.v1.router import api_router

__all__ = ["api_router"]
