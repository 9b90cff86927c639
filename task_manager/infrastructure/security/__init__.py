"""Security: bearer token verification."""

from task_manager.infrastructure.security.jwt import create_access_token, verify_token

__all__ = ["create_access_token", "verify_token"]
