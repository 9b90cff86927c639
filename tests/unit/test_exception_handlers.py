"""Tests for the registered exception handlers' error bodies."""

import json
from types import SimpleNamespace

from slowapi.errors import RateLimitExceeded
from starlette.requests import Request

from task_manager.core.limiter import WRITE_ENDPOINT_LIMIT
from task_manager.main import app


def _request() -> Request:
    return Request({"type": "http", "method": "POST", "path": "/api/v1/tasks", "headers": []})


def test_rate_limit_uses_standard_error_shape() -> None:
    handler = app.exception_handlers[RateLimitExceeded]
    exc = RateLimitExceeded(SimpleNamespace(error_message=None, limit=WRITE_ENDPOINT_LIMIT))
    response = handler(_request(), exc)
    assert response.status_code == 429
    body = json.loads(response.body)
    assert set(body) == {"error", "message", "details"}
    assert body["error"] == "RATE_LIMITED"
    assert body["details"] == {"limit": WRITE_ENDPOINT_LIMIT}
