"""Tests for bearer token verification."""

from datetime import timedelta

import pytest
from jose import jwt

from task_manager.core.config import get_settings
from task_manager.infrastructure.security.jwt import create_access_token, verify_token


def test_round_trip_keeps_claims() -> None:
    token = create_access_token({"sub": "user-1", "email": "u@example.com"})
    payload = verify_token(token)
    assert payload["sub"] == "user-1"
    assert payload["email"] == "u@example.com"
    assert payload["aud"] == "authenticated"


def test_expired_token_rejected() -> None:
    token = create_access_token({"sub": "user-1"}, expires_delta=timedelta(seconds=-5))
    with pytest.raises(ValueError, match="Invalid token"):
        verify_token(token)


def test_wrong_secret_rejected() -> None:
    settings = get_settings()
    token = jwt.encode(
        {"sub": "user-1", "aud": settings.jwt_audience, "exp": 4102444800},
        "another-secret",
        algorithm=settings.jwt_algorithm,
    )
    with pytest.raises(ValueError):
        verify_token(token)


def test_wrong_audience_rejected() -> None:
    token = create_access_token({"sub": "user-1", "aud": "service_role"})
    with pytest.raises(ValueError):
        verify_token(token)


def test_missing_sub_rejected() -> None:
    token = create_access_token({"email": "u@example.com"})
    with pytest.raises(ValueError):
        verify_token(token)
