"""Test configuration and common utilities.

Copyright (c) 2025 AuthFramework. All rights reserved.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any

import httpx
import pytest
import respx
from pyonelogin import OneLoginClient

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator, Callable, Generator

# Friday, February 13, 2009 11:31:30 PM UTC
FROZEN_NOW = datetime.fromtimestamp(1234567890, tz=timezone.utc)


@pytest.fixture
def base_url() -> str:
    """Return base URL for test server."""
    return "https://api.onelogin.test"


@pytest.fixture
def frozen_now() -> datetime:
    """Return the instant the test clock is frozen at."""
    return FROZEN_NOW


@pytest.fixture
def clock(frozen_now: datetime) -> Callable[[], datetime]:
    """Return a clock that always reports ``frozen_now``."""
    return lambda: frozen_now


@pytest.fixture
async def client(
    base_url: str,
    clock: Callable[[], datetime],
) -> AsyncGenerator[OneLoginClient, None]:
    """Create test client.

    Yields:
        OneLoginClient: Configured test client.

    """
    async with OneLoginClient(
        "test-client-id",
        "test-client-secret",
        subdomain="myteam",
        base_url=base_url,
        timeout=5.0,
        clock=clock,
    ) as client:
        yield client


@pytest.fixture
def mock_responses(base_url: str) -> Generator[respx.MockRouter, None, None]:
    """Mock HTTP responses.

    Yields:
        The mock router for HTTP requests.

    """
    with respx.mock(base_url=base_url, assert_all_called=False) as router:
        yield router


@pytest.fixture
def sample_token_response() -> dict[str, Any]:
    """Token issued 30 seconds before the frozen clock, valid for ten hours."""
    return {
        "access_token": "test-access-token",
        "created_at": "2009-02-13T23:31:00.000Z",
        "expires_in": 36000,
        "refresh_token": "test-refresh-token",
        "token_type": "bearer",
        "account_id": 555555,
    }


@pytest.fixture
def token_route(
    mock_responses: respx.MockRouter,
    sample_token_response: dict[str, Any],
) -> respx.Route:
    """Mock the token endpoint with a valid credential."""
    return mock_responses.post("/auth/oauth2/v2/token").mock(
        return_value=httpx.Response(200, json=sample_token_response),
    )


@pytest.fixture
def sample_user() -> dict[str, Any]:
    """Sample authenticated user."""
    return {
        "id": 88888888,
        "username": "testuser",
        "email": "test@example.com",
        "firstname": "Test",
        "lastname": "User",
    }


@pytest.fixture
def sample_devices() -> list[dict[str, Any]]:
    """Second-factor devices registered for the sample user."""
    return [
        {"device_id": 666666, "device_type": "Google Authenticator"},
        {"device_id": 777777, "device_type": "OneLogin SMS"},
    ]


@pytest.fixture
def sample_login_response(sample_user: dict[str, Any]) -> dict[str, Any]:
    """Login response for a user without MFA."""
    return {
        "status": {
            "error": False,
            "code": 200,
            "type": "success",
            "message": "Success",
        },
        "data": [
            {
                "status": "Authenticated",
                "user": sample_user,
                "return_to_url": None,
                "expires_at": "2009/02/13 23:33:30 +0000",
                "session_token": "9x8869x31134x7906x6x54474x21x18xxx90857x",
            },
        ],
    }


@pytest.fixture
def sample_mfa_response(
    sample_user: dict[str, Any],
    sample_devices: list[dict[str, Any]],
) -> dict[str, Any]:
    """Login response for a user whose policy requires MFA."""
    return {
        "status": {
            "error": False,
            "code": 200,
            "type": "success",
            "message": "MFA is required for this user",
        },
        "data": [
            {
                "user": sample_user,
                "state_token": "5xxx604x8xx9x694xx860173xxx3x78x3x870x56",
                "callback_url": "https://api.onelogin.test/api/1/login/verify_factor",
                "devices": sample_devices,
            },
        ],
    }


@pytest.fixture
def sample_error_response() -> dict[str, Any]:
    """Sample error response."""
    return {
        "status": {
            "error": True,
            "code": 401,
            "type": "Unauthorized",
            "message": "Authentication Failed: Invalid user credentials",
        },
    }
