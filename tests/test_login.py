"""Tests for the login and second-factor flow.

Copyright (c) 2025 AuthFramework. All rights reserved.
"""

from __future__ import annotations

import json
from typing import Any

import httpx
import pytest
import respx
from pyonelogin import (
    AuthError,
    Authenticated,
    LoginState,
    NotFoundError,
    OneLoginClient,
    StateError,
    VerificationPending,
    VerificationRequired,
)

LOGIN_PATH = "/api/1/login/auth"
VERIFY_PATH = "/api/1/login/verify_factor"

PENDING_RESPONSE = {
    "status": {
        "error": False,
        "code": 200,
        "type": "pending",
        "message": "Authentication pending on OneLogin SMS",
    },
}

INVALID_OTP_RESPONSE = {
    "status": {
        "error": True,
        "code": 401,
        "type": "Unauthorized",
        "message": "Failed authentication with this factor",
    },
}


@pytest.fixture
def login_route(
    mock_responses: respx.MockRouter,
    token_route: respx.Route,
    sample_mfa_response: dict[str, Any],
) -> respx.Route:
    """Password step that leaves MFA outstanding."""
    return mock_responses.post(LOGIN_PATH).mock(
        return_value=httpx.Response(200, json=sample_mfa_response),
    )


@pytest.fixture
def verify_route(mock_responses: respx.MockRouter) -> respx.Route:
    """verify_factor endpoint; tests set its side effect."""
    return mock_responses.post(VERIFY_PATH)


async def test_fresh_login_is_unauthenticated(client: OneLoginClient) -> None:
    """Nothing is recorded before the first password step."""
    assert client.login.state is LoginState.UNAUTHENTICATED
    assert client.login.session is None


async def test_verify_before_authenticate(
    client: OneLoginClient,
    verify_route: respx.Route,
) -> None:
    """Verification without a password step is a usage error."""
    with pytest.raises(StateError):
        await client.login.verify_factor("Google Authenticator", "123456")
    assert not verify_route.called


async def test_complete_push_without_pending(client: OneLoginClient) -> None:
    """Completing a push nobody started is a usage error."""
    with pytest.raises(StateError):
        await client.login.complete_push_verification("123456")


async def test_authenticate_without_mfa(
    client: OneLoginClient,
    mock_responses: respx.MockRouter,
    token_route: respx.Route,
    sample_login_response: dict[str, Any],
) -> None:
    """A plain password login is terminal."""
    route = mock_responses.post(LOGIN_PATH).mock(
        return_value=httpx.Response(200, json=sample_login_response),
    )

    result = await client.login.authenticate_password("testuser", "s3cret")

    assert isinstance(result, Authenticated)
    assert result.user.id == 88888888
    assert result.user.first_name == "Test"
    assert result.session_token == "9x8869x31134x7906x6x54474x21x18xxx90857x"
    assert client.login.state is LoginState.AUTHENTICATED

    request = route.calls.last.request
    assert request.headers["Authorization"] == "bearer:test-access-token"
    assert json.loads(request.content) == {
        "username_or_email": "testuser",
        "password": "s3cret",
        "subdomain": "myteam",
    }


async def test_authenticate_with_mfa_required(
    client: OneLoginClient,
    login_route: respx.Route,
) -> None:
    """MFA pending after the password is a result, not an error."""
    result = await client.login.authenticate_password("testuser", "s3cret")

    assert isinstance(result, VerificationRequired)
    assert result.state_token == "5xxx604x8xx9x694xx860173xxx3x78x3x870x56"
    assert [d.device_type for d in result.devices] == [
        "Google Authenticator",
        "OneLogin SMS",
    ]
    assert client.login.state is LoginState.AWAITING_FACTOR
    assert client.login.session is not None
    assert client.login.session.state_token == result.state_token


async def test_lenient_authenticate_returns_user_despite_mfa(
    client: OneLoginClient,
    login_route: respx.Route,
) -> None:
    """The lenient login accepts a correct password even when MFA is due."""
    user = await client.login.authenticate("testuser", "s3cret")

    assert user is not None
    assert user.username == "testuser"


async def test_authenticate_rejected(
    client: OneLoginClient,
    mock_responses: respx.MockRouter,
    token_route: respx.Route,
    sample_error_response: dict[str, Any],
) -> None:
    """Wrong credentials raise AuthError and record nothing."""
    mock_responses.post(LOGIN_PATH).mock(
        return_value=httpx.Response(401, json=sample_error_response),
    )

    with pytest.raises(AuthError):
        await client.login.authenticate_password("testuser", "wrong")
    assert client.login.state is LoginState.UNAUTHENTICATED
    assert client.login.session is None


@pytest.mark.parametrize(
    "record",
    [
        pytest.param({"status": "Unknown"}, id="unknown status"),
        pytest.param({"state_token": "abc", "devices": []}, id="no devices"),
        pytest.param({"status": "Authenticated"}, id="no user"),
    ],
)
async def test_authenticate_unexpected_shape(
    client: OneLoginClient,
    mock_responses: respx.MockRouter,
    token_route: respx.Route,
    record: dict[str, Any],
) -> None:
    """Replies that are neither success nor MFA are AuthErrors."""
    mock_responses.post(LOGIN_PATH).mock(
        return_value=httpx.Response(
            200,
            json={
                "status": {"error": False, "code": 200, "type": "success", "message": "Success"},
                "data": [record],
            },
        ),
    )

    with pytest.raises(AuthError):
        await client.login.authenticate_password("testuser", "s3cret")


async def test_authenticate_empty_data(
    client: OneLoginClient,
    mock_responses: respx.MockRouter,
    token_route: respx.Route,
) -> None:
    """A success envelope without a record is an AuthError."""
    mock_responses.post(LOGIN_PATH).mock(
        return_value=httpx.Response(
            200,
            json={
                "status": {"error": False, "code": 200, "type": "success", "message": "Success"},
                "data": [],
            },
        ),
    )

    with pytest.raises(AuthError):
        await client.login.authenticate_password("testuser", "s3cret")


async def test_verify_factor_success(
    client: OneLoginClient,
    login_route: respx.Route,
    verify_route: respx.Route,
    sample_login_response: dict[str, Any],
) -> None:
    """A valid passcode completes the login as the same user."""
    verify_route.mock(return_value=httpx.Response(200, json=sample_login_response))

    required = await client.login.authenticate_password("testuser", "s3cret")
    result = await client.login.verify_factor("Google Authenticator", "123456")

    assert isinstance(result, Authenticated)
    assert result.user == required.user
    assert client.login.state is LoginState.AUTHENTICATED
    assert json.loads(verify_route.calls.last.request.content) == {
        "device_id": "666666",
        "state_token": "5xxx604x8xx9x694xx860173xxx3x78x3x870x56",
        "otp_token": "123456",
        "do_not_notify": True,
    }


async def test_verify_factor_unknown_device(
    client: OneLoginClient,
    login_route: respx.Route,
    verify_route: respx.Route,
) -> None:
    """Unregistered device tags fail before any request is made."""
    await client.login.authenticate_password("testuser", "s3cret")

    with pytest.raises(NotFoundError):
        await client.login.verify_factor("Yubico YubiKey", "123456")
    with pytest.raises(NotFoundError):
        await client.login.verify_factor("google authenticator", "")

    assert not verify_route.called
    assert client.login.state is LoginState.AWAITING_FACTOR


async def test_failed_verification_keeps_state(
    client: OneLoginClient,
    login_route: respx.Route,
    verify_route: respx.Route,
    sample_login_response: dict[str, Any],
) -> None:
    """A wrong code can be retried without logging in again."""
    verify_route.mock(
        side_effect=[
            httpx.Response(401, json=INVALID_OTP_RESPONSE),
            httpx.Response(200, json=sample_login_response),
        ],
    )

    await client.login.authenticate_password("testuser", "s3cret")
    session = client.login.session

    with pytest.raises(AuthError):
        await client.login.verify_factor("Google Authenticator", "000000")
    assert client.login.state is LoginState.AWAITING_FACTOR
    assert client.login.session == session

    result = await client.login.verify_factor("Google Authenticator", "123456")
    assert isinstance(result, Authenticated)
    assert login_route.call_count == 1


async def test_verify_factor_error_in_body(
    client: OneLoginClient,
    login_route: respx.Route,
    verify_route: respx.Route,
) -> None:
    """An error envelope delivered with HTTP 200 is still an AuthError."""
    verify_route.mock(return_value=httpx.Response(200, json=INVALID_OTP_RESPONSE))

    await client.login.authenticate_password("testuser", "s3cret")

    with pytest.raises(AuthError):
        await client.login.verify_factor("Google Authenticator", "000000")
    assert client.login.state is LoginState.AWAITING_FACTOR


async def test_verify_factor_unexpected_status(
    client: OneLoginClient,
    login_route: respx.Route,
    verify_route: respx.Route,
) -> None:
    """Success without an authenticated record is rejected."""
    verify_route.mock(
        return_value=httpx.Response(
            200,
            json={
                "status": {"error": False, "code": 200, "type": "success", "message": "Success"},
                "data": [{"status": "Pending"}],
            },
        ),
    )

    await client.login.authenticate_password("testuser", "s3cret")

    with pytest.raises(AuthError):
        await client.login.verify_factor("Google Authenticator", "123456")


async def test_push_then_complete(
    client: OneLoginClient,
    login_route: respx.Route,
    verify_route: respx.Route,
    sample_login_response: dict[str, Any],
) -> None:
    """A pending push remembers the device for the follow-up code."""
    verify_route.mock(
        side_effect=[
            httpx.Response(200, json=PENDING_RESPONSE),
            httpx.Response(200, json=sample_login_response),
        ],
    )

    pending = await client.login.authenticate_and_push(
        "testuser", "s3cret", "OneLogin SMS"
    )

    assert isinstance(pending, VerificationPending)
    assert pending.device.device_type == "OneLogin SMS"
    assert client.login.state is LoginState.AWAITING_FACTOR
    assert client.login.session is not None
    assert client.login.session.selected_device == pending.device

    result = await client.login.complete_push_verification("482915\n")

    assert isinstance(result, Authenticated)
    assert result.user.username == "testuser"

    push_body, code_body = (
        json.loads(call.request.content) for call in verify_route.calls
    )
    assert push_body["otp_token"] == ""
    assert push_body["do_not_notify"] is False
    assert code_body["device_id"] == "777777"
    assert code_body["otp_token"] == "482915"
    assert code_body["do_not_notify"] is True


async def test_pending_push_needs_selected_device(
    client: OneLoginClient,
    login_route: respx.Route,
    verify_route: respx.Route,
) -> None:
    """MFA pending alone does not make a push completable."""
    await client.login.authenticate_password("testuser", "s3cret")

    with pytest.raises(StateError):
        await client.login.complete_push_verification("123456")
    assert not verify_route.called


async def test_verify_after_completion(
    client: OneLoginClient,
    login_route: respx.Route,
    verify_route: respx.Route,
    sample_login_response: dict[str, Any],
) -> None:
    """Once authenticated, the state token is gone."""
    verify_route.mock(return_value=httpx.Response(200, json=sample_login_response))

    await client.login.authenticate_password("testuser", "s3cret")
    await client.login.verify_factor("Google Authenticator", "123456")

    with pytest.raises(StateError):
        await client.login.verify_factor("Google Authenticator", "123456")
    assert verify_route.call_count == 1


async def test_authenticate_strict(
    client: OneLoginClient,
    login_route: respx.Route,
    verify_route: respx.Route,
    sample_login_response: dict[str, Any],
) -> None:
    """Strict login needs both the password and the passcode."""
    verify_route.mock(return_value=httpx.Response(200, json=sample_login_response))

    user = await client.login.authenticate_strict(
        "testuser", "s3cret", "Google Authenticator", "123456"
    )

    assert user.id == 88888888
    assert login_route.call_count == 1
    assert verify_route.call_count == 1


async def test_authenticate_strict_bad_code(
    client: OneLoginClient,
    login_route: respx.Route,
    verify_route: respx.Route,
) -> None:
    """Strict login fails when the passcode is refused."""
    verify_route.mock(return_value=httpx.Response(401, json=INVALID_OTP_RESPONSE))

    with pytest.raises(AuthError):
        await client.login.authenticate_strict(
            "testuser", "s3cret", "Google Authenticator", "000000"
        )


async def test_authenticate_strict_without_mfa(
    client: OneLoginClient,
    mock_responses: respx.MockRouter,
    token_route: respx.Route,
    verify_route: respx.Route,
    sample_login_response: dict[str, Any],
) -> None:
    """Strict login cannot pass for a user with no second factor pending."""
    mock_responses.post(LOGIN_PATH).mock(
        return_value=httpx.Response(200, json=sample_login_response),
    )

    with pytest.raises(StateError):
        await client.login.authenticate_strict(
            "testuser", "s3cret", "Google Authenticator", "123456"
        )
    assert not verify_route.called


async def test_new_login_flows_are_independent(
    client: OneLoginClient,
    login_route: respx.Route,
) -> None:
    """Each login flow tracks its own session."""
    first = client.new_login()
    second = client.new_login()

    await first.authenticate_password("testuser", "s3cret")

    assert first.state is LoginState.AWAITING_FACTOR
    assert second.state is LoginState.UNAUTHENTICATED
    assert second.session is None


async def test_reset(
    client: OneLoginClient,
    login_route: respx.Route,
) -> None:
    """reset() forgets the pending verification."""
    await client.login.authenticate_password("testuser", "s3cret")
    client.login.reset()

    assert client.login.state is LoginState.UNAUTHENTICATED
    with pytest.raises(StateError):
        await client.login.verify_factor("Google Authenticator", "123456")
