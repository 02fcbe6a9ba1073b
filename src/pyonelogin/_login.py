"""Login service for OneLogin.

Copyright (c) 2025 AuthFramework. All rights reserved.

Implements the login flow of https://developers.onelogin.com/api-docs/1/login-page:
a password step that may leave a second factor outstanding, followed by
``verify_factor`` calls that either check a passcode or push a challenge to a
device.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from ._base import BaseClient, RequestConfig
from ._oauth import OAuthService
from .exceptions import AuthError, NotFoundError, StateError, TransportError
from .models.login_models import (
    Authenticated,
    AuthenticatedUser,
    AuthSession,
    LoginRecord,
    LoginRequest,
    LoginState,
    VerificationPending,
    VerificationRequired,
    VerifyFactorRequest,
)

logger = logging.getLogger(__name__)

LOGIN_ENDPOINT = "/api/1/login/auth"
VERIFY_FACTOR_ENDPOINT = "/api/1/login/verify_factor"

AUTHENTICATED_STATUS = "Authenticated"


class LoginService:
    """Service driving a single user's login, including second-factor steps.

    One instance tracks one login flow. Calls against the same instance must
    not overlap; use :meth:`OneLoginClient.new_login` for parallel flows.
    """

    def __init__(
        self,
        client: BaseClient,
        oauth: OAuthService,
        subdomain: str,
    ) -> None:
        """Initialize login service.

        Args:
            client: The base HTTP client
            oauth: Token service supplying the bearer header
            subdomain: OneLogin account subdomain users log in to

        """
        self._client = client
        self._oauth = oauth
        self._subdomain = subdomain
        self._session: AuthSession | None = None
        self._state = LoginState.UNAUTHENTICATED

    @property
    def state(self) -> LoginState:
        """Current position in the login flow."""
        return self._state

    @property
    def session(self) -> AuthSession | None:
        """Session recorded by the last successful step, if any."""
        return self._session

    def reset(self) -> None:
        """Discard the session and start over."""
        self._session = None
        self._state = LoginState.UNAUTHENTICATED

    async def authenticate_password(
        self,
        username: str,
        password: str,
        *,
        timeout: float | None = None,
    ) -> Authenticated | VerificationRequired:
        """Submit a username (or email) and password.

        A password that is accepted while a second factor is still required
        is not an error: the result is :class:`VerificationRequired`, and the
        state token and devices are kept for :meth:`verify_factor`.

        Args:
            username: Username or email address
            password: User's password
            timeout: Per-call timeout in seconds

        Returns:
            Authenticated or VerificationRequired.

        Raises:
            AuthError: If the credentials are rejected or the reply is unexpected

        """
        body = LoginRequest(
            username_or_email=username,
            password=password,
            subdomain=self._subdomain,
        )
        payload = await self._post(LOGIN_ENDPOINT, body.model_dump(), timeout)
        self._client.check_status(payload, "login failed for OneLogin")
        record = self._single_record(payload, "login")

        if record.status == AUTHENTICATED_STATUS and not record.state_token:
            if record.user is None:
                msg = "OneLogin returned no user for login action"
                raise AuthError(msg, details=payload)
            return self._finish(record, record.user)

        if record.state_token and record.devices:
            self._session = AuthSession(
                user=record.user,
                state_token=record.state_token,
                devices=record.devices,
                callback_url=record.callback_url,
            )
            self._transition(LoginState.AWAITING_FACTOR)
            return VerificationRequired(
                user=record.user,
                state_token=record.state_token,
                devices=record.devices,
                callback_url=record.callback_url,
            )

        msg = "authentication failed: no valid user received from OneLogin login"
        raise AuthError(msg, details=payload)

    async def verify_factor(
        self,
        device_type: str,
        otp: str = "",
        *,
        do_not_notify: bool = True,
        timeout: float | None = None,
    ) -> Authenticated | VerificationPending:
        """Verify a second factor, or push a challenge to a device.

        With a passcode device (e.g. "Google Authenticator") pass the code in
        ``otp``. With a push device (e.g. "OneLogin SMS") pass an empty
        ``otp`` and ``do_not_notify=False`` to send the challenge, then finish
        with :meth:`complete_push_verification`. Which devices can push is
        decided by the API, not checked here.

        Args:
            device_type: Device type tag exactly as listed by the password step
            otp: One-time passcode, empty to request a push
            do_not_notify: Suppress the push notification to the device
            timeout: Per-call timeout in seconds

        Returns:
            Authenticated, or VerificationPending for push challenges.

        Raises:
            StateError: If no password step is awaiting a second factor
            NotFoundError: If ``device_type`` is not registered for the user
            AuthError: If verification fails

        """
        session = self._session
        if session is None or not session.awaiting_factor:
            msg = "no prior authentication: a password step awaiting a second factor is required"
            raise StateError(msg)

        device = session.find_device(device_type)
        if device is None:
            msg = f"verify device not found: {device_type}"
            raise NotFoundError(msg, details=[d.device_type for d in session.devices])

        body = VerifyFactorRequest(
            device_id=str(device.device_id),
            state_token=session.state_token or "",
            otp_token=otp,
            do_not_notify=do_not_notify,
        )
        payload = await self._post(VERIFY_FACTOR_ENDPOINT, body.model_dump(), timeout)
        status = self._client.check_status(payload, "verify factor failed")

        # Push devices answer "pending" with no data; passcodes answer "success".
        if status.get("code") == 200 and status.get("type") == "pending":
            self._session = session.model_copy(update={"selected_device": device})
            logger.debug("Push challenge pending on %s", device.device_type)
            return VerificationPending(device=device, message=status.get("message"))

        if status.get("code") == 200 and status.get("type") == "success":
            record = self._single_record(payload, "verify factor")
            if record.status == AUTHENTICATED_STATUS and record.user is not None:
                return self._finish(record, record.user)

        msg = "verify factor failed"
        raise AuthError(msg, details=payload)

    async def complete_push_verification(
        self,
        otp: str,
        *,
        timeout: float | None = None,
    ) -> Authenticated:
        """Submit the code delivered by a pending push challenge.

        Args:
            otp: Code received on the device
            timeout: Per-call timeout in seconds

        Returns:
            The authenticated result.

        Raises:
            StateError: If no push challenge is pending

        """
        session = self._session
        if session is None or session.selected_device is None:
            msg = "no verify device selected, a push verification must be pending first"
            raise StateError(msg)

        result = await self.verify_factor(
            session.selected_device.device_type,
            otp.strip(),
            do_not_notify=True,
            timeout=timeout,
        )
        if not isinstance(result, Authenticated):
            msg = "push verification is still pending"
            raise AuthError(msg, details=result.model_dump())
        return result

    async def authenticate(
        self,
        username: str,
        password: str,
        *,
        timeout: float | None = None,
    ) -> AuthenticatedUser | None:
        """Authenticate with a password only.

        This succeeds whenever the password is right, even if the user's
        policy requires MFA. Use :meth:`authenticate_strict` to insist on a
        verified second factor.

        Returns:
            The user reported by the password step.

        """
        result = await self.authenticate_password(username, password, timeout=timeout)
        return result.user

    async def authenticate_strict(
        self,
        username: str,
        password: str,
        device_type: str,
        otp: str,
        *,
        timeout: float | None = None,
    ) -> AuthenticatedUser:
        """Authenticate with a password and a second-factor passcode.

        Succeeds only if both steps do.

        Returns:
            The verified user.

        """
        await self.authenticate_password(username, password, timeout=timeout)
        result = await self.verify_factor(
            device_type, otp, do_not_notify=True, timeout=timeout
        )
        if not isinstance(result, Authenticated):
            msg = f"{device_type} did not accept a passcode"
            raise AuthError(msg, details=result.model_dump())
        return result.user

    async def authenticate_and_push(
        self,
        username: str,
        password: str,
        device_type: str,
        *,
        timeout: float | None = None,
    ) -> Authenticated | VerificationPending:
        """Authenticate with a password, then push a challenge to a device.

        Follow up with :meth:`complete_push_verification` once the user has
        the code.

        """
        await self.authenticate_password(username, password, timeout=timeout)
        return await self.verify_factor(
            device_type, "", do_not_notify=False, timeout=timeout
        )

    async def _post(
        self, endpoint: str, body: dict[str, Any], timeout: float | None
    ) -> dict[str, Any]:
        headers = await self._oauth.authorization_header(timeout=timeout)
        config = RequestConfig(json_data=body, headers=headers, timeout=timeout)
        return await self._client.make_request("POST", endpoint, config=config)

    @staticmethod
    def _single_record(payload: dict[str, Any], action: str) -> LoginRecord:
        data = payload.get("data")
        if not isinstance(data, list) or len(data) != 1:
            msg = f"OneLogin returned no single record for {action}"
            raise AuthError(msg, details=payload)
        try:
            return LoginRecord.model_validate(data[0])
        except PydanticValidationError as e:
            msg = f"OneLogin {action} record could not be parsed"
            raise TransportError(msg, details=payload) from e

    def _finish(self, record: LoginRecord, user: AuthenticatedUser) -> Authenticated:
        self._session = AuthSession(user=user)
        self._transition(LoginState.AUTHENTICATED)
        return Authenticated(
            user=user,
            session_token=record.session_token,
            return_to_url=record.return_to_url,
            expires_at=record.expires_at,
        )

    def _transition(self, state: LoginState) -> None:
        logger.debug("Login state %s -> %s", self._state.value, state.value)
        self._state = state
