"""SAML assertion service for OneLogin.

Copyright (c) 2025 AuthFramework. All rights reserved.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from ._base import BaseClient, RequestConfig
from ._oauth import OAuthService
from .exceptions import AuthError, TransportError
from .models.saml_models import (
    SAMLAssertion,
    SAMLAssertionRequest,
    SAMLResponse,
    SAMLVerificationRequired,
    SAMLVerifyFactorRequest,
)

logger = logging.getLogger(__name__)

SAML_ASSERTION_ENDPOINT = "/api/2/saml_assertion"
SAML_VERIFY_FACTOR_ENDPOINT = "/api/2/saml_assertion/verify_factor"

SUCCESS_MESSAGE = "Success"
MFA_REQUIRED_MESSAGE = "MFA is required for this user"


class SAMLService:
    """Service for retrieving SAML assertions for an app."""

    def __init__(
        self,
        client: BaseClient,
        oauth: OAuthService,
        subdomain: str,
    ) -> None:
        """Initialize SAML service.

        Args:
            client: The base HTTP client
            oauth: Token service supplying the bearer header
            subdomain: OneLogin account subdomain

        """
        self._client = client
        self._oauth = oauth
        self._subdomain = subdomain

    async def saml_assertion(
        self,
        username: str,
        password: str,
        app_id: str,
        *,
        timeout: float | None = None,
    ) -> SAMLAssertion | SAMLVerificationRequired:
        """Request a SAML assertion for a user and app.

        Args:
            username: Username or email address
            password: User's password
            app_id: ID of the SAML app
            timeout: Per-call timeout in seconds

        Returns:
            The assertion, or the state token and devices when MFA is required.

        """
        body = SAMLAssertionRequest(
            username_or_email=username,
            password=password,
            app_id=app_id,
            subdomain=self._subdomain,
        )
        response = await self._post(SAML_ASSERTION_ENDPOINT, body.model_dump(), timeout)

        if response.message == SUCCESS_MESSAGE and response.data:
            logger.debug("Received SAML assertion for app %s", app_id)
            return SAMLAssertion(
                assertion=response.data.strip('"'), message=response.message
            )

        if response.message == MFA_REQUIRED_MESSAGE and response.state_token:
            return SAMLVerificationRequired(
                state_token=response.state_token,
                user=response.user,
                devices=response.devices,
                callback_url=response.callback_url,
                message=response.message,
            )

        msg = f"unexpected SAML assertion response: {response.message}"
        raise AuthError(msg, details=response.model_dump())

    async def verify_factor(
        self,
        app_id: str,
        device_id: str | int,
        state_token: str,
        otp: str = "",
        *,
        do_not_notify: bool = False,
        timeout: float | None = None,
    ) -> str:
        """Verify a second factor and return the SAML assertion.

        Returns:
            The base64-encoded assertion.

        Raises:
            AuthError: If no assertion is returned

        """
        body = SAMLVerifyFactorRequest(
            app_id=app_id,
            device_id=str(device_id),
            state_token=state_token,
            otp_token=otp,
            do_not_notify=do_not_notify,
        )
        response = await self._post(
            SAML_VERIFY_FACTOR_ENDPOINT, body.model_dump(), timeout
        )

        if response.message == SUCCESS_MESSAGE and response.data:
            return response.data.strip('"')

        msg = "SAML response does not contain an assertion"
        raise AuthError(msg, details=response.model_dump())

    async def _post(
        self, endpoint: str, body: dict[str, Any], timeout: float | None
    ) -> SAMLResponse:
        headers = await self._oauth.authorization_header(timeout=timeout)
        config = RequestConfig(json_data=body, headers=headers, timeout=timeout)
        payload = await self._client.make_request("POST", endpoint, config=config)

        try:
            response = SAMLResponse.model_validate(payload)
        except PydanticValidationError as e:
            msg = "SAML response could not be parsed"
            raise TransportError(msg, details=payload) from e

        if response.status_code in (400, 401):
            msg = (
                f"error from SAML assertion: {response.name}"
                f" ({response.status_code}) - {response.message}"
            )
            raise AuthError(
                msg,
                details=payload,
                status_code=response.status_code,
                code=response.name or "SAML_ERROR",
            )
        return response
