"""OAuth token service for OneLogin.

Copyright (c) 2025 AuthFramework. All rights reserved.
"""

from __future__ import annotations

import logging

from pydantic import ValidationError as PydanticValidationError

from ._base import BaseClient, RequestConfig
from ._clock import Clock, utc_now
from .exceptions import AuthError, StateError, TransportError
from .models.token_models import (
    DEFAULT_NEAR_EXPIRY_THRESHOLD,
    Credential,
    GenerateTokenResponse,
    IssueTokenRequest,
)

logger = logging.getLogger(__name__)

TOKEN_ENDPOINT = "/auth/oauth2/v2/token"


class OAuthService:
    """Service owning the API credential: issuance, freshness and refresh.

    The service holds at most one :class:`Credential`. Issuing or refreshing
    swaps the held credential for a new snapshot; it is never edited in place.
    """

    def __init__(
        self,
        client: BaseClient,
        client_id: str,
        client_secret: str,
        *,
        clock: Clock | None = None,
    ) -> None:
        """Initialize OAuth service.

        Args:
            client: The base HTTP client
            client_id: OAuth client ID of the API credential pair
            client_secret: OAuth client secret of the API credential pair
            clock: Returns "now"; defaults to the system UTC clock

        """
        self._client = client
        self._client_id = client_id
        self._client_secret = client_secret
        self._clock = clock or utc_now
        self._credential: Credential | None = None

    @property
    def credential(self) -> Credential | None:
        """The credential currently held, if any."""
        return self._credential

    def set_credential(self, credential: Credential) -> None:
        """Replace the held credential, e.g. one restored by the caller."""
        self._credential = credential

    def clear(self) -> None:
        """Forget the held credential."""
        self._credential = None

    def is_expired(self) -> bool:
        """Return True when no usable credential is held."""
        if self._credential is None:
            return True
        return self._credential.is_expired(self._clock())

    def is_near_expiry(
        self, threshold: float = DEFAULT_NEAR_EXPIRY_THRESHOLD
    ) -> bool:
        """Return True when the held credential has ``threshold`` seconds or less left.

        Args:
            threshold: Seconds before expiry that count as "near"

        """
        if self._credential is None:
            return True
        return self._credential.is_near_expiry(self._clock(), threshold)

    async def issue_token(self, *, timeout: float | None = None) -> Credential:
        """Obtain a new credential with the client-credentials grant.

        Args:
            timeout: Per-call timeout in seconds

        Returns:
            The newly issued credential, which is also held by the service.

        """
        body = IssueTokenRequest(grant_type="client_credentials")
        headers = {
            "Authorization": (
                f"client_id:{self._client_id}, client_secret:{self._client_secret}"
            ),
        }
        config = RequestConfig(
            json_data=body.model_dump(exclude_none=True),
            headers=headers,
            timeout=timeout,
        )
        credential = await self._exchange(config, "token issuance")
        logger.info(
            "Issued OneLogin access token (expires in %ss)", credential.expires_in
        )
        return credential

    async def refresh_token(
        self,
        existing: Credential | None = None,
        *,
        timeout: float | None = None,
    ) -> Credential:
        """Exchange an access/refresh pair for a new credential.

        Args:
            existing: Credential to refresh; the held one when omitted
            timeout: Per-call timeout in seconds

        Returns:
            The refreshed credential, which replaces the held one.

        Raises:
            StateError: If there is no credential to refresh

        """
        current = existing or self._credential
        if current is None or not current.refresh_token:
            msg = "no credential to refresh, issue a token first"
            raise StateError(msg)

        body = IssueTokenRequest(
            grant_type="refresh_token",
            access_token=current.access_token,
            refresh_token=current.refresh_token,
        )
        config = RequestConfig(
            json_data=body.model_dump(exclude_none=True),
            timeout=timeout,
        )
        credential = await self._exchange(config, "token refresh")
        logger.info(
            "Refreshed OneLogin access token (expires in %ss)", credential.expires_in
        )
        return credential

    async def authorization_header(
        self, *, timeout: float | None = None
    ) -> dict[str, str]:
        """Return the bearer header for API calls, issuing a token if needed.

        A missing or expired credential triggers a fresh issuance. A credential
        that is merely near expiry is used as is; refreshing it is up to the
        caller.

        Returns:
            Header mapping ready to merge into a request.

        """
        credential = self._credential
        if credential is None or credential.is_expired(self._clock()):
            credential = await self.issue_token(timeout=timeout)
        return {"Authorization": f"bearer:{credential.access_token}"}

    async def _exchange(self, config: RequestConfig, action: str) -> Credential:
        """Run one token exchange and store its result."""
        payload = await self._client.make_request(
            "POST", TOKEN_ENDPOINT, config=config
        )

        # v1 tenants wrap the token in a one-element data list
        data = payload.get("data")
        if isinstance(data, list) and data and isinstance(data[0], dict):
            record = dict(data[0])
        else:
            record = dict(payload)
        if "status" in payload:
            record["status"] = payload["status"]

        try:
            response = GenerateTokenResponse.model_validate(record)
        except PydanticValidationError as e:
            msg = f"OneLogin {action} returned an unreadable token"
            raise TransportError(msg, details=payload) from e

        if response.status is not None and response.status.error:
            status = response.status
            msg = (
                f"OneLogin oauth error: {status.type} ({status.code})"
                f" - {status.message}"
            )
            raise AuthError(
                msg,
                details=payload,
                status_code=status.code,
                code=status.type or "OAUTH_ERROR",
            )

        if not response.access_token:
            msg = f"OneLogin {action} returned no access token"
            raise AuthError(msg, details=payload)

        credential = response.to_credential()
        self._credential = credential
        return credential
