"""OneLogin client using service composition.

Copyright (c) 2025 AuthFramework. All rights reserved.
"""

from __future__ import annotations

from typing import Self

from ._base import BaseClient
from ._clock import Clock
from ._group import GroupService
from ._login import LoginService
from ._oauth import OAuthService
from ._role import RoleService
from ._saml import SAMLService
from ._user import UserService
from .config import ClientSettings


class OneLoginClient:
    """OneLogin API client using service composition."""

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        region: str = "us",
        subdomain: str = "",
        *,
        timeout: float = 30.0,
        base_url: str | None = None,
        clock: Clock | None = None,
    ) -> None:
        """Initialize OneLogin client.

        Args:
            client_id: API credential client ID
            client_secret: API credential client secret
            region: API region ("us" or "eu")
            subdomain: Account subdomain used for user logins
            timeout: Default request timeout in seconds
            base_url: Override for the regional API URL
            clock: Time source for token expiry checks

        """
        self.settings = ClientSettings(
            client_id=client_id,
            client_secret=client_secret,
            region=region,
            subdomain=subdomain,
            timeout=timeout,
            base_url=base_url,
        )
        self._client = BaseClient(
            base_url=self.settings.api_url,
            timeout=self.settings.timeout,
        )

        # Initialize service clients
        self.oauth = OAuthService(
            self._client, client_id, client_secret, clock=clock
        )
        self.login = self.new_login()
        self.saml = SAMLService(self._client, self.oauth, self.settings.subdomain)
        self.users = UserService(self._client, self.oauth)
        self.roles = RoleService(self._client, self.oauth)
        self.groups = GroupService(self._client, self.oauth)

    @classmethod
    def from_settings(
        cls, settings: ClientSettings, *, clock: Clock | None = None
    ) -> Self:
        """Build a client from validated settings."""
        return cls(
            settings.client_id,
            settings.client_secret,
            settings.region,
            settings.subdomain,
            timeout=settings.timeout,
            base_url=settings.base_url,
            clock=clock,
        )

    @classmethod
    def from_env(cls, *, clock: Clock | None = None) -> Self:
        """Build a client from ``ONELOGIN_*`` environment variables."""
        return cls.from_settings(ClientSettings.from_env(), clock=clock)

    async def __aenter__(self) -> Self:
        """Async context manager entry.

        Returns:
            The client instance.

        """
        await self._client.__aenter__()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        """Async context manager exit."""
        await self._client.__aexit__(exc_type, exc_val, exc_tb)

    async def close(self) -> None:
        """Close the client and clean up resources."""
        await self._client.close()

    def new_login(self) -> LoginService:
        """Return a login flow with its own session.

        The flow shares this client's transport and API credential, so any
        number of them can run side by side.
        """
        return LoginService(self._client, self.oauth, self.settings.subdomain)
