"""Role directory service for OneLogin.

Copyright (c) 2025 AuthFramework. All rights reserved.
"""

from __future__ import annotations

from ._base import BaseClient, RequestConfig
from ._oauth import OAuthService
from .exceptions import NotFoundError
from .models.directory_models import Role


class RoleService:
    """Service for role lookups."""

    def __init__(self, client: BaseClient, oauth: OAuthService) -> None:
        self._client = client
        self._oauth = oauth

    async def list_roles(self, *, timeout: float | None = None) -> list[Role]:
        """Get all roles, following pagination."""
        headers = await self._oauth.authorization_header(timeout=timeout)
        config = RequestConfig(headers=headers, timeout=timeout)
        return [
            self._client.parse_record(Role, item, "GET /api/1/roles")
            async for item in self._client.paginate("/api/1/roles", config=config)
        ]

    async def get_role(self, role_id: int, *, timeout: float | None = None) -> Role:
        """Get a role by ID.

        Raises:
            NotFoundError: If the role does not exist

        """
        endpoint = f"/api/1/roles/{role_id}"
        headers = await self._oauth.authorization_header(timeout=timeout)
        config = RequestConfig(headers=headers, timeout=timeout)
        payload = await self._client.make_request("GET", endpoint, config=config)
        self._client.check_status(payload, f"GET {endpoint}")

        data = payload.get("data") or []
        if not data:
            msg = f"role {role_id} not found"
            raise NotFoundError(msg)
        return self._client.parse_record(Role, data[0], f"GET {endpoint}")
