"""User directory service for OneLogin.

Copyright (c) 2025 AuthFramework. All rights reserved.
"""

from __future__ import annotations

from typing import Any

from ._base import BaseClient, RequestConfig
from ._oauth import OAuthService
from .exceptions import NotFoundError, TransportError
from .models.directory_models import User, UserQuery


class UserService:
    """Service for user lookups."""

    def __init__(self, client: BaseClient, oauth: OAuthService) -> None:
        """Initialize user service.

        Args:
            client: The base HTTP client
            oauth: Token service supplying the bearer header

        """
        self._client = client
        self._oauth = oauth

    async def list_users(
        self,
        query: UserQuery | None = None,
        *,
        timeout: float | None = None,
    ) -> list[User]:
        """Get all users, following pagination.

        Args:
            query: Optional filters (email, username, role_id, ...)
            timeout: Per-request timeout in seconds

        Returns:
            Every matching user.

        """
        params = query.model_dump(exclude_none=True) if query else None
        headers = await self._oauth.authorization_header(timeout=timeout)
        config = RequestConfig(params=params, headers=headers, timeout=timeout)
        return [
            self._client.parse_record(User, item, "GET /api/1/users")
            async for item in self._client.paginate("/api/1/users", config=config)
        ]

    async def get_user(self, user_id: int, *, timeout: float | None = None) -> User:
        """Get a user by ID.

        Raises:
            NotFoundError: If the user does not exist

        """
        endpoint = f"/api/1/users/{user_id}"
        data = await self._get(endpoint, timeout)
        if not data:
            msg = f"user {user_id} not found"
            raise NotFoundError(msg)
        return self._client.parse_record(User, data[0], f"GET {endpoint}")

    async def get_user_roles(
        self, user_id: int, *, timeout: float | None = None
    ) -> list[int]:
        """Get the IDs of the roles assigned to a user.

        Returns:
            Role IDs, possibly empty.

        """
        endpoint = f"/api/1/users/{user_id}/roles"
        data = await self._get(endpoint, timeout)
        # the API nests the ID list one level deep: {"data": [[1, 2, 3]]}
        if data and isinstance(data[0], list):
            data = data[0]
        try:
            return [int(role_id) for role_id in data]
        except (TypeError, ValueError) as e:
            msg = f"GET {endpoint}: unreadable role ID list"
            raise TransportError(msg, details=data) from e

    async def _get(self, endpoint: str, timeout: float | None) -> list[Any]:
        headers = await self._oauth.authorization_header(timeout=timeout)
        config = RequestConfig(headers=headers, timeout=timeout)
        payload = await self._client.make_request("GET", endpoint, config=config)
        self._client.check_status(payload, f"GET {endpoint}")
        return payload.get("data") or []
