"""Group directory service for OneLogin.

Copyright (c) 2025 AuthFramework. All rights reserved.
"""

from __future__ import annotations

from ._base import BaseClient, RequestConfig
from ._oauth import OAuthService
from .exceptions import NotFoundError
from .models.directory_models import Group


class GroupService:
    """Service for group lookups."""

    def __init__(self, client: BaseClient, oauth: OAuthService) -> None:
        self._client = client
        self._oauth = oauth

    async def list_groups(self, *, timeout: float | None = None) -> list[Group]:
        """Get all groups, following pagination."""
        headers = await self._oauth.authorization_header(timeout=timeout)
        config = RequestConfig(headers=headers, timeout=timeout)
        return [
            self._client.parse_record(Group, item, "GET /api/1/groups")
            async for item in self._client.paginate("/api/1/groups", config=config)
        ]

    async def get_group(self, group_id: int, *, timeout: float | None = None) -> Group:
        """Get a group by ID.

        Raises:
            NotFoundError: If the group does not exist

        """
        endpoint = f"/api/1/groups/{group_id}"
        headers = await self._oauth.authorization_header(timeout=timeout)
        config = RequestConfig(headers=headers, timeout=timeout)
        payload = await self._client.make_request("GET", endpoint, config=config)
        self._client.check_status(payload, f"GET {endpoint}")

        data = payload.get("data") or []
        if not data:
            msg = f"group {group_id} not found"
            raise NotFoundError(msg)
        return self._client.parse_record(Group, data[0], f"GET {endpoint}")
