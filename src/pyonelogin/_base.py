"""Base HTTP client for OneLogin API operations.

Copyright (c) 2025 AuthFramework. All rights reserved.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from typing import Any, NamedTuple, TypeVar

import httpx  # type: ignore[import-untyped]
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from .exceptions import (
    AuthError,
    TimeoutError as OneLoginTimeoutError,
    TransportError,
    create_error_from_response,
)

logger = logging.getLogger(__name__)

# HTTP Error Status Constants
HTTP_SUCCESS_THRESHOLD = 400

USER_AGENT = "pyonelogin/1.0.0"

ModelT = TypeVar("ModelT", bound=BaseModel)


class RequestConfig(NamedTuple):
    """Configuration for HTTP requests."""

    json_data: dict[str, Any] | None = None
    params: dict[str, Any] | None = None
    headers: dict[str, str] | None = None
    timeout: float | None = None


class BaseClient:
    """Base HTTP client for making API requests."""

    def __init__(self, base_url: str, timeout: float = 30.0) -> None:
        """Initialize base HTTP client.

        Args:
            base_url: The base URL of the API
            timeout: Default request timeout in seconds

        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

        self._client = httpx.AsyncClient(
            timeout=timeout,
            headers={"User-Agent": USER_AGENT, "Accept": "application/json"},
        )

    async def __aenter__(self) -> BaseClient:
        """Async context manager entry.

        Returns:
            The client instance.

        """
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        """Async context manager exit."""
        await self._client.aclose()

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def make_request(
        self,
        method: str,
        endpoint: str,
        *,
        config: RequestConfig | None = None,
    ) -> dict[str, Any]:
        """Make a single HTTP request and decode the JSON object it returns.

        Args:
            method: HTTP method (GET, POST, etc.)
            endpoint: API endpoint path
            config: Request configuration

        Returns:
            Parsed JSON response data.

        Raises:
            TransportError: For network errors and unparsable bodies
            OneLoginTimeoutError: When the request exceeds its timeout
            AuthError: When the API answers with an error status

        """
        if config is None:
            config = RequestConfig()

        url = f"{self.base_url}/{endpoint.lstrip('/')}"
        request_timeout = config.timeout if config.timeout is not None else self.timeout

        logger.debug("%s %s", method, endpoint)
        try:
            response = await self._client.request(
                method,
                url,
                json=config.json_data,
                params=config.params,
                headers=config.headers,
                timeout=request_timeout,
            )
        except httpx.TimeoutException as e:
            msg = f"{method} {endpoint} timed out after {request_timeout}s"
            raise OneLoginTimeoutError(msg) from e
        except httpx.RequestError as e:
            msg = f"{method} {endpoint} failed: {e}"
            raise TransportError(msg) from e

        if response.status_code >= HTTP_SUCCESS_THRESHOLD:
            error_info = self._parse_error_response(response)
            logger.debug(
                "%s %s returned %s: %s",
                method,
                endpoint,
                response.status_code,
                error_info.get("message"),
            )
            raise create_error_from_response(response.status_code, error_info)

        return self._parse_json(response, f"{method} {endpoint}")

    async def paginate(
        self,
        endpoint: str,
        *,
        config: RequestConfig | None = None,
    ) -> AsyncIterator[Any]:
        """Iterate over every record of a cursor-paginated listing.

        Pages are requested one at a time, following
        ``pagination.after_cursor`` until the API stops returning one.

        Yields:
            Each item of each page's ``data`` list.

        """
        if config is None:
            config = RequestConfig()

        params = dict(config.params or {})
        while True:
            payload = await self.make_request(
                "GET", endpoint, config=config._replace(params=params)
            )
            self.check_status(payload, f"GET {endpoint}")

            for item in payload.get("data") or []:
                yield item

            after_cursor = (payload.get("pagination") or {}).get("after_cursor")
            if not after_cursor:
                break
            params["after_cursor"] = after_cursor

    @staticmethod
    def check_status(payload: dict[str, Any], context: str) -> dict[str, Any]:
        """Raise if a v1 envelope reports an error, otherwise return its status.

        Raises:
            AuthError: When ``status.error`` is set.

        """
        status = payload.get("status") or {}
        if status.get("error"):
            msg = (
                f"{context}: {status.get('type')} ({status.get('code')})"
                f" - {status.get('message')}"
            )
            code = status.get("code")
            raise AuthError(
                msg,
                details=payload,
                status_code=code if isinstance(code, int) else None,
                code=str(status.get("type") or "API_ERROR"),
            )
        return status

    @staticmethod
    def parse_record(model: type[ModelT], record: Any, context: str) -> ModelT:
        """Validate one ``data`` item against ``model``.

        Raises:
            TransportError: When the record does not match the model.

        """
        try:
            return model.model_validate(record)
        except PydanticValidationError as e:
            msg = f"{context}: unreadable {model.__name__} record"
            raise TransportError(msg, details=record) from e

    @staticmethod
    def _parse_json(response: httpx.Response, context: str) -> dict[str, Any]:
        """Decode a successful response body.

        Returns:
            The decoded JSON object.

        """
        try:
            payload = response.json()
        except ValueError as e:
            msg = f"{context}: response body is not valid JSON"
            raise TransportError(msg, details=response.text) from e

        if not isinstance(payload, dict):
            msg = f"{context}: expected a JSON object, got {type(payload).__name__}"
            raise TransportError(msg, details=payload)
        return payload

    @staticmethod
    def _parse_error_response(response: httpx.Response) -> dict[str, Any]:
        """Parse error response from the API.

        Handles both the v1 ``status`` envelope and the flat v2 shape
        (``statusCode``/``name``/``message``).

        Returns:
            Parsed error data.

        """
        try:
            payload = response.json()
        except ValueError:
            return {"message": response.text, "code": "UNKNOWN_ERROR"}

        if not isinstance(payload, dict):
            return {"message": str(payload), "code": "UNKNOWN_ERROR"}

        status = payload.get("status")
        if isinstance(status, dict):
            error_info = {
                "message": status.get("message"),
                "code": status.get("type"),
                "details": payload,
            }
        else:
            error_info = {
                "message": payload.get("message"),
                "code": payload.get("name"),
                "details": payload,
            }

        retry_after = response.headers.get("Retry-After")
        if retry_after and retry_after.isdigit():
            error_info["retry_after"] = int(retry_after)
        return error_info
