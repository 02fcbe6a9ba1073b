"""
Exception classes for the OneLogin SDK.
"""

from __future__ import annotations

from typing import Any


class OneLoginError(Exception):
    """Base exception for OneLogin SDK errors."""

    def __init__(
        self,
        message: str,
        code: str = "UNKNOWN_ERROR",
        details: Any | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details
        self.status_code = status_code


class TransportError(OneLoginError):
    """Raised when the request could not be sent or the body could not be parsed."""

    def __init__(
        self, message: str = "Transport error", details: Any | None = None
    ) -> None:
        super().__init__(message, "TRANSPORT_ERROR", details)


class AuthError(OneLoginError):
    """Raised when the API rejects a call or reports an error envelope."""

    def __init__(
        self,
        message: str = "Authentication failed",
        details: Any | None = None,
        status_code: int | None = None,
        code: str = "AUTHENTICATION_ERROR",
    ) -> None:
        super().__init__(message, code, details, status_code)


class ValidationError(AuthError):
    """Raised when the API refuses a malformed request."""

    def __init__(self, message: str, details: Any | None = None) -> None:
        super().__init__(message, details, 400, "VALIDATION_ERROR")


class RateLimitError(AuthError):
    """Raised when rate limit is exceeded."""

    def __init__(
        self,
        message: str = "Rate limit exceeded",
        retry_after: int | None = None,
        details: Any | None = None,
    ) -> None:
        super().__init__(message, details, 429, "RATE_LIMIT_ERROR")
        self.retry_after = retry_after


class ServerError(AuthError):
    """Raised when a server error occurs."""

    def __init__(
        self,
        message: str = "Internal server error",
        details: Any | None = None,
        status_code: int = 500,
    ) -> None:
        super().__init__(message, details, status_code, "SERVER_ERROR")


class StateError(OneLoginError):
    """Raised when an operation is called out of sequence."""

    def __init__(self, message: str, details: Any | None = None) -> None:
        super().__init__(message, "STATE_ERROR", details)


class NotFoundError(OneLoginError):
    """Raised when a device or resource is not found."""

    def __init__(
        self,
        message: str = "Resource not found",
        details: Any | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message, "NOT_FOUND_ERROR", details, status_code)


class CancellationError(OneLoginError):
    """Raised when a call is aborted before it completes."""

    def __init__(
        self,
        message: str = "Request cancelled",
        details: Any | None = None,
        code: str = "CANCELLED",
    ) -> None:
        super().__init__(message, code, details)


class TimeoutError(CancellationError):  # noqa: A001
    """Raised when a request times out."""

    def __init__(
        self, message: str = "Request timeout", details: Any | None = None
    ) -> None:
        super().__init__(message, details, "TIMEOUT_ERROR")


def create_error_from_response(
    status_code: int,
    error_response: dict[str, Any] | None = None,
    default_message: str | None = None,
) -> OneLoginError:
    """Create an appropriate error instance based on HTTP status code and error response."""
    message = (error_response or {}).get(
        "message", default_message or "An error occurred"
    )
    code = (error_response or {}).get("code", "UNKNOWN_ERROR")
    details = (error_response or {}).get("details")

    message_str = str(message) if message is not None else "An error occurred"
    code_str = str(code) if code is not None else "UNKNOWN_ERROR"

    if status_code == 400:
        return ValidationError(message_str, details)
    elif status_code in (401, 403):
        return AuthError(message_str, details, status_code, code_str)
    elif status_code == 404:
        return NotFoundError(message_str, details, 404)
    elif status_code == 429:
        retry_after = (error_response or {}).get("retry_after")
        return RateLimitError(message_str, retry_after, details)
    elif status_code >= 500:
        return ServerError(message_str, details, status_code)
    else:
        return AuthError(message_str, details, status_code, code_str)
