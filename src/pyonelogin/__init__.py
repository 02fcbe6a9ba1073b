"""
pyonelogin

Async Python client library for the OneLogin REST API.
Provides typed access to OAuth tokens, user login with second-factor
verification, SAML assertions, and user, role and group lookups.
"""

from .client import OneLoginClient
from .config import ClientSettings
from .exceptions import *
from .models import *

__version__ = "1.0.0"

__all__ = [
    "OneLoginClient",
    "ClientSettings",
    # Exceptions
    "OneLoginError",
    "TransportError",
    "AuthError",
    "ValidationError",
    "RateLimitError",
    "ServerError",
    "StateError",
    "NotFoundError",
    "CancellationError",
    "TimeoutError",
    # Token models
    "Credential",
    # Login models
    "AuthenticatedUser",
    "Authenticated",
    "AuthResult",
    "AuthSession",
    "Device",
    "LoginState",
    "VerificationPending",
    "VerificationRequired",
    # SAML models
    "SAMLAssertion",
    "SAMLDevice",
    "SAMLResult",
    "SAMLVerificationRequired",
    # Directory models
    "Group",
    "Role",
    "User",
    "UserQuery",
]
