"""OneLogin models package.

Copyright (c) 2025 AuthFramework. All rights reserved.
"""

from .directory_models import Group, Role, User, UserQuery
from .login_models import (
    AuthenticatedUser,
    Authenticated,
    AuthResult,
    AuthSession,
    Device,
    LoginRecord,
    LoginRequest,
    LoginState,
    VerificationPending,
    VerificationRequired,
    VerifyFactorRequest,
)
from .saml_models import (
    SAMLAssertion,
    SAMLAssertionRequest,
    SAMLDevice,
    SAMLResponse,
    SAMLResult,
    SAMLVerificationRequired,
    SAMLVerifyFactorRequest,
)
from .token_models import (
    DEFAULT_NEAR_EXPIRY_THRESHOLD,
    Credential,
    GenerateTokenResponse,
    IssueTokenRequest,
    TokenStatus,
)

__all__ = [
    # Token models
    "DEFAULT_NEAR_EXPIRY_THRESHOLD",
    "Credential",
    "GenerateTokenResponse",
    "IssueTokenRequest",
    "TokenStatus",
    # Login models
    "AuthenticatedUser",
    "Authenticated",
    "AuthResult",
    "AuthSession",
    "Device",
    "LoginRecord",
    "LoginRequest",
    "LoginState",
    "VerificationPending",
    "VerificationRequired",
    "VerifyFactorRequest",
    # SAML models
    "SAMLAssertion",
    "SAMLAssertionRequest",
    "SAMLDevice",
    "SAMLResponse",
    "SAMLResult",
    "SAMLVerificationRequired",
    "SAMLVerifyFactorRequest",
    # Directory models
    "Group",
    "Role",
    "User",
    "UserQuery",
]
