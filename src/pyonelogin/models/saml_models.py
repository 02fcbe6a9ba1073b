"""SAML assertion models for OneLogin.

Copyright (c) 2025 AuthFramework. All rights reserved.
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .login_models import AuthenticatedUser


class SAMLDevice(BaseModel):
    """Second-factor device as listed by the SAML endpoints."""

    model_config = ConfigDict(extra="ignore")

    device_id: int | str
    device_type: str
    duo_api_hostname: str | None = None
    duo_sig_request: str | None = None


class SAMLAssertionRequest(BaseModel):
    """Body of a SAML assertion request."""

    username_or_email: str
    password: str
    app_id: str
    subdomain: str


class SAMLVerifyFactorRequest(BaseModel):
    """Body of a SAML ``verify_factor`` call."""

    app_id: str
    device_id: str
    state_token: str
    otp_token: str = ""
    do_not_notify: bool = False


class SAMLResponse(BaseModel):
    """Raw v2 SAML envelope; success and MFA shapes share one body."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    message: str | None = None
    data: str | None = None
    state_token: str | None = None
    user: AuthenticatedUser | None = None
    devices: list[SAMLDevice] = Field(default_factory=list)
    callback_url: str | None = None
    name: str | None = None
    status_code: int | None = Field(default=None, alias="statusCode")

    @field_validator("devices", mode="before")
    @classmethod
    def _null_devices(cls, value: object) -> object:
        return [] if value is None else value


class SAMLAssertion(BaseModel):
    """A base64-encoded SAML assertion ready to post to the service provider."""

    kind: Literal["assertion"] = "assertion"
    assertion: str
    message: str | None = None


class SAMLVerificationRequired(BaseModel):
    """The user must pass a second factor before an assertion is issued."""

    kind: Literal["verification_required"] = "verification_required"
    state_token: str
    user: AuthenticatedUser | None = None
    devices: list[SAMLDevice]
    callback_url: str | None = None
    message: str | None = None


SAMLResult = Annotated[
    Union[SAMLAssertion, SAMLVerificationRequired],
    Field(discriminator="kind"),
]
