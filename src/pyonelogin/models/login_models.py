"""Login and second-factor models for OneLogin.

Copyright (c) 2025 AuthFramework. All rights reserved.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class AuthenticatedUser(BaseModel):
    """Summary of the user returned by a login or verification call."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: int
    username: str | None = None
    email: str | None = None
    first_name: str | None = Field(default=None, alias="firstname")
    last_name: str | None = Field(default=None, alias="lastname")


class Device(BaseModel):
    """A registered second-factor device."""

    model_config = ConfigDict(extra="ignore")

    device_id: int | str
    device_type: str


class LoginRecord(BaseModel):
    """One entry of the ``data`` list returned by the login endpoints."""

    model_config = ConfigDict(extra="ignore")

    status: str | None = None
    user: AuthenticatedUser | None = None
    return_to_url: str | None = None
    expires_at: str | None = None
    session_token: str | None = None
    state_token: str | None = None
    callback_url: str | None = None
    devices: list[Device] = Field(default_factory=list)

    @field_validator("devices", mode="before")
    @classmethod
    def _null_devices(cls, value: object) -> object:
        return [] if value is None else value


class Authenticated(BaseModel):
    """Terminal login outcome: the user is fully authenticated."""

    kind: Literal["authenticated"] = "authenticated"
    user: AuthenticatedUser
    session_token: str | None = None
    return_to_url: str | None = None
    expires_at: str | None = None


class VerificationRequired(BaseModel):
    """Password accepted, but the user's policy asks for a second factor."""

    kind: Literal["verification_required"] = "verification_required"
    user: AuthenticatedUser | None = None
    state_token: str
    devices: list[Device]
    callback_url: str | None = None


class VerificationPending(BaseModel):
    """A push challenge was delivered to a device; a code must follow."""

    kind: Literal["verification_pending"] = "verification_pending"
    device: Device
    message: str | None = None


AuthResult = Annotated[
    Union[Authenticated, VerificationRequired, VerificationPending],
    Field(discriminator="kind"),
]


class LoginState(str, Enum):
    """Where a login flow currently stands."""

    UNAUTHENTICATED = "unauthenticated"
    AWAITING_FACTOR = "awaiting_factor"
    AUTHENTICATED = "authenticated"


class AuthSession(BaseModel):
    """Ephemeral state linking a password step to its second-factor step."""

    user: AuthenticatedUser | None = None
    state_token: str | None = None
    devices: list[Device] = Field(default_factory=list)
    callback_url: str | None = None
    selected_device: Device | None = None

    @property
    def awaiting_factor(self) -> bool:
        """True when a state token and devices are held for verification."""
        return bool(self.state_token) and bool(self.devices)

    def find_device(self, device_type: str) -> Device | None:
        """Return the first device whose type tag matches exactly."""
        for device in self.devices:
            if device.device_type == device_type:
                return device
        return None


class VerifyFactorRequest(BaseModel):
    """Body of a ``verify_factor`` call."""

    device_id: str
    state_token: str
    otp_token: str = ""
    do_not_notify: bool = True


class LoginRequest(BaseModel):
    """Body of a password login call."""

    username_or_email: str
    password: str
    subdomain: str
