"""OAuth credential models for OneLogin.

Copyright (c) 2025 AuthFramework. All rights reserved.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .._clock import as_utc

DEFAULT_NEAR_EXPIRY_THRESHOLD = 60

# ten years
MAX_EXPIRES_IN = 10 * 365 * 24 * 60 * 60


class IssueTokenRequest(BaseModel):
    """Body of a token issuance or refresh exchange."""

    grant_type: str
    access_token: str | None = None
    refresh_token: str | None = None


class Credential(BaseModel):
    """Bearer token plus the metadata needed to judge and renew it.

    A credential is never changed in place: issuing or refreshing produces a
    new instance that replaces the previous one as a whole.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    access_token: str = ""
    refresh_token: str = ""
    created_at: datetime | None = None
    expires_in: int = Field(default=0, ge=0, le=MAX_EXPIRES_IN)
    token_type: str = "bearer"
    account_id: int | None = None

    @field_validator("created_at", mode="before")
    @classmethod
    def _blank_created_at(cls, value: Any) -> Any:
        if value == "":
            return None
        return value

    @field_validator("created_at")
    @classmethod
    def _normalize_created_at(cls, value: datetime | None) -> datetime | None:
        return as_utc(value) if value is not None else None

    @property
    def expires_at(self) -> datetime | None:
        """Instant at which the access token stops being accepted."""
        if self.created_at is None:
            return None
        try:
            return self.created_at + timedelta(seconds=self.expires_in)
        except OverflowError:
            return datetime.max.replace(tzinfo=timezone.utc)

    def seconds_remaining(self, now: datetime) -> float:
        """Seconds of validity left at ``now``; negative once expired."""
        expires_at = self.expires_at
        if expires_at is None:
            return float("-inf")
        return (expires_at - as_utc(now)).total_seconds()

    def is_expired(self, now: datetime) -> bool:
        """Return True when ``now`` is at or past the expiry instant."""
        return self.seconds_remaining(now) <= 0

    def is_near_expiry(
        self,
        now: datetime,
        threshold: float = DEFAULT_NEAR_EXPIRY_THRESHOLD,
    ) -> bool:
        """Return True when at most ``threshold`` seconds of validity remain."""
        return self.seconds_remaining(now) <= threshold


class TokenStatus(BaseModel):
    """Status block attached to OneLogin envelopes."""

    error: bool = False
    code: int | None = None
    type: str | None = None
    message: str | None = None


class GenerateTokenResponse(Credential):
    """Token endpoint response: credential fields plus an optional status."""

    status: TokenStatus | None = None

    def to_credential(self) -> Credential:
        """Drop the status block and keep the credential snapshot."""
        return Credential.model_validate(self.model_dump(exclude={"status"}))
