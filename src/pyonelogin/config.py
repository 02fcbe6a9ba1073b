"""Client configuration for the OneLogin SDK.

Copyright (c) 2025 AuthFramework. All rights reserved.
"""

from __future__ import annotations

import os
from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field, field_validator

ENV_PREFIX = "ONELOGIN_"


class ClientSettings(BaseModel):
    """Settings needed to construct a :class:`OneLoginClient`."""

    model_config = ConfigDict(frozen=True)

    client_id: str = Field(min_length=1)
    client_secret: str = Field(min_length=1, repr=False)
    region: str = "us"
    subdomain: str = ""
    timeout: float = Field(default=30.0, gt=0)
    base_url: str | None = None

    @field_validator("region")
    @classmethod
    def _lower_region(cls, value: str) -> str:
        return value.strip().lower()

    @property
    def api_url(self) -> str:
        """Base URL of the regional API, unless overridden."""
        if self.base_url:
            return self.base_url.rstrip("/")
        return f"https://api.{self.region}.onelogin.com"

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        prefix: str = ENV_PREFIX,
    ) -> ClientSettings:
        """Load settings from ``ONELOGIN_*`` environment variables.

        Recognized names are ``CLIENT_ID``, ``CLIENT_SECRET``, ``REGION``,
        ``SUBDOMAIN``, ``TIMEOUT`` and ``BASE_URL``, each behind ``prefix``.
        """
        env = os.environ if environ is None else environ
        values = {
            field: env[prefix + field.upper()]
            for field in cls.model_fields
            if prefix + field.upper() in env
        }
        return cls.model_validate(values)
