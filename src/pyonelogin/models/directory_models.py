"""Directory models (users, roles, groups) for OneLogin.

Copyright (c) 2025 AuthFramework. All rights reserved.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class Group(BaseModel):
    """Group model."""

    model_config = ConfigDict(extra="ignore")

    id: int
    name: str
    reference: str | None = None


class Role(BaseModel):
    """Role model."""

    model_config = ConfigDict(extra="ignore")

    id: int
    name: str


class User(BaseModel):
    """User directory record."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: int
    username: str | None = None
    email: str | None = None
    first_name: str | None = Field(default=None, alias="firstname")
    last_name: str | None = Field(default=None, alias="lastname")
    status: int | None = None
    state: int | None = None
    group_id: int | None = None
    role_ids: list[int] | None = Field(default=None, alias="role_id")
    external_id: str | int | None = None
    created_at: datetime | None = None
    last_login: datetime | None = None


class UserQuery(BaseModel):
    """Filters accepted by the user listing endpoint."""

    email: str | None = None
    username: str | None = None
    firstname: str | None = None
    lastname: str | None = None
    directory_id: int | None = None
    role_id: int | None = None
    fields: str | None = None
