from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field  # type: ignore[import-not-found]


class ProfilePublic(BaseModel):
    id: UUID
    display_name: str | None = None
    avatar_url: str | None = None
    updated_at: datetime


class UpsertProfileRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    display_name: str | None = Field(default=None, alias="displayName", max_length=80)
    avatar_url: str | None = Field(default=None, alias="avatarUrl", max_length=2048)
