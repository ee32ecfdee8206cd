"""User transfer objects returned by the application handlers."""

from __future__ import annotations

from uuid import UUID

from pydantic import BaseModel, ConfigDict


class CreatedUserResponseDto(BaseModel):
    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: UUID
    name: str
    email: str


class GetListUserListItemDto(BaseModel):
    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: UUID
    name: str
    email: str
