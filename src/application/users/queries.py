"""List-users query and its handler."""

from __future__ import annotations

from pydantic import BaseModel, Field

from src.application.responses import GetListResponse
from src.application.users.dtos import GetListUserListItemDto
from src.domain.repositories.users import UserRepository
from src.infrastructure.persistence.models.users import User


class GetListUserQuery(BaseModel):
    index: int = Field(default=0, ge=0)
    size: int = Field(default=5, ge=0)


class GetListUserQueryHandler:
    """Lists users page by page, oldest first, soft-deleted ones included."""

    def __init__(self, user_repository: UserRepository) -> None:
        self._user_repository = user_repository

    async def handle(self, request: GetListUserQuery) -> GetListResponse[GetListUserListItemDto]:
        users = await self._user_repository.get_list(
            index=request.index,
            size=request.size,
            order_by=[User.created_date, User.id],
            with_deleted=True,
        )
        return GetListResponse[GetListUserListItemDto].model_validate(users, from_attributes=True)
