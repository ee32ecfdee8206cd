"""Create-user command and its handler."""

from __future__ import annotations

import logging
from uuid import uuid4

from pydantic import BaseModel, Field

from src.application.users.dtos import CreatedUserResponseDto
from src.domain.repositories.users import UserRepository
from src.infrastructure.persistence.models.users import User

logger = logging.getLogger(__name__)


class CreateUserCommand(BaseModel):
    name: str = Field(min_length=1)
    email: str = Field(min_length=1)


class CreateUserCommandHandler:
    def __init__(self, user_repository: UserRepository) -> None:
        self._user_repository = user_repository

    async def handle(self, request: CreateUserCommand) -> CreatedUserResponseDto:
        user = User(id=uuid4(), name=request.name, email=request.email)
        await self._user_repository.add(user)
        logger.info("Created user %s", user.id)
        return CreatedUserResponseDto.model_validate(user)
