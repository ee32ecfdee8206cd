"""SQLAlchemy implementation of UserRepository."""

from __future__ import annotations

from uuid import UUID

from src.domain.repositories.users import UserRepository
from src.infrastructure.persistence.models.users import User
from src.infrastructure.persistence.repositories.base import AsyncSqlRepository


class SqlUserRepository(AsyncSqlRepository[User, UUID], UserRepository):
    model = User
