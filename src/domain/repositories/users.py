"""User repository interface."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID

from .base import AsyncRepository

if TYPE_CHECKING:
    from src.infrastructure.persistence.models.users import User


class UserRepository(AsyncRepository["User", UUID]):
    """Read/write interface for User entities.

    Adds nothing to the generic contract; it exists so handlers depend on a
    user-specific abstraction rather than on the generic repository.
    """
