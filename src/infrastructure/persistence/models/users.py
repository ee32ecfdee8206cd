"""User ORM model."""

from __future__ import annotations

import uuid
from typing import Optional

from sqlalchemy import Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.persistence.models.base import Entity


class User(Entity):
    """Application user.

    platform is free text recorded by the client that registered the user;
    it is optional and not exposed through the HTTP API.
    """

    __tablename__ = "users"

    id_type = Uuid
    id_default = uuid.uuid4

    name: Mapped[str] = mapped_column(Text, nullable=False)
    email: Mapped[str] = mapped_column(Text, nullable=False)
    platform: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
