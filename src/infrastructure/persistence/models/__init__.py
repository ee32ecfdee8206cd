"""ORM model registry. Imports every model module so each mapper class is
registered with Base.metadata before Alembic or SQLAlchemy runs.
"""

from src.infrastructure.persistence.models.base import INCLUDE_DELETED, Entity, utc_now
from src.infrastructure.persistence.models.users import User

__all__ = [
    "Entity",
    "INCLUDE_DELETED",
    "User",
    "utc_now",
]
