"""Concrete SQLAlchemy repository implementations.

Exports the generic repositories, the SqlRepository subclasses and the
get_repositories() factory function for wiring at the application boundary
(FastAPI dependency injection).
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from .base import AsyncSqlRepository, SqlRepository
from .paging import paginate, paginate_async
from .relations import Navigation, cascading_navigations, has_one_to_one_dependency
from .users import SqlUserRepository


@dataclass
class Repositories:
    """All repository instances bound to a single AsyncSession."""

    users: SqlUserRepository


def get_repositories(session: AsyncSession) -> Repositories:
    """Construct all repositories bound to the given session.

    Intended for use as a FastAPI dependency:

        async def handler(
            session: AsyncSession = Depends(get_session),
        ) -> ...:
            repos = get_repositories(session)
            users = await repos.users.get_list(index=0, size=5)
    """
    return Repositories(
        users=SqlUserRepository(session),
    )


__all__ = [
    "AsyncSqlRepository",
    "Navigation",
    "Repositories",
    "SqlRepository",
    "SqlUserRepository",
    "cascading_navigations",
    "get_repositories",
    "has_one_to_one_dependency",
    "paginate",
    "paginate_async",
]
