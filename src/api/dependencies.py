"""FastAPI dependencies: one AsyncSession per request and the handlers built on it."""

from collections.abc import AsyncGenerator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.users import CreateUserCommandHandler, GetListUserQueryHandler
from src.infrastructure.persistence.repositories import Repositories, get_repositories


async def get_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Yield a session from the app's factory; closed (and rolled back if
    uncommitted) when the request finishes."""
    async with request.app.state.session_factory() as session:
        yield session


def get_repos(session: AsyncSession = Depends(get_session)) -> Repositories:
    return get_repositories(session)


def get_create_user_handler(
    repos: Repositories = Depends(get_repos),
) -> CreateUserCommandHandler:
    return CreateUserCommandHandler(repos.users)


def get_list_user_handler(
    repos: Repositories = Depends(get_repos),
) -> GetListUserQueryHandler:
    return GetListUserQueryHandler(repos.users)
