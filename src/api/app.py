"""FastAPI application factory."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from src.api.users import router as users_router
from src.domain.exceptions import (
    AmbiguousResultError,
    OneToOneDeleteConflictError,
    RepositoryError,
)
from src.infrastructure.database import AsyncSessionLocal, Settings, settings as default_settings
from src.infrastructure.logging_config import setup_logging

logger = logging.getLogger(__name__)


def _error_response(status_code: int, exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


def create_app(
    session_factory: async_sessionmaker[AsyncSession] | None = None,
    settings: Settings | None = None,
) -> FastAPI:
    """Build the API.

    session_factory defaults to the module-level AsyncSessionLocal; tests pass
    their own factory bound to a throwaway database.
    """
    settings = settings or default_settings
    setup_logging(settings.log_level)

    app = FastAPI(title="Users API")
    app.state.settings = settings
    app.state.session_factory = session_factory or AsyncSessionLocal

    app.include_router(users_router)

    @app.exception_handler(OneToOneDeleteConflictError)
    async def _one_to_one_conflict(request: Request, exc: OneToOneDeleteConflictError):
        return _error_response(status.HTTP_409_CONFLICT, exc)

    @app.exception_handler(AmbiguousResultError)
    async def _ambiguous_result(request: Request, exc: AmbiguousResultError):
        return _error_response(status.HTTP_409_CONFLICT, exc)

    @app.exception_handler(RepositoryError)
    async def _repository_error(request: Request, exc: RepositoryError):
        logger.warning("Repository error on %s %s: %s", request.method, request.url.path, exc)
        return _error_response(status.HTTP_400_BAD_REQUEST, exc)

    return app
