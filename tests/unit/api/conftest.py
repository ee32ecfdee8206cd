"""A FastAPI TestClient over a throwaway SQLite file database."""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

import src.infrastructure.persistence  # noqa: F401  registers all mappers
from src.api import create_app
from src.infrastructure.database import Base, Settings


@pytest.fixture
def db_path(tmp_path):
    path = tmp_path / "users.sqlite3"
    engine = create_engine(f"sqlite:///{path}")
    Base.metadata.create_all(engine)
    engine.dispose()
    return path


@pytest.fixture
def app(db_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{db_path}", poolclass=NullPool)
    factory = async_sessionmaker(bind=engine, expire_on_commit=False)
    return create_app(session_factory=factory, settings=Settings(default_page_size=5))


@pytest.fixture
def client(app):
    with TestClient(app) as client:
        yield client
