"""Tests for SqlUserRepository against SQLite."""

from uuid import UUID

from src.domain.repositories import UserRepository
from src.infrastructure.persistence.models import User
from src.infrastructure.persistence.repositories import AsyncSqlRepository, SqlUserRepository


def test_user_repository_is_bound_to_user_model():
    assert SqlUserRepository.model is User


def test_user_repository_implements_domain_interface():
    assert issubclass(SqlUserRepository, UserRepository)
    assert issubclass(SqlUserRepository, AsyncSqlRepository)


async def test_add_assigns_uuid_and_created_date(async_session):
    user = await SqlUserRepository(async_session).add(User(name="Ada", email="ada@example.com"))
    assert isinstance(user.id, UUID)
    assert user.created_date is not None


async def test_get_list_returns_users_page(async_session):
    repo = SqlUserRepository(async_session)
    await repo.add_range(
        [User(name=f"user-{i}", email=f"u{i}@example.com") for i in range(7)]
    )
    page = await repo.get_list(order_by=[User.name], index=1, size=5)
    assert [u.name for u in page.items] == ["user-5", "user-6"]
    assert page.count == 7
    assert page.has_previous is True
    assert page.has_next is False


async def test_soft_deleted_user_stays_listed_with_deleted(async_session):
    repo = SqlUserRepository(async_session)
    user = await repo.add(User(name="Ada", email="ada@example.com"))
    await repo.delete(user)
    assert (await repo.get_list()).count == 0
    assert (await repo.get_list(with_deleted=True)).items == [user]


async def test_platform_is_optional(async_session):
    user = await SqlUserRepository(async_session).add(User(name="Ada", email="ada@example.com"))
    assert user.platform is None
