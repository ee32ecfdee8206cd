"""Tests for the generic SqlRepository: query builder, reads and writes."""

from datetime import datetime
from unittest.mock import MagicMock

import pytest
from sqlalchemy import select
from sqlalchemy.orm import selectinload

from src.domain.exceptions import AmbiguousResultError
from src.infrastructure.persistence.repositories.base import UNTRACKED, SqlRepository
from tests.fixtures.blog import Author, AuthorRepository, Post


def _seed(session, *names):
    authors = [Author(name=name) for name in names]
    session.add_all(authors)
    session.commit()
    return authors


# --- query builder (no database) ---

def _repo():
    return AuthorRepository(MagicMock())


def test_query_excludes_soft_deleted_by_default():
    assert "test_authors.deleted_date IS NULL" in str(_repo().query())


def test_query_with_deleted_drops_deleted_filter():
    stmt = _repo().query(with_deleted=True)
    assert "deleted_date IS NULL" not in str(stmt)


def test_query_with_deleted_bypasses_session_filter():
    stmt = _repo().query(with_deleted=True)
    assert stmt.get_execution_options()["include_deleted"] is True


def test_query_without_tracking_is_tagged():
    stmt = _repo().query(enable_tracking=False)
    assert stmt.get_execution_options()[UNTRACKED] is True


def test_query_tracks_by_default():
    assert UNTRACKED not in _repo().query().get_execution_options()


def test_query_applies_filter_before_deleted_filter():
    sql = str(_repo().query(filter=Author.name == "Ada"))
    where = sql[sql.index("WHERE"):]
    assert where.index("test_authors.name =") < where.index("deleted_date IS NULL")


def test_query_applies_ordering():
    sql = str(_repo().query(order_by=[Author.name.desc()]))
    assert "ORDER BY test_authors.name DESC" in sql


def test_query_applies_include_options():
    stmt = _repo().query(include=[selectinload(Author.posts)])
    assert len(stmt._with_options) == 1  # noqa: SLF001


def test_generic_repository_has_no_bound_model():
    assert not hasattr(SqlRepository, "model")


# --- reads ---

def test_get_first_returns_none_when_empty(session):
    assert AuthorRepository(session).get_first() is None


def test_get_first_honours_filter(session):
    _seed(session, "Ada", "Grace")
    found = AuthorRepository(session).get_first(filter=Author.name == "Grace")
    assert found.name == "Grace"


def test_get_single_returns_the_only_match(session):
    _seed(session, "Ada", "Grace")
    assert AuthorRepository(session).get_single(filter=Author.name == "Ada").name == "Ada"


def test_get_single_raises_when_ambiguous(session):
    _seed(session, "Ada", "Ada")
    with pytest.raises(AmbiguousResultError):
        AuthorRepository(session).get_single(filter=Author.name == "Ada")


def test_get_single_hides_soft_deleted_duplicate(session):
    first, _ = _seed(session, "Ada", "Ada")
    repo = AuthorRepository(session)
    repo.delete(first)
    assert repo.get_single(filter=Author.name == "Ada") is not None


def test_get_by_id_finds_row(session):
    (ada,) = _seed(session, "Ada")
    assert AuthorRepository(session).get_by_id(ada.id) is ada


def test_get_by_id_with_deleted(session):
    (ada,) = _seed(session, "Ada")
    repo = AuthorRepository(session)
    repo.delete(ada)
    assert repo.get_by_id(ada.id) is None
    assert repo.get_by_id(ada.id, with_deleted=True) is ada


def test_any_false_on_empty_table(session):
    assert AuthorRepository(session).any() is False


def test_any_true_when_match_exists(session):
    _seed(session, "Ada")
    assert AuthorRepository(session).any(filter=Author.name == "Ada") is True


def test_any_respects_with_deleted(session):
    (ada,) = _seed(session, "Ada")
    repo = AuthorRepository(session)
    repo.delete(ada)
    assert repo.any() is False
    assert repo.any(with_deleted=True) is True


def test_untracked_read_detaches_loaded_entities(session):
    _seed(session, "Ada")
    session.expunge_all()
    author = AuthorRepository(session).get_first(enable_tracking=False)
    assert author.name == "Ada"
    assert author not in session


def test_untracked_read_keeps_already_tracked_entities(session):
    (ada,) = _seed(session, "Ada")
    AuthorRepository(session).get_first(enable_tracking=False)
    assert ada in session


def test_include_eager_loads_relation(session):
    session.add(Author(name="Ada", posts=[Post(title="p")]))
    session.commit()
    session.expunge_all()
    author = AuthorRepository(session).get_first(include=[selectinload(Author.posts)])
    assert "posts" in author.__dict__
    assert [p.title for p in author.posts] == ["p"]


# --- writes ---

def test_add_stamps_created_date_and_commits(session):
    author = AuthorRepository(session).add(Author(name="Ada"), actor_id=3)
    assert isinstance(author.created_date, datetime)
    assert author.created_user_id == 3
    assert session.scalars(select(Author)).one().name == "Ada"


def test_add_range_commits_all(session):
    AuthorRepository(session).add_range([Author(name="Ada"), Author(name="Grace")])
    assert len(session.scalars(select(Author)).all()) == 2


def test_update_stamps_updated_date(session):
    (ada,) = _seed(session, "Ada")
    ada.name = "Ada L."
    AuthorRepository(session).update(ada, actor_id=9)
    assert ada.updated_date is not None
    assert ada.updated_user_id == 9
    assert session.scalars(select(Author)).one().name == "Ada L."


def test_update_range_stamps_every_entity(session):
    authors = _seed(session, "Ada", "Grace")
    AuthorRepository(session).update_range(authors)
    assert all(a.updated_date is not None for a in authors)


def test_update_reattaches_detached_entity(session):
    (ada,) = _seed(session, "Ada")
    assert ada.name == "Ada"
    session.expunge(ada)
    ada.name = "Countess"
    AuthorRepository(session).update(ada)
    assert session.scalars(select(Author)).one().name == "Countess"


def test_add_commits_once_per_call():
    session = MagicMock()
    AuthorRepository(session).add(Author(name="Ada"))
    session.add.assert_called_once()
    session.commit.assert_called_once()
