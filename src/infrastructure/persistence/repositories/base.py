"""Generic SQLAlchemy repositories with soft-delete support.

AsyncSqlRepository (AsyncSession) is the primary surface; SqlRepository is
its synchronous twin for scripts and sync sessions. Both are bound to one
``model`` class and share the query builder and audit stamping below.

Every write commits immediately. Store errors are not caught: a failed
commit leaves the in-memory entity mutations applied but unpersisted.

Soft delete stamps ``deleted_date`` and then walks the mapped relationship
graph (see relations.py), stamping every dependent reachable through a
cascading edge. Already-deleted entities stop the walk, which is also what
terminates cascade cycles. Permanent delete hands the row to
``Session.delete`` and leaves dependents to the ORM/database cascades.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Iterator, Sequence
from contextlib import asynccontextmanager, contextmanager
from typing import Any, ClassVar, Generic, TypeVar

from sqlalchemy import ColumnElement, Select, inspect, select
from sqlalchemy.exc import MultipleResultsFound
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Session, with_parent
from sqlalchemy.sql.base import ExecutableOption

from src.domain.exceptions import AmbiguousResultError, OneToOneDeleteConflictError
from src.domain.models.paging import Paginate
from src.domain.repositories.base import AsyncRepository, Repository
from src.infrastructure.persistence.models.base import INCLUDE_DELETED, Entity, utc_now
from src.infrastructure.persistence.repositories.paging import paginate, paginate_async
from src.infrastructure.persistence.repositories.relations import (
    Navigation,
    cascading_navigations,
    has_one_to_one_dependency,
)

logger = logging.getLogger(__name__)

EntityT = TypeVar("EntityT", bound=Entity)
IdT = TypeVar("IdT")

UNTRACKED = "untracked"


def _as_items(value: Any, is_collection: bool) -> list[Entity]:
    if is_collection:
        return list(value or ())
    return [value] if value is not None else []


class _SqlRepositoryBase(Generic[EntityT, IdT]):
    model: ClassVar[type[Entity]]

    def query(
        self,
        filter: ColumnElement[bool] | None = None,
        include: Sequence[ExecutableOption] | None = None,
        order_by: Sequence[Any] | None = None,
        with_deleted: bool = False,
        enable_tracking: bool = True,
    ) -> Select[tuple[EntityT]]:
        """Build a SELECT over ``model``.

        Steps run in a fixed order and only when supplied: filter, include
        (loader options such as ``selectinload``), tracking mode, deletion
        visibility, ordering. Soft-deleted rows are excluded unless
        with_deleted is set, which also bypasses the session-wide filter.
        """
        stmt = select(self.model)
        if filter is not None:
            stmt = stmt.where(filter)
        if include:
            stmt = stmt.options(*include)
        if not enable_tracking:
            stmt = stmt.execution_options(**{UNTRACKED: True})
        if with_deleted:
            stmt = stmt.execution_options(**{INCLUDE_DELETED: True})
        else:
            stmt = stmt.where(self.model.deleted_date.is_(None))
        if order_by:
            stmt = stmt.order_by(*order_by)
        return stmt

    def _exists_statement(
        self,
        filter: ColumnElement[bool] | None,
        with_deleted: bool,
        enable_tracking: bool,
    ) -> Select[tuple[bool]]:
        stmt = self.query(filter=filter, with_deleted=with_deleted, enable_tracking=enable_tracking)
        return select(stmt.exists()).execution_options(**stmt.get_execution_options())

    @staticmethod
    def _is_untracked(stmt: Select[Any]) -> bool:
        return bool(stmt.get_execution_options().get(UNTRACKED, False))

    @staticmethod
    def _stamp_created(entity: Entity, actor_id: Any) -> None:
        entity.created_date = utc_now()
        if actor_id is not None:
            entity.created_user_id = actor_id

    @staticmethod
    def _stamp_updated(entity: Entity, actor_id: Any) -> None:
        entity.updated_date = utc_now()
        if actor_id is not None:
            entity.updated_user_id = actor_id

    @staticmethod
    def _mark_deleted(entity: Entity, actor_id: Any) -> bool:
        """Stamp the deletion audit fields; False if already soft-deleted."""
        if entity.deleted_date is not None:
            return False
        entity.deleted_date = utc_now()
        if actor_id is not None:
            entity.deleted_user_id = actor_id
        return True

    @staticmethod
    def _ensure_soft_deletable(entity: Entity) -> None:
        if has_one_to_one_dependency(type(entity)):
            logger.warning(
                "Refusing soft delete of %s %s: one-to-one dependent",
                type(entity).__name__,
                entity.id,
            )
            raise OneToOneDeleteConflictError(type(entity).__name__)

    @staticmethod
    def _relation_query(entity: Entity, navigation: Navigation) -> Select[tuple[Entity]]:
        # Loaded through with_parent, so the deleted filter is added by hand.
        target = navigation.target
        return (
            select(target)
            .where(with_parent(entity, getattr(type(entity), navigation.key)))
            .where(target.deleted_date.is_(None))
        )

    @staticmethod
    def _is_loaded(entity: Entity, navigation: Navigation) -> bool:
        return navigation.key not in inspect(entity).unloaded


class SqlRepository(_SqlRepositoryBase[EntityT, IdT], Repository[EntityT, IdT]):
    """Synchronous generic repository bound to a ``Session``."""

    def __init__(self, session: Session) -> None:
        self._session = session

    @contextmanager
    def _tracking(self, stmt: Select[Any]) -> Iterator[None]:
        # Untracked reads expunge whatever they newly brought into the session.
        if not self._is_untracked(stmt):
            yield
            return
        known = set(self._session.identity_map.keys())
        yield
        for key, obj in list(self._session.identity_map.items()):
            if key not in known and obj in self._session:
                self._session.expunge(obj)

    # --- reads ---

    def get_first(
        self,
        filter: ColumnElement[bool] | None = None,
        include: Sequence[ExecutableOption] | None = None,
        with_deleted: bool = False,
        enable_tracking: bool = True,
    ) -> EntityT | None:
        stmt = self.query(
            filter=filter, include=include, with_deleted=with_deleted, enable_tracking=enable_tracking
        )
        with self._tracking(stmt):
            return self._session.scalars(stmt.limit(1)).unique().first()

    def get_single(
        self,
        filter: ColumnElement[bool] | None = None,
        include: Sequence[ExecutableOption] | None = None,
        with_deleted: bool = False,
        enable_tracking: bool = True,
    ) -> EntityT | None:
        stmt = self.query(
            filter=filter, include=include, with_deleted=with_deleted, enable_tracking=enable_tracking
        )
        with self._tracking(stmt):
            try:
                return self._session.scalars(stmt).unique().one_or_none()
            except MultipleResultsFound as exc:
                raise AmbiguousResultError(self.model.__name__) from exc

    def get_by_id(
        self,
        id: IdT,
        include: Sequence[ExecutableOption] | None = None,
        with_deleted: bool = False,
        enable_tracking: bool = True,
    ) -> EntityT | None:
        return self.get_single(
            filter=self.model.id == id,
            include=include,
            with_deleted=with_deleted,
            enable_tracking=enable_tracking,
        )

    def any(
        self,
        filter: ColumnElement[bool] | None = None,
        with_deleted: bool = False,
        enable_tracking: bool = True,
    ) -> bool:
        stmt = self._exists_statement(filter, with_deleted, enable_tracking)
        return bool(self._session.scalar(stmt))

    def get_list(
        self,
        filter: ColumnElement[bool] | None = None,
        include: Sequence[ExecutableOption] | None = None,
        order_by: Sequence[Any] | None = None,
        index: int = 0,
        size: int = 10,
        with_deleted: bool = False,
        enable_tracking: bool = True,
    ) -> Paginate[EntityT]:
        stmt = self.query(filter, include, order_by, with_deleted, enable_tracking)
        with self._tracking(stmt):
            return paginate(self._session, stmt, index, size)

    # --- writes ---

    def add(self, entity: EntityT, actor_id: Any = None) -> EntityT:
        self._stamp_created(entity, actor_id)
        self._session.add(entity)
        self._session.commit()
        return entity

    def add_range(self, entities: Sequence[EntityT], actor_id: Any = None) -> Sequence[EntityT]:
        for entity in entities:
            self._stamp_created(entity, actor_id)
        self._session.add_all(entities)
        self._session.commit()
        return entities

    def update(self, entity: EntityT, actor_id: Any = None) -> EntityT:
        self._stamp_updated(entity, actor_id)
        self._session.add(entity)
        self._session.commit()
        return entity

    def update_range(self, entities: Sequence[EntityT], actor_id: Any = None) -> Sequence[EntityT]:
        for entity in entities:
            self._stamp_updated(entity, actor_id)
        self._session.add_all(entities)
        self._session.commit()
        return entities

    def delete(self, entity: EntityT, permanent: bool = False, actor_id: Any = None) -> EntityT:
        self._set_deleted([entity], permanent, actor_id)
        self._session.commit()
        return entity

    def delete_range(
        self, entities: Sequence[EntityT], permanent: bool = False, actor_id: Any = None
    ) -> Sequence[EntityT]:
        self._set_deleted(entities, permanent, actor_id)
        self._session.commit()
        return entities

    def _set_deleted(self, entities: Sequence[Entity], permanent: bool, actor_id: Any) -> None:
        if permanent:
            for entity in entities:
                logger.debug("Permanently deleting %s %s", type(entity).__name__, entity.id)
                self._session.delete(entity)
            return
        for entity in entities:
            self._ensure_soft_deletable(entity)
        for entity in entities:
            self._soft_delete(entity, actor_id)

    def _soft_delete(self, entity: Entity, actor_id: Any) -> None:
        if not self._mark_deleted(entity, actor_id):
            return
        logger.debug("Soft-deleted %s %s", type(entity).__name__, entity.id)
        for navigation in cascading_navigations(type(entity)):
            for related in self._load_related(entity, navigation):
                self._soft_delete(related, actor_id)
        self._session.add(entity)

    def _load_related(self, entity: Entity, navigation: Navigation) -> list[Entity]:
        if self._is_loaded(entity, navigation):
            return _as_items(getattr(entity, navigation.key), navigation.is_collection)
        return list(self._session.scalars(self._relation_query(entity, navigation)))


class AsyncSqlRepository(_SqlRepositoryBase[EntityT, IdT], AsyncRepository[EntityT, IdT]):
    """Asynchronous generic repository bound to an ``AsyncSession``.

    Unloaded relationships are never touched through attribute access (that
    would lazy-load outside the event loop); the soft-delete walk queries
    them explicitly instead.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    @asynccontextmanager
    async def _tracking(self, stmt: Select[Any]) -> AsyncIterator[None]:
        if not self._is_untracked(stmt):
            yield
            return
        known = set(self._session.identity_map.keys())
        yield
        for key, obj in list(self._session.identity_map.items()):
            if key not in known and obj in self._session:
                self._session.expunge(obj)

    # --- reads ---

    async def get_first(
        self,
        filter: ColumnElement[bool] | None = None,
        include: Sequence[ExecutableOption] | None = None,
        with_deleted: bool = False,
        enable_tracking: bool = True,
    ) -> EntityT | None:
        stmt = self.query(
            filter=filter, include=include, with_deleted=with_deleted, enable_tracking=enable_tracking
        )
        async with self._tracking(stmt):
            result = await self._session.scalars(stmt.limit(1))
            return result.unique().first()

    async def get_single(
        self,
        filter: ColumnElement[bool] | None = None,
        include: Sequence[ExecutableOption] | None = None,
        with_deleted: bool = False,
        enable_tracking: bool = True,
    ) -> EntityT | None:
        stmt = self.query(
            filter=filter, include=include, with_deleted=with_deleted, enable_tracking=enable_tracking
        )
        async with self._tracking(stmt):
            result = await self._session.scalars(stmt)
            try:
                return result.unique().one_or_none()
            except MultipleResultsFound as exc:
                raise AmbiguousResultError(self.model.__name__) from exc

    async def get_by_id(
        self,
        id: IdT,
        include: Sequence[ExecutableOption] | None = None,
        with_deleted: bool = False,
        enable_tracking: bool = True,
    ) -> EntityT | None:
        return await self.get_single(
            filter=self.model.id == id,
            include=include,
            with_deleted=with_deleted,
            enable_tracking=enable_tracking,
        )

    async def any(
        self,
        filter: ColumnElement[bool] | None = None,
        with_deleted: bool = False,
        enable_tracking: bool = True,
    ) -> bool:
        stmt = self._exists_statement(filter, with_deleted, enable_tracking)
        return bool(await self._session.scalar(stmt))

    async def get_list(
        self,
        filter: ColumnElement[bool] | None = None,
        include: Sequence[ExecutableOption] | None = None,
        order_by: Sequence[Any] | None = None,
        index: int = 0,
        size: int = 10,
        with_deleted: bool = False,
        enable_tracking: bool = True,
    ) -> Paginate[EntityT]:
        stmt = self.query(filter, include, order_by, with_deleted, enable_tracking)
        async with self._tracking(stmt):
            return await paginate_async(self._session, stmt, index, size)

    # --- writes ---

    async def add(self, entity: EntityT, actor_id: Any = None) -> EntityT:
        self._stamp_created(entity, actor_id)
        self._session.add(entity)
        await self._session.commit()
        return entity

    async def add_range(
        self, entities: Sequence[EntityT], actor_id: Any = None
    ) -> Sequence[EntityT]:
        for entity in entities:
            self._stamp_created(entity, actor_id)
        self._session.add_all(entities)
        await self._session.commit()
        return entities

    async def update(self, entity: EntityT, actor_id: Any = None) -> EntityT:
        self._stamp_updated(entity, actor_id)
        self._session.add(entity)
        await self._session.commit()
        return entity

    async def update_range(
        self, entities: Sequence[EntityT], actor_id: Any = None
    ) -> Sequence[EntityT]:
        for entity in entities:
            self._stamp_updated(entity, actor_id)
        self._session.add_all(entities)
        await self._session.commit()
        return entities

    async def delete(
        self, entity: EntityT, permanent: bool = False, actor_id: Any = None
    ) -> EntityT:
        await self._set_deleted([entity], permanent, actor_id)
        await self._session.commit()
        return entity

    async def delete_range(
        self, entities: Sequence[EntityT], permanent: bool = False, actor_id: Any = None
    ) -> Sequence[EntityT]:
        await self._set_deleted(entities, permanent, actor_id)
        await self._session.commit()
        return entities

    async def _set_deleted(
        self, entities: Sequence[Entity], permanent: bool, actor_id: Any
    ) -> None:
        if permanent:
            for entity in entities:
                logger.debug("Permanently deleting %s %s", type(entity).__name__, entity.id)
                await self._session.delete(entity)
            return
        for entity in entities:
            self._ensure_soft_deletable(entity)
        for entity in entities:
            await self._soft_delete(entity, actor_id)

    async def _soft_delete(self, entity: Entity, actor_id: Any) -> None:
        if not self._mark_deleted(entity, actor_id):
            return
        logger.debug("Soft-deleted %s %s", type(entity).__name__, entity.id)
        for navigation in cascading_navigations(type(entity)):
            for related in await self._load_related(entity, navigation):
                await self._soft_delete(related, actor_id)
        self._session.add(entity)

    async def _load_related(self, entity: Entity, navigation: Navigation) -> list[Entity]:
        if self._is_loaded(entity, navigation):
            return _as_items(getattr(entity, navigation.key), navigation.is_collection)
        result = await self._session.scalars(self._relation_query(entity, navigation))
        return list(result)
