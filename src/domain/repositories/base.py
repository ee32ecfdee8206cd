"""Generic repository base interfaces.

AsyncRepository[E, Id] and Repository[E, Id] are the root abstractions for
soft-delete-aware data access. Concrete implementations live in
src/infrastructure/persistence/repositories/ and are wired at the
application boundary via dependency injection.

Design notes:
  - E is a mapped entity carrying the audit columns (created/updated/deleted
    date and actor); Id is the type of its primary key.
  - Reads exclude soft-deleted rows unless with_deleted=True.
  - filter is a boolean SQL expression, include a sequence of loader options,
    order_by a sequence of ORDER BY clauses.
  - Every write commits before returning; delete() soft-deletes unless
    permanent=True.
  - AsyncRepository is the primary surface. Repository mirrors it for
    synchronous sessions.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any, Generic, TypeVar

from src.domain.models.paging import Paginate

E = TypeVar("E")
Id = TypeVar("Id")


class AsyncRepository(ABC, Generic[E, Id]):
    """Async CRUD + soft-delete interface for one entity type."""

    @abstractmethod
    def query(
        self,
        filter: Any = None,
        include: Sequence[Any] | None = None,
        order_by: Sequence[Any] | None = None,
        with_deleted: bool = False,
        enable_tracking: bool = True,
    ) -> Any:
        """Return a composable SELECT; nothing is executed."""

    @abstractmethod
    async def get_first(
        self,
        filter: Any = None,
        include: Sequence[Any] | None = None,
        with_deleted: bool = False,
        enable_tracking: bool = True,
    ) -> E | None:
        """Return the first match, or None."""

    @abstractmethod
    async def get_single(
        self,
        filter: Any = None,
        include: Sequence[Any] | None = None,
        with_deleted: bool = False,
        enable_tracking: bool = True,
    ) -> E | None:
        """Return the only match, or None.  Raises AmbiguousResultError on several."""

    @abstractmethod
    async def get_by_id(
        self,
        id: Id,
        include: Sequence[Any] | None = None,
        with_deleted: bool = False,
        enable_tracking: bool = True,
    ) -> E | None:
        """Return the entity with the given primary key, or None."""

    @abstractmethod
    async def any(
        self,
        filter: Any = None,
        with_deleted: bool = False,
        enable_tracking: bool = True,
    ) -> bool:
        """Return whether at least one row matches."""

    @abstractmethod
    async def get_list(
        self,
        filter: Any = None,
        include: Sequence[Any] | None = None,
        order_by: Sequence[Any] | None = None,
        index: int = 0,
        size: int = 10,
        with_deleted: bool = False,
        enable_tracking: bool = True,
    ) -> Paginate[E]:
        """Return page ``index`` (0-based) of ``size`` matching rows."""

    @abstractmethod
    async def add(self, entity: E, actor_id: Any = None) -> E:
        """Stamp created_date (UTC), persist and commit."""

    @abstractmethod
    async def add_range(self, entities: Sequence[E], actor_id: Any = None) -> Sequence[E]:
        """Stamp and persist all entities in a single commit."""

    @abstractmethod
    async def update(self, entity: E, actor_id: Any = None) -> E:
        """Stamp updated_date (UTC), persist and commit."""

    @abstractmethod
    async def update_range(self, entities: Sequence[E], actor_id: Any = None) -> Sequence[E]:
        """Stamp and persist all entities in a single commit."""

    @abstractmethod
    async def delete(self, entity: E, permanent: bool = False, actor_id: Any = None) -> E:
        """Soft-delete (cascading) or permanently delete, then commit."""

    @abstractmethod
    async def delete_range(
        self, entities: Sequence[E], permanent: bool = False, actor_id: Any = None
    ) -> Sequence[E]:
        """Delete all entities in a single commit."""


class Repository(ABC, Generic[E, Id]):
    """Synchronous counterpart of AsyncRepository."""

    @abstractmethod
    def query(
        self,
        filter: Any = None,
        include: Sequence[Any] | None = None,
        order_by: Sequence[Any] | None = None,
        with_deleted: bool = False,
        enable_tracking: bool = True,
    ) -> Any:
        """Return a composable SELECT; nothing is executed."""

    @abstractmethod
    def get_first(
        self,
        filter: Any = None,
        include: Sequence[Any] | None = None,
        with_deleted: bool = False,
        enable_tracking: bool = True,
    ) -> E | None:
        """Return the first match, or None."""

    @abstractmethod
    def get_single(
        self,
        filter: Any = None,
        include: Sequence[Any] | None = None,
        with_deleted: bool = False,
        enable_tracking: bool = True,
    ) -> E | None:
        """Return the only match, or None.  Raises AmbiguousResultError on several."""

    @abstractmethod
    def get_by_id(
        self,
        id: Id,
        include: Sequence[Any] | None = None,
        with_deleted: bool = False,
        enable_tracking: bool = True,
    ) -> E | None:
        """Return the entity with the given primary key, or None."""

    @abstractmethod
    def any(
        self,
        filter: Any = None,
        with_deleted: bool = False,
        enable_tracking: bool = True,
    ) -> bool:
        """Return whether at least one row matches."""

    @abstractmethod
    def get_list(
        self,
        filter: Any = None,
        include: Sequence[Any] | None = None,
        order_by: Sequence[Any] | None = None,
        index: int = 0,
        size: int = 10,
        with_deleted: bool = False,
        enable_tracking: bool = True,
    ) -> Paginate[E]:
        """Return page ``index`` (0-based) of ``size`` matching rows."""

    @abstractmethod
    def add(self, entity: E, actor_id: Any = None) -> E:
        """Stamp created_date (UTC), persist and commit."""

    @abstractmethod
    def add_range(self, entities: Sequence[E], actor_id: Any = None) -> Sequence[E]:
        """Stamp and persist all entities in a single commit."""

    @abstractmethod
    def update(self, entity: E, actor_id: Any = None) -> E:
        """Stamp updated_date (UTC), persist and commit."""

    @abstractmethod
    def update_range(self, entities: Sequence[E], actor_id: Any = None) -> Sequence[E]:
        """Stamp and persist all entities in a single commit."""

    @abstractmethod
    def delete(self, entity: E, permanent: bool = False, actor_id: Any = None) -> E:
        """Soft-delete (cascading) or permanently delete, then commit."""

    @abstractmethod
    def delete_range(
        self, entities: Sequence[E], permanent: bool = False, actor_id: Any = None
    ) -> Sequence[E]:
        """Delete all entities in a single commit."""
