"""Entity base class and the standing soft-delete visibility filter.

Every repository-managed model derives from Entity. The primary key type is
chosen per subclass via ``id_type`` (``Uuid`` unless overridden); the audit
actor columns reuse the same type so ``created_user_id`` and friends can hold
the id of whichever principal performed the change.

A row is soft-deleted exactly when ``deleted_date`` is set. The
``do_orm_execute`` listener below hides such rows from every ORM SELECT run
through a Session (top-level statements and the relationship loads they
trigger) unless the statement carries ``include_deleted=True``.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Callable, ClassVar, Optional

from sqlalchemy import DateTime, Uuid, event
from sqlalchemy.orm import (
    Mapped,
    ORMExecuteState,
    Session,
    declared_attr,
    mapped_column,
    with_loader_criteria,
)
from sqlalchemy.types import TypeEngine

from src.infrastructure.database import Base

INCLUDE_DELETED = "include_deleted"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Entity(Base):
    """Abstract identity + audit record.

    Subclasses set ``id_type`` / ``id_default`` to shape the primary key and
    ``__owned__ = True`` when their lifecycle is bound to a parent row
    (the cascading soft delete never walks into owned targets).
    """

    __abstract__ = True

    id_type: ClassVar[type[TypeEngine[Any]]] = Uuid
    id_default: ClassVar[Optional[Callable[[], Any]]] = None
    __owned__: ClassVar[bool] = False

    @declared_attr
    def id(cls) -> Mapped[Any]:
        return mapped_column(cls.id_type(), primary_key=True, default=cls.id_default)

    created_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utc_now
    )
    updated_date: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    deleted_date: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True, index=True
    )

    @declared_attr
    def created_user_id(cls) -> Mapped[Any]:
        return mapped_column(cls.id_type(), nullable=True)

    @declared_attr
    def updated_user_id(cls) -> Mapped[Any]:
        return mapped_column(cls.id_type(), nullable=True)

    @declared_attr
    def deleted_user_id(cls) -> Mapped[Any]:
        return mapped_column(cls.id_type(), nullable=True)

    @property
    def is_deleted(self) -> bool:
        return self.deleted_date is not None


@event.listens_for(Session, "do_orm_execute")
def _exclude_soft_deleted(execute_state: ORMExecuteState) -> None:
    # Column loads (refresh of an expired row) must still find soft-deleted rows.
    if (
        execute_state.is_select
        and not execute_state.is_column_load
        and not execute_state.execution_options.get(INCLUDE_DELETED, False)
    ):
        execute_state.statement = execute_state.statement.options(
            with_loader_criteria(
                Entity,
                lambda cls: cls.deleted_date.is_(None),
                include_aliases=True,
            )
        )
