"""Offset pagination over SQLAlchemy SELECT statements.

The count and the page are fetched with two independent queries. No snapshot
is taken between them, so a concurrent write may make count and items
disagree; callers needing consistency must run inside a suitable transaction.
"""

from __future__ import annotations

from typing import Any, TypeVar

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Session

from src.domain.models.paging import Paginate

T = TypeVar("T")


def count_statement(stmt: Select[Any]) -> Select[tuple[int]]:
    """SELECT count(*) over stmt, ignoring its ORDER BY.

    Execution options (e.g. include_deleted) are carried over so the count
    sees the same rows as the page.
    """
    return (
        select(func.count())
        .select_from(stmt.order_by(None).subquery())
        .execution_options(**stmt.get_execution_options())
    )


def page_statement(stmt: Select[Any], index: int, size: int) -> Select[Any]:
    return stmt.offset(max(index, 0) * size).limit(size)


def paginate(session: Session, stmt: Select[tuple[T]], index: int, size: int) -> Paginate[T]:
    count = session.scalar(count_statement(stmt)) or 0
    items: list[T] = []
    if size > 0:
        items = list(session.scalars(page_statement(stmt, index, size)).unique())
    return Paginate(index=index, size=size, count=count, items=items)


async def paginate_async(
    session: AsyncSession, stmt: Select[tuple[T]], index: int, size: int
) -> Paginate[T]:
    count = await session.scalar(count_statement(stmt)) or 0
    items: list[T] = []
    if size > 0:
        result = await session.scalars(page_statement(stmt, index, size))
        items = list(result.unique())
    return Paginate(index=index, size=size, count=count, items=items)
