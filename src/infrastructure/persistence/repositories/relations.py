"""Relationship reflection used by the cascading soft delete.

SQLAlchemy mappers expose every relationship together with its direction,
cascade settings and foreign keys, so the soft-delete walk is driven by the
mapped schema rather than by per-entity code. Results are cached per class;
mappers are immutable once configured.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache

from sqlalchemy import Column, Table, UniqueConstraint, inspect
from sqlalchemy.orm import ONETOMANY, RelationshipProperty

from src.infrastructure.persistence.models.base import Entity


@dataclass(frozen=True)
class Navigation:
    """A principal-to-dependent edge the soft delete must follow."""

    key: str
    is_collection: bool
    target: type[Entity]


def _cascades_on_delete(rel: RelationshipProperty) -> bool:
    # ORM-side ("client") cascade, or ON DELETE CASCADE on the dependent FK.
    if rel.cascade.delete:
        return True
    return any(
        (fk.ondelete or "").upper() == "CASCADE"
        for column in rel.remote_side
        for fk in column.foreign_keys
    )


@lru_cache(maxsize=None)
def cascading_navigations(entity_type: type[Entity]) -> tuple[Navigation, ...]:
    """Return the cascading edges on which entity_type is the principal side.

    Many-to-one (dependent side), many-to-many and viewonly relationships are
    ignored, as are targets that are owned (``__owned__``) or not soft-delete
    capable at all.
    """
    navigations = []
    for rel in inspect(entity_type).relationships:
        if rel.direction is not ONETOMANY or rel.viewonly:
            continue
        target = rel.mapper.class_
        if not issubclass(target, Entity) or target.__owned__:
            continue
        if not _cascades_on_delete(rel):
            continue
        navigations.append(
            Navigation(key=rel.key, is_collection=bool(rel.uselist), target=target)
        )
    return tuple(navigations)


def _unique_foreign_key_columns(table: Table) -> set[Column]:
    columns = {column for column in table.columns if column.unique and column.foreign_keys}
    for constraint in table.constraints:
        if isinstance(constraint, UniqueConstraint) and len(constraint.columns) == 1:
            columns.update(c for c in constraint.columns if c.foreign_keys)
    return columns


@lru_cache(maxsize=None)
def has_one_to_one_dependency(entity_type: type[Entity]) -> bool:
    """True when entity_type holds the FK of a one-to-one relationship.

    Decided from the FK side, whether or not entity_type maps a navigation
    back to its principal: either one of its FK columns is unique, or some
    mapped principal reaches entity_type through a scalar (uselist=False)
    one-to-many relationship.
    """
    mapper = inspect(entity_type)
    if _unique_foreign_key_columns(mapper.local_table):
        return True
    for principal in mapper.registry.mappers:
        for rel in principal.relationships:
            if (
                rel.direction is ONETOMANY
                and not rel.uselist
                and not rel.viewonly
                and mapper.isa(rel.mapper)
            ):
                return True
    return False
