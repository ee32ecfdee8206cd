"""Repository-level errors.

Store failures (connectivity, constraint violations) are not wrapped: they
propagate to the caller as the SQLAlchemy exceptions they are.
"""

from __future__ import annotations


class RepositoryError(Exception):
    """Base class for errors raised by the repository layer."""


class OneToOneDeleteConflictError(RepositoryError):
    """Soft delete refused for the dependent side of a one-to-one relationship.

    The soft-deleted row would keep occupying the unique foreign-key slot and
    block re-creating an entity under the same key.
    """

    def __init__(self, entity_type: str) -> None:
        self.entity_type = entity_type
        super().__init__(
            f"{entity_type} has a one-to-one relationship; soft delete would "
            "block re-creating an entry with the same foreign key"
        )


class AmbiguousResultError(RepositoryError):
    """A single-result read matched more than one row."""

    def __init__(self, entity_type: str) -> None:
        self.entity_type = entity_type
        super().__init__(f"Expected at most one {entity_type}, found several")
