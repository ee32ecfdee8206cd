"""Shared response envelopes for application handlers."""

from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class GetListResponse(BaseModel, Generic[T]):
    """A page of transfer objects plus the paging figures of the source query.

    Built from a Paginate via ``model_validate(page, from_attributes=True)``;
    the derived fields (pages, has_previous, has_next) are copied, not
    recomputed.
    """

    model_config = ConfigDict(from_attributes=True, frozen=True)

    items: list[T] = Field(default_factory=list)
    index: int
    size: int
    count: int
    pages: int
    has_previous: bool
    has_next: bool
