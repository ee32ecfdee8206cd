"""Paginated query result.

Paginate is built fresh for every list query and frozen once returned.
pages, has_previous and has_next are derived from the stored fields so
they can never disagree with index/size/count.
"""

from __future__ import annotations

import math
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

T = TypeVar("T")


class Paginate(BaseModel, Generic[T]):
    """One page of items plus the figures needed to navigate the rest.

    index is 0-based. A negative size is coerced to 0; a zero size yields
    zero pages rather than dividing by zero.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    index: int = 0
    size: int = 0
    count: int = 0
    items: list[T] = Field(default_factory=list)

    @field_validator("size", mode="before")
    @classmethod
    def _coerce_negative_size(cls, value: Any) -> Any:
        if isinstance(value, int) and value < 0:
            return 0
        return value

    @computed_field  # type: ignore[prop-decorator]
    @property
    def pages(self) -> int:
        if self.size == 0:
            return 0
        return math.ceil(self.count / self.size)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def has_previous(self) -> bool:
        return self.index > 0

    @computed_field  # type: ignore[prop-decorator]
    @property
    def has_next(self) -> bool:
        return self.index + 1 < self.pages
