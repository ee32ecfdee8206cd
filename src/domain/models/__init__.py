"""Domain model package.

Pure pydantic value types with no ORM or infrastructure dependencies.
"""

from .paging import Paginate

__all__ = [
    "Paginate",
]
