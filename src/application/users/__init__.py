"""User use cases: create one user, list users page by page."""

from .commands import CreateUserCommand, CreateUserCommandHandler
from .dtos import CreatedUserResponseDto, GetListUserListItemDto
from .queries import GetListUserQuery, GetListUserQueryHandler

__all__ = [
    "CreateUserCommand",
    "CreateUserCommandHandler",
    "CreatedUserResponseDto",
    "GetListUserListItemDto",
    "GetListUserQuery",
    "GetListUserQueryHandler",
]
