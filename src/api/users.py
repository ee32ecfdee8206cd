"""/api/users routes."""

from fastapi import APIRouter, Depends, Request

from src.api.dependencies import get_create_user_handler, get_list_user_handler
from src.application.responses import GetListResponse
from src.application.users import (
    CreatedUserResponseDto,
    CreateUserCommand,
    CreateUserCommandHandler,
    GetListUserListItemDto,
    GetListUserQuery,
    GetListUserQueryHandler,
)

router = APIRouter(prefix="/api/users", tags=["users"])


@router.post("", response_model=CreatedUserResponseDto)
async def add(
    command: CreateUserCommand,
    handler: CreateUserCommandHandler = Depends(get_create_user_handler),
) -> CreatedUserResponseDto:
    return await handler.handle(command)


@router.get("", response_model=GetListResponse[GetListUserListItemDto])
async def get_list(
    request: Request,
    handler: GetListUserQueryHandler = Depends(get_list_user_handler),
) -> GetListResponse[GetListUserListItemDto]:
    query = GetListUserQuery(index=0, size=request.app.state.settings.default_page_size)
    return await handler.handle(query)
