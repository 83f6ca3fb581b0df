"""User directory routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Header, Query

from cluster.application.usecase.user import (
    GetUserRequest,
    GetUserResponse,
    GetUserUseCase,
    ListUsersRequest,
    ListUsersResponse,
    ListUsersUseCase,
)
from cluster.domain.service import JWTService
from cluster.interface.api.auth import SESSION_COOKIE, require_user_id

router = APIRouter(prefix="/users", tags=["users"], route_class=DishkaRoute)


@router.get("", response_model=ListUsersResponse)
async def list_users(
    list_users_use_case: FromDishka[ListUsersUseCase],
    jwt_service: FromDishka[JWTService],
    limit: int = Query(default=100, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    session_token: str | None = Cookie(default=None, alias=SESSION_COOKIE),
    authorization: str | None = Header(default=None),
) -> ListUsersResponse:
    """List users, oldest first."""
    user_id = await require_user_id(jwt_service, session_token, authorization)
    return await list_users_use_case.execute(
        ListUsersRequest(user_id=user_id, limit=limit, offset=offset)
    )


# Must be registered before /{target_user_id}
@router.get("/me", response_model=GetUserResponse)
async def get_current_user(
    get_user_use_case: FromDishka[GetUserUseCase],
    jwt_service: FromDishka[JWTService],
    session_token: str | None = Cookie(default=None, alias=SESSION_COOKIE),
    authorization: str | None = Header(default=None),
) -> GetUserResponse:
    """The signed-in user with their projects."""
    user_id = await require_user_id(jwt_service, session_token, authorization)
    return await get_user_use_case.execute(GetUserRequest(user_id=user_id))


@router.get("/{target_user_id}", response_model=GetUserResponse)
async def get_user(
    target_user_id: str,
    get_user_use_case: FromDishka[GetUserUseCase],
    jwt_service: FromDishka[JWTService],
    session_token: str | None = Cookie(default=None, alias=SESSION_COOKIE),
    authorization: str | None = Header(default=None),
) -> GetUserResponse:
    """A user with the projects they own or invest in."""
    user_id = await require_user_id(jwt_service, session_token, authorization)
    return await get_user_use_case.execute(
        GetUserRequest(user_id=user_id, target_user_id=target_user_id)
    )
