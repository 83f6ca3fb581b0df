"""Comment routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Header, status
from pydantic import BaseModel, Field

from cluster.application.usecase.comment import (
    CreateCommentRequest,
    CreateCommentResponse,
    CreateCommentUseCase,
    DeleteCommentRequest,
    DeleteCommentResponse,
    DeleteCommentUseCase,
    GetCommentsRequest,
    GetCommentsResponse,
    GetCommentsUseCase,
    UpdateCommentRequest,
    UpdateCommentResponse,
    UpdateCommentUseCase,
)
from cluster.domain.service import JWTService
from cluster.interface.api.auth import SESSION_COOKIE, require_user_id

router = APIRouter(prefix="/comments", tags=["comments"], route_class=DishkaRoute)


class CommentAPIRequest(BaseModel):
    """API request carrying comment text."""

    text: str = Field(min_length=1, max_length=250)


@router.post(
    "/{task_id}",
    response_model=CreateCommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_comment(
    task_id: str,
    request: CommentAPIRequest,
    create_comment_use_case: FromDishka[CreateCommentUseCase],
    jwt_service: FromDishka[JWTService],
    session_token: str | None = Cookie(default=None, alias=SESSION_COOKIE),
    authorization: str | None = Header(default=None),
) -> CreateCommentResponse:
    """Comment on a task (owner, investor or super-admin)."""
    user_id = await require_user_id(jwt_service, session_token, authorization)
    return await create_comment_use_case.execute(
        CreateCommentRequest(user_id=user_id, task_id=task_id, text=request.text)
    )


@router.get("/{task_id}", response_model=GetCommentsResponse)
async def get_comments(
    task_id: str,
    get_comments_use_case: FromDishka[GetCommentsUseCase],
    jwt_service: FromDishka[JWTService],
    session_token: str | None = Cookie(default=None, alias=SESSION_COOKIE),
    authorization: str | None = Header(default=None),
) -> GetCommentsResponse:
    """Comments on a task, oldest first."""
    user_id = await require_user_id(jwt_service, session_token, authorization)
    return await get_comments_use_case.execute(
        GetCommentsRequest(user_id=user_id, task_id=task_id)
    )


@router.patch("/{comment_id}", response_model=UpdateCommentResponse)
async def update_comment(
    comment_id: str,
    request: CommentAPIRequest,
    update_comment_use_case: FromDishka[UpdateCommentUseCase],
    jwt_service: FromDishka[JWTService],
    session_token: str | None = Cookie(default=None, alias=SESSION_COOKIE),
    authorization: str | None = Header(default=None),
) -> UpdateCommentResponse:
    """Edit a comment. Only its author can edit."""
    user_id = await require_user_id(jwt_service, session_token, authorization)
    return await update_comment_use_case.execute(
        UpdateCommentRequest(
            user_id=user_id, comment_id=comment_id, text=request.text
        )
    )


@router.delete("/{comment_id}", response_model=DeleteCommentResponse)
async def delete_comment(
    comment_id: str,
    delete_comment_use_case: FromDishka[DeleteCommentUseCase],
    jwt_service: FromDishka[JWTService],
    session_token: str | None = Cookie(default=None, alias=SESSION_COOKIE),
    authorization: str | None = Header(default=None),
) -> DeleteCommentResponse:
    """Delete a comment as its author or the project owner."""
    user_id = await require_user_id(jwt_service, session_token, authorization)
    return await delete_comment_use_case.execute(
        DeleteCommentRequest(user_id=user_id, comment_id=comment_id)
    )
