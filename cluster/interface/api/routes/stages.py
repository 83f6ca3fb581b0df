"""Stage routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Header
from pydantic import BaseModel, Field

from cluster.application.usecase.stage import (
    DeleteStageRequest,
    DeleteStageResponse,
    DeleteStageUseCase,
    UpdateStageRequest,
    UpdateStageResponse,
    UpdateStageUseCase,
)
from cluster.domain.service import JWTService
from cluster.interface.api.auth import SESSION_COOKIE, require_user_id

router = APIRouter(prefix="/stages", tags=["stages"], route_class=DishkaRoute)


class UpdateStageAPIRequest(BaseModel):
    """API request for editing a stage."""

    name: str | None = Field(default=None, min_length=1, max_length=10)
    description: str | None = Field(default=None, max_length=25)
    is_done: bool | None = None


@router.patch("/{stage_id}", response_model=UpdateStageResponse)
async def update_stage(
    stage_id: str,
    request: UpdateStageAPIRequest,
    update_stage_use_case: FromDishka[UpdateStageUseCase],
    jwt_service: FromDishka[JWTService],
    session_token: str | None = Cookie(default=None, alias=SESSION_COOKIE),
    authorization: str | None = Header(default=None),
) -> UpdateStageResponse:
    """Edit a stage (owner or super-admin)."""
    user_id = await require_user_id(jwt_service, session_token, authorization)
    return await update_stage_use_case.execute(
        UpdateStageRequest(
            user_id=user_id,
            stage_id=stage_id,
            name=request.name,
            description=request.description,
            is_done=request.is_done,
        )
    )


@router.delete("/{stage_id}", response_model=DeleteStageResponse)
async def delete_stage(
    stage_id: str,
    delete_stage_use_case: FromDishka[DeleteStageUseCase],
    jwt_service: FromDishka[JWTService],
    session_token: str | None = Cookie(default=None, alias=SESSION_COOKIE),
    authorization: str | None = Header(default=None),
) -> DeleteStageResponse:
    """Delete a stage with its tasks and their comments."""
    user_id = await require_user_id(jwt_service, session_token, authorization)
    return await delete_stage_use_case.execute(
        DeleteStageRequest(user_id=user_id, stage_id=stage_id)
    )
