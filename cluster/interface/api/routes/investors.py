"""Investor membership routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Header

from cluster.application.usecase.project import (
    RemoveInvestorRequest,
    RemoveInvestorResponse,
    RemoveInvestorUseCase,
)
from cluster.domain.service import JWTService
from cluster.interface.api.auth import SESSION_COOKIE, require_user_id

router = APIRouter(prefix="/investors", tags=["investors"], route_class=DishkaRoute)


@router.delete("/{project_id}/{investor_id}", response_model=RemoveInvestorResponse)
async def remove_investor(
    project_id: str,
    investor_id: str,
    remove_investor_use_case: FromDishka[RemoveInvestorUseCase],
    jwt_service: FromDishka[JWTService],
    session_token: str | None = Cookie(default=None, alias=SESSION_COOKIE),
    authorization: str | None = Header(default=None),
) -> RemoveInvestorResponse:
    """Revoke an investor's access to a project (owner or super-admin)."""
    user_id = await require_user_id(jwt_service, session_token, authorization)
    return await remove_investor_use_case.execute(
        RemoveInvestorRequest(
            user_id=user_id, project_id=project_id, investor_id=investor_id
        )
    )
