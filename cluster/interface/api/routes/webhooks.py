"""Identity-provider webhook routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Request

from cluster.application.usecase.user import (
    SyncIdentityRequest,
    SyncIdentityResponse,
    SyncIdentityUseCase,
)

router = APIRouter(prefix="/webhooks", tags=["webhooks"], route_class=DishkaRoute)


@router.post("/identity", response_model=SyncIdentityResponse)
async def identity_webhook(
    request: Request,
    sync_identity_use_case: FromDishka[SyncIdentityUseCase],
) -> SyncIdentityResponse:
    """Receive user lifecycle events from the identity provider.

    The signature covers the exact request bytes, so the body is read raw
    rather than parsed by FastAPI.
    """
    body = await request.body()
    return await sync_identity_use_case.execute(
        SyncIdentityRequest(body=body, headers=dict(request.headers))
    )
