"""Invitation routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Header, status
from pydantic import BaseModel, Field

from cluster.application.usecase.invitation import (
    AcceptInvitationRequest,
    AcceptInvitationResponse,
    AcceptInvitationUseCase,
    CancelInvitationRequest,
    CancelInvitationResponse,
    CancelInvitationUseCase,
    GetInvitationRequest,
    GetInvitationResponse,
    GetInvitationUseCase,
    ListProjectInvitationsRequest,
    ListProjectInvitationsResponse,
    ListProjectInvitationsUseCase,
    SendInvitationRequest,
    SendInvitationResponse,
    SendInvitationUseCase,
)
from cluster.domain.service import JWTService
from cluster.interface.api.auth import SESSION_COOKIE, require_user_id

router = APIRouter(prefix="/invitations", tags=["invitations"], route_class=DishkaRoute)


class SendInvitationAPIRequest(BaseModel):
    """API request for inviting an investor to a project."""

    project_id: str
    invitee_email: str = Field(min_length=1, max_length=254)
    message: str | None = None


class AcceptInvitationAPIRequest(BaseModel):
    """API request for accepting an invitation."""

    token: str = Field(min_length=1, max_length=128)


@router.post(
    "/invite",
    response_model=SendInvitationResponse,
    status_code=status.HTTP_201_CREATED,
)
async def send_invitation(
    request: SendInvitationAPIRequest,
    send_invitation_use_case: FromDishka[SendInvitationUseCase],
    jwt_service: FromDishka[JWTService],
    session_token: str | None = Cookie(default=None, alias=SESSION_COOKIE),
    authorization: str | None = Header(default=None),
) -> SendInvitationResponse:
    """Invite someone by email to invest in a project.

    Only the project owner (or a super-admin) may invite. The invitation is
    stored even when the email cannot be delivered; the response then has
    ``email_send_failed`` set.
    """
    user_id = await require_user_id(jwt_service, session_token, authorization)
    return await send_invitation_use_case.execute(
        SendInvitationRequest(
            inviter_id=user_id,
            project_id=request.project_id,
            invitee_email=request.invitee_email,
            message=request.message,
        )
    )


@router.get("/accept/{token}", response_model=GetInvitationResponse)
async def get_invitation(
    token: str,
    get_invitation_use_case: FromDishka[GetInvitationUseCase],
) -> GetInvitationResponse:
    """Resolve a live invitation for the acceptance page.

    Public: the token itself is the credential.
    """
    return await get_invitation_use_case.execute(GetInvitationRequest(token=token))


@router.post("/accept", response_model=AcceptInvitationResponse)
async def accept_invitation(
    request: AcceptInvitationAPIRequest,
    accept_invitation_use_case: FromDishka[AcceptInvitationUseCase],
    jwt_service: FromDishka[JWTService],
    session_token: str | None = Cookie(default=None, alias=SESSION_COOKIE),
    authorization: str | None = Header(default=None),
) -> AcceptInvitationResponse:
    """Accept an invitation as the signed-in user.

    The caller's email must match the invitee email. Accepting twice as the
    same user returns the project again with ``already_investor`` set.
    """
    user_id = await require_user_id(jwt_service, session_token, authorization)
    return await accept_invitation_use_case.execute(
        AcceptInvitationRequest(user_id=user_id, token=request.token)
    )


@router.get("/project/{project_id}", response_model=ListProjectInvitationsResponse)
async def list_project_invitations(
    project_id: str,
    list_invitations_use_case: FromDishka[ListProjectInvitationsUseCase],
    jwt_service: FromDishka[JWTService],
    session_token: str | None = Cookie(default=None, alias=SESSION_COOKIE),
    authorization: str | None = Header(default=None),
) -> ListProjectInvitationsResponse:
    """List a project's invitations, newest first (owner or super-admin)."""
    user_id = await require_user_id(jwt_service, session_token, authorization)
    return await list_invitations_use_case.execute(
        ListProjectInvitationsRequest(user_id=user_id, project_id=project_id)
    )


@router.delete("/{invitation_id}", response_model=CancelInvitationResponse)
async def cancel_invitation(
    invitation_id: str,
    cancel_invitation_use_case: FromDishka[CancelInvitationUseCase],
    jwt_service: FromDishka[JWTService],
    session_token: str | None = Cookie(default=None, alias=SESSION_COOKIE),
    authorization: str | None = Header(default=None),
) -> CancelInvitationResponse:
    """Cancel a pending invitation (owner or super-admin)."""
    user_id = await require_user_id(jwt_service, session_token, authorization)
    return await cancel_invitation_use_case.execute(
        CancelInvitationRequest(user_id=user_id, invitation_id=invitation_id)
    )
