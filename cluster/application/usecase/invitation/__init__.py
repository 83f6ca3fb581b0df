"""Invitation use cases."""

from cluster.application.usecase.invitation.accept_invitation import (
    AcceptInvitationRequest,
    AcceptInvitationResponse,
    AcceptInvitationUseCase,
)
from cluster.application.usecase.invitation.cancel_invitation import (
    CancelInvitationRequest,
    CancelInvitationResponse,
    CancelInvitationUseCase,
)
from cluster.application.usecase.invitation.expire_invitations import (
    ExpireInvitationsRequest,
    ExpireInvitationsResponse,
    ExpireInvitationsUseCase,
)
from cluster.application.usecase.invitation.get_invitation import (
    GetInvitationRequest,
    GetInvitationResponse,
    GetInvitationUseCase,
)
from cluster.application.usecase.invitation.list_project_invitations import (
    ListProjectInvitationsRequest,
    ListProjectInvitationsResponse,
    ListProjectInvitationsUseCase,
)
from cluster.application.usecase.invitation.send_invitation import (
    InvitationItem,
    SendInvitationRequest,
    SendInvitationResponse,
    SendInvitationUseCase,
)

__all__ = [
    "AcceptInvitationRequest",
    "AcceptInvitationResponse",
    "AcceptInvitationUseCase",
    "CancelInvitationRequest",
    "CancelInvitationResponse",
    "CancelInvitationUseCase",
    "ExpireInvitationsRequest",
    "ExpireInvitationsResponse",
    "ExpireInvitationsUseCase",
    "GetInvitationRequest",
    "GetInvitationResponse",
    "GetInvitationUseCase",
    "InvitationItem",
    "ListProjectInvitationsRequest",
    "ListProjectInvitationsResponse",
    "ListProjectInvitationsUseCase",
    "SendInvitationRequest",
    "SendInvitationResponse",
    "SendInvitationUseCase",
]
