"""In-memory invitation repository for testing."""

from datetime import datetime
from typing import Optional

from cluster.domain.error import ConflictError
from cluster.domain.model.invitation import Invitation
from cluster.domain.repository.invitation import InvitationRepository
from cluster.domain.value import (
    EmailAddress,
    InvitationId,
    InvitationStatus,
    InvitationToken,
    ProjectId,
    UserId,
)


class InMemoryInvitationRepository(InvitationRepository):
    """In-memory implementation of InvitationRepository for testing."""

    def __init__(self) -> None:
        self._invitations: dict[InvitationId, Invitation] = {}

    async def find_by_id(self, invitation_id: InvitationId) -> Optional[Invitation]:
        """Find an invitation by ID."""
        return self._invitations.get(invitation_id)

    async def find_by_token(self, token: InvitationToken) -> Optional[Invitation]:
        """Find an invitation by its token."""
        for invitation in self._invitations.values():
            if invitation.token == token:
                return invitation
        return None

    async def find_live_pending(
        self, project_id: ProjectId, email: EmailAddress, now: datetime
    ) -> Optional[Invitation]:
        """Find the live pending invitation for (project, email)."""
        for invitation in self._invitations.values():
            if (
                invitation.project_id == project_id
                and invitation.invitee_email == email
                and invitation.is_live(now)
            ):
                return invitation
        return None

    async def find_by_project(self, project_id: ProjectId) -> list[Invitation]:
        """Invitations of a project, newest first."""
        return sorted(
            (i for i in self._invitations.values() if i.project_id == project_id),
            key=lambda i: i.created_at,
            reverse=True,
        )

    async def save(self, invitation: Invitation) -> Invitation:
        """Save an invitation (create or update).

        Raises:
            ConflictError: If a pending invitation already holds the
                (project, email) slot
        """
        if invitation.id in self._invitations:
            self._invitations[invitation.id] = invitation
            return invitation

        for existing in list(self._invitations.values()):
            if (
                existing.project_id == invitation.project_id
                and existing.invitee_email == invitation.invitee_email
                and existing.status == InvitationStatus.PENDING
            ):
                if existing.is_overdue(invitation.created_at):
                    self._invitations[existing.id] = existing.model_copy(
                        update={
                            "status": InvitationStatus.EXPIRED,
                            "updated_at": invitation.created_at,
                        }
                    )
                else:
                    raise ConflictError(
                        "A pending invitation already exists for this email",
                        code="PENDING_INVITATION_EXISTS",
                    )

        self._invitations[invitation.id] = invitation
        return invitation

    async def mark_accepted(
        self, invitation_id: InvitationId, user_id: UserId, now: datetime
    ) -> bool:
        """Conditional ``pending -> accepted``."""
        invitation = self._invitations.get(invitation_id)
        if not invitation or not invitation.is_live(now):
            return False
        self._invitations[invitation_id] = invitation.model_copy(
            update={
                "status": InvitationStatus.ACCEPTED,
                "accepted_at": now,
                "accepted_by_user_id": user_id,
                "updated_at": now,
            }
        )
        return True

    async def mark_cancelled(self, invitation_id: InvitationId, now: datetime) -> bool:
        """Conditional ``pending -> cancelled``."""
        invitation = self._invitations.get(invitation_id)
        if not invitation or invitation.status != InvitationStatus.PENDING:
            return False
        self._invitations[invitation_id] = invitation.model_copy(
            update={"status": InvitationStatus.CANCELLED, "updated_at": now}
        )
        return True

    async def record_delivery_failure(
        self, invitation_id: InvitationId, error: str, at: datetime
    ) -> None:
        """Flag a failed delivery."""
        invitation = self._invitations.get(invitation_id)
        if invitation:
            self._invitations[invitation_id] = invitation.model_copy(
                update={
                    "email_send_failed": True,
                    "last_email_error": error,
                    "last_email_error_at": at,
                    "updated_at": at,
                }
            )

    async def expire_overdue(self, now: datetime) -> int:
        """Bulk ``pending -> expired``."""
        count = 0
        for invitation in list(self._invitations.values()):
            if invitation.is_overdue(now):
                self._invitations[invitation.id] = invitation.model_copy(
                    update={"status": InvitationStatus.EXPIRED, "updated_at": now}
                )
                count += 1
        return count

    async def delete_by_project(self, project_id: ProjectId) -> int:
        """Delete all invitations of a project."""
        doomed = [
            invitation_id
            for invitation_id, invitation in self._invitations.items()
            if invitation.project_id == project_id
        ]
        for invitation_id in doomed:
            del self._invitations[invitation_id]
        return len(doomed)
