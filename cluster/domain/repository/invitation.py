"""Invitation repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime

from cluster.domain.model.invitation import Invitation
from cluster.domain.value import (
    EmailAddress,
    InvitationId,
    InvitationToken,
    ProjectId,
    UserId,
)


class InvitationRepository(ABC):
    """Repository for Invitation entity.

    Status transitions that can race (accept, sweep) are exposed as
    conditional bulk updates instead of going through ``save``.
    """

    @abstractmethod
    async def find_by_id(self, invitation_id: InvitationId) -> Invitation | None:
        """Find an invitation by ID.

        Args:
            invitation_id: The invitation's unique identifier

        Returns:
            The invitation if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_token(self, token: InvitationToken) -> Invitation | None:
        """Find an invitation by token, whatever its status.

        Args:
            token: The invitation token

        Returns:
            The invitation if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_live_pending(
        self, project_id: ProjectId, email: EmailAddress, now: datetime
    ) -> Invitation | None:
        """Find the pending, unexpired invitation for (project, email).

        Args:
            project_id: Project the invitation targets
            email: Normalized invitee email
            now: Reference time for the expiry check

        Returns:
            The live invitation if one exists, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_project(self, project_id: ProjectId) -> list[Invitation]:
        """List a project's invitations, newest first."""
        pass

    @abstractmethod
    async def save(self, invitation: Invitation) -> Invitation:
        """Save an invitation (create or update).

        Raises:
            ConflictError: If another live pending invitation exists for the
                same (project, email) on create
        """
        pass

    @abstractmethod
    async def mark_accepted(
        self, invitation_id: InvitationId, user_id: UserId, now: datetime
    ) -> bool:
        """Compare-and-swap ``pending`` to ``accepted``.

        The update only applies while the row is still pending and unexpired
        at ``now``.

        Returns:
            True if this call performed the transition
        """
        pass

    @abstractmethod
    async def mark_cancelled(self, invitation_id: InvitationId, now: datetime) -> bool:
        """Compare-and-swap ``pending`` to ``cancelled``.

        Returns:
            True if this call performed the transition
        """
        pass

    @abstractmethod
    async def record_delivery_failure(
        self, invitation_id: InvitationId, error: str, at: datetime
    ) -> None:
        """Flag an invitation whose email could not be delivered."""
        pass

    @abstractmethod
    async def expire_overdue(self, now: datetime) -> int:
        """Move every pending invitation with ``expires_at <= now`` to expired.

        Returns:
            Number of invitations transitioned
        """
        pass

    @abstractmethod
    async def delete_by_project(self, project_id: ProjectId) -> int:
        """Delete all invitations of a project (project cascade only)."""
        pass
