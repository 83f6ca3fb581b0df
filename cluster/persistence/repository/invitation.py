"""PostgreSQL implementation of Invitation repository."""

from datetime import datetime
from typing import Optional

from sqlalchemy import and_, delete, insert, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from cluster.domain.error import ConflictError
from cluster.domain.model import Invitation
from cluster.domain.repository import InvitationRepository
from cluster.domain.value import (
    EmailAddress,
    InvitationId,
    InvitationStatus,
    InvitationToken,
    ProjectId,
    UserId,
)
from cluster.persistence.mappers import invitation_to_dict, row_to_invitation
from cluster.persistence.tables import invitations_table

_PENDING = InvitationStatus.PENDING.value


class PostgresInvitationRepository(InvitationRepository):
    """PostgreSQL implementation of InvitationRepository.

    Status transitions are conditional UPDATEs on ``status = 'pending'`` so
    two concurrent requests cannot both win.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, invitation_id: InvitationId) -> Optional[Invitation]:
        """Find an invitation by ID.

        Args:
            invitation_id: Invitation ID to look up

        Returns:
            Invitation if found, None otherwise
        """
        stmt = select(invitations_table).where(invitations_table.c.id == invitation_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_invitation(dict(row)) if row else None

    async def find_by_token(self, token: InvitationToken) -> Optional[Invitation]:
        """Find an invitation by its token.

        Args:
            token: Invitation token to look up

        Returns:
            Invitation if found, None otherwise
        """
        stmt = select(invitations_table).where(invitations_table.c.token == token.root)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_invitation(dict(row)) if row else None

    async def find_live_pending(
        self, project_id: ProjectId, email: EmailAddress, now: datetime
    ) -> Optional[Invitation]:
        """Find the live pending invitation for (project, email), if any."""
        stmt = select(invitations_table).where(
            and_(
                invitations_table.c.project_id == project_id,
                invitations_table.c.invitee_email == email.root,
                invitations_table.c.status == _PENDING,
                invitations_table.c.expires_at > now,
            )
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_invitation(dict(row)) if row else None

    async def find_by_project(self, project_id: ProjectId) -> list[Invitation]:
        """All invitations of a project, newest first."""
        stmt = (
            select(invitations_table)
            .where(invitations_table.c.project_id == project_id)
            .order_by(invitations_table.c.created_at.desc())
        )
        result = await self.session.execute(stmt)
        return [row_to_invitation(dict(row)) for row in result.mappings()]

    async def save(self, invitation: Invitation) -> Invitation:
        """Save an invitation (create or update).

        On create, an overdue pending invitation for the same (project, email)
        is expired first so it does not hold the unique pending slot.

        Raises:
            ConflictError: If a live pending invitation already exists
        """
        invitation_dict = invitation_to_dict(invitation)

        existing = await self.find_by_id(invitation.id)

        if existing:
            stmt = (
                update(invitations_table)
                .where(invitations_table.c.id == invitation.id)
                .values(**invitation_dict)
            )
            await self.session.execute(stmt)
            await self.session.flush()
            return invitation

        await self.session.execute(
            update(invitations_table)
            .where(
                and_(
                    invitations_table.c.project_id == invitation.project_id,
                    invitations_table.c.invitee_email == invitation.invitee_email.root,
                    invitations_table.c.status == _PENDING,
                    invitations_table.c.expires_at <= invitation.created_at,
                )
            )
            .values(
                status=InvitationStatus.EXPIRED.value,
                updated_at=invitation.created_at,
            )
        )

        try:
            async with self.session.begin_nested():
                await self.session.execute(
                    insert(invitations_table).values(**invitation_dict)
                )
        except IntegrityError:
            raise ConflictError(
                "A pending invitation already exists for this email",
                code="PENDING_INVITATION_EXISTS",
            )

        await self.session.flush()
        return invitation

    async def mark_accepted(
        self, invitation_id: InvitationId, user_id: UserId, now: datetime
    ) -> bool:
        """Compare-and-swap ``pending -> accepted`` while still unexpired."""
        stmt = (
            update(invitations_table)
            .where(
                and_(
                    invitations_table.c.id == invitation_id,
                    invitations_table.c.status == _PENDING,
                    invitations_table.c.expires_at > now,
                )
            )
            .values(
                status=InvitationStatus.ACCEPTED.value,
                accepted_at=now,
                accepted_by_user_id=user_id,
                updated_at=now,
            )
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount == 1  # type: ignore[attr-defined]

    async def mark_cancelled(self, invitation_id: InvitationId, now: datetime) -> bool:
        """Compare-and-swap ``pending -> cancelled``."""
        stmt = (
            update(invitations_table)
            .where(
                and_(
                    invitations_table.c.id == invitation_id,
                    invitations_table.c.status == _PENDING,
                )
            )
            .values(status=InvitationStatus.CANCELLED.value, updated_at=now)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount == 1  # type: ignore[attr-defined]

    async def record_delivery_failure(
        self, invitation_id: InvitationId, error: str, at: datetime
    ) -> None:
        """Flag an invitation whose email could not be delivered."""
        stmt = (
            update(invitations_table)
            .where(invitations_table.c.id == invitation_id)
            .values(
                email_send_failed=True,
                last_email_error=error,
                last_email_error_at=at,
                updated_at=at,
            )
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def expire_overdue(self, now: datetime) -> int:
        """Bulk ``pending -> expired`` for everything past its expiry."""
        stmt = (
            update(invitations_table)
            .where(
                and_(
                    invitations_table.c.status == _PENDING,
                    invitations_table.c.expires_at <= now,
                )
            )
            .values(status=InvitationStatus.EXPIRED.value, updated_at=now)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount  # type: ignore[attr-defined]

    async def delete_by_project(self, project_id: ProjectId) -> int:
        """Delete all invitations of a project."""
        stmt = delete(invitations_table).where(
            invitations_table.c.project_id == project_id
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount  # type: ignore[attr-defined]
