"""Invitation entity.

An invitation grants investor membership on a project to whoever proves
ownership of the invitee email. Tokens are single-use and time-boxed.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from cluster.domain.model.common import TimestampedModel
from cluster.domain.value import (
    EmailAddress,
    InvitationId,
    InvitationStatus,
    InvitationToken,
    ProjectId,
    UserId,
)


class Invitation(TimestampedModel):
    """Invitation entity.

    Business rules:
    - Created ``pending``; accepted, expired and cancelled are terminal
    - At most one live pending invitation per (project, invitee_email)
    - Live means ``status == pending`` and ``expires_at > now``; the stored
      status alone is not enough, expiry is always checked against the clock
    - Email delivery problems are recorded, never fatal
    """

    id: InvitationId
    token: InvitationToken
    project_id: ProjectId
    inviter_id: UserId
    invitee_email: EmailAddress
    status: InvitationStatus = InvitationStatus.PENDING
    expires_at: datetime
    accepted_at: Optional[datetime] = None
    accepted_by_user_id: Optional[UserId] = None
    message: Optional[str] = Field(default=None, max_length=500)

    # Delivery bookkeeping
    email_send_failed: bool = False
    last_email_error: Optional[str] = None
    last_email_error_at: Optional[datetime] = None

    def is_live(self, now: datetime) -> bool:
        """Whether the invitation can still be resolved or accepted."""
        return self.status == InvitationStatus.PENDING and self.expires_at > now

    def is_overdue(self, now: datetime) -> bool:
        """Pending on paper but past its expiry."""
        return self.status == InvitationStatus.PENDING and self.expires_at <= now
