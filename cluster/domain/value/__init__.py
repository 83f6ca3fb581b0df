"""Domain value objects for Cluster."""

from cluster.domain.value.common import utc_now
from cluster.domain.value.identifiers import (
    CommentId,
    InvitationId,
    ProjectId,
    StageId,
    TaskId,
    UserId,
)
from cluster.domain.value.types import (
    AccessLevel,
    EmailAddress,
    InvitationStatus,
    InvitationToken,
    ProjectStatus,
    UserRole,
)

__all__ = [
    # Identifiers
    "UserId",
    "ProjectId",
    "StageId",
    "TaskId",
    "CommentId",
    "InvitationId",
    # Types
    "AccessLevel",
    "EmailAddress",
    "InvitationStatus",
    "InvitationToken",
    "ProjectStatus",
    "UserRole",
    # Clock
    "utc_now",
]
