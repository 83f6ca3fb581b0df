"""Strongly typed identifiers for Cluster domain entities.

NewType wrappers keep project, stage and invitation IDs from being mixed up
at call sites while staying plain UUIDs at runtime.
"""

from typing import NewType
from uuid import UUID

UserId = NewType("UserId", UUID)
ProjectId = NewType("ProjectId", UUID)
StageId = NewType("StageId", UUID)
TaskId = NewType("TaskId", UUID)
CommentId = NewType("CommentId", UUID)
InvitationId = NewType("InvitationId", UUID)
