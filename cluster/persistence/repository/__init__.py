"""PostgreSQL repository implementations."""

from cluster.persistence.repository.comment import PostgresCommentRepository
from cluster.persistence.repository.invitation import PostgresInvitationRepository
from cluster.persistence.repository.project import PostgresProjectRepository
from cluster.persistence.repository.stage import PostgresStageRepository
from cluster.persistence.repository.task import PostgresTaskRepository
from cluster.persistence.repository.user import PostgresUserRepository

__all__ = [
    "PostgresUserRepository",
    "PostgresProjectRepository",
    "PostgresInvitationRepository",
    "PostgresStageRepository",
    "PostgresTaskRepository",
    "PostgresCommentRepository",
]
