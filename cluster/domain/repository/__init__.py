"""Repository interfaces for Cluster domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from cluster.domain.repository.comment import CommentRepository
from cluster.domain.repository.invitation import InvitationRepository
from cluster.domain.repository.project import ProjectRepository
from cluster.domain.repository.stage import StageRepository
from cluster.domain.repository.task import TaskRepository
from cluster.domain.repository.user import UserRepository

__all__ = [
    "UserRepository",
    "ProjectRepository",
    "InvitationRepository",
    "StageRepository",
    "TaskRepository",
    "CommentRepository",
]
