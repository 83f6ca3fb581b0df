"""In-memory repository implementations for testing."""

from .comment import InMemoryCommentRepository
from .invitation import InMemoryInvitationRepository
from .project import InMemoryProjectRepository
from .stage import InMemoryStageRepository
from .task import InMemoryTaskRepository
from .user import InMemoryUserRepository

__all__ = [
    "InMemoryCommentRepository",
    "InMemoryInvitationRepository",
    "InMemoryProjectRepository",
    "InMemoryStageRepository",
    "InMemoryTaskRepository",
    "InMemoryUserRepository",
]
