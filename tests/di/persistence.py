"""Mock persistence providers for testing."""

from dishka import Scope, provide

from cluster.domain.repository import (
    CommentRepository,
    InvitationRepository,
    ProjectRepository,
    StageRepository,
    TaskRepository,
    UserRepository,
)
from cluster.persistence.repository.inmemory import (
    InMemoryCommentRepository,
    InMemoryInvitationRepository,
    InMemoryProjectRepository,
    InMemoryStageRepository,
    InMemoryTaskRepository,
    InMemoryUserRepository,
)
from cluster.util.di.infrastructure.persistence import PersistenceProvider


class MockPersistenceProvider(PersistenceProvider):
    """Mock persistence provider using in-memory repositories.

    Uses APP scope so state survives across requests of one test client;
    every test builds its own container, which keeps tests isolated.
    """

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_user_repository(self) -> UserRepository:
        """Provide in-memory user repository."""
        return InMemoryUserRepository()

    @provide(scope=Scope.APP)
    def get_project_repository(self) -> ProjectRepository:
        """Provide in-memory project repository."""
        return InMemoryProjectRepository()

    @provide(scope=Scope.APP)
    def get_invitation_repository(self) -> InvitationRepository:
        """Provide in-memory invitation repository."""
        return InMemoryInvitationRepository()

    @provide(scope=Scope.APP)
    def get_stage_repository(self) -> StageRepository:
        """Provide in-memory stage repository."""
        return InMemoryStageRepository()

    @provide(scope=Scope.APP)
    def get_task_repository(self) -> TaskRepository:
        """Provide in-memory task repository."""
        return InMemoryTaskRepository()

    @provide(scope=Scope.APP)
    def get_comment_repository(self) -> CommentRepository:
        """Provide in-memory comment repository."""
        return InMemoryCommentRepository()
