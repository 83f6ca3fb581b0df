"""Domain layer DI providers."""

from dishka import Scope, provide

from cluster.config import AuthSettings, InvitationSettings, Settings
from cluster.domain.repository import (
    CommentRepository,
    InvitationRepository,
    ProjectRepository,
    StageRepository,
    TaskRepository,
    UserRepository,
)
from cluster.domain.service import (
    AccessService,
    CommentService,
    InvitationNotifier,
    InvitationService,
    JWTService,
    ProjectService,
    StageService,
    TaskService,
    UserService,
)
from cluster.util.di.base import ProviderBase
from cluster.util.jwt import SigningKeyResolver


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide(scope=Scope.APP)
    def get_access_service(self) -> AccessService:
        """Provide the stateless project access policy."""
        return AccessService()

    @provide
    def get_jwt_service(
        self,
        auth_settings: AuthSettings,
        key_resolver: SigningKeyResolver,
        user_service: UserService,
    ) -> JWTService:
        """Provide JWT session domain service."""
        return JWTService(
            auth_settings=auth_settings,
            key_resolver=key_resolver,
            user_service=user_service,
        )

    @provide
    def get_project_service(
        self,
        project_repository: ProjectRepository,
        stage_repository: StageRepository,
        task_repository: TaskRepository,
        comment_repository: CommentRepository,
        invitation_repository: InvitationRepository,
        access_service: AccessService,
    ) -> ProjectService:
        """Provide project domain service."""
        return ProjectService(
            project_repository=project_repository,
            stage_repository=stage_repository,
            task_repository=task_repository,
            comment_repository=comment_repository,
            invitation_repository=invitation_repository,
            access_service=access_service,
        )

    @provide
    def get_stage_service(
        self,
        stage_repository: StageRepository,
        task_repository: TaskRepository,
        comment_repository: CommentRepository,
        project_repository: ProjectRepository,
        access_service: AccessService,
    ) -> StageService:
        """Provide stage domain service."""
        return StageService(
            stage_repository=stage_repository,
            task_repository=task_repository,
            comment_repository=comment_repository,
            project_repository=project_repository,
            access_service=access_service,
        )

    @provide
    def get_task_service(
        self,
        task_repository: TaskRepository,
        stage_repository: StageRepository,
        comment_repository: CommentRepository,
        project_repository: ProjectRepository,
        access_service: AccessService,
    ) -> TaskService:
        """Provide task domain service."""
        return TaskService(
            task_repository=task_repository,
            stage_repository=stage_repository,
            comment_repository=comment_repository,
            project_repository=project_repository,
            access_service=access_service,
        )

    @provide
    def get_comment_service(
        self,
        comment_repository: CommentRepository,
        task_service: TaskService,
        access_service: AccessService,
    ) -> CommentService:
        """Provide comment domain service."""
        return CommentService(
            comment_repository=comment_repository,
            task_service=task_service,
            access_service=access_service,
        )

    @provide
    def get_user_service(
        self, user_repository: UserRepository, project_service: ProjectService
    ) -> UserService:
        """Provide user domain service."""
        return UserService(
            user_repository=user_repository, project_service=project_service
        )

    @provide
    def get_invitation_service(
        self,
        invitation_repository: InvitationRepository,
        project_repository: ProjectRepository,
        user_repository: UserRepository,
        access_service: AccessService,
        notifier: InvitationNotifier,
        settings: Settings,
        invitation_settings: InvitationSettings,
    ) -> InvitationService:
        """Provide invitation domain service."""
        return InvitationService(
            invitation_repository=invitation_repository,
            project_repository=project_repository,
            user_repository=user_repository,
            access_service=access_service,
            notifier=notifier,
            accept_url=settings.invitation_accept_url,
            expiry_days=invitation_settings.expiry_days,
            message_max_length=invitation_settings.message_max_length,
        )
