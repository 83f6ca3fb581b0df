"""Application layer DI providers."""

from dishka import Scope, provide

from cluster.application.usecase.comment import (
    CreateCommentUseCase,
    DeleteCommentUseCase,
    GetCommentsUseCase,
    UpdateCommentUseCase,
)
from cluster.application.usecase.invitation import (
    AcceptInvitationUseCase,
    CancelInvitationUseCase,
    ExpireInvitationsUseCase,
    GetInvitationUseCase,
    ListProjectInvitationsUseCase,
    SendInvitationUseCase,
)
from cluster.application.usecase.project import (
    ChangeProjectStatusUseCase,
    CreateProjectUseCase,
    DeleteProjectUseCase,
    GetProjectUseCase,
    ListProjectsUseCase,
    RemoveInvestorUseCase,
    UpdateProjectUseCase,
)
from cluster.application.usecase.stage import (
    CreateStageUseCase,
    DeleteStageUseCase,
    ListStagesUseCase,
    UpdateStageUseCase,
)
from cluster.application.usecase.task import (
    AddTasksUseCase,
    DeleteTaskUseCase,
    ListTasksUseCase,
    UpdateTaskUseCase,
)
from cluster.application.usecase.user import (
    GetUserUseCase,
    ListUsersUseCase,
    SyncIdentityUseCase,
)
from cluster.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed.

    Most use cases are plain constructors over request-scoped services and
    are registered as factories; dishka resolves their arguments by type.
    """

    scope = Scope.REQUEST

    # Project use cases
    create_project = provide(CreateProjectUseCase)
    get_project = provide(GetProjectUseCase)
    update_project = provide(UpdateProjectUseCase)
    change_project_status = provide(ChangeProjectStatusUseCase)
    delete_project = provide(DeleteProjectUseCase)
    list_projects = provide(ListProjectsUseCase)
    remove_investor = provide(RemoveInvestorUseCase)

    # Stage use cases
    create_stage = provide(CreateStageUseCase)
    list_stages = provide(ListStagesUseCase)
    update_stage = provide(UpdateStageUseCase)
    delete_stage = provide(DeleteStageUseCase)

    # Task use cases
    add_tasks = provide(AddTasksUseCase)
    list_tasks = provide(ListTasksUseCase)
    update_task = provide(UpdateTaskUseCase)
    delete_task = provide(DeleteTaskUseCase)

    # Comment use cases
    create_comment = provide(CreateCommentUseCase)
    get_comments = provide(GetCommentsUseCase)
    update_comment = provide(UpdateCommentUseCase)
    delete_comment = provide(DeleteCommentUseCase)

    # Invitation use cases
    send_invitation = provide(SendInvitationUseCase)
    get_invitation = provide(GetInvitationUseCase)
    accept_invitation = provide(AcceptInvitationUseCase)
    list_project_invitations = provide(ListProjectInvitationsUseCase)
    cancel_invitation = provide(CancelInvitationUseCase)
    expire_invitations = provide(ExpireInvitationsUseCase)

    # User use cases
    get_user = provide(GetUserUseCase)
    list_users = provide(ListUsersUseCase)
    sync_identity = provide(SyncIdentityUseCase)
