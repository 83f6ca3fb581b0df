"""Project domain service."""

from datetime import date
from uuid import uuid4

import logfire

from cluster.domain.error import NotFoundError, ValidationError
from cluster.domain.model import Project, User
from cluster.domain.model.project import (
    PROJECT_NAME_MAX_LENGTH,
    PROJECT_NAME_MIN_LENGTH,
)
from cluster.domain.repository import (
    CommentRepository,
    InvitationRepository,
    ProjectRepository,
    StageRepository,
    TaskRepository,
)
from cluster.domain.value import AccessLevel, ProjectId, ProjectStatus, UserId

from .access_service import AccessService
from .base import Service

_UNSET = object()


class ProjectService(Service):
    """Domain service for project operations.

    Deleting a project removes its stages, their tasks and comments, and its
    invitations. The cascade is spelled out here rather than left to the
    database.
    """

    def __init__(
        self,
        project_repository: ProjectRepository,
        stage_repository: StageRepository,
        task_repository: TaskRepository,
        comment_repository: CommentRepository,
        invitation_repository: InvitationRepository,
        access_service: AccessService,
    ) -> None:
        """Initialize project service.

        Args:
            project_repository: Project repository
            stage_repository: Stage repository
            task_repository: Task repository
            comment_repository: Comment repository
            invitation_repository: Invitation repository
            access_service: Project access policy
        """
        self.project_repository = project_repository
        self.stage_repository = stage_repository
        self.task_repository = task_repository
        self.comment_repository = comment_repository
        self.invitation_repository = invitation_repository
        self.access_service = access_service

    async def create(
        self,
        owner: User,
        name: str,
        description: str | None = None,
        status: ProjectStatus = ProjectStatus.PLANNING,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> Project:
        """Create a project owned by ``owner``.

        Raises:
            ValidationError: If the name or dates are invalid
        """
        with logfire.span("project_service.create", owner_id=str(owner.id)):
            project = Project(
                id=ProjectId(uuid4()),
                name=self._clean_name(name),
                description=description,
                owner_id=owner.id,
                status=status,
                start_date=start_date,
                end_date=end_date,
            )
            saved = await self.project_repository.save(project)
            logfire.info(
                "Project created", project_id=str(saved.id), owner_id=str(owner.id)
            )
            return saved

    async def get_by_id(self, project_id: ProjectId) -> Project:
        """Get project by ID.

        Raises:
            NotFoundError: If project not found
        """
        with logfire.span("project_service.get_by_id", project_id=str(project_id)):
            project = await self.project_repository.find_by_id(project_id)
            if not project:
                logfire.warn("Project not found", project_id=str(project_id))
                raise NotFoundError(
                    "Project", str(project_id), code="PROJECT_NOT_FOUND"
                )
            return project

    async def get_for_user(
        self, project_id: ProjectId, user: User
    ) -> tuple[Project, AccessLevel]:
        """Get a project the user may read, with their access level.

        Raises:
            NotFoundError: If project not found
            ForbiddenError: If the user has no access
        """
        project = await self.get_by_id(project_id)
        level = self.access_service.verify_access(user, project)
        return project, level

    async def list_visible(self, user: User) -> list[Project]:
        """Projects shown on the user's dashboard.

        Super-admins see every project, others what they own or invest in.
        """
        with logfire.span("project_service.list_visible", user_id=str(user.id)):
            if user.is_super_admin:
                projects = await self.project_repository.find_all()
            else:
                projects = await self.project_repository.find_for_user(user.id)
            logfire.info(
                "Projects listed", user_id=str(user.id), count=len(projects)
            )
            return projects

    async def list_for_user(self, user_id: UserId) -> list[Project]:
        """Projects where ``user_id`` is owner or investor."""
        with logfire.span("project_service.list_for_user", user_id=str(user_id)):
            return await self.project_repository.find_for_user(user_id)

    async def update(
        self,
        project_id: ProjectId,
        actor: User,
        name: str | None = None,
        description=_UNSET,
        start_date=_UNSET,
        end_date=_UNSET,
    ) -> Project:
        """Update editable project fields. The owner never changes.

        Fields left at their default are not touched; pass None explicitly
        to clear description or dates.

        Raises:
            NotFoundError: If project not found
            ForbiddenError: If the actor does not own the project
            ValidationError: If the new values are invalid
        """
        with logfire.span(
            "project_service.update",
            project_id=str(project_id),
            actor_id=str(actor.id),
        ):
            project = await self.get_by_id(project_id)
            self.access_service.verify_owner(actor, project)

            changes: dict = {}
            if name is not None:
                changes["name"] = self._clean_name(name)
            if description is not _UNSET:
                changes["description"] = description
            if start_date is not _UNSET:
                changes["start_date"] = start_date
            if end_date is not _UNSET:
                changes["end_date"] = end_date

            start = changes.get("start_date", project.start_date)
            end = changes.get("end_date", project.end_date)
            if start and end and end < start:
                raise ValidationError(
                    "End date must not be before start date", code="INVALID_DATE_RANGE"
                )

            saved = await self.project_repository.save(project.touched(**changes))
            logfire.info(
                "Project updated",
                project_id=str(project_id),
                fields=sorted(changes),
            )
            return saved

    async def change_status(
        self, project_id: ProjectId, actor: User, status: ProjectStatus
    ) -> Project:
        """Move a project to another lifecycle status.

        Raises:
            NotFoundError: If project not found
            ForbiddenError: If the actor does not own the project
        """
        with logfire.span(
            "project_service.change_status",
            project_id=str(project_id),
            status=status.value,
        ):
            project = await self.get_by_id(project_id)
            self.access_service.verify_owner(actor, project)
            saved = await self.project_repository.save(project.touched(status=status))
            logfire.info(
                "Project status changed",
                project_id=str(project_id),
                old_status=project.status.value,
                new_status=status.value,
            )
            return saved

    async def delete(self, project_id: ProjectId, actor: User) -> None:
        """Delete a project and everything under it.

        Raises:
            NotFoundError: If project not found
            ForbiddenError: If the actor does not own the project
        """
        with logfire.span(
            "project_service.delete",
            project_id=str(project_id),
            actor_id=str(actor.id),
        ):
            project = await self.get_by_id(project_id)
            self.access_service.verify_owner(actor, project)
            await self.purge(project)

    async def delete_owned_by(self, owner_id: UserId) -> int:
        """Delete every project owned by a user (account removal).

        Returns:
            Number of projects deleted
        """
        with logfire.span("project_service.delete_owned_by", owner_id=str(owner_id)):
            projects = await self.project_repository.find_by_owner(owner_id)
            for project in projects:
                await self.purge(project)
            logfire.info(
                "Owned projects deleted", owner_id=str(owner_id), count=len(projects)
            )
            return len(projects)

    async def purge(self, project: Project) -> None:
        """Remove a project with its stages, tasks, comments and invitations."""
        stages = await self.stage_repository.find_by_project(project.id)
        task_count = 0
        for stage in stages:
            tasks = await self.task_repository.find_by_stage(stage.id)
            for task in tasks:
                await self.comment_repository.delete_by_task(task.id)
                await self.task_repository.delete(task.id)
            task_count += len(tasks)
            await self.stage_repository.delete(stage.id)

        invitations = await self.invitation_repository.delete_by_project(project.id)
        await self.project_repository.delete(project.id)

        logfire.info(
            "Project deleted",
            project_id=str(project.id),
            stages=len(stages),
            tasks=task_count,
            invitations=invitations,
        )

    async def remove_investor(
        self, project_id: ProjectId, investor_id: UserId, actor: User
    ) -> Project:
        """Revoke an investor's membership.

        Raises:
            NotFoundError: If the project is missing or the user is not an
                investor on it
            ForbiddenError: If the actor does not own the project
        """
        with logfire.span(
            "project_service.remove_investor",
            project_id=str(project_id),
            investor_id=str(investor_id),
        ):
            project = await self.get_by_id(project_id)
            self.access_service.verify_owner(actor, project)

            if not project.is_investor(investor_id) or not (
                await self.project_repository.remove_investor(project.id, investor_id)
            ):
                raise NotFoundError(
                    "Investor", str(investor_id), code="INVESTOR_NOT_FOUND"
                )

            logfire.info(
                "Investor removed",
                project_id=str(project_id),
                investor_id=str(investor_id),
            )
            return await self.get_by_id(project_id)

    @staticmethod
    def _clean_name(name: str) -> str:
        cleaned = name.strip()
        if not PROJECT_NAME_MIN_LENGTH <= len(cleaned) <= PROJECT_NAME_MAX_LENGTH:
            raise ValidationError(
                f"Project name must be between {PROJECT_NAME_MIN_LENGTH} and "
                f"{PROJECT_NAME_MAX_LENGTH} characters",
                code="INVALID_PROJECT_NAME",
            )
        return cleaned
