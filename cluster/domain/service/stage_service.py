"""Stage domain service."""

from dataclasses import dataclass
from uuid import uuid4

import logfire

from cluster.domain.error import NotFoundError
from cluster.domain.model import Project, Stage, Task, User
from cluster.domain.repository import (
    CommentRepository,
    ProjectRepository,
    StageRepository,
    TaskRepository,
)
from cluster.domain.value import ProjectId, StageId

from .access_service import AccessService
from .base import Service


@dataclass
class StageWithTasks:
    """A stage resolved together with its tasks."""

    stage: Stage
    tasks: list[Task]


class StageService(Service):
    """Domain service for project stages."""

    def __init__(
        self,
        stage_repository: StageRepository,
        task_repository: TaskRepository,
        comment_repository: CommentRepository,
        project_repository: ProjectRepository,
        access_service: AccessService,
    ) -> None:
        self.stage_repository = stage_repository
        self.task_repository = task_repository
        self.comment_repository = comment_repository
        self.project_repository = project_repository
        self.access_service = access_service

    async def create(
        self,
        project_id: ProjectId,
        actor: User,
        name: str,
        description: str | None = None,
    ) -> Stage:
        """Add a stage to a project.

        Raises:
            NotFoundError: If project not found
            ForbiddenError: If the actor does not own the project
        """
        with logfire.span(
            "stage_service.create", project_id=str(project_id), actor_id=str(actor.id)
        ):
            project = await self._get_project(project_id)
            self.access_service.verify_owner(actor, project)

            stage = Stage(
                id=StageId(uuid4()),
                project_id=project.id,
                owner_id=project.owner_id,
                name=name.strip(),
                description=description.strip() if description else None,
            )
            saved = await self.stage_repository.save(stage)
            logfire.info(
                "Stage created", stage_id=str(saved.id), project_id=str(project.id)
            )
            return saved

    async def list_for_project(
        self, project_id: ProjectId, actor: User
    ) -> list[StageWithTasks]:
        """Stages of a project with their tasks, oldest first.

        Raises:
            NotFoundError: If project not found
            ForbiddenError: If the actor has no access
        """
        with logfire.span(
            "stage_service.list_for_project", project_id=str(project_id)
        ):
            project = await self._get_project(project_id)
            self.access_service.verify_access(actor, project)
            return await self.stages_with_tasks(project.id)

    async def stages_with_tasks(self, project_id: ProjectId) -> list[StageWithTasks]:
        """Resolve stages and tasks without an access check."""
        stages = await self.stage_repository.find_by_project(project_id)
        return [
            StageWithTasks(
                stage=stage, tasks=await self.task_repository.find_by_stage(stage.id)
            )
            for stage in stages
        ]

    async def get_with_project(self, stage_id: StageId) -> tuple[Stage, Project]:
        """Load a stage and its project.

        Raises:
            NotFoundError: If either is missing
        """
        stage = await self.stage_repository.find_by_id(stage_id)
        if not stage:
            logfire.warn("Stage not found", stage_id=str(stage_id))
            raise NotFoundError("Stage", str(stage_id), code="STAGE_NOT_FOUND")
        project = await self._get_project(stage.project_id)
        return stage, project

    async def update(
        self,
        stage_id: StageId,
        actor: User,
        name: str | None = None,
        description: str | None = None,
        is_done: bool | None = None,
    ) -> Stage:
        """Update a stage.

        Raises:
            NotFoundError: If the stage is missing
            ForbiddenError: If the actor does not own the project
        """
        with logfire.span("stage_service.update", stage_id=str(stage_id)):
            stage, project = await self.get_with_project(stage_id)
            self.access_service.verify_owner(actor, project)

            changes: dict = {}
            if name is not None:
                changes["name"] = name.strip()
            if description is not None:
                changes["description"] = description.strip() or None
            if is_done is not None:
                changes["is_done"] = is_done

            saved = await self.stage_repository.save(stage.touched(**changes))
            logfire.info("Stage updated", stage_id=str(stage_id), fields=sorted(changes))
            return saved

    async def delete(self, stage_id: StageId, actor: User) -> None:
        """Delete a stage together with its tasks and their comments.

        Raises:
            NotFoundError: If the stage is missing
            ForbiddenError: If the actor does not own the project
        """
        with logfire.span("stage_service.delete", stage_id=str(stage_id)):
            stage, project = await self.get_with_project(stage_id)
            self.access_service.verify_owner(actor, project)

            tasks = await self.task_repository.find_by_stage(stage.id)
            for task in tasks:
                await self.comment_repository.delete_by_task(task.id)
                await self.task_repository.delete(task.id)
            await self.stage_repository.delete(stage.id)

            logfire.info("Stage deleted", stage_id=str(stage_id), tasks=len(tasks))

    async def _get_project(self, project_id: ProjectId) -> Project:
        project = await self.project_repository.find_by_id(project_id)
        if not project:
            raise NotFoundError("Project", str(project_id), code="PROJECT_NOT_FOUND")
        return project
