"""Task domain service."""

from typing import Any
from uuid import uuid4

import logfire

from cluster.domain.error import NotFoundError, ValidationError
from cluster.domain.model import Project, Stage, Task, User
from cluster.domain.model.task import TASK_NAME_MAX_LENGTH, TASK_NAME_MIN_LENGTH
from cluster.domain.repository import (
    CommentRepository,
    ProjectRepository,
    StageRepository,
    TaskRepository,
)
from cluster.domain.value import StageId, TaskId

from .access_service import AccessService
from .base import Service


def parse_task_names(raw: Any) -> list[str]:
    """Normalize the loosely shaped ``tasks`` payload into task names.

    Accepted shapes: ``"a, b"``, ``["a", "b"]``, ``[{"task_name": "a"}]``
    and ``{"task_name": "a"}``. Blank names are dropped.

    Raises:
        ValidationError: INVALID_TASKS_FORMAT for any other shape,
            AT_LEAST_ONE_TASK_REQUIRED if nothing is left
    """
    if isinstance(raw, str):
        names = [part.strip() for part in raw.split(",")]
    elif isinstance(raw, list):
        names = [
            str(
                item["task_name"]
                if isinstance(item, dict) and "task_name" in item
                else item
            ).strip()
            for item in raw
        ]
    elif isinstance(raw, dict) and "task_name" in raw:
        names = [str(raw["task_name"]).strip()]
    else:
        raise ValidationError("Invalid tasks format", code="INVALID_TASKS_FORMAT")

    names = [name for name in names if name]
    if not names:
        raise ValidationError(
            "At least one task is required", code="AT_LEAST_ONE_TASK_REQUIRED"
        )
    return names


class TaskService(Service):
    """Domain service for tasks inside project stages."""

    def __init__(
        self,
        task_repository: TaskRepository,
        stage_repository: StageRepository,
        comment_repository: CommentRepository,
        project_repository: ProjectRepository,
        access_service: AccessService,
    ) -> None:
        self.task_repository = task_repository
        self.stage_repository = stage_repository
        self.comment_repository = comment_repository
        self.project_repository = project_repository
        self.access_service = access_service

    async def add_tasks(self, stage_id: StageId, actor: User, raw: Any) -> list[Task]:
        """Bulk-add tasks to a stage.

        Args:
            stage_id: Target stage
            actor: Acting user (owner or super-admin)
            raw: Task names in any shape ``parse_task_names`` accepts

        Returns:
            Created tasks in input order

        Raises:
            NotFoundError: If the stage or its project is missing
            ForbiddenError: If the actor does not own the project
            ValidationError: If the payload is malformed or a name is invalid
        """
        with logfire.span("task_service.add_tasks", stage_id=str(stage_id)):
            stage, project = await self._load_stage(stage_id)
            self.access_service.verify_owner(actor, project)

            names = parse_task_names(raw)
            for name in names:
                self._check_name(name)

            tasks = [
                Task(
                    id=TaskId(uuid4()),
                    stage_id=stage.id,
                    owner_id=project.owner_id,
                    name=name,
                )
                for name in names
            ]
            saved = await self.task_repository.save_many(tasks)
            logfire.info("Tasks added", stage_id=str(stage_id), count=len(saved))
            return saved

    async def list_for_stage(self, stage_id: StageId, actor: User) -> list[Task]:
        """Tasks of a stage, oldest first.

        Raises:
            NotFoundError: If the stage is missing
            ForbiddenError: If the actor has no access to the project
        """
        with logfire.span("task_service.list_for_stage", stage_id=str(stage_id)):
            stage, project = await self._load_stage(stage_id)
            self.access_service.verify_access(actor, project)
            return await self.task_repository.find_by_stage(stage.id)

    async def get_with_project(self, task_id: TaskId) -> tuple[Task, Project]:
        """Load a task and the project it belongs to.

        Raises:
            NotFoundError: If the task, its stage or the project is missing
        """
        task = await self.task_repository.find_by_id(task_id)
        if not task:
            logfire.warn("Task not found", task_id=str(task_id))
            raise NotFoundError("Task", str(task_id), code="TASK_NOT_FOUND")
        _, project = await self._load_stage(task.stage_id)
        return task, project

    async def update(
        self,
        task_id: TaskId,
        actor: User,
        name: str | None = None,
        is_done: bool | None = None,
    ) -> Task:
        """Rename a task or toggle its done flag. Renaming marks it edited.

        Raises:
            NotFoundError: If the task is missing
            ForbiddenError: If the actor does not own the project
        """
        with logfire.span("task_service.update", task_id=str(task_id)):
            task, project = await self.get_with_project(task_id)
            self.access_service.verify_owner(actor, project)

            changes: dict = {}
            if name is not None:
                cleaned = name.strip()
                self._check_name(cleaned)
                if cleaned != task.name:
                    changes["name"] = cleaned
                    changes["is_edited"] = True
            if is_done is not None:
                changes["is_done"] = is_done

            saved = await self.task_repository.save(task.touched(**changes))
            logfire.info("Task updated", task_id=str(task_id), fields=sorted(changes))
            return saved

    async def delete(self, task_id: TaskId, actor: User) -> None:
        """Delete a task and its comments.

        Raises:
            NotFoundError: If the task is missing
            ForbiddenError: If the actor does not own the project
        """
        with logfire.span("task_service.delete", task_id=str(task_id)):
            task, project = await self.get_with_project(task_id)
            self.access_service.verify_owner(actor, project)

            comments = await self.comment_repository.delete_by_task(task.id)
            await self.task_repository.delete(task.id)
            logfire.info("Task deleted", task_id=str(task_id), comments=comments)

    async def _load_stage(self, stage_id: StageId) -> tuple[Stage, Project]:
        stage = await self.stage_repository.find_by_id(stage_id)
        if not stage:
            raise NotFoundError("Stage", str(stage_id), code="STAGE_NOT_FOUND")
        project = await self.project_repository.find_by_id(stage.project_id)
        if not project:
            raise NotFoundError(
                "Project", str(stage.project_id), code="PROJECT_NOT_FOUND"
            )
        return stage, project

    @staticmethod
    def _check_name(name: str) -> None:
        if not TASK_NAME_MIN_LENGTH <= len(name) <= TASK_NAME_MAX_LENGTH:
            raise ValidationError(
                f"Task name must be between {TASK_NAME_MIN_LENGTH} and "
                f"{TASK_NAME_MAX_LENGTH} characters",
                code="INVALID_TASK_NAME",
            )
