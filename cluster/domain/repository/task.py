"""Task repository interface."""

from abc import ABC, abstractmethod

from cluster.domain.model.task import Task
from cluster.domain.value import StageId, TaskId


class TaskRepository(ABC):
    """Repository for Task entity."""

    @abstractmethod
    async def find_by_id(self, task_id: TaskId) -> Task | None:
        """Find a task by ID."""
        pass

    @abstractmethod
    async def find_by_stage(self, stage_id: StageId) -> list[Task]:
        """List tasks of a stage in creation order."""
        pass

    @abstractmethod
    async def save_many(self, tasks: list[Task]) -> list[Task]:
        """Insert several tasks at once."""
        pass

    @abstractmethod
    async def save(self, task: Task) -> Task:
        """Save a task (create or update)."""
        pass

    @abstractmethod
    async def delete(self, task_id: TaskId) -> None:
        """Delete a task row."""
        pass
