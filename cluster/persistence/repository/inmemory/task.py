"""In-memory task repository for testing."""

from typing import Optional

from cluster.domain.model.task import Task
from cluster.domain.repository.task import TaskRepository
from cluster.domain.value import StageId, TaskId


class InMemoryTaskRepository(TaskRepository):
    """In-memory implementation of TaskRepository for testing."""

    def __init__(self) -> None:
        self._tasks: dict[TaskId, Task] = {}

    async def find_by_id(self, task_id: TaskId) -> Optional[Task]:
        return self._tasks.get(task_id)

    async def find_by_stage(self, stage_id: StageId) -> list[Task]:
        return [t for t in self._tasks.values() if t.stage_id == stage_id]

    async def save_many(self, tasks: list[Task]) -> list[Task]:
        for task in tasks:
            self._tasks[task.id] = task
        return tasks

    async def save(self, task: Task) -> Task:
        self._tasks[task.id] = task
        return task

    async def delete(self, task_id: TaskId) -> None:
        self._tasks.pop(task_id, None)
