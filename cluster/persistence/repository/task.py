"""PostgreSQL implementation of Task repository."""

from typing import Optional

from sqlalchemy import delete, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from cluster.domain.model import Task
from cluster.domain.repository import TaskRepository
from cluster.domain.value import StageId, TaskId
from cluster.persistence.mappers import row_to_task, task_to_dict
from cluster.persistence.tables import tasks_table


class PostgresTaskRepository(TaskRepository):
    """PostgreSQL implementation of TaskRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_id(self, task_id: TaskId) -> Optional[Task]:
        """Find a task by ID."""
        stmt = select(tasks_table).where(tasks_table.c.id == task_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_task(dict(row)) if row else None

    async def find_by_stage(self, stage_id: StageId) -> list[Task]:
        """Tasks of a stage, oldest first."""
        stmt = (
            select(tasks_table)
            .where(tasks_table.c.stage_id == stage_id)
            .order_by(tasks_table.c.created_at)
        )
        result = await self.session.execute(stmt)
        return [row_to_task(dict(row)) for row in result.mappings()]

    async def save_many(self, tasks: list[Task]) -> list[Task]:
        """Bulk insert new tasks."""
        if tasks:
            await self.session.execute(
                insert(tasks_table), [task_to_dict(task) for task in tasks]
            )
            await self.session.flush()
        return tasks

    async def save(self, task: Task) -> Task:
        """Save a task (create or update)."""
        task_dict = task_to_dict(task)

        if await self.find_by_id(task.id):
            stmt = (
                update(tasks_table).where(tasks_table.c.id == task.id).values(**task_dict)
            )
        else:
            stmt = insert(tasks_table).values(**task_dict)
        await self.session.execute(stmt)

        await self.session.flush()
        return task

    async def delete(self, task_id: TaskId) -> None:
        """Delete a task."""
        stmt = delete(tasks_table).where(tasks_table.c.id == task_id)
        await self.session.execute(stmt)
        await self.session.flush()
