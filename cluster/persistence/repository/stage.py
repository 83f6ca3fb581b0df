"""PostgreSQL implementation of Stage repository."""

from typing import Optional

from sqlalchemy import delete, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from cluster.domain.model import Stage
from cluster.domain.repository import StageRepository
from cluster.domain.value import ProjectId, StageId
from cluster.persistence.mappers import row_to_stage, stage_to_dict
from cluster.persistence.tables import stages_table


class PostgresStageRepository(StageRepository):
    """PostgreSQL implementation of StageRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_id(self, stage_id: StageId) -> Optional[Stage]:
        """Find a stage by ID."""
        stmt = select(stages_table).where(stages_table.c.id == stage_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_stage(dict(row)) if row else None

    async def find_by_project(self, project_id: ProjectId) -> list[Stage]:
        """Stages of a project, oldest first."""
        stmt = (
            select(stages_table)
            .where(stages_table.c.project_id == project_id)
            .order_by(stages_table.c.created_at)
        )
        result = await self.session.execute(stmt)
        return [row_to_stage(dict(row)) for row in result.mappings()]

    async def save(self, stage: Stage) -> Stage:
        """Save a stage (create or update)."""
        stage_dict = stage_to_dict(stage)

        if await self.find_by_id(stage.id):
            stmt = (
                update(stages_table)
                .where(stages_table.c.id == stage.id)
                .values(**stage_dict)
            )
        else:
            stmt = insert(stages_table).values(**stage_dict)
        await self.session.execute(stmt)

        await self.session.flush()
        return stage

    async def delete(self, stage_id: StageId) -> None:
        """Delete a stage."""
        stmt = delete(stages_table).where(stages_table.c.id == stage_id)
        await self.session.execute(stmt)
        await self.session.flush()
