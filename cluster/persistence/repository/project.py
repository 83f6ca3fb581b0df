"""PostgreSQL implementation of Project repository."""

from collections import defaultdict
from typing import Optional
from uuid import UUID

from sqlalchemy import delete, insert, or_, select, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession

from cluster.domain.model import Project
from cluster.domain.repository import ProjectRepository
from cluster.domain.value import ProjectId, UserId
from cluster.persistence.mappers import project_to_dict, row_to_project
from cluster.persistence.tables import project_investors_table, projects_table


class PostgresProjectRepository(ProjectRepository):
    """PostgreSQL implementation of ProjectRepository.

    Investors are rows in ``project_investors``; each project read joins
    them back in membership order.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, project_id: ProjectId) -> Optional[Project]:
        """Find a project by ID.

        Args:
            project_id: Project ID to look up

        Returns:
            Project if found, None otherwise
        """
        stmt = select(projects_table).where(projects_table.c.id == project_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        if not row:
            return None
        investors = await self._load_investors([row["id"]])
        return row_to_project(dict(row), investors[row["id"]])

    async def find_all(self, limit: int = 100, offset: int = 0) -> list[Project]:
        """List all projects, newest first."""
        stmt = (
            select(projects_table)
            .order_by(projects_table.c.created_at.desc())
            .limit(limit)
            .offset(offset)
        )
        return await self._fetch(stmt)

    async def find_for_user(self, user_id: UserId) -> list[Project]:
        """Projects the user owns or invests in, newest first."""
        invested = select(project_investors_table.c.project_id).where(
            project_investors_table.c.user_id == user_id
        )
        stmt = (
            select(projects_table)
            .where(
                or_(
                    projects_table.c.owner_id == user_id,
                    projects_table.c.id.in_(invested),
                )
            )
            .order_by(projects_table.c.created_at.desc())
        )
        return await self._fetch(stmt)

    async def find_by_owner(self, owner_id: UserId) -> list[Project]:
        """Projects owned by a user."""
        stmt = (
            select(projects_table)
            .where(projects_table.c.owner_id == owner_id)
            .order_by(projects_table.c.created_at.desc())
        )
        return await self._fetch(stmt)

    async def save(self, project: Project) -> Project:
        """Save a project (create or update).

        On create the initial investor set is inserted too; on update the
        investor rows are left alone.
        """
        project_dict = project_to_dict(project)

        existing = await self.find_by_id(project.id)

        if existing:
            stmt = (
                update(projects_table)
                .where(projects_table.c.id == project.id)
                .values(**project_dict)
            )
            await self.session.execute(stmt)
        else:
            await self.session.execute(insert(projects_table).values(**project_dict))
            for investor_id in project.investor_ids:
                await self.add_investor(project.id, investor_id)

        await self.session.flush()
        return await self.find_by_id(project.id) or project

    async def add_investor(self, project_id: ProjectId, user_id: UserId) -> bool:
        """Insert the membership row unless it already exists."""
        owner_stmt = select(projects_table.c.owner_id).where(
            projects_table.c.id == project_id
        )
        owner_id = (await self.session.execute(owner_stmt)).scalar_one_or_none()
        if owner_id is None or owner_id == user_id:
            return False

        stmt = (
            pg_insert(project_investors_table)
            .values(project_id=project_id, user_id=user_id)
            .on_conflict_do_nothing(index_elements=["project_id", "user_id"])
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0  # type: ignore[attr-defined]

    async def remove_investor(self, project_id: ProjectId, user_id: UserId) -> bool:
        """Delete the membership row."""
        stmt = delete(project_investors_table).where(
            project_investors_table.c.project_id == project_id,
            project_investors_table.c.user_id == user_id,
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0  # type: ignore[attr-defined]

    async def delete(self, project_id: ProjectId) -> None:
        """Delete a project and its membership rows."""
        await self.session.execute(
            delete(project_investors_table).where(
                project_investors_table.c.project_id == project_id
            )
        )
        await self.session.execute(
            delete(projects_table).where(projects_table.c.id == project_id)
        )
        await self.session.flush()

    async def _fetch(self, stmt) -> list[Project]:
        result = await self.session.execute(stmt)
        rows = [dict(row) for row in result.mappings()]
        investors = await self._load_investors([row["id"] for row in rows])
        return [row_to_project(row, investors[row["id"]]) for row in rows]

    async def _load_investors(self, project_ids: list[UUID]) -> dict[UUID, list[UUID]]:
        """Investor IDs per project, in the order they joined."""
        investors: dict[UUID, list[UUID]] = defaultdict(list)
        if not project_ids:
            return investors
        stmt = (
            select(
                project_investors_table.c.project_id,
                project_investors_table.c.user_id,
            )
            .where(project_investors_table.c.project_id.in_(project_ids))
            .order_by(project_investors_table.c.created_at)
        )
        result = await self.session.execute(stmt)
        for project_id, user_id in result.all():
            investors[project_id].append(user_id)
        return investors
