"""In-memory project repository for testing."""

from typing import Optional

from cluster.domain.model.project import Project
from cluster.domain.repository.project import ProjectRepository
from cluster.domain.value import ProjectId, UserId


class InMemoryProjectRepository(ProjectRepository):
    """In-memory implementation of ProjectRepository for testing."""

    def __init__(self) -> None:
        self._projects: dict[ProjectId, Project] = {}

    async def find_by_id(self, project_id: ProjectId) -> Optional[Project]:
        """Find a project by ID."""
        return self._projects.get(project_id)

    async def find_all(self, limit: int = 100, offset: int = 0) -> list[Project]:
        """List all projects, newest first."""
        return self._newest_first(self._projects.values())[offset : offset + limit]

    async def find_for_user(self, user_id: UserId) -> list[Project]:
        """Projects the user owns or invests in."""
        return self._newest_first(
            p
            for p in self._projects.values()
            if p.is_owner(user_id) or p.is_investor(user_id)
        )

    async def find_by_owner(self, owner_id: UserId) -> list[Project]:
        """Projects owned by a user."""
        return self._newest_first(
            p for p in self._projects.values() if p.is_owner(owner_id)
        )

    async def save(self, project: Project) -> Project:
        """Save a project; on update the stored investor set wins."""
        existing = self._projects.get(project.id)
        if existing:
            project = project.model_copy(
                update={"investor_ids": existing.investor_ids}
            )
        self._projects[project.id] = project
        return project

    async def add_investor(self, project_id: ProjectId, user_id: UserId) -> bool:
        """Append an investor if absent."""
        project = self._projects.get(project_id)
        if not project or project.is_owner(user_id) or project.is_investor(user_id):
            return False
        self._projects[project_id] = project.model_copy(
            update={"investor_ids": (*project.investor_ids, user_id)}
        )
        return True

    async def remove_investor(self, project_id: ProjectId, user_id: UserId) -> bool:
        """Drop an investor."""
        project = self._projects.get(project_id)
        if not project or not project.is_investor(user_id):
            return False
        self._projects[project_id] = project.model_copy(
            update={
                "investor_ids": tuple(i for i in project.investor_ids if i != user_id)
            }
        )
        return True

    async def delete(self, project_id: ProjectId) -> None:
        """Delete a project."""
        self._projects.pop(project_id, None)

    @staticmethod
    def _newest_first(projects) -> list[Project]:
        return sorted(projects, key=lambda p: p.created_at, reverse=True)
