"""Project repository interface."""

from abc import ABC, abstractmethod

from cluster.domain.model.project import Project
from cluster.domain.value import ProjectId, UserId


class ProjectRepository(ABC):
    """Repository for Project aggregate."""

    @abstractmethod
    async def find_by_id(self, project_id: ProjectId) -> Project | None:
        """Find a project by ID.

        Args:
            project_id: The project's unique identifier

        Returns:
            The project if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_all(self, limit: int = 100, offset: int = 0) -> list[Project]:
        """List all projects, newest first."""
        pass

    @abstractmethod
    async def find_for_user(self, user_id: UserId) -> list[Project]:
        """Find projects the user owns or invests in, newest first."""
        pass

    @abstractmethod
    async def find_by_owner(self, owner_id: UserId) -> list[Project]:
        """Find projects owned by a user."""
        pass

    @abstractmethod
    async def save(self, project: Project) -> Project:
        """Save a project (create or update).

        The investor set is not written by ``save`` on update; use
        ``add_investor`` / ``remove_investor`` so concurrent membership
        changes are not lost.
        """
        pass

    @abstractmethod
    async def add_investor(self, project_id: ProjectId, user_id: UserId) -> bool:
        """Atomically add an investor if absent.

        Args:
            project_id: Project to modify
            user_id: User to add

        Returns:
            True if the user was added, False if already present or the
            user is the owner
        """
        pass

    @abstractmethod
    async def remove_investor(self, project_id: ProjectId, user_id: UserId) -> bool:
        """Atomically remove an investor.

        Returns:
            True if the user was an investor and was removed
        """
        pass

    @abstractmethod
    async def delete(self, project_id: ProjectId) -> None:
        """Delete a project row (children are removed by the service)."""
        pass
