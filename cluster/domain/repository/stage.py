"""Stage repository interface."""

from abc import ABC, abstractmethod

from cluster.domain.model.stage import Stage
from cluster.domain.value import ProjectId, StageId


class StageRepository(ABC):
    """Repository for Stage entity."""

    @abstractmethod
    async def find_by_id(self, stage_id: StageId) -> Stage | None:
        """Find a stage by ID."""
        pass

    @abstractmethod
    async def find_by_project(self, project_id: ProjectId) -> list[Stage]:
        """List stages of a project in creation order."""
        pass

    @abstractmethod
    async def save(self, stage: Stage) -> Stage:
        """Save a stage (create or update)."""
        pass

    @abstractmethod
    async def delete(self, stage_id: StageId) -> None:
        """Delete a stage row."""
        pass
