"""In-memory stage repository for testing."""

from typing import Optional

from cluster.domain.model.stage import Stage
from cluster.domain.repository.stage import StageRepository
from cluster.domain.value import ProjectId, StageId


class InMemoryStageRepository(StageRepository):
    """In-memory implementation of StageRepository for testing."""

    def __init__(self) -> None:
        self._stages: dict[StageId, Stage] = {}

    async def find_by_id(self, stage_id: StageId) -> Optional[Stage]:
        return self._stages.get(stage_id)

    async def find_by_project(self, project_id: ProjectId) -> list[Stage]:
        return [s for s in self._stages.values() if s.project_id == project_id]

    async def save(self, stage: Stage) -> Stage:
        self._stages[stage.id] = stage
        return stage

    async def delete(self, stage_id: StageId) -> None:
        self._stages.pop(stage_id, None)
