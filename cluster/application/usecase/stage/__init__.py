"""Stage use cases."""

from cluster.application.usecase.stage.create_stage import (
    CreateStageRequest,
    CreateStageResponse,
    CreateStageUseCase,
    StageItem,
)
from cluster.application.usecase.stage.manage_stages import (
    DeleteStageRequest,
    DeleteStageResponse,
    DeleteStageUseCase,
    ListStagesRequest,
    ListStagesResponse,
    ListStagesUseCase,
    UpdateStageRequest,
    UpdateStageResponse,
    UpdateStageUseCase,
)

__all__ = [
    "CreateStageRequest",
    "CreateStageResponse",
    "CreateStageUseCase",
    "DeleteStageRequest",
    "DeleteStageResponse",
    "DeleteStageUseCase",
    "ListStagesRequest",
    "ListStagesResponse",
    "ListStagesUseCase",
    "StageItem",
    "UpdateStageRequest",
    "UpdateStageResponse",
    "UpdateStageUseCase",
]
