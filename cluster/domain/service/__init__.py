"""Domain services."""

from .access_service import AccessService, access_level
from .base import Service
from .comment_service import CommentService
from .invitation_service import AcceptanceResult, InvitationService, ResolvedInvitation
from .jwt_service import JWTService
from .notification_service import InvitationNotifier
from .project_service import ProjectService
from .stage_service import StageService, StageWithTasks
from .task_service import TaskService, parse_task_names
from .user_service import UserService

__all__ = [
    "AcceptanceResult",
    "AccessService",
    "CommentService",
    "InvitationNotifier",
    "InvitationService",
    "JWTService",
    "ProjectService",
    "ResolvedInvitation",
    "Service",
    "StageService",
    "StageWithTasks",
    "TaskService",
    "UserService",
    "access_level",
    "parse_task_names",
]
