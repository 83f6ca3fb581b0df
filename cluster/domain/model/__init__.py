"""Domain model entities for Cluster."""

from cluster.domain.model.comment import Comment
from cluster.domain.model.invitation import Invitation
from cluster.domain.model.project import Project
from cluster.domain.model.stage import Stage
from cluster.domain.model.task import Task
from cluster.domain.model.user import User

__all__ = [
    "User",
    "Project",
    "Invitation",
    "Stage",
    "Task",
    "Comment",
]
