"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict, Iterable, Optional
from uuid import UUID

from cluster.domain.model import Comment, Invitation, Project, Stage, Task, User
from cluster.domain.value import (
    CommentId,
    EmailAddress,
    InvitationId,
    InvitationStatus,
    InvitationToken,
    ProjectId,
    ProjectStatus,
    StageId,
    TaskId,
    UserId,
    UserRole,
)


def _uuid(value: Any) -> Optional[UUID]:
    if value is None:
        return None
    return UUID(value) if isinstance(value, str) else value


def row_to_user(row: Dict[str, Any]) -> User:
    """Convert database row to User domain model.

    Args:
        row: Database row as dict

    Returns:
        User domain model
    """
    return User(
        id=UserId(_uuid(row["id"])),
        external_id=row["external_id"],
        role=UserRole(row["role"]),
        email=EmailAddress(row["email"]) if row.get("email") else None,
        display_name=row.get("display_name"),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def user_to_dict(user: User) -> Dict[str, Any]:
    """Convert User domain model to database dict.

    Args:
        user: User domain model

    Returns:
        Dict suitable for database insertion/update
    """
    data = user.model_dump()
    data["role"] = user.role.value
    return data


def row_to_project(
    row: Dict[str, Any], investor_ids: Iterable[UUID] = ()
) -> Project:
    """Convert database row to Project domain model.

    Args:
        row: Database row as dict
        investor_ids: Investor user IDs from ``project_investors``

    Returns:
        Project domain model
    """
    return Project(
        id=ProjectId(_uuid(row["id"])),
        name=row["name"],
        description=row.get("description"),
        owner_id=UserId(_uuid(row["owner_id"])),
        investor_ids=tuple(UserId(_uuid(i)) for i in investor_ids),
        status=ProjectStatus(row["status"]),
        start_date=row.get("start_date"),
        end_date=row.get("end_date"),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def project_to_dict(project: Project) -> Dict[str, Any]:
    """Convert Project domain model to a ``projects`` row.

    The investor set lives in its own table and is left out.
    """
    data = project.model_dump(exclude={"investor_ids"})
    data["status"] = project.status.value
    return data


def row_to_invitation(row: Dict[str, Any]) -> Invitation:
    """Convert database row to Invitation domain model.

    Args:
        row: Database row as dict

    Returns:
        Invitation domain model
    """
    return Invitation(
        id=InvitationId(_uuid(row["id"])),
        token=InvitationToken(root=row["token"]),
        project_id=ProjectId(_uuid(row["project_id"])),
        inviter_id=UserId(_uuid(row["inviter_id"])),
        invitee_email=EmailAddress(row["invitee_email"]),
        status=InvitationStatus(row["status"]),
        expires_at=row["expires_at"],
        accepted_at=row.get("accepted_at"),
        accepted_by_user_id=UserId(_uuid(row["accepted_by_user_id"]))
        if row.get("accepted_by_user_id")
        else None,
        message=row.get("message"),
        email_send_failed=row.get("email_send_failed", False),
        last_email_error=row.get("last_email_error"),
        last_email_error_at=row.get("last_email_error_at"),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def invitation_to_dict(invitation: Invitation) -> Dict[str, Any]:
    """Convert Invitation domain model to database dict.

    Token and email are RootModels and serialize to their plain strings.
    """
    data = invitation.model_dump()
    data["status"] = invitation.status.value
    return data


def row_to_stage(row: Dict[str, Any]) -> Stage:
    """Convert database row to Stage domain model."""
    return Stage(
        id=StageId(_uuid(row["id"])),
        project_id=ProjectId(_uuid(row["project_id"])),
        owner_id=UserId(_uuid(row["owner_id"])),
        name=row["name"],
        description=row.get("description"),
        is_done=row["is_done"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def stage_to_dict(stage: Stage) -> Dict[str, Any]:
    return stage.model_dump()


def row_to_task(row: Dict[str, Any]) -> Task:
    """Convert database row to Task domain model."""
    return Task(
        id=TaskId(_uuid(row["id"])),
        stage_id=StageId(_uuid(row["stage_id"])),
        owner_id=UserId(_uuid(row["owner_id"])),
        name=row["name"],
        is_done=row["is_done"],
        is_edited=row["is_edited"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def task_to_dict(task: Task) -> Dict[str, Any]:
    return task.model_dump()


def row_to_comment(row: Dict[str, Any]) -> Comment:
    """Convert database row to Comment domain model."""
    return Comment(
        id=CommentId(_uuid(row["id"])),
        task_id=TaskId(_uuid(row["task_id"])),
        author_id=UserId(_uuid(row["author_id"])),
        author_name=row["author_name"],
        text=row["text"],
        is_edited=row["is_edited"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def comment_to_dict(comment: Comment) -> Dict[str, Any]:
    return comment.model_dump()
