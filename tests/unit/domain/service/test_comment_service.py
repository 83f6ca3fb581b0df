"""Unit tests for CommentService."""

import pytest

from cluster.domain.error import ForbiddenError, NotFoundError, ValidationError
from cluster.domain.repository import CommentRepository, ProjectRepository
from cluster.domain.service import (
    CommentService,
    ProjectService,
    StageService,
    TaskService,
)
from tests.conftest import make_user
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no docker needed
unit_env = create_env_fixture()


async def _task_with_investor(unit_env):
    """Owner, investor and a task in one of the owner's projects."""
    owner = make_user("owner@example.com", display_name="Olga")
    investor = make_user("inv@example.com", display_name="Ivan")
    project = await (await unit_env.get(ProjectService)).create(owner, "Wind Park")
    await (await unit_env.get(ProjectRepository)).add_investor(project.id, investor.id)
    stage = await (await unit_env.get(StageService)).create(project.id, owner, "Design")
    [task] = await (await unit_env.get(TaskService)).add_tasks(
        stage.id, owner, "Survey"
    )
    return owner, investor, task


class TestCreateComment:
    """Tests for create_comment method."""

    @pytest.mark.asyncio
    async def test_investor_can_comment(self, unit_env):
        """Investors may comment; the author name is copied in."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        _, investor, task = await _task_with_investor(unit_env)

        # Act
        result = await comment_service.create_comment(task.id, investor, "  Nice  ")

        # Assert
        assert result.text == "Nice"
        assert result.author_name == "Ivan"
        assert result.is_edited is False

        # Verify it was saved in repository
        saved = await comment_repo.find_by_id(result.id)
        assert saved is not None

    @pytest.mark.asyncio
    async def test_outsider_cannot_comment(self, unit_env):
        """Users without project access are rejected."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        _, _, task = await _task_with_investor(unit_env)

        # Act & Assert
        with pytest.raises(ForbiddenError):
            await comment_service.create_comment(
                task.id, make_user("x@example.com"), "Hi"
            )

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "text, code", [("   ", "COMMENT_TEXT_REQUIRED"), ("x" * 251, "COMMENT_TOO_LONG")]
    )
    async def test_text_bounds(self, unit_env, text, code):
        """Text must be 1 to 250 characters."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        owner, _, task = await _task_with_investor(unit_env)

        # Act & Assert
        with pytest.raises(ValidationError) as exc:
            await comment_service.create_comment(task.id, owner, text)
        assert exc.value.code == code


class TestEditComment:
    """Tests for update and delete."""

    @pytest.mark.asyncio
    async def test_author_edit_marks_edited(self, unit_env):
        """Edited comments are flagged."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        _, investor, task = await _task_with_investor(unit_env)
        comment = await comment_service.create_comment(task.id, investor, "First")

        # Act
        updated = await comment_service.update_comment(comment.id, investor, "Second")

        # Assert
        assert updated.text == "Second"
        assert updated.is_edited is True

    @pytest.mark.asyncio
    async def test_owner_cannot_edit_others_comment(self, unit_env):
        """Only the author may edit, not even the project owner."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        owner, investor, task = await _task_with_investor(unit_env)
        comment = await comment_service.create_comment(task.id, investor, "First")

        # Act & Assert
        with pytest.raises(ForbiddenError) as exc:
            await comment_service.update_comment(comment.id, owner, "Changed")
        assert exc.value.code == "FORBIDDEN_NOT_COMMENT_AUTHOR"

    @pytest.mark.asyncio
    async def test_owner_can_delete_others_comment(self, unit_env):
        """Project owners can moderate comments."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        owner, investor, task = await _task_with_investor(unit_env)
        comment = await comment_service.create_comment(task.id, investor, "First")

        # Act
        await comment_service.delete_comment(comment.id, owner)

        # Assert
        assert await comment_service.get_comments(task.id, owner) == []

    @pytest.mark.asyncio
    async def test_investor_cannot_delete_owners_comment(self, unit_env):
        """Non-authors without ownership cannot delete."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        owner, investor, task = await _task_with_investor(unit_env)
        comment = await comment_service.create_comment(task.id, owner, "Mine")

        # Act & Assert
        with pytest.raises(ForbiddenError):
            await comment_service.delete_comment(comment.id, investor)

    @pytest.mark.asyncio
    async def test_delete_missing_comment(self, unit_env):
        """Deleting twice reports not found."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        owner, _, task = await _task_with_investor(unit_env)
        comment = await comment_service.create_comment(task.id, owner, "Mine")
        await comment_service.delete_comment(comment.id, owner)

        # Act & Assert
        with pytest.raises(NotFoundError) as exc:
            await comment_service.delete_comment(comment.id, owner)
        assert exc.value.code == "COMMENT_NOT_FOUND"
