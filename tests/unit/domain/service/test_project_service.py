"""Unit tests for ProjectService."""

from datetime import date
from uuid import uuid4

import pytest
from pydantic import ValidationError as PydanticValidationError

from cluster.domain.error import ForbiddenError, NotFoundError, ValidationError
from cluster.domain.model import Comment
from cluster.domain.repository import (
    CommentRepository,
    InvitationRepository,
    ProjectRepository,
    StageRepository,
    TaskRepository,
    UserRepository,
)
from cluster.domain.service import (
    InvitationService,
    ProjectService,
    StageService,
    TaskService,
)
from cluster.domain.value import (
    AccessLevel,
    CommentId,
    ProjectId,
    ProjectStatus,
    UserId,
    UserRole,
)
from tests.conftest import NOW, make_user
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no docker needed
unit_env = create_env_fixture()


class TestCreateProject:
    """Tests for project creation."""

    @pytest.mark.asyncio
    async def test_create_project_defaults(self, unit_env):
        """New projects start in planning with no investors."""
        # Arrange
        service = await unit_env.get(ProjectService)
        owner = make_user("owner@example.com")

        # Act
        project = await service.create(owner, "  Wind Park  ", description="Offshore")

        # Assert
        assert project.name == "Wind Park"
        assert project.owner_id == owner.id
        assert project.status == ProjectStatus.PLANNING
        assert project.investor_ids == ()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("name", ["ab", "x" * 26, "   "])
    async def test_create_project_rejects_bad_name(self, unit_env, name):
        """Names must be 3 to 25 characters after trimming."""
        # Arrange
        service = await unit_env.get(ProjectService)

        # Act & Assert
        with pytest.raises(ValidationError) as exc:
            await service.create(make_user(), name)
        assert exc.value.code == "INVALID_PROJECT_NAME"

    @pytest.mark.asyncio
    async def test_create_project_rejects_inverted_dates(self, unit_env):
        """End date before start date is invalid."""
        # Arrange
        service = await unit_env.get(ProjectService)

        # Act & Assert
        with pytest.raises(PydanticValidationError):
            await service.create(
                make_user(),
                "Wind Park",
                start_date=date(2026, 5, 1),
                end_date=date(2026, 4, 1),
            )


class TestReadProject:
    """Tests for reading and listing projects."""

    @pytest.mark.asyncio
    async def test_get_for_user_reports_access_level(self, unit_env):
        """Owner, investor and admin get their respective levels."""
        # Arrange
        service = await unit_env.get(ProjectService)
        project_repo = await unit_env.get(ProjectRepository)
        owner = make_user("owner@example.com")
        investor = make_user("inv@example.com", role=UserRole.INVESTOR)
        admin = make_user("admin@example.com", role=UserRole.SUPER_ADMIN)
        project = await service.create(owner, "Wind Park")
        await project_repo.add_investor(project.id, investor.id)

        # Act
        _, owner_level = await service.get_for_user(project.id, owner)
        _, investor_level = await service.get_for_user(project.id, investor)
        _, admin_level = await service.get_for_user(project.id, admin)

        # Assert
        assert owner_level == AccessLevel.OWNER
        assert investor_level == AccessLevel.INVESTOR
        assert admin_level == AccessLevel.OWNER

    @pytest.mark.asyncio
    async def test_get_for_outsider_forbidden(self, unit_env):
        """Users without membership cannot read the project."""
        # Arrange
        service = await unit_env.get(ProjectService)
        project = await service.create(make_user(), "Wind Park")

        # Act & Assert
        with pytest.raises(ForbiddenError) as exc:
            await service.get_for_user(project.id, make_user("x@example.com"))
        assert exc.value.code == "FORBIDDEN_NO_PROJECT_ACCESS"

    @pytest.mark.asyncio
    async def test_get_unknown_project(self, unit_env):
        """Unknown IDs raise PROJECT_NOT_FOUND."""
        # Arrange
        service = await unit_env.get(ProjectService)

        # Act & Assert
        with pytest.raises(NotFoundError) as exc:
            await service.get_by_id(ProjectId(uuid4()))
        assert exc.value.code == "PROJECT_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_list_visible_scopes_by_role(self, unit_env):
        """Super-admins see everything, others only their projects."""
        # Arrange
        service = await unit_env.get(ProjectService)
        alice = make_user("alice@example.com")
        bob = make_user("bob@example.com")
        await service.create(alice, "Alpha")
        await service.create(bob, "Bravo")
        admin = make_user("admin@example.com", role=UserRole.SUPER_ADMIN)

        # Act
        alice_projects = await service.list_visible(alice)
        admin_projects = await service.list_visible(admin)

        # Assert
        assert [p.name for p in alice_projects] == ["Alpha"]
        assert {p.name for p in admin_projects} == {"Alpha", "Bravo"}


class TestUpdateProject:
    """Tests for editing projects."""

    @pytest.mark.asyncio
    async def test_update_only_touches_given_fields(self, unit_env):
        """Unspecified fields keep their values; explicit None clears."""
        # Arrange
        service = await unit_env.get(ProjectService)
        owner = make_user()
        project = await service.create(
            owner, "Wind Park", description="Offshore", start_date=date(2026, 1, 1)
        )

        # Act
        updated = await service.update(project.id, owner, name="Sun Park", description=None)

        # Assert
        assert updated.name == "Sun Park"
        assert updated.description is None
        assert updated.start_date == date(2026, 1, 1)
        assert updated.owner_id == owner.id

    @pytest.mark.asyncio
    async def test_update_rejects_end_before_existing_start(self, unit_env):
        """Date range is checked against stored values too."""
        # Arrange
        service = await unit_env.get(ProjectService)
        owner = make_user()
        project = await service.create(owner, "Wind Park", start_date=date(2026, 6, 1))

        # Act & Assert
        with pytest.raises(ValidationError) as exc:
            await service.update(project.id, owner, end_date=date(2026, 5, 1))
        assert exc.value.code == "INVALID_DATE_RANGE"

    @pytest.mark.asyncio
    async def test_update_by_investor_forbidden(self, unit_env):
        """Investors have read-only access."""
        # Arrange
        service = await unit_env.get(ProjectService)
        project_repo = await unit_env.get(ProjectRepository)
        project = await service.create(make_user(), "Wind Park")
        investor = make_user("inv@example.com")
        await project_repo.add_investor(project.id, investor.id)

        # Act & Assert
        with pytest.raises(ForbiddenError) as exc:
            await service.update(project.id, investor, name="Hijacked")
        assert exc.value.code == "FORBIDDEN_NOT_PROJECT_OWNER"

    @pytest.mark.asyncio
    async def test_change_status(self, unit_env):
        """Owner can move the project through its lifecycle."""
        # Arrange
        service = await unit_env.get(ProjectService)
        owner = make_user()
        project = await service.create(owner, "Wind Park")

        # Act
        updated = await service.change_status(project.id, owner, ProjectStatus.ACTIVE)

        # Assert
        assert updated.status == ProjectStatus.ACTIVE

    @pytest.mark.asyncio
    async def test_update_keeps_investors(self, unit_env):
        """Editing details never drops investors."""
        # Arrange
        service = await unit_env.get(ProjectService)
        project_repo = await unit_env.get(ProjectRepository)
        owner = make_user()
        project = await service.create(owner, "Wind Park")
        investor_id = UserId(uuid4())
        await project_repo.add_investor(project.id, investor_id)

        # Act
        updated = await service.update(project.id, owner, name="Sun Park")

        # Assert
        assert updated.investor_ids == (investor_id,)


class TestRemoveInvestor:
    """Tests for revoking investor membership."""

    @pytest.mark.asyncio
    async def test_remove_investor(self, unit_env):
        """Owner can revoke an investor."""
        # Arrange
        service = await unit_env.get(ProjectService)
        project_repo = await unit_env.get(ProjectRepository)
        owner = make_user()
        project = await service.create(owner, "Wind Park")
        investor_id = UserId(uuid4())
        await project_repo.add_investor(project.id, investor_id)

        # Act
        updated = await service.remove_investor(project.id, investor_id, owner)

        # Assert
        assert updated.investor_ids == ()

    @pytest.mark.asyncio
    async def test_remove_non_investor_not_found(self, unit_env):
        """Removing someone who is not an investor fails."""
        # Arrange
        service = await unit_env.get(ProjectService)
        owner = make_user()
        project = await service.create(owner, "Wind Park")

        # Act & Assert
        with pytest.raises(NotFoundError) as exc:
            await service.remove_investor(project.id, UserId(uuid4()), owner)
        assert exc.value.code == "INVESTOR_NOT_FOUND"


class TestDeleteProject:
    """Tests for deleting projects."""

    @pytest.mark.asyncio
    async def test_delete_cascades_to_children(self, unit_env):
        """Stages, tasks, comments and invitations go with the project."""
        # Arrange
        service = await unit_env.get(ProjectService)
        stage_service = await unit_env.get(StageService)
        task_service = await unit_env.get(TaskService)
        invitation_service = await unit_env.get(InvitationService)
        user_repo = await unit_env.get(UserRepository)
        comment_repo = await unit_env.get(CommentRepository)
        owner = await user_repo.save(make_user("owner@example.com"))
        project = await service.create(owner, "Wind Park")
        stage = await stage_service.create(project.id, owner, "Design")
        [task] = await task_service.add_tasks(stage.id, owner, "Draw turbine")
        comment = await comment_repo.save(
            Comment(
                id=CommentId(uuid4()),
                task_id=task.id,
                author_id=owner.id,
                author_name="Owner",
                text="Looks good",
            )
        )
        invitation = await invitation_service.issue(
            project.id, owner, "alice@example.com", now=NOW
        )

        # Act
        await service.delete(project.id, owner)

        # Assert
        assert await (await unit_env.get(ProjectRepository)).find_by_id(project.id) is None
        assert await (await unit_env.get(StageRepository)).find_by_id(stage.id) is None
        assert await (await unit_env.get(TaskRepository)).find_by_id(task.id) is None
        assert await comment_repo.find_by_id(comment.id) is None
        invitation_repo = await unit_env.get(InvitationRepository)
        assert await invitation_repo.find_by_id(invitation.id) is None

    @pytest.mark.asyncio
    async def test_delete_by_non_owner_forbidden(self, unit_env):
        """Only the owner may delete."""
        # Arrange
        service = await unit_env.get(ProjectService)
        project = await service.create(make_user(), "Wind Park")

        # Act & Assert
        with pytest.raises(ForbiddenError):
            await service.delete(project.id, make_user("other@example.com"))
