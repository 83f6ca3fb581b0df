"""Unit tests for InvitationService."""

import re
from uuid import uuid4

import pytest

from cluster.adapter.email import MockInvitationNotifier
from cluster.adapter.error import DeliveryError
from cluster.domain.error import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    StateInvalidError,
    ValidationError,
)
from cluster.domain.model import Invitation
from cluster.domain.repository import (
    InvitationRepository,
    ProjectRepository,
    UserRepository,
)
from cluster.domain.service import InvitationService, ProjectService
from cluster.domain.value import (
    EmailAddress,
    InvitationId,
    InvitationStatus,
    InvitationToken,
    UserRole,
)
from tests.conftest import NOW, days, make_project, make_user
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no docker needed
unit_env = create_env_fixture()


async def _seed(unit_env, invitee_email: str | None = "alice@example.com"):
    """Owner, project and (optionally) an invitee account."""
    user_repo = await unit_env.get(UserRepository)
    project_repo = await unit_env.get(ProjectRepository)

    owner = await user_repo.save(make_user("owner@example.com", display_name="Olga"))
    project = await project_repo.save(make_project(owner))
    invitee = None
    if invitee_email:
        invitee = await user_repo.save(
            make_user(invitee_email, role=UserRole.INVESTOR)
        )
    return owner, project, invitee


class TestIssue:
    """Tests for issuing invitations."""

    @pytest.mark.asyncio
    async def test_issue_creates_pending_invitation_and_sends_email(self, unit_env):
        """Issuing should store a pending invitation and email the link."""
        # Arrange
        service = await unit_env.get(InvitationService)
        notifier = await unit_env.get(MockInvitationNotifier)
        owner, project, _ = await _seed(unit_env)

        # Act
        invitation = await service.issue(
            project.id, owner, "  Alice@Example.COM ", "Join us", now=NOW
        )

        # Assert
        assert invitation.status == InvitationStatus.PENDING
        assert invitation.invitee_email.root == "alice@example.com"
        assert invitation.expires_at == NOW + days(7)
        assert re.fullmatch(r"[0-9a-f]{64}", invitation.token.root)
        assert invitation.email_send_failed is False

        assert len(notifier.sent) == 1
        sent = notifier.sent[0]
        assert sent.to_email == "alice@example.com"
        assert sent.project_name == project.name
        assert sent.inviter_name == "Olga"
        assert sent.message == "Join us"
        assert sent.link.endswith(f"/invite/accept?token={invitation.token.root}")

    @pytest.mark.asyncio
    async def test_issue_by_non_owner_is_forbidden(self, unit_env):
        """Only the owner may invite."""
        # Arrange
        service = await unit_env.get(InvitationService)
        _, project, invitee = await _seed(unit_env)

        # Act & Assert
        with pytest.raises(ForbiddenError) as exc:
            await service.issue(project.id, invitee, "bob@example.com", now=NOW)
        assert exc.value.code == "FORBIDDEN_NOT_PROJECT_OWNER"

    @pytest.mark.asyncio
    async def test_super_admin_can_issue(self, unit_env):
        """Super-admins bypass the owner check."""
        # Arrange
        service = await unit_env.get(InvitationService)
        user_repo = await unit_env.get(UserRepository)
        _, project, _ = await _seed(unit_env)
        admin = await user_repo.save(
            make_user("root@example.com", role=UserRole.SUPER_ADMIN)
        )

        # Act
        invitation = await service.issue(project.id, admin, "bob@example.com", now=NOW)

        # Assert
        assert invitation.inviter_id == admin.id

    @pytest.mark.asyncio
    async def test_issue_unknown_project_not_found(self, unit_env):
        """Unknown project should raise PROJECT_NOT_FOUND."""
        # Arrange
        service = await unit_env.get(InvitationService)
        owner, _, _ = await _seed(unit_env)

        # Act & Assert
        with pytest.raises(NotFoundError) as exc:
            await service.issue(make_project(owner).id, owner, "a@b.co", now=NOW)
        assert exc.value.code == "PROJECT_NOT_FOUND"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("email", ["not-an-email", "a@b", "a b@c.com", ""])
    async def test_issue_rejects_malformed_email(self, unit_env, email):
        """Malformed addresses should fail validation."""
        # Arrange
        service = await unit_env.get(InvitationService)
        owner, project, _ = await _seed(unit_env)

        # Act & Assert
        with pytest.raises(ValidationError) as exc:
            await service.issue(project.id, owner, email, now=NOW)
        assert exc.value.code == "INVALID_EMAIL_FORMAT"

    @pytest.mark.asyncio
    async def test_issue_rejects_long_message(self, unit_env):
        """Messages over 500 characters should be rejected."""
        # Arrange
        service = await unit_env.get(InvitationService)
        owner, project, _ = await _seed(unit_env)

        # Act & Assert
        with pytest.raises(ValidationError) as exc:
            await service.issue(
                project.id, owner, "bob@example.com", "x" * 501, now=NOW
            )
        assert exc.value.code == "MESSAGE_TOO_LONG"

    @pytest.mark.asyncio
    async def test_issue_to_owner_email_rejected(self, unit_env):
        """The owner cannot invite themselves."""
        # Arrange
        service = await unit_env.get(InvitationService)
        owner, project, _ = await _seed(unit_env)

        # Act & Assert
        with pytest.raises(ValidationError) as exc:
            await service.issue(project.id, owner, "OWNER@example.com", now=NOW)
        assert exc.value.code == "CANNOT_INVITE_OWNER"

    @pytest.mark.asyncio
    async def test_issue_to_existing_investor_conflicts(self, unit_env):
        """Existing investors cannot be invited again."""
        # Arrange
        service = await unit_env.get(InvitationService)
        project_repo = await unit_env.get(ProjectRepository)
        owner, project, invitee = await _seed(unit_env)
        await project_repo.add_investor(project.id, invitee.id)

        # Act & Assert
        with pytest.raises(ConflictError) as exc:
            await service.issue(project.id, owner, "alice@example.com", now=NOW)
        assert exc.value.code == "USER_ALREADY_INVESTOR"

    @pytest.mark.asyncio
    async def test_duplicate_pending_invitation_conflicts(self, unit_env):
        """A second live invitation for the same email should be refused."""
        # Arrange
        service = await unit_env.get(InvitationService)
        owner, project, _ = await _seed(unit_env)
        await service.issue(project.id, owner, "alice@example.com", now=NOW)

        # Act & Assert
        with pytest.raises(ConflictError) as exc:
            await service.issue(
                project.id, owner, "ALICE@example.com", now=NOW + days(1)
            )
        assert exc.value.code == "PENDING_INVITATION_EXISTS"

    @pytest.mark.asyncio
    async def test_reissue_after_expiry_expires_previous(self, unit_env):
        """Once the first invitation is overdue a new one can be issued."""
        # Arrange
        service = await unit_env.get(InvitationService)
        invitation_repo = await unit_env.get(InvitationRepository)
        owner, project, _ = await _seed(unit_env)
        first = await service.issue(project.id, owner, "alice@example.com", now=NOW)

        # Act
        second = await service.issue(
            project.id, owner, "alice@example.com", now=NOW + days(8)
        )

        # Assert
        assert second.id != first.id
        assert second.token != first.token
        stored_first = await invitation_repo.find_by_id(first.id)
        assert stored_first.status == InvitationStatus.EXPIRED

    @pytest.mark.asyncio
    async def test_reissue_after_cancel(self, unit_env):
        """Cancelling frees the slot for a fresh invitation."""
        # Arrange
        service = await unit_env.get(InvitationService)
        owner, project, invitee = await _seed(unit_env)
        first = await service.issue(project.id, owner, "alice@example.com", now=NOW)
        await service.cancel(first.id, owner, now=NOW)

        # Act
        second = await service.issue(project.id, owner, "alice@example.com", now=NOW)

        # Assert
        assert second.status == InvitationStatus.PENDING
        assert second.token != first.token
        result = await service.accept(second.token.root, invitee, now=NOW)
        assert result.project.is_investor(invitee.id)

    @pytest.mark.asyncio
    async def test_reissue_after_accepted_investor_removed(self, unit_env):
        """A removed investor can be invited again and rejoin."""
        # Arrange
        service = await unit_env.get(InvitationService)
        project_service = await unit_env.get(ProjectService)
        owner, project, invitee = await _seed(unit_env)
        first = await service.issue(project.id, owner, "alice@example.com", now=NOW)
        await service.accept(first.token.root, invitee, now=NOW)
        await project_service.remove_investor(project.id, invitee.id, owner)

        # Act
        second = await service.issue(
            project.id, owner, "alice@example.com", now=NOW + days(1)
        )
        result = await service.accept(second.token.root, invitee, now=NOW + days(1))

        # Assert
        assert second.id != first.id
        assert result.already_investor is False
        assert result.project.investor_ids == (invitee.id,)

    @pytest.mark.asyncio
    async def test_delivery_failure_keeps_invitation(self, unit_env):
        """A failing email should be recorded, not raised."""
        # Arrange
        service = await unit_env.get(InvitationService)
        notifier = await unit_env.get(MockInvitationNotifier)
        invitation_repo = await unit_env.get(InvitationRepository)
        owner, project, _ = await _seed(unit_env)
        notifier.fail_with = DeliveryError("SMTP timeout")

        # Act
        invitation = await service.issue(
            project.id, owner, "alice@example.com", now=NOW
        )

        # Assert
        assert invitation.email_send_failed is True
        assert invitation.last_email_error == "SMTP timeout"
        stored = await invitation_repo.find_by_id(invitation.id)
        assert stored.status == InvitationStatus.PENDING
        assert stored.email_send_failed is True


class TestResolve:
    """Tests for resolving a token for the acceptance page."""

    @pytest.mark.asyncio
    async def test_resolve_live_invitation(self, unit_env):
        """A live token resolves to invitation, project and inviter."""
        # Arrange
        service = await unit_env.get(InvitationService)
        owner, project, _ = await _seed(unit_env)
        invitation = await service.issue(project.id, owner, "alice@example.com", now=NOW)

        # Act
        resolved = await service.resolve(invitation.token.root, now=NOW + days(1))

        # Assert
        assert resolved.invitation.id == invitation.id
        assert resolved.project.id == project.id
        assert resolved.inviter.id == owner.id

    @pytest.mark.asyncio
    @pytest.mark.parametrize("token", ["0" * 64, "not-a-token", ""])
    async def test_resolve_unknown_token_not_found(self, unit_env, token):
        """Unknown and malformed tokens are both reported as not found."""
        # Arrange
        service = await unit_env.get(InvitationService)

        # Act & Assert
        with pytest.raises(NotFoundError) as exc:
            await service.resolve(token, now=NOW)
        assert exc.value.code == "INVITATION_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_resolve_overdue_invitation_is_expired(self, unit_env):
        """Expiry is checked against the clock even before the sweep runs."""
        # Arrange
        service = await unit_env.get(InvitationService)
        owner, project, _ = await _seed(unit_env)
        invitation = await service.issue(project.id, owner, "alice@example.com", now=NOW)

        # Act & Assert
        with pytest.raises(StateInvalidError) as exc:
            await service.resolve(invitation.token.root, now=NOW + days(7))
        assert exc.value.code == "INVITATION_EXPIRED"

    @pytest.mark.asyncio
    async def test_resolve_cancelled_invitation(self, unit_env):
        """Cancelled invitations cannot be resolved."""
        # Arrange
        service = await unit_env.get(InvitationService)
        owner, project, _ = await _seed(unit_env)
        invitation = await service.issue(project.id, owner, "alice@example.com", now=NOW)
        await service.cancel(invitation.id, owner, now=NOW)

        # Act & Assert
        with pytest.raises(StateInvalidError) as exc:
            await service.resolve(invitation.token.root, now=NOW)
        assert exc.value.code == "INVITATION_CANCELLED"


class TestAccept:
    """Tests for accepting invitations."""

    @pytest.mark.asyncio
    async def test_accept_adds_investor(self, unit_env):
        """Accepting should add the user as investor and close the invitation."""
        # Arrange
        service = await unit_env.get(InvitationService)
        owner, project, invitee = await _seed(unit_env)
        invitation = await service.issue(project.id, owner, "alice@example.com", now=NOW)

        # Act
        result = await service.accept(invitation.token.root, invitee, now=NOW + days(1))

        # Assert
        assert result.already_investor is False
        assert result.project.is_investor(invitee.id)
        assert result.invitation.status == InvitationStatus.ACCEPTED
        assert result.invitation.accepted_by_user_id == invitee.id
        assert result.invitation.accepted_at == NOW + days(1)

    @pytest.mark.asyncio
    async def test_accept_matches_email_case_insensitively(self, unit_env):
        """Invitee email comparison ignores case."""
        # Arrange
        service = await unit_env.get(InvitationService)
        user_repo = await unit_env.get(UserRepository)
        owner, project, _ = await _seed(unit_env, invitee_email=None)
        invitation = await service.issue(project.id, owner, "Carol@Example.com", now=NOW)
        carol = await user_repo.save(make_user("CAROL@example.COM"))

        # Act
        result = await service.accept(invitation.token.root, carol, now=NOW)

        # Assert
        assert result.project.is_investor(carol.id)

    @pytest.mark.asyncio
    async def test_accept_with_other_email_forbidden(self, unit_env):
        """Only the addressed invitee may accept."""
        # Arrange
        service = await unit_env.get(InvitationService)
        user_repo = await unit_env.get(UserRepository)
        owner, project, _ = await _seed(unit_env)
        invitation = await service.issue(project.id, owner, "alice@example.com", now=NOW)
        mallory = await user_repo.save(make_user("mallory@example.com"))

        # Act & Assert
        with pytest.raises(ForbiddenError) as exc:
            await service.accept(invitation.token.root, mallory, now=NOW)
        assert exc.value.code == "INVITATION_EMAIL_MISMATCH"

    @pytest.mark.asyncio
    async def test_accept_without_email_rejected(self, unit_env):
        """Accounts without an email cannot prove they are the invitee."""
        # Arrange
        service = await unit_env.get(InvitationService)
        owner, project, _ = await _seed(unit_env)
        invitation = await service.issue(project.id, owner, "alice@example.com", now=NOW)

        # Act & Assert
        with pytest.raises(ValidationError) as exc:
            await service.accept(invitation.token.root, make_user(email=None), now=NOW)
        assert exc.value.code == "USER_EMAIL_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_accept_twice_by_same_user_is_idempotent(self, unit_env):
        """A replay by the same user returns the project again."""
        # Arrange
        service = await unit_env.get(InvitationService)
        project_repo = await unit_env.get(ProjectRepository)
        owner, project, invitee = await _seed(unit_env)
        invitation = await service.issue(project.id, owner, "alice@example.com", now=NOW)
        await service.accept(invitation.token.root, invitee, now=NOW)

        # Act
        again = await service.accept(invitation.token.root, invitee, now=NOW + days(30))

        # Assert
        assert again.already_investor is True
        stored = await project_repo.find_by_id(project.id)
        assert stored.investor_ids == (invitee.id,)

    @pytest.mark.asyncio
    async def test_replay_after_investor_removed_conflicts(self, unit_env):
        """A used token does not restore revoked membership."""
        # Arrange
        service = await unit_env.get(InvitationService)
        project_service = await unit_env.get(ProjectService)
        project_repo = await unit_env.get(ProjectRepository)
        owner, project, invitee = await _seed(unit_env)
        invitation = await service.issue(project.id, owner, "alice@example.com", now=NOW)
        await service.accept(invitation.token.root, invitee, now=NOW)
        await project_service.remove_investor(project.id, invitee.id, owner)

        # Act & Assert
        with pytest.raises(ConflictError) as exc:
            await service.accept(invitation.token.root, invitee, now=NOW + days(1))
        assert exc.value.code == "INVITATION_ALREADY_ACCEPTED"
        stored = await project_repo.find_by_id(project.id)
        assert stored.investor_ids == ()

    @pytest.mark.asyncio
    async def test_accept_after_someone_else_accepted_conflicts(self, unit_env):
        """A consumed token cannot be used by another account."""
        # Arrange
        service = await unit_env.get(InvitationService)
        user_repo = await unit_env.get(UserRepository)
        owner, project, invitee = await _seed(unit_env)
        invitation = await service.issue(project.id, owner, "alice@example.com", now=NOW)
        await service.accept(invitation.token.root, invitee, now=NOW)
        twin = await user_repo.save(make_user("alice@example.com"))

        # Act & Assert
        with pytest.raises(ConflictError) as exc:
            await service.accept(invitation.token.root, twin, now=NOW)
        assert exc.value.code == "INVITATION_ALREADY_ACCEPTED"

    @pytest.mark.asyncio
    async def test_accept_expired_invitation_fails(self, unit_env):
        """Accepting at or after expires_at fails without membership change."""
        # Arrange
        service = await unit_env.get(InvitationService)
        project_repo = await unit_env.get(ProjectRepository)
        owner, project, invitee = await _seed(unit_env)
        invitation = await service.issue(project.id, owner, "alice@example.com", now=NOW)

        # Act & Assert
        with pytest.raises(StateInvalidError) as exc:
            await service.accept(invitation.token.root, invitee, now=NOW + days(7))
        assert exc.value.code == "INVITATION_EXPIRED"
        stored = await project_repo.find_by_id(project.id)
        assert stored.investor_ids == ()

    @pytest.mark.asyncio
    async def test_accept_by_owner_rejected(self, unit_env):
        """An invitation addressed to the owner's email cannot be accepted."""
        # Arrange
        service = await unit_env.get(InvitationService)
        invitation_repo = await unit_env.get(InvitationRepository)
        owner, project, _ = await _seed(unit_env)
        invitation = await invitation_repo.save(
            Invitation(
                id=InvitationId(uuid4()),
                token=InvitationToken.generate(),
                project_id=project.id,
                inviter_id=owner.id,
                invitee_email=EmailAddress("owner@example.com"),
                expires_at=NOW + days(7),
                created_at=NOW,
                updated_at=NOW,
            )
        )

        # Act & Assert
        with pytest.raises(ValidationError) as exc:
            await service.accept(invitation.token.root, owner, now=NOW)
        assert exc.value.code == "CANNOT_INVITE_OWNER"

    @pytest.mark.asyncio
    async def test_accept_when_already_investor_does_not_duplicate(self, unit_env):
        """Membership gained elsewhere is reported, not duplicated."""
        # Arrange
        service = await unit_env.get(InvitationService)
        project_repo = await unit_env.get(ProjectRepository)
        owner, project, invitee = await _seed(unit_env)
        invitation = await service.issue(project.id, owner, "alice@example.com", now=NOW)
        await project_repo.add_investor(project.id, invitee.id)

        # Act
        result = await service.accept(invitation.token.root, invitee, now=NOW)

        # Assert
        assert result.already_investor is True
        assert result.project.investor_ids == (invitee.id,)
        assert result.invitation.status == InvitationStatus.ACCEPTED


class TestCancel:
    """Tests for cancelling invitations."""

    @pytest.mark.asyncio
    async def test_cancel_pending_invitation(self, unit_env):
        """Owner can cancel; the token then stops working."""
        # Arrange
        service = await unit_env.get(InvitationService)
        owner, project, invitee = await _seed(unit_env)
        invitation = await service.issue(project.id, owner, "alice@example.com", now=NOW)

        # Act
        cancelled = await service.cancel(invitation.id, owner, now=NOW)

        # Assert
        assert cancelled.status == InvitationStatus.CANCELLED
        with pytest.raises(StateInvalidError) as exc:
            await service.accept(invitation.token.root, invitee, now=NOW)
        assert exc.value.code == "INVITATION_CANCELLED"

    @pytest.mark.asyncio
    async def test_cancel_accepted_invitation_rejected(self, unit_env):
        """Terminal invitations cannot be cancelled."""
        # Arrange
        service = await unit_env.get(InvitationService)
        owner, project, invitee = await _seed(unit_env)
        invitation = await service.issue(project.id, owner, "alice@example.com", now=NOW)
        await service.accept(invitation.token.root, invitee, now=NOW)

        # Act & Assert
        with pytest.raises(StateInvalidError) as exc:
            await service.cancel(invitation.id, owner, now=NOW)
        assert exc.value.code == "INVITATION_NOT_PENDING"

    @pytest.mark.asyncio
    async def test_cancel_by_non_owner_forbidden(self, unit_env):
        """Invitees cannot cancel invitations."""
        # Arrange
        service = await unit_env.get(InvitationService)
        owner, project, invitee = await _seed(unit_env)
        invitation = await service.issue(project.id, owner, "alice@example.com", now=NOW)

        # Act & Assert
        with pytest.raises(ForbiddenError):
            await service.cancel(invitation.id, invitee, now=NOW)

    @pytest.mark.asyncio
    async def test_cancel_unknown_invitation_not_found(self, unit_env):
        """Unknown invitation IDs are not found."""
        # Arrange
        service = await unit_env.get(InvitationService)
        owner, _, _ = await _seed(unit_env)

        # Act & Assert
        with pytest.raises(NotFoundError) as exc:
            await service.cancel(InvitationId(uuid4()), owner, now=NOW)
        assert exc.value.code == "INVITATION_NOT_FOUND"


class TestSweepExpired:
    """Tests for the expiry sweep."""

    @pytest.mark.asyncio
    async def test_sweep_expires_only_overdue_pending(self, unit_env):
        """Overdue pending rows expire; live and terminal rows are untouched."""
        # Arrange
        service = await unit_env.get(InvitationService)
        invitation_repo = await unit_env.get(InvitationRepository)
        owner, project, invitee = await _seed(unit_env)
        old = await service.issue(project.id, owner, "old@example.com", now=NOW)
        accepted = await service.issue(project.id, owner, "alice@example.com", now=NOW)
        await service.accept(accepted.token.root, invitee, now=NOW)
        fresh = await service.issue(
            project.id, owner, "fresh@example.com", now=NOW + days(5)
        )

        # Act
        count = await service.sweep_expired(now=NOW + days(8))

        # Assert
        assert count == 1
        assert (await invitation_repo.find_by_id(old.id)).status == InvitationStatus.EXPIRED
        assert (
            await invitation_repo.find_by_id(accepted.id)
        ).status == InvitationStatus.ACCEPTED
        assert (await invitation_repo.find_by_id(fresh.id)).status == InvitationStatus.PENDING

    @pytest.mark.asyncio
    async def test_sweep_is_idempotent(self, unit_env):
        """Running the sweep twice expires nothing the second time."""
        # Arrange
        service = await unit_env.get(InvitationService)
        owner, project, _ = await _seed(unit_env)
        await service.issue(project.id, owner, "old@example.com", now=NOW)

        # Act
        first = await service.sweep_expired(now=NOW + days(8))
        second = await service.sweep_expired(now=NOW + days(8))

        # Assert
        assert (first, second) == (1, 0)
