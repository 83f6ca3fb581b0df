"""Invitation domain service.

Owns the invitation state machine::

    pending -> accepted | expired | cancelled   (all terminal)

Liveness (``status == pending and expires_at > now``) is evaluated against
the clock on every resolve/accept; the background sweep only keeps stored
statuses tidy for listings.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from uuid import uuid4

import logfire
from pydantic import ValidationError as PydanticValidationError

from cluster.domain.error import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    StateInvalidError,
    ValidationError,
)
from cluster.domain.model import Invitation, Project, User
from cluster.domain.repository import (
    InvitationRepository,
    ProjectRepository,
    UserRepository,
)
from cluster.domain.value import (
    EmailAddress,
    InvitationId,
    InvitationStatus,
    InvitationToken,
    ProjectId,
    utc_now,
)

from .access_service import AccessService
from .base import Service
from .notification_service import InvitationNotifier


@dataclass
class ResolvedInvitation:
    """A live invitation together with what the acceptance page shows."""

    invitation: Invitation
    project: Project
    inviter: User | None


@dataclass
class AcceptanceResult:
    """Outcome of accepting an invitation."""

    invitation: Invitation
    project: Project
    already_investor: bool


class InvitationService(Service):
    """Domain service for issuing, resolving and accepting invitations."""

    def __init__(
        self,
        invitation_repository: InvitationRepository,
        project_repository: ProjectRepository,
        user_repository: UserRepository,
        access_service: AccessService,
        notifier: InvitationNotifier,
        accept_url: str,
        expiry_days: int = 7,
        message_max_length: int = 500,
    ) -> None:
        """Initialize invitation service.

        Args:
            invitation_repository: Invitation repository
            project_repository: Project repository
            user_repository: User repository
            access_service: Project access policy
            notifier: Outbound invitation delivery
            accept_url: Frontend acceptance page; the token is appended as
                ``?token=``
            expiry_days: Lifetime of a new invitation
            message_max_length: Upper bound for the personal message
        """
        self.invitation_repository = invitation_repository
        self.project_repository = project_repository
        self.user_repository = user_repository
        self.access_service = access_service
        self.notifier = notifier
        self.accept_url = accept_url
        self.expiry_days = expiry_days
        self.message_max_length = message_max_length

    def build_link(self, token: InvitationToken) -> str:
        """Acceptance link sent to the invitee."""
        return f"{self.accept_url}?token={token.root}"

    async def issue(
        self,
        project_id: ProjectId,
        inviter: User,
        invitee_email: str,
        message: str | None = None,
        now: datetime | None = None,
    ) -> Invitation:
        """Issue an invitation and attempt delivery.

        Args:
            project_id: Project the invitee is asked to join
            inviter: Acting user (must own the project or be super-admin)
            invitee_email: Raw invitee address
            message: Optional personal note
            now: Reference time (defaults to the clock)

        Returns:
            The created invitation, including the plaintext token. Delivery
            failures are reflected in ``email_send_failed``.

        Raises:
            NotFoundError: If the project does not exist
            ForbiddenError: If the inviter does not own the project
            ValidationError: If the email or message is invalid, or the
                invitee is the owner
            ConflictError: If the invitee is already an investor or a live
                pending invitation exists
        """
        now = now or utc_now()
        with logfire.span(
            "invitation_service.issue",
            project_id=str(project_id),
            inviter_id=str(inviter.id),
        ):
            project = await self._get_project(project_id)
            self.access_service.verify_owner(inviter, project)

            email = self.parse_email(invitee_email)
            note = self._clean_message(message)

            existing_user = await self.user_repository.find_by_email(email)
            if existing_user and project.is_owner(existing_user.id):
                raise ValidationError(
                    "The project owner cannot be invited", code="CANNOT_INVITE_OWNER"
                )
            if existing_user and project.is_investor(existing_user.id):
                raise ConflictError(
                    "User is already an investor on this project",
                    code="USER_ALREADY_INVESTOR",
                )

            pending = await self.invitation_repository.find_live_pending(
                project.id, email, now
            )
            if pending:
                logfire.warn(
                    "Pending invitation already exists",
                    project_id=str(project.id),
                    invitation_id=str(pending.id),
                )
                raise ConflictError(
                    "A pending invitation already exists for this email",
                    code="PENDING_INVITATION_EXISTS",
                )

            invitation = Invitation(
                id=InvitationId(uuid4()),
                token=InvitationToken.generate(),
                project_id=project.id,
                inviter_id=inviter.id,
                invitee_email=email,
                status=InvitationStatus.PENDING,
                expires_at=now + timedelta(days=self.expiry_days),
                message=note,
                created_at=now,
                updated_at=now,
            )
            saved = await self.invitation_repository.save(invitation)
            logfire.info(
                "Invitation created",
                invitation_id=str(saved.id),
                project_id=str(project.id),
                expires_at=saved.expires_at.isoformat(),
            )

            return await self._deliver(saved, project, inviter)

    async def _deliver(
        self, invitation: Invitation, project: Project, inviter: User
    ) -> Invitation:
        try:
            await self.notifier.send_invitation_email(
                to_email=invitation.invitee_email.root,
                project_name=project.name,
                inviter_name=inviter.name,
                link=self.build_link(invitation.token),
                message=invitation.message,
            )
        except Exception as e:
            failed_at = utc_now()
            logfire.error(
                "Failed to send invitation email",
                invitation_id=str(invitation.id),
                error=str(e),
                error_type=type(e).__name__,
            )
            try:
                await self.invitation_repository.record_delivery_failure(
                    invitation.id, str(e), failed_at
                )
            except Exception as mark_error:
                logfire.error(
                    "Failed to record invitation delivery failure",
                    invitation_id=str(invitation.id),
                    error=str(mark_error),
                )
            return invitation.model_copy(
                update={
                    "email_send_failed": True,
                    "last_email_error": str(e),
                    "last_email_error_at": failed_at,
                }
            )

        logfire.info("Invitation email sent", invitation_id=str(invitation.id))
        return invitation

    async def resolve(
        self, token: str, now: datetime | None = None
    ) -> ResolvedInvitation:
        """Look up a live invitation for the acceptance page.

        Args:
            token: Plaintext token from the link
            now: Reference time (defaults to the clock)

        Returns:
            The invitation with its project and inviter

        Raises:
            NotFoundError: If no invitation owns the token
            ConflictError: If already accepted
            StateInvalidError: If cancelled, expired or otherwise not live
        """
        now = now or utc_now()
        with logfire.span("invitation_service.resolve", token=token[:8] + "..."):
            invitation = await self._find_by_token(token)
            self._ensure_live(invitation, now)

            project = await self._get_project(invitation.project_id)
            inviter = await self.user_repository.find_by_id(invitation.inviter_id)

            logfire.info(
                "Invitation resolved",
                invitation_id=str(invitation.id),
                project_id=str(project.id),
            )
            return ResolvedInvitation(
                invitation=invitation, project=project, inviter=inviter
            )

    async def accept(
        self, token: str, user: User, now: datetime | None = None
    ) -> AcceptanceResult:
        """Accept an invitation on behalf of ``user``.

        The status transition is a conditional update on ``pending``; the
        investor insert runs in the same transaction (request session), so
        both land or neither does.

        Args:
            token: Plaintext token from the link
            user: Authenticated accepting user
            now: Reference time (defaults to the clock)

        Returns:
            Accepted invitation, the refreshed project and whether the user
            was already an investor

        Raises:
            NotFoundError: If the token or project is unknown
            ValidationError: If the user has no verified email, or owns the
                project
            ForbiddenError: If the user's email does not match the invitee
            ConflictError: If the invitation was accepted by someone else
            StateInvalidError: If the invitation is cancelled or expired
        """
        now = now or utc_now()
        with logfire.span(
            "invitation_service.accept",
            token=token[:8] + "...",
            user_id=str(user.id),
        ):
            if user.email is None:
                raise ValidationError(
                    "No verified email on the accepting account",
                    code="USER_EMAIL_NOT_FOUND",
                )

            invitation = await self._find_by_token(token)

            if self._is_own_acceptance(invitation, user):
                return await self._replayed(invitation, user)

            self._ensure_live(invitation, now)

            if not invitation.invitee_email.matches(user.email.root):
                logfire.warn(
                    "Invitation email mismatch",
                    invitation_id=str(invitation.id),
                    user_id=str(user.id),
                )
                raise ForbiddenError(
                    "This invitation was sent to a different email address",
                    code="INVITATION_EMAIL_MISMATCH",
                )

            project = await self._get_project(invitation.project_id)
            if project.is_owner(user.id):
                raise ValidationError(
                    "The project owner cannot join as an investor",
                    code="CANNOT_INVITE_OWNER",
                )
            already_investor = project.is_investor(user.id)

            transitioned = await self.invitation_repository.mark_accepted(
                invitation.id, user.id, now
            )
            if not transitioned:
                # Lost a race: report whatever state the winner left behind
                current = await self.invitation_repository.find_by_id(invitation.id)
                if current and self._is_own_acceptance(current, user):
                    return await self._replayed(current, user)
                self._ensure_live(current or invitation, now)
                raise ConflictError(
                    "Invitation has already been accepted",
                    code="INVITATION_ALREADY_ACCEPTED",
                )

            if not already_investor:
                await self.project_repository.add_investor(project.id, user.id)

            accepted = await self.invitation_repository.find_by_id(invitation.id)
            refreshed = await self._get_project(project.id)
            logfire.info(
                "Invitation accepted",
                invitation_id=str(invitation.id),
                project_id=str(project.id),
                user_id=str(user.id),
                already_investor=already_investor,
            )
            return AcceptanceResult(
                invitation=accepted or invitation,
                project=refreshed,
                already_investor=already_investor,
            )

    async def list_for_project(
        self, project_id: ProjectId, actor: User
    ) -> list[Invitation]:
        """List a project's invitations for its owner.

        Raises:
            NotFoundError: If the project does not exist
            ForbiddenError: If the actor does not own the project
        """
        with logfire.span(
            "invitation_service.list_for_project",
            project_id=str(project_id),
            actor_id=str(actor.id),
        ):
            project = await self._get_project(project_id)
            self.access_service.verify_owner(actor, project)
            invitations = await self.invitation_repository.find_by_project(project.id)
            logfire.info(
                "Invitations listed",
                project_id=str(project.id),
                count=len(invitations),
            )
            return invitations

    async def cancel(
        self, invitation_id: InvitationId, actor: User, now: datetime | None = None
    ) -> Invitation:
        """Cancel a pending invitation.

        Raises:
            NotFoundError: If the invitation or its project is unknown
            ForbiddenError: If the actor does not own the project
            StateInvalidError: If the invitation is no longer pending
        """
        now = now or utc_now()
        with logfire.span(
            "invitation_service.cancel",
            invitation_id=str(invitation_id),
            actor_id=str(actor.id),
        ):
            invitation = await self.invitation_repository.find_by_id(invitation_id)
            if not invitation:
                raise NotFoundError(
                    "Invitation", str(invitation_id), code="INVITATION_NOT_FOUND"
                )

            project = await self._get_project(invitation.project_id)
            self.access_service.verify_owner(actor, project)

            if invitation.status != InvitationStatus.PENDING or not (
                await self.invitation_repository.mark_cancelled(invitation.id, now)
            ):
                current = (
                    await self.invitation_repository.find_by_id(invitation.id)
                    or invitation
                )
                logfire.warn(
                    "Cannot cancel invitation",
                    invitation_id=str(invitation.id),
                    status=current.status.value,
                )
                raise StateInvalidError(
                    f"Only pending invitations can be cancelled (status: {current.status.value})",
                    code="INVITATION_NOT_PENDING",
                )

            cancelled = await self.invitation_repository.find_by_id(invitation.id)
            logfire.info("Invitation cancelled", invitation_id=str(invitation.id))
            return cancelled or invitation.model_copy(
                update={"status": InvitationStatus.CANCELLED, "updated_at": now}
            )

    async def sweep_expired(self, now: datetime | None = None) -> int:
        """Transition every overdue pending invitation to ``expired``.

        Returns:
            Number of invitations expired
        """
        now = now or utc_now()
        with logfire.span("invitation_service.sweep_expired", now=now.isoformat()):
            count = await self.invitation_repository.expire_overdue(now)
            logfire.info("Expired invitations swept", count=count)
            return count

    @staticmethod
    def parse_email(raw: str) -> EmailAddress:
        """Normalize and validate an email address.

        Raises:
            ValidationError: If the address is malformed
        """
        try:
            return EmailAddress(raw)
        except PydanticValidationError:
            raise ValidationError("Invalid email format", code="INVALID_EMAIL_FORMAT")

    def _clean_message(self, message: str | None) -> str | None:
        if message is None:
            return None
        note = message.strip()
        if not note:
            return None
        if len(note) > self.message_max_length:
            raise ValidationError(
                f"Message must be at most {self.message_max_length} characters",
                code="MESSAGE_TOO_LONG",
            )
        return note

    async def _find_by_token(self, token: str) -> Invitation:
        try:
            parsed = InvitationToken(token)
        except PydanticValidationError:
            parsed = None
        invitation = (
            await self.invitation_repository.find_by_token(parsed) if parsed else None
        )
        if not invitation:
            logfire.warn("Invitation not found", token=token[:8] + "...")
            raise NotFoundError(
                "Invitation", token[:8] + "...", code="INVITATION_NOT_FOUND"
            )
        return invitation

    async def _get_project(self, project_id: ProjectId) -> Project:
        project = await self.project_repository.find_by_id(project_id)
        if not project:
            raise NotFoundError("Project", str(project_id), code="PROJECT_NOT_FOUND")
        return project

    async def _replayed(
        self, invitation: Invitation, user: User
    ) -> AcceptanceResult:
        project = await self._get_project(invitation.project_id)
        if not project.is_investor(user.id):
            logfire.warn(
                "Accepted invitation replayed after investor removal",
                invitation_id=str(invitation.id),
                user_id=str(user.id),
            )
            raise ConflictError(
                "Invitation has already been accepted",
                code="INVITATION_ALREADY_ACCEPTED",
            )
        logfire.info(
            "Invitation already accepted by this user",
            invitation_id=str(invitation.id),
        )
        return AcceptanceResult(
            invitation=invitation, project=project, already_investor=True
        )

    @staticmethod
    def _is_own_acceptance(invitation: Invitation, user: User) -> bool:
        return (
            invitation.status == InvitationStatus.ACCEPTED
            and invitation.accepted_by_user_id == user.id
        )

    @staticmethod
    def _ensure_live(invitation: Invitation, now: datetime) -> None:
        """Raise the error matching why an invitation is not live."""
        if invitation.is_live(now):
            return
        if invitation.status == InvitationStatus.ACCEPTED:
            raise ConflictError(
                "Invitation has already been accepted",
                code="INVITATION_ALREADY_ACCEPTED",
            )
        if invitation.status == InvitationStatus.CANCELLED:
            raise StateInvalidError(
                "Invitation has been cancelled", code="INVITATION_CANCELLED"
            )
        if invitation.status == InvitationStatus.EXPIRED or invitation.is_overdue(now):
            raise StateInvalidError(
                "Invitation has expired", code="INVITATION_EXPIRED"
            )
        raise StateInvalidError("Invitation is not valid", code="INVITATION_INVALID")
