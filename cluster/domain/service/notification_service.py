"""Notification port used by the invitation engine."""


class InvitationNotifier:
    """Outbound invitation delivery interface.

    Implementations live in the adapter layer and are injected; the engine
    treats any exception from ``send_invitation_email`` as a delivery
    failure to record, never as its own failure.
    """

    async def send_invitation_email(
        self,
        to_email: str,
        project_name: str,
        inviter_name: str | None,
        link: str,
        message: str | None = None,
    ) -> None:
        """Deliver an invitation email.

        Args:
            to_email: Invitee address
            project_name: Name of the project the invitee is asked to join
            inviter_name: Display name of the inviting user, if known
            link: Acceptance URL carrying the token
            message: Optional personal note from the inviter
        """
        raise NotImplementedError
