"""Email delivery adapters."""

from cluster.adapter.email.smtp import (
    MockInvitationNotifier,
    RenderedEmail,
    SentInvitation,
    SmtpInvitationNotifier,
    render_invitation,
)

__all__ = [
    "MockInvitationNotifier",
    "RenderedEmail",
    "SentInvitation",
    "SmtpInvitationNotifier",
    "render_invitation",
]
