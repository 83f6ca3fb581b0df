"""SMTP invitation email delivery.

Messages are built with ``email.mime`` and sent through ``smtplib`` in a
worker thread, bounded by the configured timeout.
"""

import asyncio
import html
import smtplib
import ssl
from dataclasses import dataclass
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formataddr

import logfire

from cluster.adapter.error import DeliveryError
from cluster.config import EmailSettings
from cluster.domain.service.notification_service import InvitationNotifier


@dataclass
class RenderedEmail:
    """Subject and bodies of an outgoing email."""

    subject: str
    html: str
    text: str


def render_invitation(
    project_name: str,
    inviter_name: str | None,
    link: str,
    message: str | None = None,
    expiry_days: int = 7,
) -> RenderedEmail:
    """Render the invitation email.

    User-supplied values are HTML-escaped in the HTML body.
    """
    inviter = inviter_name or "A project owner"
    subject = f'Invitation to collaborate on "{project_name}"'

    text_lines = [
        f'{inviter} has invited you to join "{project_name}" as an investor.',
        "",
    ]
    if message:
        text_lines += ["Message:", message, ""]
    text_lines += [
        "Accept the invitation:",
        link,
        "",
        f"This invitation expires in {expiry_days} days.",
    ]

    note = (
        f'<blockquote style="border-left:3px solid #ccc;padding-left:12px;">'
        f"{html.escape(message)}</blockquote>"
        if message
        else ""
    )
    html_body = f"""\
<!DOCTYPE html>
<html>
  <body style="font-family: Arial, sans-serif; color: #222;">
    <h2>You're invited to "{html.escape(project_name)}"</h2>
    <p><strong>{html.escape(inviter)}</strong> has invited you to join the project as an investor.</p>
    {note}
    <p>
      <a href="{html.escape(link, quote=True)}"
         style="display:inline-block;padding:10px 18px;background:#2b6cb0;color:#fff;text-decoration:none;border-radius:4px;">
        Accept invitation
      </a>
    </p>
    <p style="font-size:12px;color:#666;">This invitation expires in {expiry_days} days.
    If you did not expect it, you can ignore this email.</p>
  </body>
</html>
"""

    return RenderedEmail(subject=subject, html=html_body, text="\n".join(text_lines))


class SmtpInvitationNotifier(InvitationNotifier):
    """Invitation notifier backed by an SMTP server."""

    def __init__(self, settings: EmailSettings, expiry_days: int = 7) -> None:
        """Initialize notifier.

        Args:
            settings: SMTP settings
            expiry_days: Invitation lifetime quoted in the email
        """
        self.settings = settings
        self.expiry_days = expiry_days

    async def send_invitation_email(
        self,
        to_email: str,
        project_name: str,
        inviter_name: str | None,
        link: str,
        message: str | None = None,
    ) -> None:
        """Send the invitation email.

        Raises:
            DeliveryError: If the SMTP exchange fails or times out
        """
        rendered = render_invitation(
            project_name, inviter_name, link, message, self.expiry_days
        )

        if not self.settings.enabled:
            logfire.info(
                "Email sending disabled, invitation not sent",
                to_email=to_email,
                subject=rendered.subject,
            )
            return

        with logfire.span("smtp.send_invitation_email", to_email=to_email):
            try:
                await asyncio.wait_for(
                    asyncio.to_thread(self._send, to_email, rendered),
                    timeout=self.settings.timeout_seconds,
                )
            except asyncio.TimeoutError:
                raise DeliveryError(
                    f"SMTP delivery timed out after {self.settings.timeout_seconds}s"
                )
            except (smtplib.SMTPException, OSError) as e:
                raise DeliveryError(f"SMTP delivery failed: {e}") from e

            logfire.info("Invitation email delivered", to_email=to_email)

    def _build_message(self, to_email: str, rendered: RenderedEmail) -> MIMEMultipart:
        message = MIMEMultipart("alternative")
        message["Subject"] = rendered.subject
        message["From"] = formataddr((self.settings.from_name, self.settings.from_address))
        message["To"] = to_email
        message.attach(MIMEText(rendered.text, "plain", "utf-8"))
        message.attach(MIMEText(rendered.html, "html", "utf-8"))
        return message

    def _send(self, to_email: str, rendered: RenderedEmail) -> None:
        """Blocking SMTP exchange, run in a worker thread."""
        message = self._build_message(to_email, rendered)
        context = ssl.create_default_context()
        timeout = self.settings.timeout_seconds

        if self.settings.use_ssl:
            server: smtplib.SMTP = smtplib.SMTP_SSL(
                self.settings.host, self.settings.port, timeout=timeout, context=context
            )
        else:
            server = smtplib.SMTP(self.settings.host, self.settings.port, timeout=timeout)

        with server:
            if self.settings.use_tls and not self.settings.use_ssl:
                server.starttls(context=context)
            if self.settings.username and self.settings.password:
                server.login(self.settings.username, self.settings.password)
            server.sendmail(self.settings.from_address, [to_email], message.as_string())


@dataclass
class SentInvitation:
    """Invitation email captured by the mock notifier."""

    to_email: str
    project_name: str
    inviter_name: str | None
    link: str
    message: str | None


class MockInvitationNotifier(InvitationNotifier):
    """Mock notifier for testing.

    Records every call; set ``fail_with`` to make delivery raise.
    """

    def __init__(self) -> None:
        self.sent: list[SentInvitation] = []
        self.fail_with: Exception | None = None

    async def send_invitation_email(
        self,
        to_email: str,
        project_name: str,
        inviter_name: str | None,
        link: str,
        message: str | None = None,
    ) -> None:
        """Record the email, or raise ``fail_with``."""
        if self.fail_with is not None:
            raise self.fail_with
        self.sent.append(
            SentInvitation(
                to_email=to_email,
                project_name=project_name,
                inviter_name=inviter_name,
                link=link,
                message=message,
            )
        )
