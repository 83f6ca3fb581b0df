"""Unit tests for the SMTP invitation notifier."""

import smtplib

import pytest

from cluster.adapter.email import SmtpInvitationNotifier, render_invitation
from cluster.adapter.error import DeliveryError
from cluster.config import EmailSettings

LINK = "http://localhost:3000/invite/accept?token=" + "a" * 64


class FakeSMTP:
    """Records the SMTP exchange instead of talking to a server."""

    instances: list["FakeSMTP"] = []

    def __init__(self, host, port, timeout=None):
        self.host = host
        self.port = port
        self.calls: list[tuple] = []
        FakeSMTP.instances.append(self)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def starttls(self, context=None):
        self.calls.append(("starttls",))

    def login(self, username, password):
        self.calls.append(("login", username))

    def sendmail(self, from_addr, to_addrs, msg):
        self.calls.append(("sendmail", from_addr, to_addrs, msg))


class RefusingSMTP(FakeSMTP):
    def __init__(self, host, port, timeout=None):
        raise ConnectionRefusedError("connection refused")


class TestRenderInvitation:
    """Tests for render_invitation."""

    def test_render_includes_link_and_message(self):
        """Both bodies carry the link; the message is quoted."""
        # Act
        rendered = render_invitation("Wind Park", "Olga", LINK, "Welcome aboard", 7)

        # Assert
        assert rendered.subject == 'Invitation to collaborate on "Wind Park"'
        assert LINK in rendered.text
        assert "Welcome aboard" in rendered.text
        assert "expires in 7 days" in rendered.text
        assert "Olga" in rendered.html

    def test_render_escapes_html(self):
        """User-supplied values cannot inject markup."""
        # Act
        rendered = render_invitation("<b>Park</b>", "<script>", LINK, "<i>hi</i>")

        # Assert
        assert "<script>" not in rendered.html
        assert "&lt;b&gt;Park&lt;/b&gt;" in rendered.html
        assert "&lt;i&gt;hi&lt;/i&gt;" in rendered.html

    def test_render_without_inviter_name(self):
        """A generic inviter label is used when the name is unknown."""
        rendered = render_invitation("Wind Park", None, LINK)
        assert rendered.text.startswith("A project owner has invited you")


class TestSmtpInvitationNotifier:
    """Tests for SmtpInvitationNotifier."""

    @pytest.mark.asyncio
    async def test_disabled_does_not_connect(self, monkeypatch):
        """With sending disabled nothing touches the network."""
        # Arrange
        monkeypatch.setattr(smtplib, "SMTP", RefusingSMTP)
        notifier = SmtpInvitationNotifier(EmailSettings(enabled=False))

        # Act & Assert (no exception)
        await notifier.send_invitation_email("a@example.com", "Wind Park", "Olga", LINK)

    @pytest.mark.asyncio
    async def test_sends_over_starttls_with_login(self, monkeypatch):
        """Enabled delivery uses STARTTLS and logs in when credentials exist."""
        # Arrange
        FakeSMTP.instances = []
        monkeypatch.setattr(smtplib, "SMTP", FakeSMTP)
        settings = EmailSettings(
            enabled=True,
            host="smtp.test",
            port=587,
            username="mailer",
            password="secret",
            from_address="noreply@cluster.test",
        )
        notifier = SmtpInvitationNotifier(settings)

        # Act
        await notifier.send_invitation_email(
            "a@example.com", "Wind Park", "Olga", LINK, "Hello"
        )

        # Assert
        [server] = FakeSMTP.instances
        assert (server.host, server.port) == ("smtp.test", 587)
        assert [c[0] for c in server.calls] == ["starttls", "login", "sendmail"]
        _, from_addr, to_addrs, raw = server.calls[-1]
        assert from_addr == "noreply@cluster.test"
        assert to_addrs == ["a@example.com"]
        assert "Wind Park" in raw

    @pytest.mark.asyncio
    async def test_connection_failure_raises_delivery_error(self, monkeypatch):
        """Transport errors surface as DeliveryError."""
        # Arrange
        monkeypatch.setattr(smtplib, "SMTP", RefusingSMTP)
        notifier = SmtpInvitationNotifier(EmailSettings(enabled=True))

        # Act & Assert
        with pytest.raises(DeliveryError) as exc:
            await notifier.send_invitation_email(
                "a@example.com", "Wind Park", "Olga", LINK
            )
        assert exc.value.code == "EMAIL_DELIVERY_FAILED"
