"""Email infrastructure providers."""

from dishka import Scope, provide

from cluster.adapter.email import SmtpInvitationNotifier
from cluster.config import EmailSettings, InvitationSettings
from cluster.domain.service import InvitationNotifier
from cluster.util.di.base import ProviderBase


class EmailProvider(ProviderBase):
    """Email component base."""

    __mock_component__ = "email"


class ProdEmailProvider(EmailProvider):
    """Production email provider sending over SMTP."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_invitation_notifier(
        self,
        email_settings: EmailSettings,
        invitation_settings: InvitationSettings,
    ) -> InvitationNotifier:
        """Provide SMTP invitation notifier.

        With ``EMAIL__ENABLED=false`` the notifier only logs what it would
        have sent.
        """
        return SmtpInvitationNotifier(
            settings=email_settings, expiry_days=invitation_settings.expiry_days
        )
