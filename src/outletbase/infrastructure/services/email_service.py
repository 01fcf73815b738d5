"""Email service for sending emails.

Renders the built-in templates and hands the result to the configured
provider. Delivery is best-effort: failures are logged and reported back
in an ``EmailResult`` instead of propagating to the caller.
"""

from dataclasses import dataclass
from datetime import datetime
from urllib.parse import urlencode

from outletbase.core.config import Settings, get_settings
from outletbase.core.logging import get_logger
from outletbase.infrastructure.services.email import (
    ConsoleProvider,
    EmailProvider,
    ResendProvider,
    SMTPProvider,
    SMTPSettings,
    TemplateRenderer,
    get_template_renderer,
)
from outletbase.infrastructure.services.email import templates

logger = get_logger(__name__)


@dataclass
class EmailResult:
    """Outcome of a send attempt."""

    success: bool
    error: str | None = None


class EmailService:
    """Service for sending emails."""

    def __init__(
        self,
        provider: EmailProvider,
        renderer: TemplateRenderer | None = None,
        settings: Settings | None = None,
    ) -> None:
        """Initialize the email service.

        Args:
            provider: Delivery backend.
            renderer: Template renderer, defaults to the global instance.
            settings: Application settings, used for sender and link URLs.
        """
        self.provider = provider
        self.renderer = renderer or get_template_renderer()
        self.settings = settings or get_settings()

    def invitation_url(self, token: str) -> str:
        return f"{self.settings.invitation_accept_url}?{urlencode({'token': token})}"

    async def send_invitation_email(
        self,
        to: str,
        outlet_name: str,
        inviter_name: str,
        token: str,
        expires_at: datetime,
    ) -> EmailResult:
        """Send an outlet admin invitation email.

        Args:
            to: Recipient email address.
            outlet_name: Name of the outlet the recipient is invited to.
            inviter_name: Display name of the owner who sent the invitation.
            token: Invitation token embedded in the accept link.
            expires_at: When the invitation stops being acceptable.

        Returns:
            EmailResult describing whether the provider accepted the message.
        """
        variables = {
            "app_name": self.settings.app_name,
            "email": to,
            "outlet_name": outlet_name,
            "inviter_name": inviter_name,
            "invitation_url": self.invitation_url(token),
            "expires_at": expires_at.strftime("%Y-%m-%d %H:%M UTC"),
        }

        try:
            subject = self.renderer.render(templates.INVITATION_SUBJECT, variables, html=False)
            text_body = self.renderer.render(templates.INVITATION_TEXT, variables, html=False)
            html_body = self.renderer.render(templates.INVITATION_HTML, variables)

            sent = await self.provider.send_email(
                to=to,
                subject=subject,
                html_body=html_body,
                text_body=text_body,
                from_email=self.settings.email_from,
                from_name=self.settings.email_from_name,
                reply_to=self.settings.email_reply_to,
            )
        except Exception as e:
            logger.warning(
                "Invitation email failed",
                to=to,
                provider=self.provider.name,
                error=str(e),
            )
            return EmailResult(success=False, error=str(e))

        if not sent:
            logger.warning("Invitation email was not accepted", to=to, provider=self.provider.name)
            return EmailResult(success=False, error="Provider rejected the message")

        logger.info("Invitation email sent", to=to, provider=self.provider.name)
        return EmailResult(success=True)


def build_email_provider(settings: Settings) -> EmailProvider:
    """Create the provider selected by ``email_provider``."""
    if settings.email_provider == "smtp":
        return SMTPProvider(
            SMTPSettings(
                host=settings.smtp_host,
                port=settings.smtp_port,
                username=settings.smtp_username,
                password=settings.smtp_password,
                use_tls=settings.smtp_use_tls,
                use_ssl=settings.smtp_use_ssl,
                from_email=settings.email_from,
                from_name=settings.email_from_name,
                reply_to=settings.email_reply_to,
                timeout=settings.smtp_timeout,
            )
        )
    if settings.email_provider == "resend":
        return ResendProvider(settings.resend_api_key or "")
    return ConsoleProvider()


def get_email_service(settings: Settings | None = None) -> EmailService:
    settings = settings or get_settings()
    return EmailService(build_email_provider(settings), settings=settings)
