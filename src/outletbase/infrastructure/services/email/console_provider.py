"""Console email provider for development.

Writes outgoing emails to the structured log instead of delivering them.
"""

from outletbase.core.logging import get_logger
from outletbase.infrastructure.services.email.email_provider import EmailProvider

logger = get_logger(__name__)


class ConsoleProvider(EmailProvider):
    """Log emails instead of sending them."""

    name = "console"

    async def send_email(
        self,
        to: str,
        subject: str,
        html_body: str,
        text_body: str,
        from_email: str,
        from_name: str,
        reply_to: str | None = None,
    ) -> bool:
        logger.info(
            "[EMAIL] Outgoing email",
            to=to,
            subject=subject,
            sender=f"{from_name} <{from_email}>",
            body=text_body,
        )
        return True
