"""Resend email provider.

The Resend SDK is synchronous and keyed through the module-level
``resend.api_key``, so calls run in a worker thread.
"""

import asyncio

import resend

from outletbase.core.logging import get_logger
from outletbase.infrastructure.services.email.email_provider import EmailProvider

logger = get_logger(__name__)


class ResendProvider(EmailProvider):
    """Deliver invitation emails through the Resend API."""

    name = "resend"

    def __init__(self, api_key: str) -> None:
        self.api_key = api_key

    def build_params(
        self,
        to: str,
        subject: str,
        html_body: str,
        text_body: str,
        from_email: str,
        from_name: str,
        reply_to: str | None = None,
    ) -> dict:
        params = {
            "from": f"{from_name} <{from_email}>" if from_name else from_email,
            "to": [to],
            "subject": subject,
            "html": html_body,
            "text": text_body,
        }
        if reply_to:
            params["reply_to"] = reply_to
        return params

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
        """Send one message; API errors propagate to the email service."""
        params = self.build_params(
            to, subject, html_body, text_body, from_email, from_name, reply_to
        )
        resend.api_key = self.api_key
        try:
            response = await asyncio.to_thread(resend.Emails.send, params)
        except Exception as e:
            logger.error("Resend rejected message", to=to, error=str(e))
            raise

        logger.info(
            "Email sent via Resend",
            email_id=response.get("id") if isinstance(response, dict) else None,
            to=to,
        )
        return True
