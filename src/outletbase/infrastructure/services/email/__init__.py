"""Email providers and template rendering."""

from outletbase.infrastructure.services.email.console_provider import ConsoleProvider
from outletbase.infrastructure.services.email.email_provider import EmailProvider
from outletbase.infrastructure.services.email.resend_provider import ResendProvider
from outletbase.infrastructure.services.email.smtp_provider import SMTPProvider, SMTPSettings
from outletbase.infrastructure.services.email.template_renderer import (
    TemplateRenderer,
    get_template_renderer,
)

__all__ = [
    "ConsoleProvider",
    "EmailProvider",
    "ResendProvider",
    "SMTPProvider",
    "SMTPSettings",
    "TemplateRenderer",
    "get_template_renderer",
]
