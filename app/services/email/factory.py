"""Email sender factory - returns appropriate sender based on config."""

from app.config import settings
from app.services.email.base import EmailSender
from app.services.email.console import ConsoleEmailSender
from app.services.email.smtp import SmtpEmailSender


def create_email_sender(provider: str | None = None) -> EmailSender:
    """Build the configured email sender."""
    provider = (provider or settings.email_provider).lower()
    if provider == "smtp" and settings.smtp_host:
        return SmtpEmailSender()
    return ConsoleEmailSender()
