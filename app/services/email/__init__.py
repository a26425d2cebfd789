from app.services.email.base import EmailSender
from app.services.email.console import ConsoleEmailSender
from app.services.email.factory import create_email_sender
from app.services.email.smtp import SmtpEmailSender

__all__ = [
    "EmailSender",
    "ConsoleEmailSender",
    "SmtpEmailSender",
    "create_email_sender",
]
