"""SMTP email sender for production"""

import asyncio
import smtplib
from email.message import EmailMessage

from app.config import settings
from app.services.email.base import EmailSender
from app.utils.logger import mask_email, setup_logger

logger = setup_logger("email.smtp")


class SmtpEmailSender(EmailSender):
    """Delivers mail through an SMTP relay (STARTTLS or implicit SSL)."""

    def __init__(
        self,
        host: str | None = None,
        port: int | None = None,
        user: str | None = None,
        password: str | None = None,
        from_email: str | None = None,
        use_tls: bool | None = None,
        use_ssl: bool | None = None,
        timeout: float | None = None,
    ):
        self.host = host or settings.smtp_host
        self.port = port or settings.smtp_port
        self.user = user if user is not None else settings.smtp_user
        self.password = password if password is not None else settings.smtp_password
        self.from_email = from_email or settings.email_from
        self.use_tls = settings.smtp_use_tls if use_tls is None else use_tls
        self.use_ssl = settings.smtp_use_ssl if use_ssl is None else use_ssl
        self.timeout = timeout or settings.smtp_timeout

    def _build_message(self, to, subject, text_body, html_body) -> EmailMessage:
        msg = EmailMessage()
        msg["Subject"] = subject
        msg["From"] = self.from_email
        msg["To"] = to
        msg.set_content(text_body)
        if html_body:
            msg.add_alternative(html_body, subtype="html")
        return msg

    def _deliver(self, msg: EmailMessage) -> None:
        smtp_cls = smtplib.SMTP_SSL if self.use_ssl else smtplib.SMTP
        with smtp_cls(self.host, self.port, timeout=self.timeout) as client:
            if not self.use_ssl and self.use_tls:
                client.starttls()
            if self.user:
                client.login(self.user, self.password or "")
            client.send_message(msg)

    async def send(self, to, subject, text_body, html_body=None) -> bool:
        if not self.host:
            logger.error("[Email][SMTP] No SMTP host configured")
            return False

        msg = self._build_message(to, subject, text_body, html_body)
        try:
            await asyncio.to_thread(self._deliver, msg)
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"[Email][SMTP] Delivery to {mask_email(to)} failed: {e}")
            return False

        logger.info(f"[Email][SMTP] Sent to {mask_email(to)}")
        return True
