"""Console email sender for development"""

from app.services.email.base import EmailSender
from app.utils.logger import mask_email, setup_logger

logger = setup_logger("email.console")


class ConsoleEmailSender(EmailSender):
    """Development email sender that logs messages instead of delivering them."""

    async def send(self, to, subject, text_body, html_body=None) -> bool:
        logger.info(f"[Email][Console] To: {mask_email(to)}")
        logger.info(f"[Email][Console] Subject: {subject}")
        logger.info(f"[Email][Console] Body:\n{text_body}")
        return True
