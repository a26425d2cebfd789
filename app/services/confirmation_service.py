"""
Email confirmation workflow.

Each account moves one way, ``Unconfirmed(token) -> Confirmed``. The token
is issued at registration, mailed as a link, and redeemed by a single
conditional UPDATE so that concurrent redemptions have exactly one winner.
Unknown and already-used tokens produce the same error.
"""

from __future__ import annotations

from typing import TYPE_CHECKING
from urllib.parse import urlencode

from app.config import settings
from app.db_handlers import UserDBHandler
from app.errors import InvalidOrUsedToken
from app.services.email import EmailSender
from app.utils.auth import generate_confirmation_token
from app.utils.logger import mask_email, setup_logger

if TYPE_CHECKING:
    from app.db import Database

logger = setup_logger("confirmation_service")

CONFIRMATION_SUBJECT = "Confirme seu email no CyberMaker"


class ConfirmationService:
    def __init__(
        self,
        database: Database,
        email_sender: EmailSender,
        public_api_url: str = settings.public_api_url,
    ):
        self.user_handler = UserDBHandler(database)
        self.email_sender = email_sender
        self.public_api_url = public_api_url.rstrip("/")

    @staticmethod
    def issue_token() -> str:
        return generate_confirmation_token()

    def build_confirmation_url(self, token: str) -> str:
        return f"{self.public_api_url}/api/confirmar?{urlencode({'token': token})}"

    async def send_confirmation_email(self, email: str, name: str, token: str) -> bool:
        """
        Mail the confirmation link. Never raises: a failed send leaves the
        account unconfirmed and is only logged.
        """
        url = self.build_confirmation_url(token)
        text_body = (
            f"Olá, {name}!\n\n"
            "Para ativar sua conta no CyberMaker, confirme seu email acessando:\n"
            f"{url}\n\n"
            "Se você não criou esta conta, ignore esta mensagem."
        )
        html_body = (
            f"<p>Olá, {name}!</p>"
            "<p>Para ativar sua conta no CyberMaker, confirme seu email:</p>"
            f'<p><a href="{url}">Confirmar email</a></p>'
        )
        try:
            sent = await self.email_sender.send(
                email, CONFIRMATION_SUBJECT, text_body, html_body
            )
        except Exception as e:
            logger.error(
                f"Confirmation email to {mask_email(email)} raised: {e}", exc_info=True
            )
            return False

        if not sent:
            logger.error(f"Confirmation email to {mask_email(email)} was not sent")
        return sent

    async def redeem(self, token: str) -> None:
        """Confirm the account holding ``token``; raises ``InvalidOrUsedToken`` otherwise."""
        if not token or not await self.user_handler.set_confirmed(token):
            raise InvalidOrUsedToken()
        logger.info(f"Account confirmed with token {token[:6]}...")
