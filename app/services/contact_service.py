"""Recruiter-initiated contact with users."""

from __future__ import annotations

from typing import TYPE_CHECKING

from app.db_handlers import ContactDBHandler, UserDBHandler
from app.errors import Forbidden, UserNotFound
from app.models import Contact
from app.services.email import EmailSender
from app.utils.logger import mask_email, setup_logger

if TYPE_CHECKING:
    from app.db import Database

logger = setup_logger("contact_service")


class ContactService:
    def __init__(self, database: Database, email_sender: EmailSender):
        self.database = database
        self.user_handler = UserDBHandler(database)
        self.contact_handler = ContactDBHandler(database)
        self.email_sender = email_sender

    async def contact(self, recruiter_id: int, user_id: int, mensagem: str) -> Contact:
        """Store a recruiter's message to a user and notify the user by email."""
        async with self.database.transaction() as db:
            recruiter = await self.user_handler.get(recruiter_id, db=db)
            if recruiter is None or not recruiter.is_recruiter:
                raise Forbidden("Apenas recrutadores podem entrar em contato")

            target = await self.user_handler.get(user_id, db=db)
            if target is None:
                raise UserNotFound()

            contact = await self.contact_handler.create(
                {
                    "recrutador_id": recruiter_id,
                    "usuario_id": user_id,
                    "mensagem": mensagem,
                },
                db=db,
            )

        await self._notify(recruiter.nome, recruiter.email, target.email, mensagem)
        logger.info(f"Recruiter {recruiter_id} contacted user {user_id}")
        return contact

    async def _notify(
        self, recruiter_name: str, recruiter_email: str, to: str, mensagem: str
    ) -> None:
        text_body = (
            f"{recruiter_name} ({recruiter_email}) quer falar com você no CyberMaker:\n\n"
            f"{mensagem}"
        )
        try:
            sent = await self.email_sender.send(
                to, "Um recrutador quer falar com você", text_body
            )
        except Exception as e:
            logger.error(f"Contact email to {mask_email(to)} raised: {e}", exc_info=True)
            return
        if not sent:
            logger.error(f"Contact email to {mask_email(to)} was not sent")
