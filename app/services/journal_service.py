from __future__ import annotations

from typing import TYPE_CHECKING

from app.config import settings
from app.db_handlers import JournalDBHandler, UserDBHandler
from app.models import JournalPost

if TYPE_CHECKING:
    from app.db import Database


class JournalService:
    """Personal journal entries. Posting awards ``POINTS_JOURNAL_POST`` (0 by default)."""

    def __init__(
        self, database: Database, *, post_award: int = settings.points_journal_post
    ):
        self.database = database
        self.journal_handler = JournalDBHandler(database)
        self.user_handler = UserDBHandler(database)
        self.post_award = post_award

    async def post(self, user_id: int, conteudo: str, titulo: str | None = None) -> JournalPost:
        async with self.database.transaction() as db:
            post = await self.journal_handler.create(
                {"usuario_id": user_id, "titulo": titulo, "conteudo": conteudo}, db=db
            )
            if self.post_award:
                await self.user_handler.adjust_score(user_id, self.post_award, db=db)
        return post

    async def list_for_user(self, user_id: int) -> list[JournalPost]:
        return await self.journal_handler.list_for_user(user_id)
