from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import desc

from app.db_handlers.base import BaseDBHandler
from app.models import JournalPost

if TYPE_CHECKING:
    from app.db import Database


class JournalDBHandler(BaseDBHandler[JournalPost]):
    def __init__(self, database: Database | None = None):
        super().__init__(JournalPost, database)

    async def list_for_user(self, user_id: int) -> list[JournalPost]:
        return await self.get_multi_by_attributes(
            usuario_id=user_id,
            limit=None,
            order_by=[desc(JournalPost.data_postagem), desc(JournalPost.id)],
        )
