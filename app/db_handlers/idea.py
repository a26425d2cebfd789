from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import desc

from app.db_handlers.base import BaseDBHandler
from app.models import Conclusion, Idea

if TYPE_CHECKING:
    from app.db import Database


class IdeaDBHandler(BaseDBHandler[Idea]):
    def __init__(self, database: Database | None = None):
        super().__init__(Idea, database)

    async def list_ideas(self, user_id: int | None = None) -> list[Idea]:
        filters = {} if user_id is None else {"usuario_id": user_id}
        return await self.get_multi_by_attributes(
            limit=None,
            order_by=[desc(Idea.data_criacao), desc(Idea.id)],
            **filters,
        )


class ConclusionDBHandler(BaseDBHandler[Conclusion]):
    def __init__(self, database: Database | None = None):
        super().__init__(Conclusion, database)

    async def list_conclusions(self, idea_id: int | None = None) -> list[Conclusion]:
        filters = {} if idea_id is None else {"ideia_id": idea_id}
        return await self.get_multi_by_attributes(
            limit=None,
            order_by=[desc(Conclusion.data), desc(Conclusion.id)],
            **filters,
        )
