from __future__ import annotations

from typing import TYPE_CHECKING, Any

from app.db_handlers import (
    ActivityDBHandler,
    IdeaDBHandler,
    JournalDBHandler,
    UserDBHandler,
)
from app.errors import UserNotFound

if TYPE_CHECKING:
    from app.db import Database

RECENT_ACTIVITY_LIMIT = 10


class ProfileService:
    """Aggregated public profile: user fields, rank position and activity counts."""

    def __init__(self, database: Database):
        self.database = database
        self.user_handler = UserDBHandler(database)
        self.activity_handler = ActivityDBHandler(database)
        self.idea_handler = IdeaDBHandler(database)
        self.journal_handler = JournalDBHandler(database)

    async def get_profile(self, user_id: int) -> dict[str, Any]:
        async with self.database.session() as db:
            user = await self.user_handler.get(user_id, db=db)
            if user is None:
                raise UserNotFound()

            return {
                **user.to_dict(),
                "posicao_ranking": await self.user_handler.get_rank_position(
                    user, db=db
                ),
                "total_ideias": await self.idea_handler.count_by_attributes(
                    usuario_id=user_id, db=db
                ),
                "total_diario": await self.journal_handler.count_by_attributes(
                    usuario_id=user_id, db=db
                ),
                "total_atividades": await self.activity_handler.count_by_attributes(
                    usuario_id=user_id, db=db
                ),
                "atividades_recentes": await self.activity_handler.list_for_user(
                    user_id, RECENT_ACTIVITY_LIMIT, db=db
                ),
            }
