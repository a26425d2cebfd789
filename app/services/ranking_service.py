"""Leaderboard projection and manual score adjustments."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from app.config import settings
from app.db_handlers import UserDBHandler
from app.utils.logger import setup_logger

if TYPE_CHECKING:
    from app.db import Database

logger = setup_logger("ranking_service")

MAX_RANKING_LIMIT = 100
RANKING_FIELDS = ("id", "nome", "foto", "pontos", "online")


class RankingService:
    def __init__(self, database: Database):
        self.user_handler = UserDBHandler(database)

    async def list(self, limit: int | None = None) -> list[dict[str, Any]]:
        """Users by score, highest first, at most ``limit`` rows."""
        limit = min(limit or settings.ranking_default_limit, MAX_RANKING_LIMIT)
        users = await self.user_handler.get_ranking(limit)
        return [{field: getattr(user, field) for field in RANKING_FIELDS} for user in users]

    async def adjust(self, user_id: int, delta: int) -> None:
        await self.user_handler.adjust_score(user_id, delta)
        logger.info(f"Manual score adjustment for user {user_id}: {delta:+d}")
