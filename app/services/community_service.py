from __future__ import annotations

from typing import TYPE_CHECKING, Any

from app.config import settings
from app.db_handlers import CommunityPostDBHandler, UserDBHandler
from app.models import CommunityPost
from app.utils.images import COMMUNITY_IMAGE, ImageStore
from app.utils.logger import setup_logger

if TYPE_CHECKING:
    from app.db import Database

logger = setup_logger("community_service")


class CommunityService:
    """Community feed. Each post awards its author ``POINTS_COMMUNITY_POST``."""

    def __init__(
        self,
        database: Database,
        image_store: ImageStore,
        *,
        post_award: int = settings.points_community_post,
    ):
        self.database = database
        self.post_handler = CommunityPostDBHandler(database)
        self.user_handler = UserDBHandler(database)
        self.image_store = image_store
        self.post_award = post_award

    async def post(
        self, user_id: int, titulo: str, texto: str, imagem: str | None = None
    ) -> CommunityPost:
        image_path = await self.image_store.save(imagem, COMMUNITY_IMAGE)
        try:
            async with self.database.transaction() as db:
                post = await self.post_handler.create(
                    {
                        "usuario_id": user_id,
                        "titulo": titulo,
                        "texto": texto,
                        "imagem": image_path,
                    },
                    db=db,
                )
                await self.user_handler.adjust_score(user_id, self.post_award, db=db)
        except Exception:
            self.image_store.discard(image_path)
            raise

        logger.info(f"User {user_id} posted {post.id} (+{self.post_award} points)")
        return post

    async def feed(self, limit: int = 100) -> list[dict[str, Any]]:
        return await self.post_handler.get_feed(limit)
