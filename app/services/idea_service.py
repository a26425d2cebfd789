"""
Ideas and their conclusions.

Concluding an idea is restricted to its owner and awards the owner
``POINTS_CONCLUSION`` in the same transaction as the conclusion insert.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from app.config import settings
from app.db_handlers import ConclusionDBHandler, IdeaDBHandler, UserDBHandler
from app.errors import Forbidden, NotFound
from app.models import Conclusion, Idea
from app.utils.images import IDEA_IMAGE, ImageStore
from app.utils.logger import setup_logger

if TYPE_CHECKING:
    from app.db import Database

logger = setup_logger("idea_service")


class IdeaService:
    def __init__(
        self,
        database: Database,
        image_store: ImageStore,
        *,
        conclusion_award: int = settings.points_conclusion,
    ):
        self.database = database
        self.idea_handler = IdeaDBHandler(database)
        self.conclusion_handler = ConclusionDBHandler(database)
        self.user_handler = UserDBHandler(database)
        self.image_store = image_store
        self.conclusion_award = conclusion_award

    async def create_idea(
        self,
        user_id: int,
        titulo: str,
        categoria: str,
        descricao: str,
        imagem: str | None = None,
    ) -> Idea:
        image_path = await self.image_store.save(imagem, IDEA_IMAGE)
        try:
            return await self.idea_handler.create(
                {
                    "usuario_id": user_id,
                    "titulo": titulo,
                    "categoria": categoria,
                    "descricao": descricao,
                    "imagem": image_path,
                }
            )
        except Exception:
            self.image_store.discard(image_path)
            raise

    async def list_ideas(self, user_id: int | None = None) -> list[Idea]:
        return await self.idea_handler.list_ideas(user_id)

    async def conclude(
        self,
        user_id: int,
        idea_id: int,
        video: str,
        imagens: str,
        descricao: str,
    ) -> Conclusion:
        async with self.database.transaction() as db:
            idea = await self.idea_handler.get(idea_id, db=db)
            if idea is None:
                raise NotFound("Ideia não encontrada")
            if idea.usuario_id != user_id:
                raise Forbidden("Apenas o autor pode concluir esta ideia")

            conclusion = await self.conclusion_handler.create(
                {
                    "ideia_id": idea_id,
                    "video": video,
                    "imagens": imagens,
                    "descricao": descricao,
                },
                db=db,
            )
            await self.user_handler.adjust_score(
                idea.usuario_id, self.conclusion_award, db=db
            )

        logger.info(
            f"Idea {idea_id} concluded by user {user_id} (+{self.conclusion_award} points)"
        )
        return conclusion

    async def list_conclusions(self, idea_id: int | None = None) -> list[Conclusion]:
        return await self.conclusion_handler.list_conclusions(idea_id)
