from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.db_handlers.base import BaseDBHandler, check_local_db
from app.models import CommunityPost, Contact, User

if TYPE_CHECKING:
    from app.db import Database


class CommunityPostDBHandler(BaseDBHandler[CommunityPost]):
    def __init__(self, database: Database | None = None):
        super().__init__(CommunityPost, database)

    @check_local_db
    async def get_feed(
        self, limit: int = 100, *, db: AsyncSession = None
    ) -> list[dict[str, Any]]:
        """Posts newest first, each with its author's name and avatar."""
        stmt = (
            select(CommunityPost, User.nome, User.foto)
            .join(User, User.id == CommunityPost.usuario_id)
            .order_by(desc(CommunityPost.data_criacao), desc(CommunityPost.id))
            .limit(limit)
        )
        result = await db.execute(stmt)
        return [
            {**post.to_dict(), "autor_nome": name, "autor_foto": avatar}
            for post, name, avatar in result.all()
        ]


class ContactDBHandler(BaseDBHandler[Contact]):
    def __init__(self, database: Database | None = None):
        super().__init__(Contact, database)
