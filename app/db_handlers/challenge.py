from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.db_handlers.base import BaseDBHandler, check_local_db
from app.models import Activity, ActivityStatus, Challenge, User
from app.utils.logger import setup_logger

if TYPE_CHECKING:
    from app.db import Database

logger = setup_logger("db_handlers.challenge")


class ChallengeDBHandler(BaseDBHandler[Challenge]):
    def __init__(self, database: Database | None = None):
        super().__init__(Challenge, database)

    @check_local_db
    async def list_with_recruiter(
        self, *, db: AsyncSession = None
    ) -> list[dict[str, Any]]:
        """All challenges, newest first, with the posting recruiter's name."""
        stmt = (
            select(Challenge, User.nome)
            .join(User, User.id == Challenge.recrutador_id)
            .order_by(desc(Challenge.data_postagem), desc(Challenge.id))
        )
        result = await db.execute(stmt)
        return [
            {**challenge.to_dict(), "recrutador_nome": recruiter_name}
            for challenge, recruiter_name in result.all()
        ]


class ActivityDBHandler(BaseDBHandler[Activity]):
    def __init__(self, database: Database | None = None):
        super().__init__(Activity, database)

    @check_local_db
    async def create_completed(
        self,
        user_id: int,
        challenge_id: int,
        link: str,
        *,
        db: AsyncSession = None,
    ) -> Activity:
        return await self.create(
            {
                "usuario_id": user_id,
                "desafio_id": challenge_id,
                "link": link,
                "status": ActivityStatus.COMPLETED,
            },
            db=db,
        )

    @check_local_db
    async def exists_for(
        self, user_id: int, challenge_id: int, *, db: AsyncSession = None
    ) -> bool:
        count = await self.count_by_attributes(
            usuario_id=user_id, desafio_id=challenge_id, db=db
        )
        return count > 0

    @check_local_db
    async def list_for_user(
        self, user_id: int, limit: int | None = None, *, db: AsyncSession = None
    ) -> list[dict[str, Any]]:
        """A user's activities, newest first, with the challenge title."""
        stmt = (
            select(Activity, Challenge.titulo)
            .join(Challenge, Challenge.id == Activity.desafio_id)
            .where(Activity.usuario_id == user_id)
            .order_by(desc(Activity.data_submissao), desc(Activity.id))
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await db.execute(stmt)
        return [
            {**activity.to_dict(), "desafio_titulo": title}
            for activity, title in result.all()
        ]
