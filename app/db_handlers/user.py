from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import desc, false, func, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.db_handlers.base import BaseDBHandler, check_local_db
from app.errors import DuplicateEmail, UserNotFound, ValidationError
from app.models.user import User, UserRole
from app.utils.logger import mask_email, setup_logger

if TYPE_CHECKING:
    from app.db import Database

logger = setup_logger("db_handlers.user")


class UserDBHandler(BaseDBHandler[User]):
    """
    Credential store and points ledger.

    Every score change is a single ``pontos = pontos + delta`` statement and
    confirmation is a single conditional UPDATE, so concurrent requests never
    lose updates or both redeem the same token.
    """

    def __init__(self, database: Database | None = None):
        super().__init__(User, database)

    @check_local_db
    async def create_user(
        self,
        nome: str,
        email: str,
        senha_hash: str,
        tipo_usuario: UserRole,
        token_confirmacao: str,
        foto: str | None = None,
        *,
        db: AsyncSession = None,
    ) -> User:
        """Insert an unconfirmed user. Raises ``DuplicateEmail`` if the email exists."""
        if await self.get_by_email(email, db=db) is not None:
            raise DuplicateEmail()

        try:
            return await self.create(
                {
                    "nome": nome,
                    "email": email,
                    "senha": senha_hash,
                    "tipo_usuario": tipo_usuario,
                    "token_confirmacao": token_confirmacao,
                    "confirmado": False,
                    "foto": foto,
                    "pontos": 0,
                    "online": False,
                },
                db=db,
            )
        except IntegrityError as e:
            # Lost a race against a concurrent registration of the same email
            logger.info(f"Duplicate registration rejected for {mask_email(email)}")
            raise DuplicateEmail() from e

    @check_local_db
    async def get_by_email(self, email: str, *, db: AsyncSession = None) -> User | None:
        """Get a user by exact email."""
        try:
            stmt = select(User).where(User.email == email)
            result = await db.execute(stmt.execution_options(populate_existing=True))
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error(f"Error retrieving user by email '{mask_email(email)}': {e}")
            raise

    @check_local_db
    async def adjust_score(
        self, user_id: int, delta: int, *, db: AsyncSession = None
    ) -> None:
        """
        Atomically add ``delta`` to a user's score.

        Raises ``UserNotFound`` when no row matches, and ``ValidationError``
        when a negative delta would take the score below zero.
        """
        stmt = update(User).where(User.id == user_id).values(pontos=User.pontos + delta)
        if delta < 0:
            stmt = stmt.where(User.pontos + delta >= 0)

        result = await db.execute(stmt.execution_options(synchronize_session=False))
        if result.rowcount == 1:
            logger.debug(f"Score of user {user_id} adjusted by {delta}")
            return

        if delta < 0 and await self.get(user_id, db=db) is not None:
            raise ValidationError("A pontuação não pode ficar negativa")
        raise UserNotFound()

    @check_local_db
    async def set_confirmed(self, token: str, *, db: AsyncSession = None) -> bool:
        """Confirm the unconfirmed user holding ``token`` and clear the token."""
        stmt = (
            update(User)
            .where(User.token_confirmacao == token, User.confirmado == false())
            .values(confirmado=True, token_confirmacao=None)
            .execution_options(synchronize_session=False)
        )
        result = await db.execute(stmt)
        return result.rowcount == 1

    @check_local_db
    async def set_online(
        self, user_id: int, online: bool, *, db: AsyncSession = None
    ) -> None:
        stmt = (
            update(User)
            .where(User.id == user_id)
            .values(online=online)
            .execution_options(synchronize_session=False)
        )
        await db.execute(stmt)

    @check_local_db
    async def get_ranking(self, limit: int, *, db: AsyncSession = None) -> list[User]:
        """Users ordered by score, highest first; ties keep registration order."""
        stmt = select(User).order_by(desc(User.pontos), User.id).limit(limit)
        result = await db.execute(stmt)
        return list(result.scalars().all())

    @check_local_db
    async def get_rank_position(self, user: User, *, db: AsyncSession = None) -> int:
        """1-based position of ``user`` in the ranking order."""
        stmt = select(func.count()).select_from(User).where(
            (User.pontos > user.pontos)
            | ((User.pontos == user.pontos) & (User.id < user.id))
        )
        result = await db.execute(stmt)
        return result.scalar_one() + 1
