from __future__ import annotations

import asyncio
from functools import wraps
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from asyncpg.exceptions import ConnectionDoesNotExistError
from sqlalchemy import func, select
from sqlalchemy.exc import DBAPIError, IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.base import Base
from app.utils.logger import setup_logger

if TYPE_CHECKING:
    from app.db import Database

logger = setup_logger("db_handlers")

MAX_ATTEMPTS = 3

ModelType = TypeVar("ModelType", bound=Base)


def check_local_db(func):
    """
    Session decorator with transaction management and retry logic.

    When the caller passes ``db``, the call joins that session and the caller
    owns the transaction. Otherwise a session is opened from the handler's
    ``Database``, committed on success and rolled back on any error.
    Dropped connections are retried with backoff.
    """

    @wraps(func)
    async def wrapper(self, *args, **kwargs):
        # Nested call: the outermost caller who created the session commits.
        if kwargs.get("db") is not None:
            return await func(self, *args, **kwargs)

        if self.database is None:
            raise RuntimeError(
                f"{type(self).__name__}.{func.__name__} needs a session or a Database"
            )

        last_exception = None
        for attempt in range(MAX_ATTEMPTS):
            async with self.database.session() as db:
                kwargs["db"] = db
                try:
                    result = await func(self, *args, **kwargs)
                    await db.commit()
                    return result
                except DBAPIError as e:
                    await db.rollback()
                    if isinstance(e.orig, ConnectionDoesNotExistError):
                        last_exception = e
                        logger.warning(
                            f"Connection error in {func.__name__} (attempt {attempt + 1}/{MAX_ATTEMPTS}): {e}. Retrying..."
                        )
                        await asyncio.sleep(1 + attempt)
                        continue
                    logger.error(
                        f"DBAPIError in {func.__name__}: {e}",
                        exc_info=True,
                    )
                    raise
                except Exception:
                    await db.rollback()
                    raise

        logger.error(
            f"All retries failed for {func.__name__}. Last error: {last_exception}"
        )
        raise last_exception

    return wrapper


class BaseDBHandler(Generic[ModelType]):
    """Generic handler for database operations with basic CRUD methods."""

    def __init__(self, model: type[ModelType], database: Database | None = None):
        self.model = model
        self.database = database

    @check_local_db
    async def create(
        self, obj_dict: dict[str, Any], *, db: AsyncSession = None
    ) -> ModelType:
        """Insert a new record and load its server-generated columns."""
        db_obj = self.model(**obj_dict)
        try:
            db.add(db_obj)
            await db.flush()
            await db.refresh(db_obj)
            return db_obj
        except IntegrityError as e:
            logger.warning(f"IntegrityError creating {self.model.__name__}: {e.orig}")
            # Re-raise so calling code can translate it
            raise
        except SQLAlchemyError as e:
            logger.error(f"Error creating {self.model.__name__}: {e}", exc_info=True)
            raise

    @check_local_db
    async def get(self, id: Any, *, db: AsyncSession = None) -> ModelType | None:
        """Get a single record by its primary key."""
        stmt = select(self.model).where(self.model.id == id)
        result = await db.execute(stmt.execution_options(populate_existing=True))
        return result.scalars().first()

    @check_local_db
    async def get_multi_by_attributes(
        self,
        *,
        db: AsyncSession = None,
        skip: int = 0,
        limit: int | None = 100,
        order_by: Any = None,
        **kwargs,
    ) -> list[ModelType]:
        """Get multiple records by a set of attributes with pagination."""
        stmt = select(self.model).filter_by(**kwargs)

        if order_by is not None:
            if isinstance(order_by, list):
                stmt = stmt.order_by(*order_by)
            else:
                stmt = stmt.order_by(order_by)

        stmt = stmt.offset(skip)
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await db.execute(stmt)
        return list(result.scalars().all())

    @check_local_db
    async def count_by_attributes(self, *, db: AsyncSession = None, **kwargs) -> int:
        """Count records matching a set of attributes."""
        stmt = select(func.count()).select_from(self.model).filter_by(**kwargs)
        result = await db.execute(stmt)
        return result.scalar_one()

