import argparse
import asyncio
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from app import models  # noqa: F401
from app.config import settings
from app.models.base import Base
from app.utils.logger import setup_logger

logger = setup_logger("db")

_DRIVER_PREFIXES = {
    "postgresql://": "postgresql+asyncpg://",
    "postgres://": "postgresql+asyncpg://",
}


def normalize_database_url(url: str) -> str:
    """Rewrite plain driver URLs to their async SQLAlchemy dialect."""
    for prefix, replacement in _DRIVER_PREFIXES.items():
        if url.startswith(prefix):
            return url.replace(prefix, replacement, 1)
    if "+" not in url.split("://", 1)[0]:
        raise ValueError(f"Unsupported database URL prefix: {url.split('://', 1)[0]}")
    return url


class Database:
    """
    Owns the async engine (and therefore the connection pool) for the process.

    Created once at application startup, handed to whoever needs sessions,
    and closed at shutdown. Callers wait up to ``pool_timeout`` seconds for a
    free connection when all ``pool_size`` connections are busy.
    """

    def __init__(
        self,
        url: str,
        *,
        pool_size: int = settings.db_pool_size,
        pool_timeout: float = settings.db_pool_timeout,
        command_timeout: float = settings.db_command_timeout,
        echo: bool = settings.db_echo,
    ):
        self.url = normalize_database_url(url)
        engine_kwargs = {"echo": echo}
        if self.url.startswith("sqlite"):
            engine_kwargs["connect_args"] = {"timeout": command_timeout}
        else:
            engine_kwargs.update(
                pool_pre_ping=True,
                pool_size=pool_size,
                max_overflow=0,
                pool_timeout=pool_timeout,
                pool_recycle=300,
            )
            if self.url.startswith("postgresql+asyncpg"):
                engine_kwargs["connect_args"] = {
                    "timeout": command_timeout,
                    "command_timeout": command_timeout,
                }

        self.engine: AsyncEngine = create_async_engine(self.url, **engine_kwargs)
        self.session_factory = async_sessionmaker(
            autocommit=False,
            autoflush=False,
            bind=self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        logger.debug(f"Database engine created for dialect {self.engine.dialect.name}")

    def session(self) -> AsyncSession:
        return self.session_factory()

    @asynccontextmanager
    async def transaction(self) -> AsyncGenerator[AsyncSession, None]:
        """Session with an explicit transaction: commit on success, rollback on error."""
        async with self.session_factory() as session:
            async with session.begin():
                yield session

    async def init_models(self):
        if not Base.metadata.tables:
            logger.warning("Base.metadata.tables is EMPTY! No tables will be created.")
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info(
            f"Database schema initialized: {sorted(Base.metadata.tables.keys())}"
        )

    async def drop_models(self):
        logger.warning("Dropping all application tables. THIS IS A DESTRUCTIVE OPERATION.")
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    async def check_connection(self) -> bool:
        """Performs a simple query to check actual DB connectivity."""
        async with self.session_factory() as session:
            try:
                result = await session.execute(text("SELECT 1"))
                if result.scalar_one() != 1:
                    raise RuntimeError("Test query returned an unexpected result.")
            except Exception as e:
                logger.error(f"Failed to execute test query: {e}", exc_info=True)
                raise RuntimeError("Database connectivity check failed.") from e
        logger.info("Successfully connected to the database and executed a test query.")
        return True

    async def close(self):
        logger.info("Closing database connections.")
        await self.engine.dispose()
        logger.info("Database connections closed.")


def create_database() -> Database:
    if not settings.database_url:
        raise ValueError("DATABASE_URL environment variable not set")
    return Database(settings.database_url)


# --- Dependencies for FastAPI ---
def get_database(request: Request) -> Database:
    return request.app.state.database


async def _run_action(action: str):
    database = create_database()
    try:
        if action == "init":
            await database.init_models()
        elif action == "reset":
            await database.drop_models()
            await database.init_models()
        elif action == "check":
            await database.check_connection()
    finally:
        await database.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Application Database Utility")
    parser.add_argument(
        "action",
        choices=["init", "reset", "check"],
        help="'init' to create missing tables, "
        "'reset' to drop and recreate every table, "
        "'check' to verify connectivity.",
    )
    args = parser.parse_args()

    if args.action == "reset":
        confirm = input(
            "WARNING: This will delete all application data. Are you sure? (yes/no): "
        )
        if confirm.lower() != "yes":
            logger.info("Database reset cancelled by user.")
            raise SystemExit(0)

    asyncio.run(_run_action(args.action))
    logger.info(f"Database utility finished: {args.action}")
