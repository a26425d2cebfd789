import pytest
from sqlalchemy import inspect

from app.db import Database, normalize_database_url


@pytest.mark.parametrize(
    "url, expected",
    [
        ("postgresql://u:p@db/app", "postgresql+asyncpg://u:p@db/app"),
        ("postgres://u:p@db/app", "postgresql+asyncpg://u:p@db/app"),
        ("postgresql+asyncpg://u:p@db/app", "postgresql+asyncpg://u:p@db/app"),
        ("sqlite+aiosqlite:///tmp/x.db", "sqlite+aiosqlite:///tmp/x.db"),
    ],
)
def test_normalize_database_url(url, expected):
    assert normalize_database_url(url) == expected


def test_plain_url_without_async_driver_is_rejected():
    with pytest.raises(ValueError):
        normalize_database_url("sqlite:///tmp/x.db")


@pytest.mark.asyncio
async def test_connection_check_and_schema(database):
    assert await database.check_connection() is True

    async with database.engine.connect() as conn:
        tables = await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names())

    assert {
        "usuarios",
        "desafios",
        "atividades",
        "diario",
        "ideias",
        "conclusoes",
        "comunidade_posts",
        "contatos",
    } <= set(tables)


@pytest.mark.asyncio
async def test_transaction_rolls_back_on_error(database):
    from app.db_handlers import JournalDBHandler

    handler = JournalDBHandler(database)
    with pytest.raises(RuntimeError):
        async with database.transaction() as db:
            await handler.create({"usuario_id": 1, "conteudo": "rascunho"}, db=db)
            raise RuntimeError("abort")

    assert await handler.count_by_attributes() == 0


@pytest.mark.asyncio
async def test_pool_settings_apply_to_server_databases():
    db = Database(
        "postgresql://u:p@localhost/app", pool_size=10, pool_timeout=30, command_timeout=15
    )
    try:
        assert db.engine.pool.size() == 10
        assert db.engine.pool._max_overflow == 0
        assert db.engine.pool._timeout == 30
    finally:
        await db.close()
