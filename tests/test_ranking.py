import asyncio

import pytest

from app.db_handlers import UserDBHandler
from app.errors import UserNotFound, ValidationError
from app.models import UserRole
from app.services.ranking_service import MAX_RANKING_LIMIT, RankingService
from app.utils.auth import generate_confirmation_token


async def _create_users(database, *names):
    handler = UserDBHandler(database)
    users = []
    for name in names:
        users.append(
            await handler.create_user(
                nome=name,
                email=f"{name}@example.com",
                senha_hash="$2b$04$hash",
                tipo_usuario=UserRole.STANDARD,
                token_confirmacao=generate_confirmation_token(),
            )
        )
    return users


@pytest.mark.asyncio
async def test_ranking_orders_by_score_then_registration(database):
    ana, bia, caio, duda = await _create_users(database, "ana", "bia", "caio", "duda")
    ranking = RankingService(database)
    await ranking.adjust(bia.id, 50)
    await ranking.adjust(caio.id, 200)
    await ranking.adjust(duda.id, 50)

    entries = await ranking.list()

    assert [e["nome"] for e in entries] == ["caio", "bia", "duda", "ana"]
    assert [e["pontos"] for e in entries] == [200, 50, 50, 0]
    assert set(entries[0]) == {"id", "nome", "foto", "pontos", "online"}


@pytest.mark.asyncio
async def test_ranking_respects_limit(database):
    await _create_users(database, *(f"user{i}" for i in range(5)))
    ranking = RankingService(database)

    assert len(await ranking.list(limit=3)) == 3
    assert len(await ranking.list(limit=MAX_RANKING_LIMIT + 50)) == 5


@pytest.mark.asyncio
async def test_rank_position_matches_ranking_order(database):
    ana, bia, caio = await _create_users(database, "ana", "bia", "caio")
    handler = UserDBHandler(database)
    await handler.adjust_score(caio.id, 10)

    positions = {
        user.nome: await handler.get_rank_position(await handler.get(user.id))
        for user in (ana, bia, caio)
    }

    assert positions == {"caio": 1, "ana": 2, "bia": 3}


@pytest.mark.asyncio
async def test_negative_adjustment_cannot_go_below_zero(database):
    [ana] = await _create_users(database, "ana")
    ranking = RankingService(database)
    await ranking.adjust(ana.id, 30)

    await ranking.adjust(ana.id, -30)
    with pytest.raises(ValidationError):
        await ranking.adjust(ana.id, -1)

    assert (await UserDBHandler(database).get(ana.id)).pontos == 0


@pytest.mark.asyncio
async def test_adjusting_unknown_user_fails(database):
    ranking = RankingService(database)

    with pytest.raises(UserNotFound):
        await ranking.adjust(999, 10)
    with pytest.raises(UserNotFound):
        await ranking.adjust(999, -10)


@pytest.mark.asyncio
async def test_concurrent_adjustments_are_not_lost(database):
    [ana] = await _create_users(database, "ana")
    handler = UserDBHandler(database)

    await asyncio.gather(*(handler.adjust_score(ana.id, 10) for _ in range(20)))

    assert (await handler.get(ana.id)).pontos == 200
