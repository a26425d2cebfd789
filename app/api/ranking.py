# Leaderboard routes

from fastapi import APIRouter, Depends, Query

from app.dependencies.auth import require_admin_key
from app.dependencies.services import get_ranking_service
from app.schemas import RankingEntry, ScoreAdjustment, SuccessResponse
from app.services.ranking_service import MAX_RANKING_LIMIT, RankingService

router = APIRouter(prefix="/api/ranking", tags=["Ranking"])


@router.get("", response_model=list[RankingEntry])
async def get_ranking(
    limit: int | None = Query(default=None, ge=1, le=MAX_RANKING_LIMIT),
    ranking_service: RankingService = Depends(get_ranking_service),
):
    """Users ordered by score, highest first."""
    return await ranking_service.list(limit)


@router.post(
    "/pontos",
    response_model=SuccessResponse,
    dependencies=[Depends(require_admin_key)],
)
async def adjust_score(
    adjustment: ScoreAdjustment,
    ranking_service: RankingService = Depends(get_ranking_service),
):
    """Add (or subtract) points for a user. Requires the ``X-Admin-Key`` header."""
    await ranking_service.adjust(adjustment.usuario_id, adjustment.pontos)
    return SuccessResponse()
