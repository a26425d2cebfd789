from fastapi import APIRouter, Depends, Query, status

from app.dependencies.auth import get_current_user
from app.dependencies.services import get_community_service
from app.models import User
from app.schemas import CommunityPostCreate, CommunityPostOut, CreatedResponse
from app.services.community_service import CommunityService

router = APIRouter(prefix="/api/comunidade", tags=["Community"])


@router.post("", response_model=CreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_community_post(
    post_data: CommunityPostCreate,
    current_user: User = Depends(get_current_user),
    community_service: CommunityService = Depends(get_community_service),
):
    post = await community_service.post(
        current_user.id, post_data.titulo, post_data.texto, post_data.imagem
    )
    return CreatedResponse(id=post.id)


@router.get("", response_model=list[CommunityPostOut])
async def get_feed(
    limit: int = Query(default=100, ge=1, le=100),
    community_service: CommunityService = Depends(get_community_service),
):
    """Latest community posts with their author's name and avatar."""
    return await community_service.feed(limit)
