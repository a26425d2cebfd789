from fastapi import APIRouter, Depends, status

from app.dependencies.auth import get_current_user
from app.dependencies.services import get_journal_service
from app.models import User
from app.schemas import CreatedResponse, JournalListResponse, JournalPostCreate
from app.services.journal_service import JournalService

router = APIRouter(prefix="/api/diario", tags=["Journal"])


@router.post("", response_model=CreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_journal_post(
    post_data: JournalPostCreate,
    current_user: User = Depends(get_current_user),
    journal_service: JournalService = Depends(get_journal_service),
):
    post = await journal_service.post(current_user.id, post_data.conteudo, post_data.titulo)
    return CreatedResponse(id=post.id)


@router.get("/{usuario_id}", response_model=JournalListResponse)
async def list_journal_posts(
    usuario_id: int,
    journal_service: JournalService = Depends(get_journal_service),
):
    """A user's journal, newest first."""
    return JournalListResponse(posts=await journal_service.list_for_user(usuario_id))
