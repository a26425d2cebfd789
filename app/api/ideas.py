# Idea and conclusion routes

from fastapi import APIRouter, Depends, status

from app.dependencies.auth import get_current_user
from app.dependencies.services import get_idea_service
from app.models import User
from app.schemas import (
    ConclusionCreate,
    ConclusionOut,
    CreatedResponse,
    IdeaCreate,
    IdeaOut,
)
from app.services.idea_service import IdeaService

router = APIRouter(prefix="/api", tags=["Ideas"])


@router.post("/ideias", response_model=CreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_idea(
    idea_data: IdeaCreate,
    current_user: User = Depends(get_current_user),
    idea_service: IdeaService = Depends(get_idea_service),
):
    idea = await idea_service.create_idea(
        current_user.id,
        idea_data.titulo,
        idea_data.categoria,
        idea_data.descricao,
        idea_data.imagem,
    )
    return CreatedResponse(id=idea.id)


@router.get("/ideias", response_model=list[IdeaOut])
async def list_ideas(idea_service: IdeaService = Depends(get_idea_service)):
    return await idea_service.list_ideas()


@router.get("/ideias/{usuario_id}", response_model=list[IdeaOut])
async def list_user_ideas(
    usuario_id: int,
    idea_service: IdeaService = Depends(get_idea_service),
):
    return await idea_service.list_ideas(usuario_id)


@router.post(
    "/conclusoes", response_model=CreatedResponse, status_code=status.HTTP_201_CREATED
)
async def conclude_idea(
    conclusion_data: ConclusionCreate,
    current_user: User = Depends(get_current_user),
    idea_service: IdeaService = Depends(get_idea_service),
):
    """Mark one of the caller's ideas as concluded, awarding its points."""
    conclusion = await idea_service.conclude(
        current_user.id,
        conclusion_data.ideia_id,
        conclusion_data.video,
        conclusion_data.imagens,
        conclusion_data.descricao,
    )
    return CreatedResponse(id=conclusion.id)


@router.get("/conclusoes", response_model=list[ConclusionOut])
async def list_conclusions(idea_service: IdeaService = Depends(get_idea_service)):
    return await idea_service.list_conclusions()


@router.get("/conclusoes/{ideia_id}", response_model=list[ConclusionOut])
async def list_idea_conclusions(
    ideia_id: int,
    idea_service: IdeaService = Depends(get_idea_service),
):
    return await idea_service.list_conclusions(ideia_id)
