# Challenge routes: recruiters post challenges, users submit completed work

from fastapi import APIRouter, Depends, status

from app.dependencies.auth import get_current_recruiter, get_current_user
from app.dependencies.services import get_challenge_service
from app.models import User
from app.schemas import (
    ChallengeCreate,
    ChallengeListResponse,
    CreatedResponse,
    SubmissionCreate,
    SubmissionResponse,
)
from app.services.challenge_service import ChallengeService

router = APIRouter(prefix="/api", tags=["Challenges"])


@router.post(
    "/desafios", response_model=CreatedResponse, status_code=status.HTTP_201_CREATED
)
async def create_challenge(
    challenge_data: ChallengeCreate,
    current_user: User = Depends(get_current_recruiter),
    challenge_service: ChallengeService = Depends(get_challenge_service),
):
    challenge = await challenge_service.post_challenge(
        current_user.id,
        challenge_data.titulo,
        challenge_data.descricao,
        challenge_data.area,
    )
    return CreatedResponse(id=challenge.id)


@router.get("/desafios", response_model=ChallengeListResponse)
async def list_challenges(
    challenge_service: ChallengeService = Depends(get_challenge_service),
):
    return ChallengeListResponse(desafios=await challenge_service.list_challenges())


@router.post(
    "/atividades/submeter",
    response_model=SubmissionResponse,
    status_code=status.HTTP_201_CREATED,
)
async def submit_challenge(
    submission: SubmissionCreate,
    current_user: User = Depends(get_current_user),
    challenge_service: ChallengeService = Depends(get_challenge_service),
):
    """
    Submit a link for a challenge.

    The activity is stored as completed and the submission points are added to
    the user's score in the same transaction.
    """
    activity = await challenge_service.submit(
        current_user.id, submission.desafio_id, submission.link
    )
    return SubmissionResponse(
        message=f"Desafio submetido! +{challenge_service.submission_award} pontos",
        atividade_id=activity.id,
    )
