# Public profiles and recruiter contact

from fastapi import APIRouter, Depends, status

from app.dependencies.auth import get_current_recruiter
from app.dependencies.services import get_contact_service, get_profile_service
from app.models import User
from app.schemas import ContactCreate, ContactResponse, ProfileResponse
from app.services.contact_service import ContactService
from app.services.profile_service import ProfileService

router = APIRouter(prefix="/api", tags=["Users"])


@router.get("/perfil/{usuario_id}", response_model=ProfileResponse)
async def get_profile(
    usuario_id: int,
    profile_service: ProfileService = Depends(get_profile_service),
):
    """Public profile with ranking position, totals and recent activities."""
    return ProfileResponse(perfil=await profile_service.get_profile(usuario_id))


@router.post(
    "/contato", response_model=ContactResponse, status_code=status.HTTP_201_CREATED
)
async def contact_user(
    contact_data: ContactCreate,
    current_user: User = Depends(get_current_recruiter),
    contact_service: ContactService = Depends(get_contact_service),
):
    contact = await contact_service.contact(
        current_user.id, contact_data.usuario_id, contact_data.mensagem
    )
    return ContactResponse(contato_id=contact.id)
