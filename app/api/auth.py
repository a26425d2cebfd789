# Account API routes: registration, email confirmation, login and logout

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import PlainTextResponse, RedirectResponse
from sqlalchemy.exc import SQLAlchemyError

from app.config import settings
from app.dependencies.auth import get_current_user
from app.dependencies.services import get_account_service, get_confirmation_service
from app.errors import InvalidOrUsedToken
from app.models import User
from app.schemas import (
    LoginResponse,
    MeResponse,
    RegisterResponse,
    SuccessResponse,
    UserLogin,
    UserPublic,
    UserRegister,
)
from app.services.account_service import AccountService
from app.services.confirmation_service import ConfirmationService
from app.utils.auth import create_access_token
from app.utils.logger import setup_logger

logger = setup_logger("api.auth")

router = APIRouter(prefix="/api", tags=["Authentication"])


@router.post(
    "/registrar", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED
)
async def register_user(
    user_data: UserRegister,
    account_service: AccountService = Depends(get_account_service),
):
    """Register an unconfirmed account and mail its confirmation link."""
    user = await account_service.register(
        nome=user_data.nome,
        email=user_data.email,
        senha=user_data.senha,
        tipo_usuario=user_data.tipo_usuario,
        foto=user_data.foto,
    )
    return RegisterResponse(id=user.id)


@router.post("/login", response_model=LoginResponse)
async def login_user(
    user_data: UserLogin,
    account_service: AccountService = Depends(get_account_service),
):
    """Authenticate a confirmed user and return a JWT for the write endpoints."""
    user = await account_service.login(user_data.email, user_data.senha)
    access_token = create_access_token(data={"sub": str(user.id)})
    return LoginResponse(usuario=UserPublic.model_validate(user), token=access_token)


@router.post("/logout", response_model=SuccessResponse)
async def logout_user(
    current_user: User = Depends(get_current_user),
    account_service: AccountService = Depends(get_account_service),
):
    await account_service.logout(current_user.id)
    return SuccessResponse()


@router.get("/me", response_model=MeResponse)
async def get_current_user_info(current_user: User = Depends(get_current_user)):
    return MeResponse(usuario=UserPublic.model_validate(current_user))


async def _confirm(token: str, confirmation: ConfirmationService):
    # Opened from an email client, so failures are plain text rather than JSON
    try:
        await confirmation.redeem(token)
    except InvalidOrUsedToken as e:
        return PlainTextResponse(e.message, status_code=status.HTTP_400_BAD_REQUEST)
    except SQLAlchemyError as e:
        logger.error(f"Database error while confirming account: {e}", exc_info=True)
        return PlainTextResponse(
            "Erro ao confirmar conta",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    return RedirectResponse(
        f"{settings.frontend_url.rstrip('/')}/login.html?status=success",
        status_code=status.HTTP_303_SEE_OTHER,
    )


@router.get("/confirmar")
async def confirm_account_query(
    token: str = Query(default=""),
    confirmation: ConfirmationService = Depends(get_confirmation_service),
):
    """Confirm an account from the link sent by email."""
    return await _confirm(token, confirmation)


@router.get("/confirmar/{token}")
async def confirm_account(
    token: str,
    confirmation: ConfirmationService = Depends(get_confirmation_service),
):
    return await _confirm(token, confirmation)
