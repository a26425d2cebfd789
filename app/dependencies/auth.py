"""
Authentication dependencies for FastAPI route protection.
"""

from fastapi import Depends, Header
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.config import settings
from app.db import Database, get_database
from app.db_handlers import UserDBHandler
from app.errors import AuthFailure, Forbidden
from app.models import User
from app.utils.auth import extract_user_id_from_token

# HTTP Bearer token extraction; missing headers are reported as AuthFailure
security = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    database: Database = Depends(get_database),
) -> User:
    """
    Dependency to get the current authenticated user from JWT token.
    """
    if credentials is None:
        raise AuthFailure("Token de acesso ausente")

    user_id = extract_user_id_from_token(credentials.credentials)
    if user_id is None:
        raise AuthFailure("Token de acesso inválido ou expirado")

    user = await UserDBHandler(database).get(user_id)
    if user is None:
        raise AuthFailure("Usuário não encontrado")

    return user


async def get_current_recruiter(
    current_user: User = Depends(get_current_user),
) -> User:
    """Dependency that only lets recruiter accounts through."""
    if not current_user.is_recruiter:
        raise Forbidden("Apenas recrutadores podem realizar esta ação")
    return current_user


async def require_admin_key(x_admin_key: str | None = Header(default=None)) -> None:
    """Guard for manual score adjustments; disabled when ADMIN_API_KEY is unset."""
    if not settings.admin_api_key or x_admin_key != settings.admin_api_key:
        raise Forbidden()
