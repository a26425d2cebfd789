"""
Account lifecycle: registration, login and logout.

Registration stores an unconfirmed user with a bcrypt hash and a fresh
confirmation token, then mails the confirmation link. Login verifies the
password before looking at the confirmation flag, so an unconfirmed account
cannot be told apart from a missing one without the right password.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from app.config import settings
from app.db_handlers import UserDBHandler
from app.errors import (
    AccountNotConfirmed,
    InvalidCredentials,
    ValidationError,
    WeakSecret,
)
from app.models import User, UserRole
from app.services.confirmation_service import ConfirmationService
from app.utils.auth import (
    fits_bcrypt,
    get_password_hash,
    is_strong_password,
    verify_password,
)
from app.utils.images import AVATAR, ImageStore
from app.utils.logger import mask_email, setup_logger

if TYPE_CHECKING:
    from app.db import Database

logger = setup_logger("account_service")


class AccountService:
    def __init__(
        self,
        database: Database,
        confirmation: ConfirmationService,
        image_store: ImageStore,
        *,
        enforce_password_policy: bool = settings.enforce_password_policy,
        bcrypt_rounds: int = settings.bcrypt_rounds,
    ):
        self.database = database
        self.user_handler = UserDBHandler(database)
        self.confirmation = confirmation
        self.image_store = image_store
        self.enforce_password_policy = enforce_password_policy
        self.bcrypt_rounds = bcrypt_rounds

    def check_password(self, senha: str) -> None:
        if not fits_bcrypt(senha):
            raise ValidationError("A senha deve ter no máximo 72 bytes")
        if self.enforce_password_policy and not is_strong_password(senha):
            raise WeakSecret()

    async def register(
        self,
        nome: str,
        email: str,
        senha: str,
        tipo_usuario: UserRole = UserRole.STANDARD,
        foto: str | None = None,
    ) -> User:
        """
        Create an unconfirmed account and send its confirmation email.

        Raises ``WeakSecret`` or ``ValidationError`` before touching the
        store, and ``DuplicateEmail`` if the address is taken.
        """
        self.check_password(senha)

        senha_hash = await asyncio.to_thread(
            get_password_hash, senha, self.bcrypt_rounds
        )
        avatar_path = await self.image_store.save(foto, AVATAR)
        token = self.confirmation.issue_token()

        try:
            user = await self.user_handler.create_user(
                nome=nome,
                email=email,
                senha_hash=senha_hash,
                tipo_usuario=tipo_usuario,
                token_confirmacao=token,
                foto=avatar_path,
            )
        except Exception:
            self.image_store.discard(avatar_path)
            raise

        logger.info(
            f"Registered user {user.id} ({mask_email(email)}) as {tipo_usuario.value}"
        )
        await self.confirmation.send_confirmation_email(email, nome, token)
        return user

    async def login(self, email: str, senha: str) -> User:
        """Return the confirmed user matching the credentials."""
        user = await self.user_handler.get_by_email(email)
        password_ok = await asyncio.to_thread(
            verify_password,
            senha,
            user.senha if user else None,
            self.bcrypt_rounds,
        )
        if user is None or not password_ok:
            logger.info(f"Failed login for {mask_email(email)}")
            raise InvalidCredentials()

        if not user.confirmado:
            raise AccountNotConfirmed()

        await self.user_handler.set_online(user.id, True)
        user.online = True
        logger.info(f"User {user.id} logged in")
        return user

    async def logout(self, user_id: int) -> None:
        await self.user_handler.set_online(user_id, False)
