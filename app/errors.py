"""
Domain error taxonomy.

Services raise these; ``main.create_app`` turns them into
``{"success": false, "error": ...}`` responses with the matching status code.
"""

from fastapi import status


class AppError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Erro interno"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Campos inválidos ou incompletos"


class WeakSecret(ValidationError):
    default_message = (
        "A senha deve ter ao menos 8 caracteres, com letra maiúscula, "
        "letra minúscula, número e símbolo"
    )


class InvalidOrUsedToken(ValidationError):
    default_message = "O link de confirmação é inválido ou já foi utilizado"


class Conflict(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Registro duplicado"


class DuplicateEmail(Conflict):
    default_message = "Email já cadastrado"


class DuplicateSubmission(Conflict):
    default_message = "Desafio já submetido por este usuário"


class AuthFailure(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Não autenticado"


class InvalidCredentials(AuthFailure):
    default_message = "Email ou senha incorretos"


class AccountNotConfirmed(AuthFailure):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Confirme seu email antes de entrar"


class NotFound(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Registro não encontrado"


class UserNotFound(NotFound):
    default_message = "Usuário não encontrado"


class Forbidden(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Acesso negado"


class InternalError(AppError):
    pass
