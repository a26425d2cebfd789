"""Shared helpers for the test modules (imported after conftest sets the environment)."""

import base64
from io import BytesIO

from httpx import AsyncClient
from PIL import Image

from app.db import Database
from app.db_handlers import UserDBHandler
from app.services.email import EmailSender

ADMIN_KEY = "test-admin-key"
STRONG_PASSWORD = "Senha@123"


class RecordingEmailSender(EmailSender):
    """Keeps every message instead of delivering it."""

    def __init__(self, accept: bool = True):
        self.accept = accept
        self.outbox: list[dict] = []

    async def send(self, to, subject, text_body, html_body=None) -> bool:
        self.outbox.append(
            {"to": to, "subject": subject, "text": text_body, "html": html_body}
        )
        return self.accept


def make_data_url(size=(40, 30), color=(200, 30, 30), fmt="PNG") -> str:
    buffer = BytesIO()
    Image.new("RGB", size, color).save(buffer, format=fmt)
    encoded = base64.b64encode(buffer.getvalue()).decode("ascii")
    return f"data:image/{fmt.lower()};base64,{encoded}"


async def register_user(
    client: AsyncClient,
    email: str,
    nome: str = "Ana",
    tipo_usuario: str = "usuario",
    senha: str = STRONG_PASSWORD,
) -> int:
    response = await client.post(
        "/api/registrar",
        json={
            "nome": nome,
            "email": email,
            "senha": senha,
            "tipo_usuario": tipo_usuario,
        },
    )
    assert response.status_code == 201, response.text
    return response.json()["id"]


async def confirm_user(client: AsyncClient, database: Database, email: str) -> None:
    user = await UserDBHandler(database).get_by_email(email)
    response = await client.get(
        "/api/confirmar", params={"token": user.token_confirmacao}
    )
    assert response.status_code == 303, response.text


async def login(client: AsyncClient, email: str, senha: str = STRONG_PASSWORD) -> dict:
    response = await client.post("/api/login", json={"email": email, "senha": senha})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['token']}"}


async def signed_in_user(
    client: AsyncClient,
    database: Database,
    email: str,
    nome: str = "Ana",
    tipo_usuario: str = "usuario",
) -> tuple[int, dict]:
    """Register, confirm and log in; returns the user id and auth headers."""
    user_id = await register_user(client, email, nome=nome, tipo_usuario=tipo_usuario)
    await confirm_user(client, database, email)
    return user_id, await login(client, email)
