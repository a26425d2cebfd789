"""
This file contains shared fixtures and configuration for the test suite.

Pytest will automatically discover and use the fixtures defined in this file.

Every test gets its own file-backed SQLite database (through aiosqlite) so the
production code paths, including concurrent sessions, run unchanged.
"""

import os
import tempfile

# Configure the environment before any app module reads settings.
_TEST_ROOT = tempfile.mkdtemp(prefix="cybermaker-tests-")
os.environ.setdefault("LOG_DIR", os.path.join(_TEST_ROOT, "logs"))
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///" + os.path.join(_TEST_ROOT, "app.db")
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["EMAIL_PROVIDER"] = "console"
os.environ["UPLOAD_DIR"] = os.path.join(_TEST_ROOT, "uploads")
os.environ["ADMIN_API_KEY"] = "test-admin-key"
os.environ["PUBLIC_API_URL"] = "http://api.test"
os.environ["FRONTEND_URL"] = "http://front.test"
os.environ.pop("STATIC_DIR", None)

from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from fastapi import FastAPI
from helpers import RecordingEmailSender
from httpx import ASGITransport, AsyncClient

from app.db import Database
from app.utils.images import ImageStore


@pytest_asyncio.fixture
async def database(tmp_path) -> AsyncGenerator[Database, None]:
    """A fresh database with every table created."""
    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", command_timeout=30)
    await db.init_models()
    yield db
    await db.close()


@pytest.fixture
def email_sender() -> RecordingEmailSender:
    return RecordingEmailSender()


@pytest.fixture
def image_store(tmp_path) -> ImageStore:
    return ImageStore(tmp_path / "uploads")


@pytest.fixture
def app(database, email_sender, image_store) -> FastAPI:
    """
    Create a new application instance wired to the test resources.
    """
    # Import the factory function here so settings are read after the env setup.
    from main import create_app

    return create_app(
        database=database, email_sender=email_sender, image_store=image_store
    )


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """
    HTTP client bound to the app. ASGITransport skips the lifespan, which is
    fine because the database fixture already created the schema.
    """
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as c:
        yield c
