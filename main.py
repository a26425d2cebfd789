#!/usr/bin/env python3

"""
Main application entry point for the CyberMaker API.

Architecture: FastAPI application over an async SQLAlchemy database, with an
email sender for account confirmation and a local image store for uploads.
Key Features: Lifecycle management, database health checks, error handling,
CORS configuration, static uploads and single-page frontend fallback.
"""

import asyncio
import sys

# Add this block to switch asyncio event loop policy on Windows
if sys.platform == "win32":
    asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())

from contextlib import asynccontextmanager
from pathlib import Path

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy.exc import SQLAlchemyError

from app.api.auth import router as auth_router
from app.api.challenges import router as challenges_router
from app.api.community import router as community_router
from app.api.ideas import router as ideas_router
from app.api.journal import router as journal_router
from app.api.ranking import router as ranking_router
from app.api.users import router as users_router
from app.config import settings
from app.db import Database, create_database
from app.errors import AppError, InternalError
from app.services.email import EmailSender, create_email_sender
from app.utils.images import UPLOADS_URL_PREFIX, ImageStore
from app.utils.logger import setup_logger

logger = setup_logger("main")


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code, content={"success": False, "error": message}
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Create the database handle (unless one was injected), make sure the schema
    exists and the server is reachable, and dispose of the pool on shutdown.
    """
    logger.info("Application startup...")
    owns_database = app.state.database is None
    try:
        if owns_database:
            app.state.database = create_database()

        logger.info("Initializing database...")
        await app.state.database.init_models()
        logger.info("Database initialization complete.")

        logger.info("Checking database connectivity...")
        if await app.state.database.check_connection():
            logger.info("Database connectivity confirmed.")
        else:
            logger.critical("Database connectivity check failed.")
            raise SystemExit("Database connection failed.")

    except (SQLAlchemyError, OSError, RuntimeError, ValueError) as e:
        logger.critical(f"Startup error: {e}")
        raise SystemExit(f"Startup failed: {e}") from e

    logger.info("CyberMaker API startup successful.")
    yield

    logger.info("CyberMaker API shutdown...")
    if owns_database:
        await app.state.database.close()
    logger.info("Shutdown complete.")


def register_exception_handlers(app: FastAPI):
    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
        return _error_response(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        # loc is ("body", field) for body fields and ("body",) for a missing body
        locations = [error.get("loc", ()) for error in errors]
        fields = [str(loc[-1]) for loc in locations if len(loc) > 1]
        message = "Campos inválidos ou incompletos"
        if fields:
            message = f"{message}: {', '.join(dict.fromkeys(fields))}"
        logger.debug(f"Rejected request to {request.url.path}: {errors}")
        return _error_response(status.HTTP_400_BAD_REQUEST, message)

    @app.exception_handler(SQLAlchemyError)
    async def database_error_handler(request: Request, exc: SQLAlchemyError):
        logger.error(
            f"Database error on {request.method} {request.url.path}: {exc}",
            exc_info=True,
        )
        return _error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR, InternalError.default_message
        )

    @app.exception_handler(OSError)
    async def oserror_exception_handler(request: Request, exc: OSError):
        # TimeoutError is a subclass of OSError
        logger.error(
            f"OSError caught on {request.url.path}: {exc}, errno: {exc.errno}",
            exc_info=True,
        )
        return _error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR, InternalError.default_message
        )


def mount_frontend(app: FastAPI, image_store: ImageStore):
    app.mount(
        UPLOADS_URL_PREFIX,
        StaticFiles(directory=image_store.upload_dir),
        name="uploads",
    )

    static_dir = Path(settings.static_dir) if settings.static_dir else None

    @app.get("/{full_path:path}", include_in_schema=False)
    async def serve_frontend(full_path: str):
        """Serve frontend files, falling back to index.html for client routes."""
        if static_dir is None or full_path.startswith("api/"):
            return _error_response(status.HTTP_404_NOT_FOUND, "Recurso não encontrado")

        candidate = (static_dir / full_path).resolve()
        if (
            full_path
            and candidate.is_file()
            and candidate.is_relative_to(static_dir.resolve())
        ):
            return FileResponse(candidate)

        index = static_dir / "index.html"
        if index.is_file():
            return FileResponse(index)
        return _error_response(status.HTTP_404_NOT_FOUND, "Recurso não encontrado")


def create_app(
    database: Database | None = None,
    email_sender: EmailSender | None = None,
    image_store: ImageStore | None = None,
):
    app = FastAPI(title="CyberMaker API", lifespan=lifespan)

    app.state.database = database
    app.state.email_sender = email_sender or create_email_sender()
    app.state.image_store = image_store or ImageStore(settings.upload_dir)

    register_exception_handlers(app)

    app.include_router(auth_router)
    app.include_router(ranking_router)
    app.include_router(challenges_router)
    app.include_router(ideas_router)
    app.include_router(journal_router)
    app.include_router(community_router)
    app.include_router(users_router)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    # Registered last so it never shadows an API route
    mount_frontend(app, app.state.image_store)

    return app


app = create_app()


def main():
    """Start the FastAPI application with uvicorn."""
    port = int(settings.server_port)
    host = settings.server_host

    logger.info(f"Starting CyberMaker API server on {host}:{port}")

    try:
        uvicorn.run(
            "main:app" if settings.server_workers > 1 else app,
            host=host,
            port=port,
            workers=settings.server_workers,
        )
    except (OSError, SystemExit) as e:
        logger.error(f"Error starting server: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
