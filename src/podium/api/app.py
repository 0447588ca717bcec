"""FastAPI application factory.

API layer:
- Validates inputs, reads the session store
- Returns engine results for the UI
- Forbidden: stats or persona logic of its own, writes to the store
"""

from __future__ import annotations

import logging
from typing import Generator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from podium.core.error_category import describe_error
from podium.core.errors import DataIntegrityError, InvalidArgumentError, PodiumError
from podium.core.settings import Settings, load_settings
from podium.db.repo import DbSession
from podium.db.session import get_session
from podium.models.types import ArchetypeDefinition
from podium.persona.catalog import load_catalog

logger = logging.getLogger(__name__)


def get_settings(request: Request) -> Settings:
    """Dependency returning the app's settings."""
    return request.app.state.settings


def get_catalog(request: Request) -> list[ArchetypeDefinition]:
    """Dependency returning the active archetype catalog."""
    return request.app.state.catalog


def get_db_session(request: Request) -> Generator[DbSession, None, None]:
    """Dependency to get database session.

    Yields:
        Database session that is automatically closed after request.
    """
    session = get_session(request.app.state.settings.db_path)
    try:
        yield session
    finally:
        session.close()


def _status_for(exc: PodiumError) -> int:
    if isinstance(exc, InvalidArgumentError):
        return 422
    if isinstance(exc, DataIntegrityError):
        return 500
    return 400


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create FastAPI application.

    Args:
        settings: Optional settings. Defaults to load_settings().

    Returns:
        Configured FastAPI application.
    """
    settings = settings or load_settings()

    app = FastAPI(
        title="Podium API",
        description="Debate practice session analytics and persona classification",
        version="0.1.0",
    )
    app.state.settings = settings
    app.state.catalog = load_catalog(settings.catalog_path)
    logger.info(
        f"Podium API ready: {len(app.state.catalog)} archetypes, "
        f"recent_window={settings.recent_window}"
    )

    # Add CORS middleware for UI access
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(PodiumError)
    async def podium_error_handler(request: Request, exc: PodiumError) -> JSONResponse:
        """Render engine errors with a user-facing category and message."""
        status_code = _status_for(exc)
        if status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc}")
        description = describe_error(str(exc))
        return JSONResponse(
            status_code=status_code,
            content={"error": description.model_dump(mode="json")},
        )

    # Include routes
    from podium.api.routes import persona, users

    app.include_router(persona.router, prefix="/api")
    app.include_router(users.router, prefix="/api")

    # Health check endpoint
    @app.get("/health")
    def health_check():
        """Health check endpoint."""
        return {"status": "ok"}

    return app


# Default app instance
app = create_app()
