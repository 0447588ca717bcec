"""User API endpoints backed by the session store.

GET /api/users/{user_id}/persona - Stats and archetypes for a stored user
GET /api/users/{user_id}/history - Stored session history
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from podium.api.app import get_catalog, get_db_session, get_settings
from podium.core.settings import Settings
from podium.db import repo
from podium.db.repo import DbSession
from podium.engine.facade import evaluate
from podium.models.types import (
    ArchetypeDefinition,
    EngineConfig,
    PersonaOverview,
    SessionRecord,
)

router = APIRouter()


@router.get("/users/{user_id}/persona", response_model=PersonaOverview)
def get_user_persona(
    user_id: str,
    recent_window: int | None = Query(default=None),
    session: DbSession = Depends(get_db_session),
    catalog: list[ArchetypeDefinition] = Depends(get_catalog),
    settings: Settings = Depends(get_settings),
) -> PersonaOverview:
    """Get persona overview for a stored user.

    The store's persisted summary is returned alongside the computed
    stats, never merged into them.

    Args:
        user_id: User to evaluate.
        recent_window: Optional override of the recent window.
        session: Database session (injected).
        catalog: Active catalog (injected).
        settings: App settings (injected).

    Returns:
        PersonaOverview with persisted summary and engine result.

    Raises:
        HTTPException: 404 if the store knows nothing about the user.
    """
    user_stats = repo.get_user_stats(session, user_id)
    history = repo.get_history(session, user_id)

    if user_stats is None and not history:
        raise HTTPException(status_code=404, detail="User not found")

    window = recent_window if recent_window is not None else settings.recent_window
    result = evaluate(history, catalog, EngineConfig(recent_window=window))

    return PersonaOverview(user_id=user_id, user_stats=user_stats, result=result)


@router.get("/users/{user_id}/history", response_model=list[SessionRecord])
def get_user_history(
    user_id: str,
    limit: int | None = Query(default=None, ge=1),
    session: DbSession = Depends(get_db_session),
) -> list[SessionRecord]:
    """Get a user's stored sessions, most recent first."""
    return repo.get_history(session, user_id, limit=limit)
