"""Persona API endpoints.

GET  /api/catalog - Active archetype catalog
POST /api/persona/evaluate - Evaluate a supplied session history
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from podium.api.app import get_catalog, get_settings
from podium.core.settings import Settings
from podium.engine.facade import evaluate
from podium.models.types import (
    ArchetypeDefinition,
    EngineConfig,
    EngineResult,
    EvaluateRequest,
)

router = APIRouter()


@router.get("/catalog", response_model=list[ArchetypeDefinition])
def get_archetype_catalog(
    catalog: list[ArchetypeDefinition] = Depends(get_catalog),
) -> list[ArchetypeDefinition]:
    """Return the archetype catalog in display order."""
    return catalog


@router.post("/persona/evaluate", response_model=EngineResult)
def evaluate_history(
    body: EvaluateRequest,
    catalog: list[ArchetypeDefinition] = Depends(get_catalog),
    settings: Settings = Depends(get_settings),
) -> EngineResult:
    """Evaluate stats and archetypes for a history supplied by the client.

    Args:
        body: History (most-recent-first) and optional engine config.
        catalog: Active catalog (injected).
        settings: App settings (injected).

    Returns:
        EngineResult for the history.
    """
    config = body.config or EngineConfig(recent_window=settings.recent_window)
    return evaluate(body.history, catalog, config)
