"""Archetype catalog.

The catalog is read-only configuration: a built-in default set of
debating archetypes, or a JSON file with a list of archetype definitions
(see ArchetypeDefinition for the schema).
"""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import TypeAdapter

from podium.models.types import (
    ArchetypeDefinition,
    DimensionProfile,
    MinAverageScore,
    MinImprovementRate,
    MinRecentAverage,
    MinSessionCount,
    MinSessionScore,
    MinTotalMinutes,
)

logger = logging.getLogger(__name__)

_catalog_adapter = TypeAdapter(list[ArchetypeDefinition])


def default_catalog() -> list[ArchetypeDefinition]:
    """Return the built-in archetype catalog in display order.

    A new list is built on every call so callers never share instances
    they might be tempted to modify.
    """
    return [
        ArchetypeDefinition(
            id="thinker",
            name="The Thinker",
            icon="brain",
            color="#a3e635",
            description="Measured and methodical. You build arguments brick by brick "
            "and rarely leave a premise unexamined.",
            ideal_profile=DimensionProfile(vocabulary=70, clarity=80, persuasion=60),
        ),
        ArchetypeDefinition(
            id="empath",
            name="The Empath",
            icon="heart",
            color="#f472b6",
            description="You win rooms by understanding them, framing every point "
            "around what your audience cares about.",
            unlock_requirements=[
                MinSessionCount(description="Complete 3 sessions", count=3),
                MinRecentAverage(
                    description="Reach a recent persuasion average of 60",
                    dimension="persuasion",
                    threshold=60,
                ),
            ],
            ideal_profile=DimensionProfile(vocabulary=60, clarity=65, persuasion=85),
        ),
        ArchetypeDefinition(
            id="arbiter",
            name="The Arbiter",
            icon="scale",
            color="#38bdf8",
            description="Balanced and fair-minded. You weigh both sides before "
            "committing and your rebuttals show it.",
            unlock_requirements=[
                MinSessionCount(description="Complete 5 sessions", count=5),
                MinAverageScore(description="Keep an average score of 65", threshold=65),
            ],
            ideal_profile=DimensionProfile(vocabulary=75, clarity=75, persuasion=75),
        ),
        ArchetypeDefinition(
            id="duelist",
            name="The Duelist",
            icon="sword",
            color="#ef4444",
            description="Direct and relentless. You press on every weakness and "
            "thrive under pressure.",
            unlock_requirements=[
                MinSessionCount(description="Complete 5 sessions", count=5),
                MinSessionScore(description="Score 85 or higher in a session", score=85),
            ],
            ideal_profile=DimensionProfile(vocabulary=65, clarity=70, persuasion=90),
        ),
        ArchetypeDefinition(
            id="visionary",
            name="The Visionary",
            icon="lightbulb",
            color="#facc15",
            description="You reframe the question itself, bringing ideas nobody "
            "else at the table considered.",
            unlock_requirements=[
                MinSessionCount(description="Complete 4 sessions", count=4),
                MinImprovementRate(description="Improve by 10% over earlier sessions", percent=10),
            ],
            ideal_profile=DimensionProfile(vocabulary=85, clarity=60, persuasion=75),
        ),
        ArchetypeDefinition(
            id="scholar",
            name="The Scholar",
            icon="book",
            color="#818cf8",
            description="Precise language and deep preparation. Your vocabulary is "
            "your sharpest tool.",
            unlock_requirements=[
                MinSessionCount(description="Complete 8 sessions", count=8),
                MinRecentAverage(
                    description="Reach a recent vocabulary average of 75",
                    dimension="vocabulary",
                    threshold=75,
                ),
            ],
            ideal_profile=DimensionProfile(vocabulary=95, clarity=75, persuasion=60),
        ),
        ArchetypeDefinition(
            id="orator",
            name="The Orator",
            icon="star",
            color="#fb923c",
            description="Commanding and clear. People remember what you said and "
            "how you said it.",
            unlock_requirements=[
                MinSessionCount(description="Complete 10 sessions", count=10),
                MinAverageScore(description="Keep an average score of 80", threshold=80),
                MinTotalMinutes(description="Practice for 60 minutes", minutes=60),
            ],
            ideal_profile=DimensionProfile(vocabulary=85, clarity=90, persuasion=85),
        ),
        ArchetypeDefinition(
            id="strategist",
            name="The Strategist",
            icon="target",
            color="#34d399",
            description="Every point serves a plan. You pick your battles and win "
            "the ones that matter.",
            unlock_requirements=[
                MinSessionCount(description="Complete 15 sessions", count=15),
                MinRecentAverage(
                    description="Reach a recent overall average of 80",
                    dimension="overall",
                    threshold=80,
                ),
                MinSessionScore(
                    description="Score 90 or higher in 3 sessions", score=90, sessions=3
                ),
            ],
            ideal_profile=DimensionProfile(vocabulary=80, clarity=90, persuasion=90),
        ),
    ]


def parse_catalog(data: str | bytes) -> list[ArchetypeDefinition]:
    """Parse a JSON catalog document.

    Args:
        data: JSON list of archetype definitions.

    Returns:
        Archetype definitions in document order.

    Raises:
        pydantic.ValidationError: If the document does not match the schema.
    """
    return _catalog_adapter.validate_json(data)


def load_catalog(path: Path | None = None) -> list[ArchetypeDefinition]:
    """Load an archetype catalog.

    Args:
        path: JSON catalog file. None returns the default catalog.

    Returns:
        Archetype definitions in display order.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        pydantic.ValidationError: If the file does not match the schema.
    """
    if path is None:
        return default_catalog()

    catalog = parse_catalog(Path(path).read_bytes())
    logger.info(f"Loaded {len(catalog)} archetypes from {path}")
    return catalog


def dump_catalog(catalog: list[ArchetypeDefinition]) -> bytes:
    """Serialize a catalog to JSON (inverse of parse_catalog)."""
    return _catalog_adapter.dump_json(catalog, indent=2)
