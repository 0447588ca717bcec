"""Persona classification.

Evaluates each archetype's unlock requirements against aggregated stats
and history, then marks the single best-matching unlocked archetype as
active. Output order is catalog order (display order, not a ranking).

Active selection:
- only unlocked archetypes are candidates
- highest scorer value wins
- ties go to the archetype that comes first in the catalog
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass

import numpy as np

from podium.core.errors import InvalidArgumentError
from podium.models.types import (
    ArchetypeDefinition,
    ArchetypeState,
    SessionRecord,
    StatsSnapshot,
    UnlockRequirement,
)
from podium.persona.requirements import CustomPredicate, evaluate_requirement

logger = logging.getLogger(__name__)

ArchetypeScorer = Callable[
    [ArchetypeDefinition, StatsSnapshot, Sequence[SessionRecord]], float
]

# Largest possible distance between two points in [0, 100]^3
MAX_PROFILE_DISTANCE = math.sqrt(3) * 100.0


@dataclass
class _Evaluation:
    """Internal per-archetype result before active selection."""

    archetype: ArchetypeDefinition
    unmet: list[UnlockRequirement]
    match_score: float | None


def profile_closeness(
    archetype: ArchetypeDefinition,
    stats: StatsSnapshot,
    history: Sequence[SessionRecord],
) -> float:
    """Default scorer: closeness of recent averages to the ideal profile.

    Args:
        archetype: Archetype to score.
        stats: Aggregated statistics.
        history: Session history (unused by this scorer).

    Returns:
        1 - distance / max_distance in [0, 1]; 0.0 without an ideal profile.
    """
    profile = archetype.ideal_profile
    if profile is None:
        return 0.0

    recent = stats.recent_averages
    actual = np.array([recent.vocabulary, recent.clarity, recent.persuasion], dtype=float)
    ideal = np.array([profile.vocabulary, profile.clarity, profile.persuasion], dtype=float)
    distance = float(np.linalg.norm(actual - ideal))
    return 1.0 - distance / MAX_PROFILE_DISTANCE


def _check_unique_ids(catalog: Sequence[ArchetypeDefinition]) -> None:
    seen: set[str] = set()
    for archetype in catalog:
        if archetype.id in seen:
            raise InvalidArgumentError(f"Duplicate archetype id in catalog: {archetype.id!r}")
        seen.add(archetype.id)


def _select_active(evaluations: list[_Evaluation]) -> int | None:
    """Index of the best unlocked archetype, first in catalog order on ties."""
    best_index: int | None = None
    best_score = -math.inf
    for index, evaluation in enumerate(evaluations):
        # NaN scores stay unlocked but are never active
        if evaluation.match_score is None or math.isnan(evaluation.match_score):
            continue
        # Strict comparison keeps the earliest archetype on ties
        if best_index is None or evaluation.match_score > best_score:
            best_index = index
            best_score = evaluation.match_score
    return best_index


def classify(
    history: Sequence[SessionRecord],
    stats: StatsSnapshot,
    catalog: Sequence[ArchetypeDefinition],
    *,
    scorer: ArchetypeScorer | None = None,
    custom_predicates: Mapping[str, CustomPredicate] | None = None,
) -> list[ArchetypeState]:
    """Classify a user against an archetype catalog.

    Never raises for empty histories or missing sub-scores: those are
    evaluated as zero-valued stats, which locks most requirement-bearing
    archetypes.

    Args:
        history: Sessions ordered most-recent-first.
        stats: StatsSnapshot computed from the same history.
        catalog: Archetype definitions in display order.
        scorer: Ranks unlocked archetypes; defaults to profile_closeness.
        custom_predicates: Registry for custom requirement names.

    Returns:
        One ArchetypeState per catalog entry, in catalog order.

    Raises:
        InvalidArgumentError: On duplicate archetype ids or an unknown
            custom predicate.
    """
    _check_unique_ids(catalog)
    score_fn = scorer or profile_closeness

    evaluations: list[_Evaluation] = []
    for archetype in catalog:
        unmet = [
            requirement
            for requirement in archetype.unlock_requirements
            if not evaluate_requirement(requirement, stats, history, custom_predicates)
        ]
        match_score = None if unmet else float(score_fn(archetype, stats, history))
        evaluations.append(
            _Evaluation(archetype=archetype, unmet=unmet, match_score=match_score)
        )

    active_index = _select_active(evaluations)
    if active_index is None:
        logger.debug("No unlocked archetypes; none active")
    else:
        logger.debug(
            f"Active archetype: {evaluations[active_index].archetype.id} "
            f"(score={evaluations[active_index].match_score:.3f})"
        )

    return [
        ArchetypeState(
            archetype_id=evaluation.archetype.id,
            is_locked=bool(evaluation.unmet),
            unmet_requirements=list(evaluation.unmet),
            is_active=index == active_index,
            match_score=evaluation.match_score,
        )
        for index, evaluation in enumerate(evaluations)
    ]
