"""Unlock requirement evaluation.

Requirements are data (a closed set of tagged variants from
models.types); this module maps each kind to a boolean over the stats
snapshot and the raw session history. The "custom" kind is resolved by
name from a caller-supplied registry of predicates.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence

from podium.core.errors import InvalidArgumentError
from podium.models.types import (
    CustomRequirement,
    MinAverageScore,
    MinImprovementRate,
    MinRecentAverage,
    MinSessionCount,
    MinSessionScore,
    MinTotalMinutes,
    MinWinRate,
    SessionRecord,
    StatsSnapshot,
    UnlockRequirement,
)

CustomPredicate = Callable[[StatsSnapshot, Sequence[SessionRecord]], bool]


def _recent_average(stats: StatsSnapshot, dimension: str) -> float:
    if dimension == "overall":
        return float(stats.recent_overall_average)
    return float(getattr(stats.recent_averages, dimension))


def evaluate_requirement(
    requirement: UnlockRequirement,
    stats: StatsSnapshot,
    history: Sequence[SessionRecord],
    custom_predicates: Mapping[str, CustomPredicate] | None = None,
) -> bool:
    """Check whether a single unlock requirement is met.

    Args:
        requirement: Requirement to evaluate.
        stats: Aggregated statistics for the history.
        history: Sessions ordered most-recent-first.
        custom_predicates: Registry for CustomRequirement names.

    Returns:
        True if the requirement is met.

    Raises:
        InvalidArgumentError: If a custom predicate name is not registered.
    """
    if isinstance(requirement, MinSessionCount):
        return stats.total_sessions >= requirement.count

    if isinstance(requirement, MinAverageScore):
        return stats.overall_average_score >= requirement.threshold

    if isinstance(requirement, MinImprovementRate):
        # Not computable never satisfies an improvement threshold
        return (
            stats.improvement_computable
            and stats.improvement_rate_percent >= requirement.percent
        )

    if isinstance(requirement, MinRecentAverage):
        return _recent_average(stats, requirement.dimension) >= requirement.threshold

    if isinstance(requirement, MinWinRate):
        return stats.win_rate >= requirement.threshold

    if isinstance(requirement, MinTotalMinutes):
        return stats.total_minutes >= requirement.minutes

    if isinstance(requirement, MinSessionScore):
        qualifying = sum(1 for s in history if s.score >= requirement.score)
        return qualifying >= requirement.sessions

    if isinstance(requirement, CustomRequirement):
        registry = custom_predicates or {}
        predicate = registry.get(requirement.predicate)
        if predicate is None:
            raise InvalidArgumentError(
                f"Unknown custom predicate: {requirement.predicate!r}"
            )
        return bool(predicate(stats, history))

    raise InvalidArgumentError(f"Unsupported requirement: {requirement!r}")
