"""Session statistics aggregation.

Computes rolling averages, win rate and improvement rate from a session
history ordered most-recent-first. Pure functions - no IO, no caching.

Rounding follows half-up semantics (floor(x + 0.5)) so that displayed
numbers match the dashboard exactly; Python's round() rounds half to even
and is not used here.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence

import numpy as np

from podium.core.errors import InvalidArgumentError, UndefinedMetricError
from podium.models.types import (
    ImprovementDirection,
    RecentAverages,
    SessionRecord,
    StatsSnapshot,
)

logger = logging.getLogger(__name__)

DEFAULT_RECENT_WINDOW = 10
WIN_RATE_PER_SESSION = 0.7
MIN_SESSIONS_FOR_IMPROVEMENT = 4
SCORE_TREND_LENGTH = 5


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves rounding toward +infinity."""
    return math.floor(value + 0.5)


def _mean(values: Sequence[int]) -> float:
    """Arithmetic mean, 0.0 for an empty sequence."""
    if not values:
        return 0.0
    return float(np.mean(values))


def compute_win_rate(total_sessions: int) -> float:
    """Session-count derived win rate.

    Every session contributes 0.7, rounded to 2 decimal places. This is a
    placeholder metric, not a real win/loss ratio.

    Args:
        total_sessions: Number of sessions in history.

    Returns:
        round(total_sessions * 0.7 * 100) / 100, or 0.0 with no sessions.
    """
    if total_sessions <= 0:
        return 0.0
    return round_half_up(total_sessions * WIN_RATE_PER_SESSION * 100) / 100


def compute_recent_averages(window: Sequence[SessionRecord]) -> RecentAverages:
    """Average each sub-score over the recent window.

    Missing sub-scores contribute 0 to the sum but still count in the
    divisor, so sparse data biases the average down.

    Args:
        window: Most recent sessions.

    Returns:
        RecentAverages with rounded integer averages (0 for an empty window).
    """
    if not window:
        return RecentAverages()

    size = len(window)

    def average(values: list[int | None]) -> int:
        total = sum(v if v is not None else 0 for v in values)
        return round_half_up(total / size)

    return RecentAverages(
        vocabulary=average([s.vocabulary_score for s in window]),
        clarity=average([s.clarity_score for s in window]),
        persuasion=average([s.persuasion_score for s in window]),
    )


def compute_improvement_rate(scores: Sequence[int]) -> int:
    """Percentage change from the older half of history to the recent half.

    The first half of `scores` is the recent half (history is
    most-recent-first); with an odd length the extra score goes to the
    older half.

    Args:
        scores: Session scores, most-recent-first, at least 4 entries.

    Returns:
        round(((recent_avg - older_avg) / older_avg) * 100).

    Raises:
        InvalidArgumentError: If fewer than 4 scores are given.
        UndefinedMetricError: If the older half averages exactly 0.
    """
    if len(scores) < MIN_SESSIONS_FOR_IMPROVEMENT:
        raise InvalidArgumentError(
            f"improvement rate needs at least {MIN_SESSIONS_FOR_IMPROVEMENT} sessions, "
            f"got {len(scores)}"
        )

    half = len(scores) // 2
    recent_avg = _mean(scores[:half])
    older_avg = _mean(scores[half:])

    if older_avg == 0:
        raise UndefinedMetricError("older half average score is 0")

    return round_half_up(((recent_avg - older_avg) / older_avg) * 100)


def _direction(rate: int) -> ImprovementDirection:
    if rate > 0:
        return "up"
    if rate < 0:
        return "down"
    return "flat"


def _validate_window(recent_window: int) -> None:
    if isinstance(recent_window, bool) or not isinstance(recent_window, int):
        raise InvalidArgumentError(
            f"recent_window must be an integer, got {type(recent_window).__name__}"
        )
    if recent_window < 1:
        raise InvalidArgumentError(f"recent_window must be >= 1, got {recent_window}")


def compute_stats(
    history: Sequence[SessionRecord],
    recent_window: int = DEFAULT_RECENT_WINDOW,
) -> StatsSnapshot:
    """Compute aggregate statistics for a session history.

    Args:
        history: Sessions ordered most-recent-first.
        recent_window: Number of most recent sessions used for the
            per-dimension averages (>= 1).

    Returns:
        StatsSnapshot. Empty histories yield all-zero statistics.

    Raises:
        InvalidArgumentError: If recent_window is not a positive integer.
    """
    _validate_window(recent_window)

    scores = [s.score for s in history]
    total_sessions = len(scores)

    # Improvement rate: 0 and not computable for short histories or a
    # zero older-half average
    improvement_rate = 0
    improvement_computable = False
    direction: ImprovementDirection | None = None
    if total_sessions >= MIN_SESSIONS_FOR_IMPROVEMENT:
        try:
            improvement_rate = compute_improvement_rate(scores)
            improvement_computable = True
            direction = _direction(improvement_rate)
        except UndefinedMetricError as e:
            logger.debug(f"Improvement rate not computable: {e}")

    window = list(history[:recent_window])
    recent = compute_recent_averages(window)
    recent_overall = (
        round_half_up((recent.vocabulary + recent.clarity + recent.persuasion) / 3)
        if window
        else 0
    )

    trend = [s.score for s in history[:SCORE_TREND_LENGTH]]
    trend.reverse()

    return StatsSnapshot(
        overall_average_score=_mean(scores),
        win_rate=compute_win_rate(total_sessions),
        improvement_rate_percent=improvement_rate,
        improvement_computable=improvement_computable,
        improvement_direction=direction,
        recent_averages=recent,
        recent_overall_average=recent_overall,
        recent_window_size=len(window),
        total_sessions=total_sessions,
        total_minutes=sum(s.duration_seconds // 60 for s in history),
        score_trend=trend,
    )
