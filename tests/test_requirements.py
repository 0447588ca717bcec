"""Tests for unlock requirement evaluation."""

import pytest

from podium.aggregation.stats import compute_stats
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
)
from podium.persona.requirements import evaluate_requirement


def _check(requirement, history, custom_predicates=None):
    stats = compute_stats(history)
    return evaluate_requirement(requirement, stats, history, custom_predicates)


class TestSessionCount:
    """Test min_session_count."""

    def test_met_at_threshold(self, make_history):
        """Exactly `count` sessions satisfies the requirement."""
        req = MinSessionCount(description="3 sessions", count=3)
        assert _check(req, make_history([50, 50, 50])) is True

    def test_unmet_below_threshold(self, make_history):
        """Fewer sessions do not."""
        req = MinSessionCount(description="3 sessions", count=3)
        assert _check(req, make_history([50, 50])) is False

    def test_zero_count_always_met(self):
        """count=0 is met even by an empty history."""
        req = MinSessionCount(description="none", count=0)
        assert _check(req, []) is True


class TestAverageScore:
    """Test min_average_score."""

    def test_met(self, make_history):
        """Average 75 meets threshold 75."""
        req = MinAverageScore(description="avg 75", threshold=75)
        assert _check(req, make_history([80, 70])) is True

    def test_unmet(self, make_history):
        """Average 74.5 misses threshold 75."""
        req = MinAverageScore(description="avg 75", threshold=75)
        assert _check(req, make_history([80, 69])) is False

    def test_empty_history_unmet(self):
        """Empty history evaluates against an average of 0."""
        req = MinAverageScore(description="avg 1", threshold=1)
        assert _check(req, []) is False


class TestImprovementRate:
    """Test min_improvement_rate."""

    def test_met(self, make_history):
        """133% improvement meets a 100% requirement."""
        req = MinImprovementRate(description="+100%", percent=100)
        assert _check(req, make_history([80, 60, 40, 20])) is True

    def test_unmet(self, make_history):
        """A decline misses a positive requirement."""
        req = MinImprovementRate(description="+10%", percent=10)
        assert _check(req, make_history([20, 40, 60, 80])) is False

    def test_not_computable_never_met(self, make_history):
        """Short histories miss even a negative threshold."""
        req = MinImprovementRate(description="anything", percent=-100)
        assert _check(req, make_history([50, 50])) is False

    def test_zero_older_average_never_met(self, make_history):
        """A non-computable rate does not satisfy a 0% threshold."""
        req = MinImprovementRate(description="0%", percent=0)
        assert _check(req, make_history([50, 50, 0, 0])) is False


class TestRecentAverage:
    """Test min_recent_average."""

    def test_dimension_met(self, make_history):
        """Recent clarity of 70 meets threshold 70."""
        req = MinRecentAverage(description="clarity 70", dimension="clarity", threshold=70)
        assert _check(req, make_history([60, 60], clarity=70)) is True

    def test_dimension_unmet_when_missing(self, make_history):
        """Unmeasured sub-scores count as 0."""
        req = MinRecentAverage(description="clarity 1", dimension="clarity", threshold=1)
        assert _check(req, make_history([60, 60])) is False

    def test_overall_dimension(self, make_history):
        """overall uses the mean of the three recent averages."""
        history = make_history([60, 60], vocabulary=90, clarity=60, persuasion=60)
        met = MinRecentAverage(description="overall 70", dimension="overall", threshold=70)
        unmet = MinRecentAverage(description="overall 71", dimension="overall", threshold=71)
        assert _check(met, history) is True
        assert _check(unmet, history) is False


class TestOtherKinds:
    """Test win rate, minutes and per-session score requirements."""

    def test_win_rate(self, make_history):
        """5 sessions -> win rate 3.5."""
        history = make_history([50] * 5)
        assert _check(MinWinRate(description="3.5", threshold=3.5), history) is True
        assert _check(MinWinRate(description="3.6", threshold=3.6), history) is False

    def test_total_minutes(self, make_history):
        """3 sessions of 5 minutes -> 15 minutes."""
        history = make_history([50, 50, 50], duration_seconds=300)
        assert _check(MinTotalMinutes(description="15", minutes=15), history) is True
        assert _check(MinTotalMinutes(description="16", minutes=16), history) is False

    def test_session_score_single(self, make_history):
        """One session at or above the score is enough by default."""
        req = MinSessionScore(description="one 85", score=85)
        assert _check(req, make_history([60, 85, 70])) is True
        assert _check(req, make_history([60, 84, 70])) is False

    def test_session_score_multiple(self, make_history):
        """`sessions` counts qualifying sessions across the whole history."""
        req = MinSessionScore(description="two 90s", score=90, sessions=2)
        assert _check(req, make_history([95, 60, 70, 90])) is True
        assert _check(req, make_history([95, 60, 70, 89])) is False


class TestCustomRequirement:
    """Test pluggable custom predicates."""

    def test_registered_predicate_called(self, make_history):
        """Custom predicates receive stats and history."""
        calls = []

        def long_topic(stats, history):
            calls.append((stats.total_sessions, len(history)))
            return any(len(s.topic) > 5 for s in history)

        req = CustomRequirement(description="long topics", predicate="long_topic")
        history = make_history([50, 60])
        assert _check(req, history, {"long_topic": long_topic}) is True
        assert calls == [(2, 2)]

    def test_predicate_result_is_bool(self, make_history):
        """Truthy predicate results are normalized to bool."""
        req = CustomRequirement(description="count", predicate="count")
        result = _check(req, make_history([50]), {"count": lambda s, h: len(h)})
        assert result is True

    def test_unknown_predicate_raises(self, make_history):
        """Unregistered names raise InvalidArgumentError."""
        req = CustomRequirement(description="missing", predicate="missing")
        with pytest.raises(InvalidArgumentError):
            _check(req, make_history([50]))
