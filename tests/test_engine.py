"""Tests for the engine facade and the caller-owned evaluation cache."""

from concurrent.futures import ThreadPoolExecutor

import pytest

from podium.core.errors import InvalidArgumentError
from podium.engine.facade import EvaluationCache, evaluate, resolve_config
from podium.models.types import EngineConfig, EngineResult


class TestEvaluate:
    """Test evaluate()."""

    def test_combines_stats_and_archetypes(self, make_history, catalog):
        """Result carries stats plus one state per catalog entry."""
        history = make_history([80, 60, 40, 20])
        result = evaluate(history, catalog)

        assert isinstance(result, EngineResult)
        assert result.stats.improvement_rate_percent == 133
        assert [s.archetype_id for s in result.archetypes] == [a.id for a in catalog]

    def test_active_archetype_id_matches_state(self, make_history, catalog):
        """active_archetype_id is the id of the single active state."""
        result = evaluate(make_history([70, 70], vocabulary=70, clarity=80), catalog)
        active = [s.archetype_id for s in result.archetypes if s.is_active]
        assert active == [result.active_archetype_id]

    def test_empty_history(self, catalog):
        """Empty history still produces a full result."""
        result = evaluate([], catalog)
        assert result.stats.total_sessions == 0
        assert result.active_archetype_id == "thinker"

    def test_empty_catalog_no_active(self, make_history):
        """No archetypes -> no active archetype."""
        result = evaluate(make_history([50]), [])
        assert result.archetypes == []
        assert result.active_archetype_id is None

    def test_default_window(self, make_record, catalog):
        """No config uses a recent window of 10."""
        history = [make_record(50, index=i) for i in range(15)]
        assert evaluate(history, catalog).stats.recent_window_size == 10

    def test_config_mapping(self, make_history, catalog):
        """A plain mapping is accepted as config."""
        result = evaluate(make_history([50] * 5), catalog, {"recent_window": 3})
        assert result.stats.recent_window_size == 3

    def test_invalid_window_rejected(self, make_history, catalog):
        """recent_window < 1 is reported, not coerced."""
        with pytest.raises(InvalidArgumentError):
            evaluate(make_history([50]), catalog, EngineConfig(recent_window=0))

    def test_invalid_config_mapping_rejected(self, catalog):
        """Unparseable config raises InvalidArgumentError."""
        with pytest.raises(InvalidArgumentError):
            evaluate([], catalog, {"recent_window": "lots"})

    def test_inputs_not_modified(self, make_history, catalog):
        """Caller lists are left untouched."""
        history = make_history([80, 60, 40, 20])
        history_before = list(history)
        catalog_before = list(catalog)

        evaluate(history, catalog)

        assert history == history_before
        assert catalog == catalog_before

    def test_custom_predicates_forwarded(self, make_history):
        """Custom predicates reach the classifier."""
        from podium.models.types import ArchetypeDefinition, CustomRequirement

        catalog = [
            ArchetypeDefinition(
                id="marathon",
                name="Marathon",
                icon="target",
                color="#000000",
                description="Long sessions",
                unlock_requirements=[
                    CustomRequirement(description="A 10 minute session", predicate="long")
                ],
            )
        ]
        predicates = {"long": lambda stats, history: any(s.duration_seconds >= 600 for s in history)}

        short = evaluate(make_history([50], duration_seconds=300), catalog, custom_predicates=predicates)
        long = evaluate(make_history([50], duration_seconds=600), catalog, custom_predicates=predicates)

        assert short.archetypes[0].is_locked is True
        assert long.archetypes[0].is_locked is False


class TestConcurrency:
    """Test parallel evaluation."""

    def test_parallel_calls_independent(self, make_history, catalog):
        """Concurrent calls on different inputs give the same results as serial ones."""
        histories = [make_history([s, s - 10, s - 20, s - 30]) for s in range(40, 100, 5)]
        expected = [evaluate(h, catalog) for h in histories]

        with ThreadPoolExecutor(max_workers=8) as pool:
            actual = list(pool.map(lambda h: evaluate(h, catalog), histories))

        assert actual == expected


class TestResolveConfig:
    """Test config defaults."""

    def test_none_gives_defaults(self):
        """None -> EngineConfig()."""
        assert resolve_config(None) == EngineConfig(recent_window=10)

    def test_instance_passthrough(self):
        """An EngineConfig is returned as-is."""
        config = EngineConfig(recent_window=4)
        assert resolve_config(config) is config

    @pytest.mark.parametrize("raw", [True, False, "3", 2.0])
    def test_non_int_window_rejected(self, raw):
        """Bools, strings and floats are rejected, not converted."""
        with pytest.raises(InvalidArgumentError):
            resolve_config({"recent_window": raw})

    def test_bool_window_rejected_by_evaluate(self, make_history, catalog):
        """evaluate() does not treat True as a window of 1."""
        with pytest.raises(InvalidArgumentError):
            evaluate(make_history([50, 60]), catalog, {"recent_window": True})


class TestEvaluationCache:
    """Test EvaluationCache."""

    def test_hit_on_equal_content(self, make_history, catalog):
        """Equal inputs built separately share a cache entry."""
        cache = EvaluationCache()
        first = cache.evaluate(make_history([80, 60, 40, 20]), catalog)
        second = cache.evaluate(make_history([80, 60, 40, 20]), list(catalog))

        assert first == second
        assert cache.misses == 1
        assert cache.hits == 1
        assert len(cache) == 1

    def test_config_part_of_key(self, make_history, catalog):
        """Different configs are cached separately."""
        cache = EvaluationCache()
        history = make_history([50] * 5)
        cache.evaluate(history, catalog, {"recent_window": 2})
        cache.evaluate(history, catalog, {"recent_window": 3})
        assert cache.misses == 2
        assert len(cache) == 2

    def test_results_are_copies(self, make_history, catalog):
        """Callers never receive the cached instance."""
        cache = EvaluationCache()
        history = make_history([50, 60])
        first = cache.evaluate(history, catalog)
        first.archetypes.clear()

        second = cache.evaluate(history, catalog)
        assert len(second.archetypes) == len(catalog)

    def test_lru_eviction(self, make_history, catalog):
        """Oldest entry is evicted past max_entries."""
        cache = EvaluationCache(max_entries=1)
        cache.evaluate(make_history([10]), catalog)
        cache.evaluate(make_history([20]), catalog)
        cache.evaluate(make_history([10]), catalog)

        assert len(cache) == 1
        assert cache.misses == 3
        assert cache.hits == 0

    def test_matches_uncached(self, make_history, catalog):
        """Cached results equal direct evaluation."""
        history = make_history([90, 85, 70, 65, 60])
        assert EvaluationCache().evaluate(history, catalog) == evaluate(history, catalog)

    def test_clear(self, make_history, catalog):
        """clear() empties the cache and resets counters."""
        cache = EvaluationCache()
        cache.evaluate(make_history([50]), catalog)
        cache.clear()
        assert len(cache) == 0
        assert cache.misses == 0

    def test_invalid_size(self):
        """max_entries must be positive."""
        with pytest.raises(InvalidArgumentError):
            EvaluationCache(max_entries=0)
