"""Engine entry point.

Composes the stats aggregator and the persona classifier into a single
EngineResult. No state is kept between calls: every call works on its
own copy of the inputs, so concurrent calls are independent.

EvaluationCache is an optional, caller-owned memoization layer keyed by
a content hash of (history, catalog, config).
"""

from __future__ import annotations

import logging
import threading
from collections import OrderedDict
from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import ValidationError

from podium.aggregation.stats import compute_stats
from podium.core.errors import InvalidArgumentError
from podium.core.identity import compute_evaluation_key
from podium.models.types import (
    ArchetypeDefinition,
    EngineConfig,
    EngineResult,
    SessionRecord,
)
from podium.persona.classifier import ArchetypeScorer, classify
from podium.persona.requirements import CustomPredicate

logger = logging.getLogger(__name__)

DEFAULT_CACHE_SIZE = 128


def resolve_config(config: EngineConfig | Mapping[str, Any] | None) -> EngineConfig:
    """Apply defaults and validate an engine configuration.

    Args:
        config: EngineConfig, plain mapping, or None for defaults.

    Returns:
        Validated EngineConfig.

    Raises:
        InvalidArgumentError: If the mapping does not validate.
    """
    if config is None:
        return EngineConfig()
    if isinstance(config, EngineConfig):
        return config
    try:
        return EngineConfig.model_validate(dict(config))
    except ValidationError as e:
        raise InvalidArgumentError(f"Invalid engine config: {e}") from e


def evaluate(
    history: Sequence[SessionRecord],
    catalog: Sequence[ArchetypeDefinition],
    config: EngineConfig | Mapping[str, Any] | None = None,
    *,
    scorer: ArchetypeScorer | None = None,
    custom_predicates: Mapping[str, CustomPredicate] | None = None,
) -> EngineResult:
    """Compute stats and archetype states for a session history.

    Args:
        history: Sessions ordered most-recent-first.
        catalog: Archetype definitions in display order.
        config: Engine configuration (defaults: recent_window=10).
        scorer: Ranks unlocked archetypes for the active pick.
        custom_predicates: Registry for custom requirement names.

    Returns:
        EngineResult with stats, one ArchetypeState per catalog entry,
        and the active archetype id (or None).

    Raises:
        InvalidArgumentError: On invalid config or catalog.
    """
    resolved = resolve_config(config)
    history_copy = tuple(history)
    catalog_copy = tuple(catalog)

    stats = compute_stats(history_copy, recent_window=resolved.recent_window)
    archetypes = classify(
        history_copy,
        stats,
        catalog_copy,
        scorer=scorer,
        custom_predicates=custom_predicates,
    )

    active_id = next((state.archetype_id for state in archetypes if state.is_active), None)

    return EngineResult(stats=stats, archetypes=archetypes, active_archetype_id=active_id)


class EvaluationCache:
    """Caller-owned LRU memoization of evaluate() results.

    Keys are content hashes, so equal inputs hit the cache even when they
    are different objects. Only the default scorer and built-in
    requirement kinds are supported: callables have no content hash.
    Results are deep-copied on the way out so callers never share
    instances.
    """

    def __init__(self, max_entries: int = DEFAULT_CACHE_SIZE):
        """Initialize cache.

        Args:
            max_entries: Maximum number of cached results (>= 1).
        """
        if max_entries < 1:
            raise InvalidArgumentError(f"max_entries must be >= 1, got {max_entries}")
        self.max_entries = max_entries
        self.hits = 0
        self.misses = 0
        self._entries: OrderedDict[str, EngineResult] = OrderedDict()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def clear(self) -> None:
        """Drop all cached results and reset counters."""
        with self._lock:
            self._entries.clear()
            self.hits = 0
            self.misses = 0

    def evaluate(
        self,
        history: Sequence[SessionRecord],
        catalog: Sequence[ArchetypeDefinition],
        config: EngineConfig | Mapping[str, Any] | None = None,
    ) -> EngineResult:
        """Return a cached result, computing and storing it on a miss."""
        resolved = resolve_config(config)
        key = compute_evaluation_key(history, catalog, resolved)

        with self._lock:
            cached = self._entries.get(key)
            if cached is not None:
                self._entries.move_to_end(key)
                self.hits += 1
                return cached.model_copy(deep=True)
            self.misses += 1

        # Computed outside the lock; concurrent misses on the same key
        # compute the same value
        result = evaluate(history, catalog, resolved)

        with self._lock:
            self._entries[key] = result
            self._entries.move_to_end(key)
            while len(self._entries) > self.max_entries:
                evicted, _ = self._entries.popitem(last=False)
                logger.debug(f"Evicted evaluation {evicted[:12]}")

        return result.model_copy(deep=True)
