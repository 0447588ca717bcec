"""Identity utilities for deterministic content hashes.

Used to key caller-owned memoization of engine results:
- history_hash: hash of the ordered session history
- catalog_hash: hash of the ordered archetype catalog
- evaluation_key: hash of (history, catalog, config)
"""

import hashlib
import json
from collections.abc import Sequence

from podium.models.types import ArchetypeDefinition, EngineConfig, SessionRecord


def _canonical_json(obj: object) -> str:
    """Canonical JSON: sorted keys, no whitespace."""
    return json.dumps(obj, sort_keys=True, separators=(",", ":"))


def _sha256(text: str) -> str:
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def compute_history_hash(history: Sequence[SessionRecord]) -> str:
    """Compute deterministic hash of a session history.

    Order matters: the same sessions in a different order hash differently.

    Args:
        history: Sessions ordered most-recent-first.

    Returns:
        64-character hex string (SHA256)
    """
    payload = [record.model_dump(mode="json") for record in history]
    return _sha256(_canonical_json(payload))


def compute_catalog_hash(catalog: Sequence[ArchetypeDefinition]) -> str:
    """Compute deterministic hash of an archetype catalog.

    Args:
        catalog: Archetype definitions in display order.

    Returns:
        64-character hex string (SHA256)
    """
    payload = [archetype.model_dump(mode="json") for archetype in catalog]
    return _sha256(_canonical_json(payload))


def compute_evaluation_key(
    history: Sequence[SessionRecord],
    catalog: Sequence[ArchetypeDefinition],
    config: EngineConfig,
) -> str:
    """Compute the memoization key for one engine evaluation.

    evaluation_key = sha256(history_hash | catalog_hash | canonical_json(config))

    Args:
        history: Sessions ordered most-recent-first.
        catalog: Archetype definitions.
        config: Engine configuration.

    Returns:
        64-character hex string (SHA256)
    """
    # Delimiter prevents ambiguity between components
    key_str = "|".join(
        [
            compute_history_hash(history),
            compute_catalog_hash(catalog),
            _canonical_json(config.model_dump(mode="json")),
        ]
    )
    return _sha256(key_str)
