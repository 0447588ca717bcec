"""Engine facade.

- Single entry point: aggregation followed by classification
- Stateless; memoization only through a caller-owned EvaluationCache
"""

from podium.engine.facade import EvaluationCache, evaluate

__all__ = ["EvaluationCache", "evaluate"]
