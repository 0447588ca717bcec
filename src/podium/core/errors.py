"""Exception hierarchy for Podium.

Empty histories, missing sub-scores and short histories are not errors;
they produce defined default values. These exceptions cover the cases
that are genuinely outside the engine's contract.
"""

from __future__ import annotations


class PodiumError(Exception):
    """Base class for all Podium errors."""


class InvalidArgumentError(PodiumError, ValueError):
    """An argument is outside its declared constraints.

    Raised instead of silently coercing the value (e.g. recent_window < 1,
    duplicate archetype ids, unknown custom predicate names).
    """


class UndefinedMetricError(PodiumError, ArithmeticError):
    """A metric formula is undefined for the given input.

    The improvement rate divides by the older half's average score, which
    is undefined when that average is exactly 0.
    """


class DataIntegrityError(PodiumError):
    """A record read from the session store failed validation."""
