"""Pydantic models for Podium.

Engine inputs (SessionRecord, ArchetypeDefinition), engine outputs
(StatsSnapshot, ArchetypeState, EngineResult) and API payloads.
Field names are snake_case; JSON transport uses model_dump(mode="json").
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, StrictInt

Score = Annotated[int, Field(ge=0, le=100)]
Dimension = Literal["vocabulary", "clarity", "persuasion"]
ImprovementDirection = Literal["up", "down", "flat"]


# ============================================================================
# Session history
# ============================================================================


class SessionRecord(BaseModel):
    """One completed practice session.

    Sub-scores are optional: None means "not measured", not zero.
    Records are immutable once created.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    topic: str
    date: datetime
    duration_seconds: int = Field(ge=0)
    score: Score
    vocabulary_score: Score | None = None
    clarity_score: Score | None = None
    persuasion_score: Score | None = None


class UserStats(BaseModel):
    """Coarse persisted summary kept by the session store.

    Independent of StatsSnapshot; the two are never merged.
    """

    total_sessions: int = Field(ge=0)
    total_minutes: int = Field(ge=0)


# ============================================================================
# Aggregated statistics
# ============================================================================


class RecentAverages(BaseModel):
    """Per-dimension averages over the recent window (rounded integers)."""

    vocabulary: int = 0
    clarity: int = 0
    persuasion: int = 0


class StatsSnapshot(BaseModel):
    """Aggregate statistics derived from a session history.

    Recomputed on every query. Every average over an empty set is 0.
    """

    overall_average_score: float
    win_rate: float
    improvement_rate_percent: int
    improvement_computable: bool
    improvement_direction: ImprovementDirection | None
    recent_averages: RecentAverages
    recent_overall_average: int
    recent_window_size: int
    total_sessions: int
    total_minutes: int
    score_trend: list[int]


# ============================================================================
# Archetype catalog
# ============================================================================


class MinSessionCount(BaseModel):
    """At least `count` sessions in history."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["min_session_count"] = "min_session_count"
    description: str
    count: int = Field(ge=0)


class MinAverageScore(BaseModel):
    """Overall average score of at least `threshold`."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["min_average_score"] = "min_average_score"
    description: str
    threshold: float


class MinImprovementRate(BaseModel):
    """Computable improvement rate of at least `percent`."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["min_improvement_rate"] = "min_improvement_rate"
    description: str
    percent: int


class MinRecentAverage(BaseModel):
    """Recent-window average of a dimension of at least `threshold`.

    dimension="overall" uses the mean of the three dimension averages.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["min_recent_average"] = "min_recent_average"
    description: str
    dimension: Literal["vocabulary", "clarity", "persuasion", "overall"]
    threshold: float


class MinWinRate(BaseModel):
    """Win rate of at least `threshold`."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["min_win_rate"] = "min_win_rate"
    description: str
    threshold: float


class MinTotalMinutes(BaseModel):
    """At least `minutes` of practice in total."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["min_total_minutes"] = "min_total_minutes"
    description: str
    minutes: int = Field(ge=0)


class MinSessionScore(BaseModel):
    """At least `sessions` individual sessions scored `score` or higher."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["min_session_score"] = "min_session_score"
    description: str
    score: Score
    sessions: int = Field(default=1, ge=1)


class CustomRequirement(BaseModel):
    """Pluggable predicate resolved by name from a caller-supplied registry."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["custom"] = "custom"
    description: str
    predicate: str


UnlockRequirement = Annotated[
    Union[
        MinSessionCount,
        MinAverageScore,
        MinImprovementRate,
        MinRecentAverage,
        MinWinRate,
        MinTotalMinutes,
        MinSessionScore,
        CustomRequirement,
    ],
    Field(discriminator="kind"),
]


class DimensionProfile(BaseModel):
    """Ideal dimension averages for an archetype."""

    model_config = ConfigDict(frozen=True)

    vocabulary: float = Field(ge=0, le=100)
    clarity: float = Field(ge=0, le=100)
    persuasion: float = Field(ge=0, le=100)


class ArchetypeDefinition(BaseModel):
    """A debating-style archetype and the rules that unlock it."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    icon: str
    color: str
    description: str
    unlock_requirements: list[UnlockRequirement] = Field(default_factory=list)
    ideal_profile: DimensionProfile | None = None


# ============================================================================
# Classification output
# ============================================================================


class ArchetypeState(BaseModel):
    """Lock/active state of one archetype for one query."""

    archetype_id: str
    is_locked: bool
    unmet_requirements: list[UnlockRequirement]
    is_active: bool
    match_score: float | None  # None when locked


class EngineConfig(BaseModel):
    """Engine configuration.

    recent_window is strict: bools, floats and numeric strings are rejected
    rather than converted. Range checks happen in compute_stats.
    """

    recent_window: StrictInt = 10


class EngineResult(BaseModel):
    """Combined engine output consumed by presentation layers."""

    stats: StatsSnapshot
    archetypes: list[ArchetypeState]
    active_archetype_id: str | None


# ============================================================================
# API payloads
# ============================================================================


class EvaluateRequest(BaseModel):
    """Body of POST /api/persona/evaluate."""

    history: list[SessionRecord]
    config: EngineConfig | None = None


class PersonaOverview(BaseModel):
    """Persona overview for a stored user."""

    user_id: str
    user_stats: UserStats | None
    result: EngineResult
