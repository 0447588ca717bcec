"""Domain models for Podium.

Pure Python dataclasses representing rows of the external session store.
These models are independent of SQLAlchemy and are converted to
validated SessionRecord / UserStats models by the repository.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass
class PracticeSessionEntity:
    """Domain model for a stored practice session."""

    session_id: str
    user_id: str
    topic: str
    completed_at: datetime
    duration_seconds: int
    score: int
    vocabulary_score: int | None = None
    clarity_score: int | None = None
    persuasion_score: int | None = None


@dataclass
class UserStatsEntity:
    """Domain model for a user's persisted summary."""

    user_id: str
    total_sessions: int
    total_minutes: int
