"""Database schema of the external session store.

Podium only reads these tables; sessions are written by the
session-completion flow elsewhere. Score ranges are enforced again by
model validation when rows are converted to SessionRecord.
"""

from datetime import datetime

from sqlalchemy import DateTime, Index, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


class PracticeSession(Base):
    """A completed practice session."""

    __tablename__ = "practice_sessions"

    session_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    user_id: Mapped[str] = mapped_column(String(64), nullable=False)
    topic: Mapped[str] = mapped_column(Text, nullable=False)
    completed_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    duration_seconds: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    score: Mapped[int] = mapped_column(Integer, nullable=False)
    vocabulary_score: Mapped[int | None] = mapped_column(Integer, nullable=True)
    clarity_score: Mapped[int | None] = mapped_column(Integer, nullable=True)
    persuasion_score: Mapped[int | None] = mapped_column(Integer, nullable=True)

    __table_args__ = (Index("ix_practice_sessions_user_date", "user_id", "completed_at"),)


class UserStatsRow(Base):
    """Coarse per-user summary maintained by the session store."""

    __tablename__ = "user_stats"

    user_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    total_sessions: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    total_minutes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
