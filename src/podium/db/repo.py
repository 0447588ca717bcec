"""Repository for reading the session store.

Encapsulates all SQLAlchemy queries, keeping engine logic pure.
Returns validated SessionRecord / UserStats models to callers.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pydantic import ValidationError
from sqlalchemy.orm import Session

from podium.core.errors import DataIntegrityError
from podium.db.schema import PracticeSession, UserStatsRow
from podium.models.domain import PracticeSessionEntity, UserStatsEntity
from podium.models.types import SessionRecord, UserStats

if TYPE_CHECKING:
    from sqlalchemy.orm import Session as DbSession
else:
    DbSession = Session

# Re-export for external use
__all__ = ["DbSession"]

logger = logging.getLogger(__name__)


# ============================================================================
# Converters: SQLAlchemy -> Domain -> Model
# ============================================================================


def _session_to_entity(row: PracticeSession) -> PracticeSessionEntity:
    """Convert SQLAlchemy PracticeSession to domain entity."""
    return PracticeSessionEntity(
        session_id=row.session_id,
        user_id=row.user_id,
        topic=row.topic,
        completed_at=row.completed_at,
        duration_seconds=row.duration_seconds,
        score=row.score,
        vocabulary_score=row.vocabulary_score,
        clarity_score=row.clarity_score,
        persuasion_score=row.persuasion_score,
    )


def _stats_to_entity(row: UserStatsRow) -> UserStatsEntity:
    """Convert SQLAlchemy UserStatsRow to domain entity."""
    return UserStatsEntity(
        user_id=row.user_id,
        total_sessions=row.total_sessions,
        total_minutes=row.total_minutes,
    )


def entity_to_record(entity: PracticeSessionEntity) -> SessionRecord:
    """Validate a stored session into a SessionRecord.

    Raises:
        DataIntegrityError: If the row violates SessionRecord constraints.
    """
    try:
        return SessionRecord(
            id=entity.session_id,
            topic=entity.topic,
            date=entity.completed_at,
            duration_seconds=entity.duration_seconds,
            score=entity.score,
            vocabulary_score=entity.vocabulary_score,
            clarity_score=entity.clarity_score,
            persuasion_score=entity.persuasion_score,
        )
    except ValidationError as e:
        logger.warning(f"Rejected invalid session row {entity.session_id}: {e}")
        raise DataIntegrityError(
            f"Invalid data in stored session {entity.session_id}"
        ) from e


# ============================================================================
# Session queries
# ============================================================================


def get_session_entities(
    session: DbSession,
    user_id: str,
    limit: int | None = None,
) -> list[PracticeSessionEntity]:
    """Get a user's stored sessions, most recent first.

    Ties on completion time are ordered by session_id descending so the
    order is deterministic.
    """
    query = (
        session.query(PracticeSession)
        .filter(PracticeSession.user_id == user_id)
        .order_by(PracticeSession.completed_at.desc(), PracticeSession.session_id.desc())
    )
    if limit is not None:
        query = query.limit(limit)
    return [_session_to_entity(row) for row in query.all()]


def get_history(
    session: DbSession,
    user_id: str,
    limit: int | None = None,
) -> list[SessionRecord]:
    """Get a user's session history as validated records, most recent first.

    Args:
        session: Database session.
        user_id: User whose history to load.
        limit: Optional maximum number of sessions.

    Returns:
        SessionRecords ordered most-recent-first (empty if none).

    Raises:
        DataIntegrityError: If a stored row fails validation.
    """
    return [entity_to_record(e) for e in get_session_entities(session, user_id, limit)]


def get_user_stats(session: DbSession, user_id: str) -> UserStats | None:
    """Get the store's persisted summary for a user.

    Returns:
        UserStats, or None if the store has no summary row.

    Raises:
        DataIntegrityError: If the stored summary fails validation.
    """
    row = session.query(UserStatsRow).filter(UserStatsRow.user_id == user_id).first()
    if row is None:
        return None

    entity = _stats_to_entity(row)
    try:
        return UserStats(
            total_sessions=entity.total_sessions,
            total_minutes=entity.total_minutes,
        )
    except ValidationError as e:
        logger.warning(f"Rejected invalid stats row for {user_id}: {e}")
        raise DataIntegrityError(f"Invalid data in stored stats for {user_id}") from e
