"""Shared pytest fixtures for podium tests."""

from datetime import datetime, timedelta

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from podium.db.schema import Base
from podium.models.types import SessionRecord
from podium.persona.catalog import default_catalog

BASE_DATE = datetime(2026, 3, 1, 12, 0, 0)


@pytest.fixture
def engine():
    """Create an in-memory SQLite engine for testing."""
    engine = create_engine("sqlite:///:memory:", echo=False)
    Base.metadata.create_all(engine)
    return engine


@pytest.fixture
def session(engine):
    """Create a database session for testing."""
    Session = sessionmaker(bind=engine)
    session = Session()
    yield session
    session.close()


@pytest.fixture
def make_record():
    """Factory for SessionRecords; index 0 is the most recent session."""

    def _make(
        score: int,
        index: int = 0,
        vocabulary: int | None = None,
        clarity: int | None = None,
        persuasion: int | None = None,
        duration_seconds: int = 300,
    ) -> SessionRecord:
        return SessionRecord(
            id=f"session-{index:03d}",
            topic=f"Topic {index}",
            date=BASE_DATE - timedelta(days=index),
            duration_seconds=duration_seconds,
            score=score,
            vocabulary_score=vocabulary,
            clarity_score=clarity,
            persuasion_score=persuasion,
        )

    return _make


@pytest.fixture
def make_history(make_record):
    """Factory building a most-recent-first history from a list of scores."""

    def _make(scores: list[int], **kwargs) -> list[SessionRecord]:
        return [make_record(score, index=i, **kwargs) for i, score in enumerate(scores)]

    return _make


@pytest.fixture
def catalog():
    """Built-in archetype catalog."""
    return default_catalog()
