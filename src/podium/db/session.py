"""Database session management for the session store.

Provides session factory for SQLite database access with proper
thread-safety for FastAPI concurrency. Podium only reads from the store;
init_db exists for local demos and tests.
"""

from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from typing import Generator

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from podium.core.settings import DEFAULT_DB_PATH
from podium.db.schema import Base

# Module-level engine cache for connection pooling
_engine_cache: dict[str, Engine] = {}


def get_engine(db_path: Path | None = None) -> Engine:
    """Get SQLAlchemy engine for the database.

    Engines are cached by resolved db_path to enable connection pooling.

    Args:
        db_path: Path to SQLite database file. Defaults to data/podium.db.

    Returns:
        SQLAlchemy engine instance (cached).
    """
    db_path = Path(db_path) if db_path is not None else DEFAULT_DB_PATH
    cache_key = str(db_path.resolve())

    if cache_key in _engine_cache:
        return _engine_cache[cache_key]

    db_path.parent.mkdir(parents=True, exist_ok=True)

    # check_same_thread=False + StaticPool: one connection shared across
    # FastAPI worker threads
    engine = create_engine(
        f"sqlite:///{db_path}",
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    _engine_cache[cache_key] = engine

    return engine


def get_session(db_path: Path | None = None) -> Session:
    """Get a database session.

    Note: Caller is responsible for closing the session.

    Args:
        db_path: Path to SQLite database file.

    Returns:
        SQLAlchemy Session instance.
    """
    factory = sessionmaker(bind=get_engine(db_path))
    return factory()


@contextmanager
def open_session(db_path: Path | None = None) -> Generator[Session, None, None]:
    """Context manager for read-only sessions; always closes the session.

    Example:
        with open_session() as session:
            history = repo.get_history(session, "user-1")
    """
    session = get_session(db_path)
    try:
        yield session
    finally:
        session.close()


def init_db(db_path: Path | None = None) -> None:
    """Create the session store tables if they don't exist.

    Args:
        db_path: Path to SQLite database file.
    """
    Base.metadata.create_all(get_engine(db_path))
