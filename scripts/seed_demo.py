#!/usr/bin/env python3
"""Seed a demo session store and print the resulting persona.

Usage:
    python scripts/seed_demo.py

This script:
1. Initializes the demo database
2. Seeds a demo user's practice sessions and summary row
3. Evaluates stats and archetypes through the engine
4. Prints the result as JSON
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timedelta
from pathlib import Path

# Add src to path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from podium.db import repo  # noqa: E402
from podium.db.schema import PracticeSession, UserStatsRow  # noqa: E402
from podium.db.session import get_session, init_db, open_session  # noqa: E402
from podium.engine.facade import evaluate  # noqa: E402
from podium.persona.catalog import default_catalog  # noqa: E402

# Constants
DEMO_DB_PATH = PROJECT_ROOT / "demo.db"
DEMO_USER_ID = "demo_user"

# (topic, minutes, score, vocabulary, clarity, persuasion), oldest first
DEMO_SESSIONS = [
    ("Should homework be banned?", 5, 52, 48, 55, None),
    ("Is social media good for democracy?", 6, 58, 55, 60, 50),
    ("Universal basic income", 8, 61, None, 64, 58),
    ("Nuclear power as climate policy", 10, 66, 70, 62, 65),
    ("Should voting be compulsory?", 7, 72, 74, 70, 71),
    ("Space exploration funding", 12, 78, 80, 76, 79),
    ("Remote work is here to stay", 9, 81, 82, 80, 84),
    ("Ban on single-use plastics", 11, 86, 85, 83, 88),
]


def seed(db_path: Path) -> None:
    """Seed demo sessions, skipping rows that already exist."""
    init_db(db_path)
    session = get_session(db_path)
    try:
        start = datetime(2026, 1, 5, 18, 0)
        for index, (topic, minutes, score, vocab, clarity, persuasion) in enumerate(
            DEMO_SESSIONS
        ):
            session_id = f"demo_session_{index:02d}"
            if session.get(PracticeSession, session_id) is not None:
                continue
            session.add(
                PracticeSession(
                    session_id=session_id,
                    user_id=DEMO_USER_ID,
                    topic=topic,
                    completed_at=start + timedelta(days=2 * index),
                    duration_seconds=minutes * 60,
                    score=score,
                    vocabulary_score=vocab,
                    clarity_score=clarity,
                    persuasion_score=persuasion,
                )
            )

        if session.get(UserStatsRow, DEMO_USER_ID) is None:
            session.add(
                UserStatsRow(
                    user_id=DEMO_USER_ID,
                    total_sessions=len(DEMO_SESSIONS),
                    total_minutes=sum(s[1] for s in DEMO_SESSIONS),
                )
            )
        session.commit()
    finally:
        session.close()


def main() -> int:
    """Seed the demo store and print the evaluation."""
    logging.basicConfig(level=logging.INFO)

    print(f"Seeding demo database at {DEMO_DB_PATH}...")
    seed(DEMO_DB_PATH)

    with open_session(DEMO_DB_PATH) as session:
        history = repo.get_history(session, DEMO_USER_ID)

    result = evaluate(history, default_catalog())
    print(json.dumps(result.model_dump(mode="json"), indent=2))
    print(f"Active archetype: {result.active_archetype_id}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
