"""Runtime settings from environment variables.

- PODIUM_DB_PATH: SQLite session store (default data/podium.db)
- PODIUM_CATALOG_PATH: JSON archetype catalog (default: built-in catalog)
- PODIUM_RECENT_WINDOW: default recent window (default 10)
- PODIUM_CORS_ORIGINS: comma-separated allowed origins for the API
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from podium.core.errors import InvalidArgumentError

DEFAULT_DB_PATH = Path("data/podium.db")
DEFAULT_RECENT_WINDOW = 10
DEFAULT_CORS_ORIGINS = (
    "http://localhost:3000",  # Next.js dev server
    "http://127.0.0.1:3000",
)


@dataclass(frozen=True)
class Settings:
    """Resolved runtime settings."""

    db_path: Path = DEFAULT_DB_PATH
    catalog_path: Path | None = None
    recent_window: int = DEFAULT_RECENT_WINDOW
    cors_origins: tuple[str, ...] = field(default=DEFAULT_CORS_ORIGINS)


def _parse_recent_window(raw: str) -> int:
    try:
        value = int(raw)
    except ValueError as e:
        raise InvalidArgumentError(f"PODIUM_RECENT_WINDOW must be an integer, got {raw!r}") from e
    if value < 1:
        raise InvalidArgumentError(f"PODIUM_RECENT_WINDOW must be >= 1, got {value}")
    return value


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Build Settings from environment variables.

    Args:
        environ: Mapping to read from. Defaults to os.environ.

    Returns:
        Settings with defaults for unset variables.

    Raises:
        InvalidArgumentError: If PODIUM_RECENT_WINDOW is not a positive integer.
    """
    env = os.environ if environ is None else environ

    catalog_raw = env.get("PODIUM_CATALOG_PATH")
    origins_raw = env.get("PODIUM_CORS_ORIGINS")
    window_raw = env.get("PODIUM_RECENT_WINDOW")

    return Settings(
        db_path=Path(env.get("PODIUM_DB_PATH", str(DEFAULT_DB_PATH))),
        catalog_path=Path(catalog_raw) if catalog_raw else None,
        recent_window=_parse_recent_window(window_raw) if window_raw else DEFAULT_RECENT_WINDOW,
        cors_origins=(
            tuple(o.strip() for o in origins_raw.split(",") if o.strip())
            if origins_raw
            else DEFAULT_CORS_ORIGINS
        ),
    )
