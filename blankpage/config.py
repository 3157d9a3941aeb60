"""Environment-driven settings."""

import os

DEFAULT_PORT = 8080
DEFAULT_SWEEP_INTERVAL_HOURS = 6.0


def normalise_database_url(url: str) -> str:
    url = url.strip()
    # Heroku/Railway style URLs use the scheme SQLAlchemy dropped in 1.4.
    if url.startswith("postgres://"):
        url = url.replace("postgres://", "postgresql+psycopg2://", 1)
    return url


def database_url() -> str:
    url = os.environ.get("DATABASE_URL", "").strip()
    if not url:
        raise RuntimeError("DATABASE_URL environment variable is required")
    return normalise_database_url(url)


def port() -> int:
    raw = os.environ.get("PORT", "").strip()
    return int(raw) if raw else DEFAULT_PORT


def sweep_interval_seconds() -> float:
    raw = os.environ.get("SWEEP_INTERVAL_HOURS", "").strip()
    hours = float(raw) if raw else DEFAULT_SWEEP_INTERVAL_HOURS
    return hours * 60 * 60
