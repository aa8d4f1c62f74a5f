"""
Configuration helpers for the person directory.

Exposes a frozen Settings object read from environment variables so that
routers/repositories never touch os.environ directly.
"""

from dataclasses import dataclass
from functools import lru_cache
import os

STORAGE_BACKENDS = ("memory", "sql")


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    storage_backend: str
    database_url: str
    db_pool_size: int
    db_max_overflow: int
    db_pool_timeout: float
    db_create_tables: bool
    log_level: str


def _int(value: str | None, default: int = 0) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _float(value: str | None, default: float = 0.0) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def _bool(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    return Settings(
        app_env=(os.getenv("APP_ENV") or "dev").lower(),
        storage_backend=(os.getenv("STORAGE_BACKEND") or "memory").strip().lower(),
        database_url=os.getenv("DATABASE_URL", "").strip(),
        db_pool_size=_int(os.getenv("DB_POOL_SIZE"), 10),
        db_max_overflow=_int(os.getenv("DB_MAX_OVERFLOW"), 0),
        db_pool_timeout=_float(os.getenv("DB_POOL_TIMEOUT"), 5.0),
        db_create_tables=_bool(os.getenv("DB_CREATE_TABLES"), True),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
    )
