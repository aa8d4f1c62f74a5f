"""Database helpers (engine/session export)."""

from .session import Base, create_engine_from_settings, create_sessionmaker, get_session

__all__ = ["Base", "create_engine_from_settings", "create_sessionmaker", "get_session"]
