"""
Persistence adapters.

Two interchangeable backends implement PersonRepository: an in-process map
(memory) and a relational store (sql). Routers depend on the contract only;
the concrete backend is chosen once at startup.
"""

from __future__ import annotations

from api.core.config import STORAGE_BACKENDS, Settings
from api.repositories.base import (
    DuplicateNickError,
    PersonNotFoundError,
    PersonRepository,
    RepositoryUnavailableError,
)
from api.repositories.memory_repository import InMemoryPersonRepository


def build_repository(settings: Settings) -> PersonRepository:
    """Instantiate the backend named by ``settings.storage_backend``."""
    backend = settings.storage_backend
    if backend == "memory":
        return InMemoryPersonRepository()
    if backend == "sql":
        from api.db.session import create_engine_from_settings
        from api.repositories.sql_repository import SQLPersonRepository

        return SQLPersonRepository(create_engine_from_settings(settings))
    raise RuntimeError(f"STORAGE_BACKEND invalido: {backend!r} (use {', '.join(STORAGE_BACKENDS)})")


__all__ = [
    "DuplicateNickError",
    "InMemoryPersonRepository",
    "PersonNotFoundError",
    "PersonRepository",
    "RepositoryUnavailableError",
    "build_repository",
]
