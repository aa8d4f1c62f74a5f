"""
Shared fixtures: settings builder and both repository backends.
"""
from __future__ import annotations

import sys
from pathlib import Path

import pytest
import pytest_asyncio

# Garante que o pacote api seja importável durante os testes locais
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from api.core import config as core_config  # noqa: E402
from api.core.config import Settings  # noqa: E402
from api.db.create_tables import create_all, drop_all  # noqa: E402
from api.db.session import create_engine_from_settings  # noqa: E402
from api.domain.people import NewPerson  # noqa: E402
from api.repositories.memory_repository import InMemoryPersonRepository  # noqa: E402
from api.repositories.sql_repository import SQLPersonRepository  # noqa: E402


def make_settings(**overrides) -> Settings:
    values = dict(
        app_env="test",
        storage_backend="memory",
        database_url="",
        db_pool_size=5,
        db_max_overflow=0,
        db_pool_timeout=5.0,
        db_create_tables=True,
        log_level="WARNING",
    )
    values.update(overrides)
    return Settings(**values)


def sqlite_url(tmp_path: Path) -> str:
    return f"sqlite+aiosqlite:///{tmp_path / 'test.db'}"


def luiz() -> NewPerson:
    return NewPerson(name="Luiz Souza", nick="Souz", birth_date="2001-08-18", stack=["Rust", "Go"])


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    core_config.get_settings.cache_clear()
    yield
    core_config.get_settings.cache_clear()


@pytest_asyncio.fixture()
async def sql_repo(tmp_path):
    """SQL backend on a temporary SQLite file, tables dropped on teardown."""
    repo = SQLPersonRepository(create_engine_from_settings(make_settings(database_url=sqlite_url(tmp_path))))
    await create_all(repo.engine)
    yield repo
    await drop_all(repo.engine)
    await repo.close()


@pytest_asyncio.fixture(params=["memory", "sql"])
async def repo(request, tmp_path):
    """Each backend in turn, so contract tests check both behave the same."""
    if request.param == "memory":
        yield InMemoryPersonRepository()
        return
    sql = SQLPersonRepository(create_engine_from_settings(make_settings(database_url=sqlite_url(tmp_path))))
    await create_all(sql.engine)
    yield sql
    await drop_all(sql.engine)
    await sql.close()
