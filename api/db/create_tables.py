"""Utility script to create the initial database schema."""
from __future__ import annotations

import asyncio

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine

from api.core.config import get_settings

from .session import Base, create_engine_from_settings
from . import models  # noqa: F401  # ensure models are imported for metadata


async def create_all(engine: AsyncEngine) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def drop_all(engine: AsyncEngine) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


async def _main() -> None:
    engine = create_engine_from_settings(get_settings())
    try:
        await create_all(engine)
    finally:
        await engine.dispose()


if __name__ == "__main__":
    try:
        asyncio.run(_main())
        print("Database tables created successfully.")
    except SQLAlchemyError as exc:
        raise SystemExit(f"Failed to create tables: {exc}") from exc
