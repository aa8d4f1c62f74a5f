"""FastAPI application for the person directory."""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from api.core.config import Settings, get_settings
from api.core.logging import configure_logging
from api.domain.people import InvalidPersonError
from api.repositories import build_repository
from api.repositories.base import (
    DuplicateNickError,
    PersonNotFoundError,
    PersonRepository,
    RepositoryUnavailableError,
)
from api.routers import people as people_router

logger = logging.getLogger(__name__)


async def _invalid_person(request: Request, exc: InvalidPersonError) -> JSONResponse:
    return JSONResponse({"detail": exc.message, "field": exc.field}, status_code=400)


async def _duplicate_nick(request: Request, exc: DuplicateNickError) -> JSONResponse:
    return JSONResponse({"detail": str(exc)}, status_code=422)


async def _not_found(request: Request, exc: PersonNotFoundError) -> JSONResponse:
    return JSONResponse({"detail": str(exc)}, status_code=404)


async def _unavailable(request: Request, exc: RepositoryUnavailableError) -> JSONResponse:
    logger.error("Repositorio indisponivel em %s %s: %s", request.method, request.url.path, exc, exc_info=exc)
    return JSONResponse({"detail": "Servico indisponivel"}, status_code=500)


def create_app(settings: Settings | None = None, repository: PersonRepository | None = None) -> FastAPI:
    """Factory compatível com uvicorn/gunicorn.

    When ``repository`` is given it is used as-is and left open at shutdown;
    otherwise the backend named in settings is built and closed by the app.
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owned = repository is None
        repo = repository or build_repository(settings)
        if owned and settings.storage_backend == "sql" and settings.db_create_tables:
            from api.db.create_tables import create_all

            await create_all(repo.engine)
        app.state.person_repository = repo
        logger.info("Repositorio de pessoas pronto (backend=%s)", type(repo).__name__)
        try:
            yield
        finally:
            app.state.person_repository = None
            if owned:
                await repo.close()
            logger.info("Repositorio de pessoas encerrado")

    app = FastAPI(title="Pessoas API", lifespan=lifespan)
    app.state.settings = settings
    app.add_exception_handler(InvalidPersonError, _invalid_person)
    app.add_exception_handler(DuplicateNickError, _duplicate_nick)
    app.add_exception_handler(PersonNotFoundError, _not_found)
    app.add_exception_handler(RepositoryUnavailableError, _unavailable)
    app.include_router(people_router.router)
    return app
