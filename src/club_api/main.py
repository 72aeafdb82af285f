"""
Application factory.

    uvicorn --factory club_api.main:create_app

The lifespan builds the engine, session factory and cache backend, stores
them on app.state, and disposes of them on shutdown. Tests pass their own
engine and cache into create_app().
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from club_api.api.v1 import api_router
from club_api.api.v1.error_handlers import register_exception_handlers
from club_api.cache.backends import CacheBackend, build_cache
from club_api.config.settings import Settings, get_settings
from club_api.core.logging import RequestIDMiddleware, setup_logging
from club_api.database.session import build_engine, build_session_factory, create_tables
from club_api.utils.metadata import get_project_name, get_project_version

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    *,
    engine: AsyncEngine | None = None,
    cache: CacheBackend | None = None,
    configure_logging: bool = True,
) -> FastAPI:
    settings = settings or get_settings()
    if configure_logging:
        setup_logging(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owns_engine = engine is None
        app_engine = engine or build_engine(settings.DATABASE_URL, echo=settings.SQLALCHEMY_ECHO)
        app_cache = cache or build_cache(settings)

        if settings.CREATE_TABLES_ON_STARTUP:
            await create_tables(app_engine)

        app.state.settings = settings
        app.state.engine = app_engine
        app.state.session_factory = build_session_factory(app_engine)
        app.state.cache = app_cache
        logger.info("app.startup", extra={"env": settings.ENV, "cache_backend": type(app_cache).__name__})

        try:
            yield
        finally:
            if cache is None:
                await app_cache.close()
            if owns_engine:
                await app_engine.dispose()
            logger.info("app.shutdown")

    app = FastAPI(title=get_project_name(), version=get_project_version(), lifespan=lifespan)
    app.add_middleware(RequestIDMiddleware)
    register_exception_handlers(app)
    app.include_router(api_router)

    @app.get("/health", tags=["health"])
    async def health():
        return {"status": "ok"}

    return app


