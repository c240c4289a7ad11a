"""Entry point for the SportMate FastAPI application."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.engine import Engine

import sportmate.models  # noqa: F401  registers every table on Base.metadata
from sportmate.api.v1 import router as v1_router
from sportmate.core.config import Settings, settings
from sportmate.core.database import Base, SessionLocal, build_session_factory
from sportmate.core.database import engine as default_engine
from sportmate.core.error_handlers import register_exception_handlers
from sportmate.core.logging_config import configure_logging
from sportmate.realtime.gateway import router as live_router
from sportmate.realtime.pipeline import MessagePipeline
from sportmate.realtime.registry import RoomRegistry

logger = logging.getLogger(__name__)


def create_app(
    engine: Optional[Engine] = None,
    app_settings: Optional[Settings] = None,
) -> FastAPI:
    """Build the application with its own session factory and room registry."""

    app_settings = app_settings or settings
    configure_logging(app_settings.LOG_LEVEL)

    bind = engine or default_engine
    session_factory = build_session_factory(bind) if engine is not None else SessionLocal

    # Ensure database tables exist when the application starts (for development purposes).
    Base.metadata.create_all(bind=bind)

    registry = RoomRegistry()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("%s starting", app_settings.PROJECT_NAME)
        yield
        registry.clear()
        logger.info("%s stopped", app_settings.PROJECT_NAME)

    app = FastAPI(title=app_settings.PROJECT_NAME, lifespan=lifespan)

    app.state.settings = app_settings
    app.state.session_factory = session_factory
    app.state.room_registry = registry
    app.state.message_pipeline = MessagePipeline(session_factory, registry)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(v1_router, prefix=app_settings.API_PREFIX)
    app.include_router(live_router)

    @app.get("/health", tags=["health"])
    def health() -> dict:
        return {"status": "ok"}

    return app


app = create_app()

__all__ = ["app", "create_app"]
