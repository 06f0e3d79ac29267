"""Media Tracker API - FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map MediaTrackerError -> structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database manager and controllers are built once in the lifespan and kept on
      app.state; shutdown disposes the engine

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from media_tracker.api.error_handlers import register_error_handlers
from media_tracker.api.routes import (
    categories, groups, health, media_items, own_platforms, users,
)
from media_tracker.config import get_settings
from media_tracker.infrastructure.database import init_db
from media_tracker.infrastructure.observability import setup_logging
from media_tracker.services.assembly import build_controllers

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(
        settings.log_level, settings.log_format, settings.log_query_performance,
    )
    db_manager = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    app.state.db_manager = db_manager
    app.state.controllers = build_controllers(
        db_manager, log_query_performance=settings.log_query_performance,
    )
    logger.info("Media Tracker API started")
    yield
    logger.info("Media Tracker API shutting down")
    await db_manager.close()


app = FastAPI(title="Media Tracker API", version="1.0.0", lifespan=lifespan)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

app.include_router(health.router)
app.include_router(users.router)
app.include_router(categories.router)
app.include_router(groups.router)
app.include_router(own_platforms.router)
app.include_router(media_items.movies_router)
app.include_router(media_items.books_router)
app.include_router(media_items.tv_shows_router)
app.include_router(media_items.videogames_router)
