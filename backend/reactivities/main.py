"""Reactivities API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Every activity route goes through OperationBoundary; framework-level
      failures go through register_error_handlers; one envelope shape either way
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup via lifespan context manager

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Seeding is opt-in (SEED_ON_STARTUP) and never stops startup on failure;
      schema migrations are run by alembic, not by the app
"""

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from reactivities.api.error_handlers import register_error_handlers
from reactivities.api.routes import activities, health
from reactivities.config import get_settings
from reactivities.db.seed import seed_data
from reactivities.infrastructure.database import init_db
from reactivities.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    if settings.seed_on_startup:
        try:
            async with manager.session() as db:
                await seed_data(db)
        except Exception:
            logger.error("An error occurred during seeding", exc_info=True)
    logger.info("Reactivities API started")
    yield
    await manager.dispose()
    logger.info("Reactivities API shutting down")


app = FastAPI(
    title="Reactivities API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

app.include_router(health.router)
app.include_router(activities.router)

# Static files: serves the client build; mounted AFTER API routes so /api/* wins
if os.path.isdir("static"):
    app.mount("/", StaticFiles(directory="static", html=True), name="static")
