"""PD Tracker API - FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map PDTrackerError -> {"error", "code"} JSON responses
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup and disposed on shutdown via lifespan

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Static front-end mounted last so /api/* always takes precedence
"""

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from pdtracker import __version__
from pdtracker.api.error_handlers import register_error_handlers
from pdtracker.api.routes import health, lookups, pdrecords, staff
from pdtracker.config import get_settings
from pdtracker.infrastructure.database import close_db, init_db
from pdtracker.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    logger.info("PD Tracker API started")
    yield
    await close_db()
    logger.info("PD Tracker API shut down")


app = FastAPI(title="PD Tracker API", version=__version__, lifespan=lifespan)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(pdrecords.router)
app.include_router(staff.router)
app.include_router(lookups.router)

register_error_handlers(app)

# html=True: unknown paths fall back to index.html
if os.path.isdir(settings.static_dir):
    app.mount(
        "/", StaticFiles(directory=settings.static_dir, html=True), name="static",
    )
