"""Argument Forge API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map ForgeError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - One Oracle per process, built in the lifespan and stored on app.state

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Error handlers live in api/error_handlers.py
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from argument_forge import __version__
from argument_forge.api.error_handlers import register_error_handlers
from argument_forge.api.routes import enhancements, health, rebuttals
from argument_forge.config import get_settings
from argument_forge.infrastructure.observability import setup_logging
from argument_forge.services.oracle import Oracle

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    app.state.oracle = Oracle.from_settings(settings)
    logger.info("Argument Forge API started")
    yield
    await app.state.oracle.client.close()
    logger.info("Argument Forge API shutting down")


app = FastAPI(
    title="Argument Forge API", version=__version__, lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(rebuttals.router)
app.include_router(enhancements.router)

register_error_handlers(app)
