"""Stockroom API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map every failure to the {error, message, statusCode} envelope
    - CORS configured from settings (not hardcoded)
    - ContextLogger built at import time and kept on app.state
    - Database session manager created on startup and disposed on shutdown

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - app.state over module globals: handlers reach shared resources through the request
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from stockroom import __version__
from stockroom.api.error_handlers import register_error_handlers
from stockroom.api.routes import health, products
from stockroom.config import get_settings
from stockroom.infrastructure.database import DatabaseSessionManager
from stockroom.infrastructure.observability import ContextLogger, setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    app.state.db_manager = DatabaseSessionManager(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    logger.info("Stockroom API started")
    yield
    await app.state.db_manager.close()
    logger.info("Stockroom API shutting down")


app = FastAPI(
    title="Stockroom API", version=__version__, lifespan=lifespan,
)

settings = get_settings()
app.state.app_logger = ContextLogger(
    logging.getLogger("stockroom"), environment=settings.environment,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(products.router)

register_error_handlers(app)
