"""Secure Notes API: FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map SecureNotesError -> structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup via lifespan context manager

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Schema managed by Alembic (backend/alembic), not create_all at startup
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from secure_notes.api.error_handlers import register_error_handlers
from secure_notes.infrastructure.database import init_db
from secure_notes.infrastructure.observability import setup_logging
from secure_notes.config import get_settings
from secure_notes.api.routes import health, contract_calls, event_logs

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
    logger.info(f"Secure Notes API started for contract {settings.contract_address}")
    yield
    logger.info("Secure Notes API shutting down")


app = FastAPI(
    title="Secure Notes API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(contract_calls.router)
app.include_router(event_logs.router)

register_error_handlers(app)
