"""Mongo Admin API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map MongoAdminError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Connection provider created on startup and every session closed on shutdown
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from mongo_admin.api.error_handlers import register_error_handlers
from mongo_admin.api.routes import databases, health, sessions
from mongo_admin.config import get_settings
from mongo_admin.infrastructure.observability import setup_logging
from mongo_admin.infrastructure.session_connections import SessionConnectionProvider

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    app.state.connections = SessionConnectionProvider(
        server_selection_timeout_ms=settings.mongo_server_selection_timeout_ms,
        connect_timeout_ms=settings.mongo_connect_timeout_ms,
    )
    logger.info("Mongo Admin API started")
    yield
    app.state.connections.close_all()
    logger.info("Mongo Admin API shutting down")


app = FastAPI(
    title="Mongo Admin API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(sessions.router)
app.include_router(databases.router)

register_error_handlers(app)
