"""Task Manager API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map TaskManagerError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup and disposed on shutdown via lifespan

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Error handlers live in api/error_handlers.py
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import get_settings
from app.infrastructure import database
from app.infrastructure.observability import setup_logging
from app.api.error_handlers import register_error_handlers
from app.api.dependencies import get_identity_client
from app.api.routes import (
    account, ai, billing, checklists, credits, health, peers, records, search,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    database.init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    logger.info("Task Manager API started")
    yield
    logger.info("Task Manager API shutting down")
    if database.db_manager:
        await database.db_manager.dispose()
    if get_identity_client.cache_info().currsize:
        await get_identity_client().close()


app = FastAPI(title="Task Manager API", version="1.0.0", lifespan=lifespan)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
for record_router in records.routers:
    app.include_router(record_router)
app.include_router(search.router)
app.include_router(checklists.router)
app.include_router(checklists.shared_router)
app.include_router(peers.router)
app.include_router(account.router)
app.include_router(credits.router)
app.include_router(billing.router)
app.include_router(billing.account_router)
app.include_router(ai.router)

register_error_handlers(app)
