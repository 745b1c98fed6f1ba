"""Expense Tracker API - FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers registered from api/error_handlers.py
    - Every request gets a trace id (X-Request-ID in, X-Request-ID out)
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup via lifespan context manager

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from expense_tracker.api.error_handlers import register_error_handlers
from expense_tracker.api.routes import expenses, health
from expense_tracker.config import get_settings
from expense_tracker.infrastructure.database import init_db
from expense_tracker.infrastructure.observability import (
    TRACE_ID_HEADER, bind_trace_id, new_trace_id, reset_trace_id, setup_logging,
)

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
    if settings.database_create_tables:
        await manager.create_tables()
        logger.info("Database tables created")
    logger.info("Expense Tracker API started")
    yield
    await manager.dispose()
    logger.info("Expense Tracker API shutting down")


app = FastAPI(
    title="Expense Tracker API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Location", TRACE_ID_HEADER],
)


@app.middleware("http")
async def assign_trace_id(request: Request, call_next):
    """Bind a trace id for logs and error bodies; echo it on the response."""
    trace_id = request.headers.get(TRACE_ID_HEADER) or new_trace_id()
    request.state.trace_id = trace_id
    token = bind_trace_id(trace_id)
    try:
        response = await call_next(request)
    finally:
        reset_trace_id(token)
    response.headers[TRACE_ID_HEADER] = trace_id
    return response


# Routes - explicit registration
app.include_router(health.router)
app.include_router(expenses.router)

register_error_handlers(app)
