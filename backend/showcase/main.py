"""Showcase API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Portfolio routes registered before comment routes: literal segments such
      as /portfolios/{title}/edit must win over /portfolios/{title}/{comment_id}
    - Global error handlers map ShowcaseError → redirects / structured JSON
    - Sessions are signed cookies (SessionMiddleware), secret from settings
    - Database initialized on startup via lifespan context manager

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Process-wide state limited to settings and the DB pool, both read-only
      after startup; everything about the caller is request-scoped
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.sessions import SessionMiddleware

from showcase.api.error_handlers import register_error_handlers
from showcase.api.routes import accounts, auth, comments, health, jobs, portfolios
from showcase.config import get_settings
from showcase.infrastructure import database
from showcase.infrastructure.observability import setup_logging

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
    logger.info("Showcase API started")
    yield
    if database.db_manager:
        await database.db_manager.dispose()
    logger.info("Showcase API shutting down")


app = FastAPI(title="Showcase API", version="1.0.0", lifespan=lifespan)

settings = get_settings()
app.add_middleware(
    SessionMiddleware,
    secret_key=settings.session_secret,
    session_cookie=settings.session_cookie,
    max_age=settings.session_max_age_seconds,
    same_site="lax",
    https_only=settings.session_https_only,
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(auth.router)
app.include_router(accounts.router)
app.include_router(portfolios.router)
app.include_router(comments.router)
app.include_router(jobs.router)

register_error_handlers(app)
