"""Library API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map LibraryApiError → {success: false, error, code}
    - CORS, security headers and rate limiting configured from settings (not hardcoded)
    - Connection pool created once on startup and disposed on shutdown via lifespan;
      uvicorn runs the shutdown half on SIGTERM/SIGINT, so the pool drains before exit

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Startup connectivity probe only logs: a database that comes up after the API
      is reported by /healthz, not by a crash loop
    - Middleware order (outermost first): security headers, CORS, rate limit, so
      preflights and 429s carry the hardening headers too
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from library_api import __version__
from library_api.api.error_handlers import register_error_handlers
from library_api.api.routes import health, resources, users
from library_api.config import get_settings
from library_api.infrastructure.database import close_db, init_db
from library_api.infrastructure.http_middleware import (
    PreflightCORSMiddleware, RateLimitMiddleware, SecurityHeadersMiddleware,
)
from library_api.infrastructure.observability import setup_logging
from library_api.infrastructure.rate_limit import SlidingWindowRateLimiter

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = init_db(
        settings.sqlalchemy_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
        pool_timeout=settings.database_pool_timeout,
    )
    if await manager.health_check():
        logger.info("Database connection OK")
    else:
        logger.warning("Database unreachable at startup")
    logger.info("Library API started")
    yield
    logger.info("Library API shutting down")
    await close_db()


app = FastAPI(title="Library API", version=__version__, lifespan=lifespan)

settings = get_settings()
app.add_middleware(
    RateLimitMiddleware,
    limiter=SlidingWindowRateLimiter(
        settings.rate_limit_requests, settings.rate_limit_window_seconds,
    ),
)
app.add_middleware(
    PreflightCORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)
app.add_middleware(SecurityHeadersMiddleware)

app.include_router(health.router)
app.include_router(users.router)
app.include_router(resources.router)

register_error_handlers(app)
