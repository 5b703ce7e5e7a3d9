"""
FastAPI application factory and configuration.

This module creates the FastAPI application instance,
configures exception handlers, and lifespan events.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request
from psycopg_pool import ConnectionPool

from src.adapters.repository.memory import InMemoryUserRepository
from src.adapters.repository.postgres import PostgresUserRepository, run_migrations
from src.adapters.verifier.cleansignups import CleanSignupsVerifier
from src.api.errors import register_exception_handlers
from src.api.routes import router as api_router
from src.config.settings import get_settings

logger = logging.getLogger(__name__)

# OpenAPI tags for documentation grouping
tags_metadata = [
    {
        "name": "registration",
        "description": "User registration API - Screen email addresses and create accounts",
    },
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    FastAPI lifespan context manager.

    Manages application startup and shutdown:
    - Creates the user repository (in-memory, or Postgres pool + migrations)
    - Creates the HTTP client used by the email verifier
    - Closes both on shutdown
    """
    settings = get_settings()
    logging.basicConfig(level=settings.log_level.upper())

    logger.info("Starting application...")

    pool: ConnectionPool | None = None
    if settings.store_backend == "postgres":
        logger.info("Connecting to database...")
        pool = ConnectionPool(
            conninfo=settings.database_url,
            min_size=settings.pool_min_size,
            max_size=settings.pool_max_size,
        )
        logger.info("Running database migrations...")
        run_migrations(pool)
        app.state.repository = PostgresUserRepository(pool, bcrypt_cost=settings.bcrypt_cost)
    else:
        logger.info("Using in-memory user store")
        app.state.repository = InMemoryUserRepository(bcrypt_cost=settings.bcrypt_cost)
    app.state.pool = pool

    http_client = httpx.Client(timeout=settings.verifier_timeout_seconds)
    if not settings.verifier_api_key:
        logger.warning(
            "VERIFIER_API_KEY is not set; verifier calls will fail and every email will be accepted"
        )
    app.state.verifier = CleanSignupsVerifier(
        http_client,
        endpoint=settings.verifier_endpoint,
        api_key=settings.verifier_api_key,
    )

    logger.info("Application startup complete")

    yield

    # Shutdown
    logger.info("Shutting down application...")
    http_client.close()
    if pool is not None:
        pool.close()
        logger.info("Database connection pool closed")


app = FastAPI(
    title="signup",
    description="User registration API with email quality screening",
    version="0.1.0",
    openapi_tags=tags_metadata,
    lifespan=lifespan,
)

register_exception_handlers(app)
app.include_router(api_router, prefix="/api")


@app.get("/health")
async def health_check(request: Request) -> dict[str, str]:
    """
    Health check endpoint.

    Returns 200 OK if the application is up. With the Postgres backend the
    database is queried too, and a connection failure raises.
    """
    pool = getattr(request.app.state, "pool", None)
    if pool is not None:
        with pool.connection() as conn:
            conn.execute("SELECT 1")

    return {"status": "healthy"}
