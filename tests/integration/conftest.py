"""
Fixtures for tests that need PostgreSQL.

Tests using these fixtures are skipped when the configured database
cannot be reached (see DATABASE_URL).
"""

from collections.abc import Iterator

import pytest
from psycopg_pool import ConnectionPool, PoolTimeout

from src.adapters.repository.postgres import PostgresUserRepository, run_migrations
from src.config.settings import get_settings
from tests.conftest import FAST_BCRYPT_COST


@pytest.fixture(scope="module")
def pool() -> Iterator[ConnectionPool]:
    """Create connection pool for integration tests, with migrations applied."""
    settings = get_settings()
    pool = ConnectionPool(
        conninfo=settings.database_url,
        min_size=1,
        max_size=10,
        open=True,
    )
    try:
        pool.wait(timeout=3)
    except PoolTimeout:
        pool.close()
        pytest.skip(f"PostgreSQL not reachable at {settings.database_url}")
    run_migrations(pool)
    yield pool
    pool.close()


@pytest.fixture
def pg_repository(pool: ConnectionPool) -> PostgresUserRepository:
    """Create repository instance for each test."""
    return PostgresUserRepository(pool, bcrypt_cost=FAST_BCRYPT_COST)


@pytest.fixture
def clean_database(pool: ConnectionPool) -> Iterator[None]:
    """Clean users table before each test."""
    with pool.connection() as conn:
        conn.execute("DELETE FROM users")
        conn.commit()
    yield
