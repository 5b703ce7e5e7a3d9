"""
PostgreSQL repository adapter - Implements UserRepository protocol.

This module provides the PostgreSQL implementation of the domain's
repository port using psycopg3 with raw SQL.

Email uniqueness is enforced by the unique index on lower(email)
(see migrations/001_create_users.sql). The lookup performed before the
insert only avoids hashing a password for an obvious duplicate; two
concurrent inserts for the same address are settled by the index, and the
loser surfaces as DuplicateEmail.
"""

import logging
import uuid
from pathlib import Path

from psycopg import errors
from psycopg_pool import ConnectionPool

from src.domain.exceptions import DuplicateEmail
from src.domain.passwords import DEFAULT_BCRYPT_COST, hash_password
from src.domain.ports import NewUser, User

logger = logging.getLogger(__name__)

_USER_COLUMNS = "id, name, email, password, verified, created_at"


def _row_to_user(row: tuple) -> User:
    return User(
        id=row[0],
        name=row[1],
        email=row[2],
        password_hash=row[3],
        verified=row[4],
        created_at=row[5],
    )


class PostgresUserRepository:
    """
    Implements UserRepository protocol via psycopg3.

    Uses structural subtyping - no explicit inheritance from Protocol.
    All SQL uses parameterized queries for security.
    """

    def __init__(self, pool: ConnectionPool, bcrypt_cost: int = DEFAULT_BCRYPT_COST) -> None:
        """
        Initialize repository with connection pool.

        Args:
            pool: psycopg3 ConnectionPool for database connections
            bcrypt_cost: bcrypt work factor for new password hashes
        """
        self._pool = pool
        self._bcrypt_cost = bcrypt_cost

    def get_by_id(self, user_id: str) -> User | None:
        sql = f"SELECT {_USER_COLUMNS} FROM users WHERE id = %s"

        with self._pool.connection() as conn, conn.cursor() as cursor:
            cursor.execute(sql, (user_id,))
            row = cursor.fetchone()
        return _row_to_user(row) if row is not None else None

    def get_by_email(self, email: str) -> User | None:
        sql = f"SELECT {_USER_COLUMNS} FROM users WHERE lower(email) = lower(%s)"

        with self._pool.connection() as conn, conn.cursor() as cursor:
            cursor.execute(sql, (email,))
            row = cursor.fetchone()
        return _row_to_user(row) if row is not None else None

    def create(self, new_user: NewUser) -> User:
        """
        Insert a new user row.

        The database generates created_at; the id is a fresh UUID4.

        Args:
            new_user: Validated registration input with plaintext password

        Returns:
            The stored User as read back from the INSERT

        Raises:
            DuplicateEmail: If the email is already registered, including
                when a concurrent insert wins the unique index
        """
        if self.get_by_email(new_user.email) is not None:
            raise DuplicateEmail(new_user.email)

        sql = f"""
            INSERT INTO users (id, name, email, password, verified, created_at)
            VALUES (%s, %s, %s, %s, FALSE, NOW())
            RETURNING {_USER_COLUMNS}
        """
        password_hash = hash_password(new_user.password, self._bcrypt_cost)
        user_id = str(uuid.uuid4())

        with self._pool.connection() as conn, conn.cursor() as cursor:
            try:
                cursor.execute(sql, (user_id, new_user.name, new_user.email, password_hash))
            except errors.UniqueViolation:
                conn.rollback()
                raise DuplicateEmail(new_user.email) from None
            row = cursor.fetchone()
            conn.commit()

        return _row_to_user(row)


def run_migrations(pool: ConnectionPool) -> None:
    """
    Execute all SQL migration files from the migrations directory.

    Migrations are executed in sorted order (alphabetically by filename).
    Each migration should be idempotent (use IF NOT EXISTS, etc.).

    Args:
        pool: psycopg3 ConnectionPool instance
    """
    # Structure: src/adapters/repository/postgres.py -> migrations/
    migrations_dir = Path(__file__).parent.parent.parent.parent / "migrations"

    if not migrations_dir.exists():
        logger.warning("Migrations directory not found: %s", migrations_dir)
        return

    sql_files = sorted(migrations_dir.glob("*.sql"))

    if not sql_files:
        logger.info("No migration files found")
        return

    logger.info("Running %d migration(s)", len(sql_files))

    for sql_file in sql_files:
        logger.info("Executing migration: %s", sql_file.name)
        try:
            sql_content = sql_file.read_text()

            with pool.connection() as conn:
                conn.execute(sql_content)

            logger.info("Migration complete: %s", sql_file.name)
        except Exception as e:
            logger.error("Migration failed: %s - %s", sql_file.name, e)
            raise RuntimeError(f"Database migration failed: {sql_file.name}") from e
