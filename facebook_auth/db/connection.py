"""PostgreSQL connection management — one pool per process, injected where needed."""

import asyncio
import logging
from typing import Optional

import asyncpg

from facebook_auth.config import (
    DATABASE_URL, DB_POOL_MIN_SIZE, DB_POOL_MAX_SIZE, DB_COMMAND_TIMEOUT,
)

logger = logging.getLogger(__name__)

# Failures a caller can hit on any query: server errors, a closed or released
# connection, command_timeout, a dropped socket, or a pool that is not open.
DB_ERRORS = (
    asyncpg.PostgresError,
    asyncpg.InterfaceError,
    asyncio.TimeoutError,
    OSError,
    RuntimeError,
)

# ---------------------------------------------------------------------------
# Database wrapper
# ---------------------------------------------------------------------------

class Database:
    """Thin async wrapper over an asyncpg connection."""

    def __init__(self, conn: asyncpg.Connection, pool: asyncpg.Pool):
        self._conn = conn
        self._pool = pool

    async def fetch_val(self, query: str, *args):
        """Fetch the first column of the first row, e.g. an INSERT ... RETURNING id."""
        return await self._conn.fetchval(query, *args)

    async def fetch_one(self, query: str, *args) -> Optional[dict]:
        """Fetch a single row as a dict, or None."""
        row = await self._conn.fetchrow(query, *args)
        return dict(row) if row else None

    async def execute_script(self, sql: str) -> None:
        """Execute multi-statement DDL (no parameters)."""
        await self._conn.execute(sql)

    async def close(self) -> None:
        """Release connection back to its pool."""
        await self._pool.release(self._conn)


# ---------------------------------------------------------------------------
# Connection pool
# ---------------------------------------------------------------------------

class DatabasePool:
    """Owns the asyncpg pool. Opened once at app startup and handed to the
    components that need database access."""

    def __init__(self, dsn: str = DATABASE_URL, pool: Optional[asyncpg.Pool] = None):
        self.dsn = dsn
        self._pool = pool

    @property
    def is_open(self) -> bool:
        return self._pool is not None

    async def open(self) -> None:
        """Create the pool. Calling it twice is a no-op."""
        if self._pool is not None:
            return
        if not self.dsn:
            raise RuntimeError(
                "DATABASE_URL environment variable is required. "
                "Set it to your PostgreSQL connection string."
            )
        self._pool = await asyncpg.create_pool(
            self.dsn,
            min_size=DB_POOL_MIN_SIZE,
            max_size=DB_POOL_MAX_SIZE,
            command_timeout=DB_COMMAND_TIMEOUT,
        )
        logger.info("DB pool created")

    async def acquire(self) -> Database:
        """Acquire a connection from the pool. Callers must close() it."""
        if self._pool is None:
            raise RuntimeError("DatabasePool.acquire() called before open()")
        conn = await self._pool.acquire()
        return Database(conn=conn, pool=self._pool)

    async def close(self) -> None:
        """Close the pool. Called at app shutdown."""
        if self._pool is not None:
            await self._pool.close()
            self._pool = None
        logger.info("DB pool closed")
