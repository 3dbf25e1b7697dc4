"""PostgreSQL schema definitions for the user store."""

from facebook_auth.db.connection import DatabasePool

SCHEMA = """
CREATE TABLE IF NOT EXISTS site_user (
    id SERIAL PRIMARY KEY,
    facebook_user_id TEXT UNIQUE NOT NULL,
    email TEXT,
    full_name TEXT,
    created_at TIMESTAMPTZ DEFAULT NOW()
);
"""


async def ensure_schema(pool: DatabasePool) -> None:
    """Create the site_user table if it doesn't exist."""
    db = await pool.acquire()
    try:
        await db.execute_script(SCHEMA)
    finally:
        await db.close()
