"""Database abstraction layer for PostgreSQL (asyncpg)."""

from facebook_auth.db.connection import (
    Database,
    DatabasePool,
    DB_ERRORS,
)
from facebook_auth.db.schema import SCHEMA, ensure_schema
