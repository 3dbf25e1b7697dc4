"""PostgreSQL access for the site_user table."""

import logging
from typing import Optional

from facebook_auth.db.connection import DB_ERRORS, DatabasePool
from .models import InternalUserData

logger = logging.getLogger(__name__)


class UserStore:
    def __init__(self, pool: DatabasePool):
        self.pool = pool

    async def get_by_facebook_id(self, facebook_id: str) -> Optional[InternalUserData]:
        """Look up a user by Facebook ID. Returns None when there is no row."""
        db = await self.pool.acquire()
        try:
            row = await db.fetch_one(
                "SELECT id, facebook_user_id, email, full_name FROM site_user "
                "WHERE facebook_user_id = $1 LIMIT 1",
                facebook_id,
            )
            return InternalUserData.from_row(row) if row else None
        finally:
            await db.close()

    async def add_user(self, user_data: InternalUserData) -> Optional[InternalUserData]:
        """Insert a new user. Returns the user with its new id, or None on failure."""
        try:
            db = await self.pool.acquire()
            try:
                new_id = await db.fetch_val(
                    "INSERT INTO site_user (facebook_user_id, email, full_name) "
                    "VALUES ($1, $2, $3) RETURNING id",
                    user_data.facebook_id, user_data.email, user_data.full_name,
                )
            finally:
                await db.close()
        except DB_ERRORS as e:
            logger.error("Failed to insert user facebook_id=%s: %s", user_data.facebook_id, e)
            return None

        if new_id is None:
            logger.error("Insert for facebook_id=%s returned no id", user_data.facebook_id)
            return None
        return user_data.model_copy(update={"id": new_id})

    async def get_or_create(self, user_data: InternalUserData) -> Optional[InternalUserData]:
        """
        Return the stored user for user_data.facebook_id, creating it if needed.

        An existing row wins over user_data: email and name are not refreshed.
        """
        existing = await self.get_by_facebook_id(user_data.facebook_id)
        if existing is not None:
            return existing
        created = await self.add_user(user_data)
        if created is not None:
            logger.info("Created user id=%s for facebook_id=%s", created.id, created.facebook_id)
        return created
