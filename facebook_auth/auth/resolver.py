"""
Resolves a Facebook access token to a local user.

Order of operations for an unseen token: cache check, Graph API call,
payload validation, store lookup-or-create, cache write. Only a fully
successful resolution is cached, so failures are retried from scratch on
the next request.
"""

import json
import logging
from typing import Optional

import httpx
from pydantic import ValidationError

from facebook_auth.db.connection import DB_ERRORS
from .cache import IdentityCache
from .facebook_client import FacebookClient
from .models import FacebookProfile, InternalUserData
from .user_store import UserStore

logger = logging.getLogger(__name__)


def mask_token(token: Optional[str]) -> str:
    """Shorten a token for log output."""
    if not token:
        return "<none>"
    return token[:6] + "..." if len(token) > 6 else "***"


class IdentityResolver:
    def __init__(self, client: FacebookClient, store: UserStore, cache: IdentityCache):
        self.client = client
        self.store = store
        self.cache = cache

    async def resolve(self, access_token: str) -> Optional[InternalUserData]:
        """Return the user for access_token, or None if it can't be verified."""
        cached = self.cache.get(access_token)
        if cached is not None:
            return cached

        try:
            raw = await self.client.fetch_profile(access_token)
        except httpx.HTTPError as e:
            logger.warning("Facebook verification failed for token %s: %s", mask_token(access_token), e)
            return None

        profile = self._parse_profile(raw)
        if profile is None:
            return None

        try:
            user = await self.store.get_or_create(profile.to_internal())
        except DB_ERRORS as e:
            logger.error("User lookup failed for facebook_id=%s: %s", profile.id, e)
            return None

        if user is None:
            return None

        self.cache[access_token] = user
        return user

    def forget(self, access_token: Optional[str]) -> None:
        """Drop any cached identity for access_token."""
        if self.cache.evict(access_token):
            logger.info("Evicted cached identity for token %s", mask_token(access_token))

    @staticmethod
    def _parse_profile(raw: str) -> Optional[FacebookProfile]:
        try:
            return FacebookProfile.model_validate(json.loads(raw))
        except json.JSONDecodeError:
            logger.warning("Facebook returned a non-JSON profile response")
        except ValidationError as e:
            logger.warning("Facebook profile is missing required fields: %s", e.error_count())
        return None
