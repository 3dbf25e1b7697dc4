"""Facebook access-token authentication for FastAPI apps."""

from facebook_auth.auth import (
    FacebookAuthMiddleware,
    FacebookClient,
    IdentityCache,
    IdentityResolver,
    InternalUserData,
    UserStore,
    get_current_user,
)
from facebook_auth.db import DatabasePool

__version__ = "1.0.0"
