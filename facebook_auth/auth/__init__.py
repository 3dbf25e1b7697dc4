from .models import InternalUserData, FacebookProfile, LoginRequest
from .cache import IdentityCache
from .facebook_client import FacebookClient
from .user_store import UserStore
from .resolver import IdentityResolver
from .middleware import FacebookAuthMiddleware
from .dependencies import get_current_user

__all__ = [
    "InternalUserData", "FacebookProfile", "LoginRequest",
    "IdentityCache", "FacebookClient", "UserStore", "IdentityResolver",
    "FacebookAuthMiddleware", "get_current_user",
]
