"""Facebook access-token authentication middleware for FastAPI.

Looks for a token in the JSON body (`facebookAccessToken`, used on first
login) or in the session (`session["user"]["facebookAccessToken"]`),
resolves it to a site user and stores the result on `request.state.user`.
Requests that can't be authenticated are answered with
`{"error": "LOGIN_REQUIRED"}` and never reach the route.

Must be added *before* Starlette's SessionMiddleware so that the session
middleware wraps this one and `request.session` is populated.
"""

import json
import logging
from typing import Optional, Sequence

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from facebook_auth.config import LOGOUT_PATH, LOGIN_REQUIRED_STATUS, EXEMPT_PATHS
from .resolver import IdentityResolver, mask_token

logger = logging.getLogger(__name__)

TOKEN_FIELD = "facebookAccessToken"
SESSION_USER_KEY = "user"
LOGIN_REQUIRED = "LOGIN_REQUIRED"


class FacebookAuthMiddleware(BaseHTTPMiddleware):
    def __init__(
        self,
        app,
        resolver: IdentityResolver,
        logout_path: str = LOGOUT_PATH,
        exempt_paths: Optional[Sequence[str]] = None,
    ):
        super().__init__(app)
        self.resolver = resolver
        self.logout_path = logout_path
        self.exempt_paths = list(EXEMPT_PATHS if exempt_paths is None else exempt_paths)

    async def dispatch(self, request: Request, call_next) -> Response:
        path = request.url.path
        if self._is_exempt(path):
            return await call_next(request)

        access_token = await self._extract_token(request)

        if path == self.logout_path:
            self.resolver.forget(access_token)
            if "session" in request.scope:
                request.session.clear()
            return await call_next(request)

        if not access_token:
            return self._login_required(request)

        try:
            user = await self.resolver.resolve(access_token)
        except Exception:
            logger.exception("Identity resolution failed for token %s", mask_token(access_token))
            user = None

        if user is None:
            return self._login_required(request)

        request.state.user = user
        if "session" in request.scope:
            session_user = dict(request.session.get(SESSION_USER_KEY) or {})
            session_user[TOKEN_FIELD] = access_token
            request.session[SESSION_USER_KEY] = session_user

        return await call_next(request)

    def _is_exempt(self, path: str) -> bool:
        """Exact match or a sub-path; /health does not cover /healthcare."""
        return any(
            path == p or path.startswith(p.rstrip("/") + "/")
            for p in self.exempt_paths
        )

    async def _extract_token(self, request: Request) -> Optional[str]:
        """Body token first, then the one remembered in the session."""
        token = await self._token_from_body(request)
        if token:
            return token

        if "session" in request.scope:
            session_user = request.session.get(SESSION_USER_KEY)
            if isinstance(session_user, dict):
                token = session_user.get(TOKEN_FIELD)
                if isinstance(token, str) and token:
                    return token
        return None

    @staticmethod
    async def _token_from_body(request: Request) -> Optional[str]:
        if "application/json" not in request.headers.get("content-type", ""):
            return None
        body = await request.body()
        if not body:
            return None
        try:
            payload = json.loads(body)
        except (json.JSONDecodeError, UnicodeDecodeError):
            return None
        if not isinstance(payload, dict):
            return None
        token = payload.get(TOKEN_FIELD)
        return token if isinstance(token, str) and token else None

    @staticmethod
    def _login_required(request: Request) -> JSONResponse:
        if "session" in request.scope:
            request.session.pop(SESSION_USER_KEY, None)
        return JSONResponse({"error": LOGIN_REQUIRED}, status_code=LOGIN_REQUIRED_STATUS)
