import logging
from typing import Optional

import uvicorn
from fastapi import Depends, FastAPI
from starlette.middleware.sessions import SessionMiddleware

from facebook_auth.auth import (
    FacebookAuthMiddleware, FacebookClient, IdentityCache, IdentityResolver,
    InternalUserData, LoginRequest, UserStore, get_current_user,
)
from facebook_auth.config import (
    DEFAULT_SESSION_SECRET_KEY, LOG_LEVEL, LOGOUT_PATH, SESSION_SECRET_KEY, SESSION_MAX_AGE,
)
from facebook_auth.db import DatabasePool, ensure_schema

logger = logging.getLogger(__name__)


def create_app(
    resolver: Optional[IdentityResolver] = None,
    session_secret: str = SESSION_SECRET_KEY,
) -> FastAPI:
    """
    Build the API.

    When no resolver is given the real one is wired up: a DatabasePool that
    is opened on startup, a Graph API client and a fresh IdentityCache.
    """
    app = FastAPI(
        title="Facebook Auth API",
        description="Facebook access-token login backed by PostgreSQL",
        version="1.0.0",
    )

    if session_secret == DEFAULT_SESSION_SECRET_KEY:
        logger.warning(
            "SESSION_SECRET_KEY is not set; session cookies are signed with the "
            "built-in development key. Set it before deploying."
        )

    db_pool: Optional[DatabasePool] = None
    facebook_client: Optional[FacebookClient] = None
    if resolver is None:
        db_pool = DatabasePool()
        facebook_client = FacebookClient()
        resolver = IdentityResolver(
            client=facebook_client,
            store=UserStore(db_pool),
            cache=IdentityCache(),
        )

    # Order matters: the last middleware added runs first, and the auth
    # middleware needs request.session.
    app.add_middleware(FacebookAuthMiddleware, resolver=resolver, logout_path=LOGOUT_PATH)
    app.add_middleware(SessionMiddleware, secret_key=session_secret, max_age=SESSION_MAX_AGE)

    @app.on_event("startup")
    async def startup():
        if db_pool is not None:
            await db_pool.open()
            await ensure_schema(db_pool)

    @app.on_event("shutdown")
    async def shutdown():
        if facebook_client is not None:
            await facebook_client.aclose()
        if db_pool is not None:
            await db_pool.close()

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    # The middleware has already verified body.facebookAccessToken by the
    # time this runs; the model only documents the request shape.
    @app.post("/services/userAuth/login")
    async def login(body: LoginRequest, user: InternalUserData = Depends(get_current_user)):
        logger.info("User %s logged in", user.id)
        return {"success": True, "user": user.to_public()}

    @app.get("/services/userAuth/me")
    async def me(user: InternalUserData = Depends(get_current_user)):
        return {"user": user.to_public()}

    @app.post(LOGOUT_PATH)
    async def logout():
        return {"success": True}

    return app


if __name__ == "__main__":
    logging.basicConfig(level=LOG_LEVEL)
    uvicorn.run(create_app(), host="0.0.0.0", port=8000)
