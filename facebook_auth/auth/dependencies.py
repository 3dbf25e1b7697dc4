from fastapi import HTTPException, Request

from .models import InternalUserData


async def get_current_user(request: Request) -> InternalUserData:
    user = getattr(request.state, "user", None)
    if user is None:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return user
