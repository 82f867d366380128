from __future__ import annotations

from fastapi import HTTPException, Request

_SIGN_IN_REQUIRED = "Sign in to continue"


def get_current_user(request: Request) -> dict | None:
    """Return the signed-in user from the session, or ``None`` for guests."""
    return request.session.get("user")


def require_user(request: Request) -> dict:
    user = get_current_user(request)
    if not user:
        raise HTTPException(status_code=401, detail=_SIGN_IN_REQUIRED)
    return user


def require_admin(request: Request) -> dict:
    user = require_user(request)
    if user.get("role") != "admin":
        raise HTTPException(status_code=403, detail="Admin access required")
    return user


def is_owner_or_admin(user: dict | None, owner_id: str | None) -> bool:
    """Whether ``user`` may see records that are not public yet."""
    if not user:
        return False
    return user.get("role") == "admin" or (owner_id is not None and user.get("id") == owner_id)
