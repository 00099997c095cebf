"""Request dependencies shared by the API routers."""
from __future__ import annotations

from fastapi import Header, HTTPException, status


async def get_owner_id(x_user_id: str | None = Header(default=None)) -> int:
    """Return the authenticated owner id forwarded by the auth proxy."""

    if x_user_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"code": "UNAUTHENTICATED", "message": "Missing X-User-Id header"},
        )
    try:
        owner_id = int(x_user_id)
    except ValueError:
        owner_id = 0
    if owner_id <= 0:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"code": "UNAUTHENTICATED", "message": "Invalid X-User-Id header"},
        )
    return owner_id
