"""
Auth dependencies for protected FastAPI routes.
"""

from __future__ import annotations

from fastapi import Depends, Header, Request

from core.errors import AuthError

from . import service


def _extract_token(authorization: str | None) -> str:
    raw = (authorization or "").strip()
    if not raw:
        raise AuthError("Access token is missing.")

    # Accept "Bearer <token>" as well as the bare token value.
    scheme, _, rest = raw.partition(" ")
    if scheme.lower() == "bearer":
        return rest.strip()
    return raw


async def get_access_token(authorization: str | None = Header(default=None)) -> str:
    return _extract_token(authorization)


async def get_current_user_id(
    request: Request,
    access_token: str = Depends(get_access_token),
) -> int:
    user_id = service.user_id_from_access_token(access_token)
    request.state.user_id = user_id
    return user_id
