"""
Auth gate for protected routes.

`get_current_user` resolves `Authorization: Bearer <token>` to a user row
before the route body runs; every failure is a 401.
"""

from __future__ import annotations

from fastapi import Depends, Header, HTTPException, status

from users.dependencies import get_user_repository
from users.repository import UserRepository

from . import service


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)


def parse_bearer(authorization: str | None) -> str:
    raw = (authorization or "").strip()
    if not raw:
        raise _unauthorized("Missing Authorization header.")

    scheme, sep, token = raw.partition(" ")
    if not sep:
        raise _unauthorized("Invalid Authorization header format.")
    if scheme.lower() != "bearer" or not token.strip():
        raise _unauthorized("Authorization must be: Bearer <token>.")
    return token.strip()


async def get_bearer_token(authorization: str | None = Header(default=None)) -> str:
    return parse_bearer(authorization)


async def get_current_user(
    access_token: str = Depends(get_bearer_token),
    users: UserRepository = Depends(get_user_repository),
) -> dict:
    return await service.get_user_from_access_token(access_token, users)
