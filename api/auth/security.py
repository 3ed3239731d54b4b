"""
Password hashing and access tokens for the todo API.

Access tokens are short-lived HS256 JWTs naming the user in `sub`; there is
no refresh flow, clients log in again once a token expires.
"""

from __future__ import annotations

import os
import time
from dataclasses import dataclass
from typing import Any

import bcrypt
import jwt

DEV_JWT_SECRET = "todo-dev-secret-change-me"


class AuthSecurityError(RuntimeError):
    pass


@dataclass(frozen=True)
class AccessClaims:
    user_id: int
    email: str
    expires_at: int


def jwt_secret() -> str:
    return os.environ.get("JWT_SECRET", "").strip() or DEV_JWT_SECRET


def jwt_algorithm() -> str:
    return os.environ.get("JWT_ALG", "").strip() or "HS256"


def access_token_ttl_s() -> int:
    raw = os.environ.get("ACCESS_TOKEN_EXPIRE_MIN", "").strip()
    try:
        minutes = int(raw) if raw else 60
    except ValueError:
        minutes = 60
    return minutes * 60


def hash_password(plain_password: str) -> str:
    if not plain_password:
        raise AuthSecurityError("Password is empty.")
    return bcrypt.hashpw(plain_password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(plain_password: str, password_hash: str) -> bool:
    if not plain_password or not password_hash:
        return False
    try:
        return bcrypt.checkpw(plain_password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash.
        return False


def build_access_token(*, user_id: int, email: str) -> str:
    issued_at = int(time.time())
    payload = {
        "sub": str(user_id),
        "email": email,
        "type": "access",
        "iat": issued_at,
        "exp": issued_at + access_token_ttl_s(),
    }
    return jwt.encode(payload, jwt_secret(), algorithm=jwt_algorithm())


def _claims_from_payload(payload: dict[str, Any]) -> AccessClaims:
    if str(payload.get("type") or "").strip().lower() != "access":
        raise AuthSecurityError("Token is not an access token.")

    subject = str(payload.get("sub") or "").strip()
    if not subject.isdigit():
        raise AuthSecurityError("Invalid access token subject.")

    return AccessClaims(
        user_id=int(subject),
        email=str(payload.get("email") or ""),
        expires_at=int(payload.get("exp") or 0),
    )


def decode_access_token(token: str) -> AccessClaims:
    raw = (token or "").strip()
    if not raw:
        raise AuthSecurityError("Access token is empty.")

    try:
        payload = jwt.decode(raw, jwt_secret(), algorithms=[jwt_algorithm()])
    except jwt.ExpiredSignatureError as exc:
        raise AuthSecurityError("Access token is expired.") from exc
    except jwt.InvalidTokenError as exc:
        raise AuthSecurityError("Invalid access token.") from exc

    return _claims_from_payload(payload)
