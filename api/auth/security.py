"""
Auth security helpers: password hashing and signed session tokens.
"""

from __future__ import annotations

import base64
import hashlib
import time
from typing import Any

import bcrypt
import jwt

from core.settings import env_int, env_str

BCRYPT_MAX_BYTES = 72


class AuthSecurityError(RuntimeError):
    pass


def secret_key() -> str:
    # Local default keeps development simple.
    # In production, set SECRET_KEY and REFRESH_KEY in environment.
    return env_str("SECRET_KEY", "dev-change-this-secret")


def refresh_key() -> str:
    return env_str("REFRESH_KEY", "dev-change-this-refresh-secret")


def jwt_algorithm() -> str:
    return env_str("JWT_ALG", "HS256")


def access_token_expire_minutes() -> int:
    return env_int("ACCESS_TOKEN_EXPIRE_MIN", 60)


def refresh_token_expire_days() -> int:
    return env_int("REFRESH_TOKEN_EXPIRE_DAYS", 7)


def now_epoch_s() -> int:
    return int(time.time())


def _bcrypt_input(plain_password: str) -> bytes:
    """
    bcrypt only accepts 72 bytes; longer passwords are reduced to a SHA-256 digest first.
    """
    password = (plain_password or "").encode("utf-8")
    if len(password) > BCRYPT_MAX_BYTES:
        return base64.b64encode(hashlib.sha256(password).digest())
    return password


def hash_password(plain_password: str) -> str:
    password = _bcrypt_input(plain_password)
    if not password:
        raise AuthSecurityError("Password is empty.")
    return bcrypt.hashpw(password, bcrypt.gensalt()).decode("utf-8")


def verify_password(plain_password: str, password_hash: str) -> bool:
    password = _bcrypt_input(plain_password)
    hashed = (password_hash or "").encode("utf-8")
    if not password or not hashed:
        return False
    try:
        return bcrypt.checkpw(password, hashed)
    except ValueError:
        return False


def build_access_token(*, user_id: int) -> str:
    issued_at = now_epoch_s()
    payload = {
        "userID": user_id,
        "type": "access",
        "iat": issued_at,
        "exp": issued_at + (access_token_expire_minutes() * 60),
    }
    return jwt.encode(payload, secret_key(), algorithm=jwt_algorithm())


def build_refresh_token(*, user_id: int, access_token: str) -> str:
    """
    Longer-lived token bound to the access token it was issued with.

    Signed with a separate key so it can never pass as an access token.
    """
    issued_at = now_epoch_s()
    payload = {
        "userID": user_id,
        "accessToken": access_token,
        "type": "refresh",
        "iat": issued_at,
        "exp": issued_at + (refresh_token_expire_days() * 24 * 60 * 60),
    }
    return jwt.encode(payload, refresh_key(), algorithm=jwt_algorithm())


def decode_access_token(token: str) -> dict[str, Any]:
    raw = (token or "").strip()
    if not raw:
        raise AuthSecurityError("Access token is empty.")

    try:
        payload = jwt.decode(raw, secret_key(), algorithms=[jwt_algorithm()])
    except jwt.InvalidTokenError as exc:
        raise AuthSecurityError("Invalid access token.") from exc

    token_type = str(payload.get("type") or "").strip().lower()
    if token_type != "access":
        raise AuthSecurityError("Token is not an access token.")

    user_id = payload.get("userID")
    if not isinstance(user_id, int) or isinstance(user_id, bool):
        raise AuthSecurityError("Access token has no user id.")

    return payload
