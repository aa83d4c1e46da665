"""
Auth business logic: sign-up, login and access-token checks.
"""

from __future__ import annotations

import asyncio
import logging

from fastapi import status

from core.errors import AuthError, NotFoundError
from core.resource import require_fields

from . import repository, schemas, security

logger = logging.getLogger(__name__)

REQUIRED_CREDENTIALS_MESSAGE = "Email and password are required."
INVALID_LOGIN_MESSAGE = "Invalid email or password."
INVALID_TOKEN_MESSAGE = "Invalid access token."


def _require_credentials(payload: schemas.CredentialsRequest) -> None:
    require_fields(
        payload,
        "email",
        "password",
        message=REQUIRED_CREDENTIALS_MESSAGE,
        non_empty=("email", "password"),
    )


def _to_user_response(user_row: dict) -> schemas.UserResponse:
    return schemas.UserResponse(id=int(user_row["id"]), email=str(user_row["email"]))


async def create_user(
    repo: repository.UserRepository,
    payload: schemas.CredentialsRequest,
) -> schemas.UserResponse:
    _require_credentials(payload)

    user_row = await repo.insert(
        {
            "email": repository.normalize_email(payload.email),
            "password_hash": await asyncio.to_thread(security.hash_password, payload.password),
        }
    )
    logger.info("user_created user_id=%s", user_row["id"])
    return _to_user_response(user_row)


async def login(
    repo: repository.UserRepository,
    payload: schemas.CredentialsRequest,
) -> schemas.TokenPairResponse:
    _require_credentials(payload)

    # Unknown email and wrong password share one message on purpose.
    try:
        user_row = await repo.get_by_email(payload.email)
    except NotFoundError:
        logger.info("login_failed reason=unknown_email")
        raise AuthError(INVALID_LOGIN_MESSAGE) from None

    # bcrypt runs in a worker thread.
    password_ok = await asyncio.to_thread(
        security.verify_password,
        payload.password,
        str(user_row.get("password_hash") or ""),
    )
    if not password_ok:
        logger.info("login_failed reason=bad_password user_id=%s", user_row["id"])
        raise AuthError(INVALID_LOGIN_MESSAGE)

    user_id = int(user_row["id"])
    access_token = security.build_access_token(user_id=user_id)
    refresh_token = security.build_refresh_token(user_id=user_id, access_token=access_token)
    return schemas.TokenPairResponse(accessToken=access_token, refreshToken=refresh_token)


def user_id_from_access_token(access_token: str) -> int:
    """
    Verify signature, expiry and type; return the `userID` claim.

    Invalid tokens answer 400 rather than 401, matching the established API.
    """
    try:
        payload = security.decode_access_token(access_token)
    except security.AuthSecurityError as exc:
        raise AuthError(INVALID_TOKEN_MESSAGE, status_code=status.HTTP_400_BAD_REQUEST) from exc
    return int(payload["userID"])
