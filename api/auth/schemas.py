"""
Auth API schemas (request/response models).
"""

from __future__ import annotations

from pydantic import BaseModel


class CredentialsRequest(BaseModel):
    # Presence is checked by the service so both fields share one message.
    email: str | None = None
    password: str | None = None


class UserResponse(BaseModel):
    id: int
    email: str


class TokenPairResponse(BaseModel):
    accessToken: str
    refreshToken: str
