"""
User persistence. Users are hard-deleted; login looks them up by email.
"""

from __future__ import annotations

from fastapi import Depends

from core.db import Database, get_database
from core.errors import NotFoundError
from core.resource import ResourceRepository, ResourceSpec, infra_fallback

USERS = ResourceSpec(
    name="user",
    plural="users",
    table="users",
    columns=("email", "password_hash"),
)


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


class UserRepository(ResourceRepository):
    def __init__(self, db: Database):
        super().__init__(db, USERS)

    async def get_by_email(self, email: str) -> dict:
        """
        Return the user row for `email`, or raise `NotFoundError`.
        """
        with infra_fallback("Some error occurred while looking up the user."):
            row = await self.db.fetch_one(
                """
                SELECT id, email, password_hash
                FROM users
                WHERE lower(email) = lower($1)
                """,
                normalize_email(email),
            )
        if row is None:
            raise NotFoundError(self.spec.name, email)
        return row


def get_repository(db: Database = Depends(get_database)) -> UserRepository:
    return UserRepository(db)
