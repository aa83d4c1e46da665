"""
Async database access (raw SQL) using asyncpg.

`Database` owns the connection pool. The FastAPI lifespan opens it on startup,
stores it on `app.state.db` and closes it on shutdown (see `api/main.py`).
Repositories receive the handle at construction instead of reaching for a
module-level global.

SQL parameter style:
- asyncpg uses positional placeholders: $1, $2, $3, ...

Driver failures are re-raised as `InfrastructureError` carrying only the
driver's own message string.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import asyncpg
from fastapi import Request

from .errors import InfrastructureError
from .settings import env_int, env_str

logger = logging.getLogger(__name__)

# asyncio.TimeoutError (command_timeout) is only an OSError from Python 3.11 on.
_DRIVER_ERRORS = (asyncpg.PostgresError, asyncpg.InterfaceError, OSError, asyncio.TimeoutError)


def _sanitize_database_url(url: str) -> str:
    parts = urlsplit(url)
    if not parts.query:
        return url

    params = [(k, v) for (k, v) in parse_qsl(parts.query, keep_blank_values=True) if k != "sslmode"]
    query = urlencode(params)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))


def database_url() -> str:
    url = env_str("DATABASE_URL")
    if not url:
        raise RuntimeError("DATABASE_URL is not set.")
    return _sanitize_database_url(url)


def affected_rows(status_tag: str) -> int:
    """
    Parse the affected-row count out of an asyncpg command status.

    Examples: "UPDATE 1" -> 1, "DELETE 0" -> 0, "INSERT 0 3" -> 3.
    """
    parts = (status_tag or "").split()
    if not parts:
        return 0
    try:
        return int(parts[-1])
    except ValueError:
        return 0


def _driver_error(exc: BaseException) -> InfrastructureError:
    return InfrastructureError(str(exc).strip())


class Database:
    def __init__(self, dsn: str | None = None):
        self._dsn = dsn
        self._pool: asyncpg.Pool | None = None

    async def connect(self) -> None:
        if self._pool is not None:
            return None
        self._pool = await asyncpg.create_pool(
            dsn=self._dsn or database_url(),
            min_size=env_int("DB_POOL_MIN", 1),
            max_size=env_int("DB_POOL_MAX", 5),
            command_timeout=env_int("DB_COMMAND_TIMEOUT", 30),
        )
        logger.info("db_pool_opened")

    async def close(self) -> None:
        if self._pool is None:
            return None
        await self._pool.close()
        self._pool = None
        logger.info("db_pool_closed")

    @property
    def pool(self) -> asyncpg.Pool:
        if self._pool is None:
            raise RuntimeError("DB pool is not initialized. Call connect() on startup.")
        return self._pool

    async def fetch_one(self, sql: str, *args: Any) -> dict[str, Any] | None:
        """
        Run a query and return a single row as a dict (or None).
        """
        try:
            row = await self.pool.fetchrow(sql, *args)
        except _DRIVER_ERRORS as exc:
            raise _driver_error(exc) from exc
        return dict(row) if row is not None else None

    async def fetch_all(self, sql: str, *args: Any) -> list[dict[str, Any]]:
        """
        Run a query and return all rows as a list of dicts.
        """
        try:
            rows = await self.pool.fetch(sql, *args)
        except _DRIVER_ERRORS as exc:
            raise _driver_error(exc) from exc
        return [dict(r) for r in rows]

    async def execute(self, sql: str, *args: Any) -> int:
        """
        Run a statement (INSERT/UPDATE/DELETE) and return the affected-row count.
        """
        try:
            status_tag = await self.pool.execute(sql, *args)
        except _DRIVER_ERRORS as exc:
            raise _driver_error(exc) from exc
        return affected_rows(status_tag)


def get_database(request: Request) -> Database:
    """
    FastAPI dependency: the pool handle opened by the lifespan.
    """
    return request.app.state.db
