from __future__ import annotations

from typing import Any
from unittest.mock import AsyncMock, Mock

import pytest
from fastapi.testclient import TestClient

from auth import repository as users_repository
from auth import security
from categories import repository as categories_repository
from core.db import Database
from core.errors import NotFoundError
from core.resource import ResourceSpec
from main import app
from products import repository as products_repository


class InMemoryRepository:
    """Dict-backed stand-in honoring the same contract as ResourceRepository."""

    def __init__(self, spec: ResourceSpec):
        self.spec = spec
        self.rows: dict[int, dict[str, Any]] = {}
        self._next_id = 1

    def _row(self, resource_id: int, entity: dict[str, Any]) -> dict[str, Any]:
        return {"id": resource_id, **{column: entity.get(column) for column in self.spec.columns}}

    async def list_active(self) -> list[dict[str, Any]]:
        rows = [dict(row) for _, row in sorted(self.rows.items())]
        if self.spec.is_soft_delete:
            rows = [row for row in rows if not row[self.spec.soft_delete_column]]
        return rows

    async def get_by_id(self, resource_id: int) -> dict[str, Any]:
        if resource_id not in self.rows:
            raise NotFoundError(self.spec.name, resource_id)
        return dict(self.rows[resource_id])

    async def insert(self, entity: dict[str, Any]) -> dict[str, Any]:
        row = self._row(self._next_id, entity)
        self.rows[self._next_id] = row
        self._next_id += 1
        return dict(row)

    async def replace_by_id(self, resource_id: int, entity: dict[str, Any]) -> dict[str, Any]:
        if resource_id not in self.rows:
            raise NotFoundError(self.spec.name, resource_id)
        self.rows[resource_id] = self._row(resource_id, entity)
        return dict(self.rows[resource_id])

    async def delete_by_id(self, resource_id: int) -> None:
        if resource_id not in self.rows:
            raise NotFoundError(self.spec.name, resource_id)
        if self.spec.is_soft_delete:
            self.rows[resource_id][self.spec.soft_delete_column] = True
        else:
            del self.rows[resource_id]

    async def delete_all(self) -> int:
        if not self.spec.allow_delete_all:
            raise RuntimeError(f"delete_all is not enabled for {self.spec.plural}.")
        removed = len(self.rows)
        self.rows.clear()
        return removed


class InMemoryUserRepository(InMemoryRepository):
    async def get_by_email(self, email: str) -> dict[str, Any]:
        wanted = users_repository.normalize_email(email)
        for row in self.rows.values():
            if row["email"] == wanted:
                return dict(row)
        raise NotFoundError(self.spec.name, email)


@pytest.fixture
def db() -> Mock:
    database = Mock(spec=Database)
    database.fetch_one = AsyncMock(return_value=None)
    database.fetch_all = AsyncMock(return_value=[])
    database.execute = AsyncMock(return_value=1)
    return database


@pytest.fixture
def product_store() -> InMemoryRepository:
    return InMemoryRepository(products_repository.PRODUCTS)


@pytest.fixture
def category_store() -> InMemoryRepository:
    return InMemoryRepository(categories_repository.CATEGORIES)


@pytest.fixture
def user_store() -> InMemoryUserRepository:
    return InMemoryUserRepository(users_repository.USERS)


@pytest.fixture
def client(product_store, category_store, user_store):
    """TestClient wired to in-memory repositories; the DB lifespan is not started."""
    app.dependency_overrides[products_repository.get_repository] = lambda: product_store
    app.dependency_overrides[categories_repository.get_repository] = lambda: category_store
    app.dependency_overrides[users_repository.get_repository] = lambda: user_store
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def auth_headers() -> dict[str, str]:
    token = security.build_access_token(user_id=1)
    return {"authorization": f"Bearer {token}"}
