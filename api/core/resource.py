"""
Generic CRUD repository shared by every resource.

Each resource is described by a `ResourceSpec` (table, writable columns,
delete policy). `ResourceRepository` turns the five CRUD operations into single
parameterized statements and normalizes "zero rows affected" into
`NotFoundError`.

Table and column names come from the `ResourceSpec` declared in each
resource's `repository.py`, never from request data.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any

from .db import Database
from .errors import InfrastructureError, NotFoundError, ValidationError

# `id` columns are SERIAL (int4); anything outside cannot match a row.
MAX_ID = 2**31 - 1


@dataclass(frozen=True)
class ResourceSpec:
    name: str
    plural: str
    table: str
    columns: tuple[str, ...]
    # Flag column for soft delete; None means rows are removed on delete.
    soft_delete_column: str | None = None
    allow_delete_all: bool = False

    @property
    def is_soft_delete(self) -> bool:
        return self.soft_delete_column is not None

    @property
    def select_list(self) -> str:
        return ", ".join(("id", *self.columns))


@contextmanager
def infra_fallback(message: str) -> Iterator[None]:
    try:
        yield
    except InfrastructureError as exc:
        raise exc.with_fallback(message)


class ResourceRepository:
    def __init__(self, db: Database, spec: ResourceSpec):
        self.db = db
        self.spec = spec

    def _values(self, entity: dict[str, Any]) -> list[Any]:
        # Only declared columns reach SQL; anything else on the entity is dropped.
        return [entity.get(column) for column in self.spec.columns]

    def _require_storable_id(self, resource_id: int) -> None:
        if not 0 < resource_id <= MAX_ID:
            raise NotFoundError(self.spec.name, resource_id)

    async def list_active(self) -> list[dict[str, Any]]:
        spec = self.spec
        where = f"WHERE {spec.soft_delete_column} = false" if spec.is_soft_delete else ""
        with infra_fallback(f"Some error occurred while retrieving {spec.plural}."):
            return await self.db.fetch_all(
                f"""
                SELECT {spec.select_list}
                FROM {spec.table}
                {where}
                ORDER BY id
                """
            )

    async def get_by_id(self, resource_id: int) -> dict[str, Any]:
        spec = self.spec
        self._require_storable_id(resource_id)
        with infra_fallback(f"Error retrieving {spec.name} with id {resource_id}"):
            row = await self.db.fetch_one(
                f"""
                SELECT {spec.select_list}
                FROM {spec.table}
                WHERE id = $1
                """,
                resource_id,
            )
        if row is None:
            raise NotFoundError(spec.name, resource_id)
        return row

    async def insert(self, entity: dict[str, Any]) -> dict[str, Any]:
        spec = self.spec
        placeholders = ", ".join(f"${i}" for i in range(1, len(spec.columns) + 1))
        with infra_fallback(f"Some error occurred while creating the {spec.name}."):
            row = await self.db.fetch_one(
                f"""
                INSERT INTO {spec.table} ({", ".join(spec.columns)})
                VALUES ({placeholders})
                RETURNING {spec.select_list}
                """,
                *self._values(entity),
            )
        if row is None:
            raise InfrastructureError(f"Some error occurred while creating the {spec.name}.")
        return row

    async def replace_by_id(self, resource_id: int, entity: dict[str, Any]) -> dict[str, Any]:
        """
        Overwrite every writable column of one row.

        The affected-row count is the only not-found signal. It is taken
        literally from the engine (PostgreSQL counts matched rows, so an
        update that leaves values unchanged still reports 1).
        """
        spec = self.spec
        self._require_storable_id(resource_id)
        assignments = ", ".join(f"{column} = ${i}" for i, column in enumerate(spec.columns, start=1))
        id_placeholder = f"${len(spec.columns) + 1}"
        with infra_fallback(f"Error updating {spec.name} with id {resource_id}"):
            count = await self.db.execute(
                f"""
                UPDATE {spec.table}
                SET {assignments}
                WHERE id = {id_placeholder}
                """,
                *self._values(entity),
                resource_id,
            )
        if count == 0:
            raise NotFoundError(spec.name, resource_id)
        return {"id": resource_id, **{column: entity.get(column) for column in spec.columns}}

    async def delete_by_id(self, resource_id: int) -> None:
        spec = self.spec
        self._require_storable_id(resource_id)
        if spec.is_soft_delete:
            sql = f"UPDATE {spec.table} SET {spec.soft_delete_column} = true WHERE id = $1"
        else:
            sql = f"DELETE FROM {spec.table} WHERE id = $1"

        with infra_fallback(f"Could not delete {spec.name} with id {resource_id}"):
            count = await self.db.execute(sql, resource_id)
        if count == 0:
            raise NotFoundError(spec.name, resource_id)

    async def delete_all(self) -> int:
        spec = self.spec
        if not spec.allow_delete_all:
            raise RuntimeError(f"delete_all is not enabled for {spec.plural}.")
        with infra_fallback(f"Some error occurred while removing all {spec.plural}."):
            return await self.db.execute(f"DELETE FROM {spec.table}")


def require_fields(payload: Any, *fields: str, message: str, non_empty: tuple[str, ...] = ()) -> None:
    """
    Raise `ValidationError(message)` unless every field is present.

    Fields listed in `non_empty` must also be non-blank strings.
    """
    for field in fields:
        value = getattr(payload, field, None)
        if value is None:
            raise ValidationError(message)
        if field in non_empty and not str(value).strip():
            raise ValidationError(message)
