"""
Category business logic.
"""

from __future__ import annotations

from typing import Any

from core.resource import ResourceRepository, require_fields

from . import schemas

EMPTY_NAME_MESSAGE = "Category name cannot be empty!"


def _to_entity(payload: schemas.CategoryRequest, *, is_deleted: bool = False) -> dict[str, Any]:
    require_fields(payload, "cat_name", message=EMPTY_NAME_MESSAGE, non_empty=("cat_name",))
    return {"cat_name": payload.cat_name, "is_deleted": is_deleted}


async def list_categories(repo: ResourceRepository) -> list[dict]:
    """
    Active categories only; soft-deleted rows are filtered by the repository.
    """
    return await repo.list_active()


async def get_category(repo: ResourceRepository, category_id: int) -> dict:
    return await repo.get_by_id(category_id)


async def create_category(repo: ResourceRepository, payload: schemas.CategoryRequest) -> dict:
    return await repo.insert(_to_entity(payload))


async def update_category(
    repo: ResourceRepository,
    category_id: int,
    payload: schemas.CategoryRequest,
) -> dict:
    entity = _to_entity(payload, is_deleted=bool(payload.is_deleted))
    return await repo.replace_by_id(category_id, entity)


async def delete_category(repo: ResourceRepository, category_id: int) -> dict:
    await repo.delete_by_id(category_id)
    return {"message": "Category was deleted successfully!"}
