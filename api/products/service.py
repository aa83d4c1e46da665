"""
Product business logic: payload validation and result shaping.
"""

from __future__ import annotations

import logging
from typing import Any

from core.resource import ResourceRepository, require_fields

from . import schemas

logger = logging.getLogger(__name__)

REQUIRED_FIELDS_MESSAGE = "Product name, price, and category ID are required!"


def _to_entity(payload: schemas.ProductRequest) -> dict[str, Any]:
    require_fields(
        payload,
        "name",
        "price",
        "cat_id",
        message=REQUIRED_FIELDS_MESSAGE,
        non_empty=("name",),
    )
    return {
        "name": payload.name,
        "price": payload.price,
        "cat_id": payload.cat_id,
        "image": payload.image or None,
    }


async def list_products(repo: ResourceRepository) -> list[dict]:
    return await repo.list_active()


async def get_product(repo: ResourceRepository, product_id: int) -> dict:
    return await repo.get_by_id(product_id)


async def create_product(repo: ResourceRepository, payload: schemas.ProductRequest) -> dict:
    return await repo.insert(_to_entity(payload))


async def update_product(
    repo: ResourceRepository,
    product_id: int,
    payload: schemas.ProductRequest,
) -> dict:
    return await repo.replace_by_id(product_id, _to_entity(payload))


async def delete_product(repo: ResourceRepository, product_id: int) -> dict:
    await repo.delete_by_id(product_id)
    return {"message": "Product was deleted successfully!"}


async def delete_all_products(repo: ResourceRepository) -> dict:
    removed = await repo.delete_all()
    logger.info("products_deleted_all removed=%s", removed)
    return {"message": "All products were deleted successfully!"}
