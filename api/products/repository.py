"""
Product persistence. Products are hard-deleted and support bulk delete.
"""

from __future__ import annotations

from fastapi import Depends

from core.db import Database, get_database
from core.resource import ResourceRepository, ResourceSpec

PRODUCTS = ResourceSpec(
    name="product",
    plural="products",
    table="products",
    columns=("name", "price", "cat_id", "image"),
    allow_delete_all=True,
)


class ProductRepository(ResourceRepository):
    def __init__(self, db: Database):
        super().__init__(db, PRODUCTS)


def get_repository(db: Database = Depends(get_database)) -> ProductRepository:
    return ProductRepository(db)
