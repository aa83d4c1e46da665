"""
Category persistence. Categories are soft-deleted through `is_deleted`.
"""

from __future__ import annotations

from fastapi import Depends

from core.db import Database, get_database
from core.resource import ResourceRepository, ResourceSpec

CATEGORIES = ResourceSpec(
    name="category",
    plural="categories",
    table="category",
    columns=("cat_name", "is_deleted"),
    soft_delete_column="is_deleted",
)


class CategoryRepository(ResourceRepository):
    def __init__(self, db: Database):
        super().__init__(db, CATEGORIES)


def get_repository(db: Database = Depends(get_database)) -> CategoryRepository:
    return CategoryRepository(db)
