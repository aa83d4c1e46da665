"""
Category API schemas (request models).
"""

from __future__ import annotations

from pydantic import BaseModel


class CategoryRequest(BaseModel):
    cat_name: str | None = None
    # Honored on update only; new categories are always active.
    is_deleted: bool | None = None
