"""
Product API schemas (request models).

Fields are optional at the schema level so the service can report missing
values with its own message; unknown fields are ignored.
"""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel


class ProductRequest(BaseModel):
    name: str | None = None
    price: Decimal | None = None
    cat_id: int | None = None
    image: str | None = None
