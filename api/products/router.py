"""
Product API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from auth import dependencies as auth_dependencies

from . import repository, schemas, service

router = APIRouter()


@router.get("/products")
async def list_products(
    repo: repository.ProductRepository = Depends(repository.get_repository),
) -> list[dict]:
    return await service.list_products(repo)


@router.post("/products", status_code=status.HTTP_201_CREATED)
async def create_product(
    payload: schemas.ProductRequest | None = None,
    repo: repository.ProductRepository = Depends(repository.get_repository),
) -> dict:
    return await service.create_product(repo, payload or schemas.ProductRequest())


@router.get("/products/{product_id}")
async def get_product(
    product_id: int,
    _: int = Depends(auth_dependencies.get_current_user_id),
    repo: repository.ProductRepository = Depends(repository.get_repository),
) -> dict:
    return await service.get_product(repo, product_id)


@router.put("/products/{product_id}")
async def update_product(
    product_id: int,
    payload: schemas.ProductRequest | None = None,
    _: int = Depends(auth_dependencies.get_current_user_id),
    repo: repository.ProductRepository = Depends(repository.get_repository),
) -> dict:
    return await service.update_product(repo, product_id, payload or schemas.ProductRequest())


@router.delete("/products/{product_id}")
async def delete_product(
    product_id: int,
    _: int = Depends(auth_dependencies.get_current_user_id),
    repo: repository.ProductRepository = Depends(repository.get_repository),
) -> dict:
    return await service.delete_product(repo, product_id)


@router.delete("/products")
async def delete_all_products(
    _: int = Depends(auth_dependencies.get_current_user_id),
    repo: repository.ProductRepository = Depends(repository.get_repository),
) -> dict:
    """
    Remove every product row. No filter, no confirmation.
    """
    return await service.delete_all_products(repo)
