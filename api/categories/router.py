"""
Category API endpoints. None of them require authentication.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from . import repository, schemas, service

router = APIRouter()


@router.get("/categories")
async def list_categories(
    repo: repository.CategoryRepository = Depends(repository.get_repository),
) -> list[dict]:
    return await service.list_categories(repo)


@router.post("/categories", status_code=status.HTTP_201_CREATED)
async def create_category(
    payload: schemas.CategoryRequest | None = None,
    repo: repository.CategoryRepository = Depends(repository.get_repository),
) -> dict:
    return await service.create_category(repo, payload or schemas.CategoryRequest())


@router.get("/categories/{category_id}")
async def get_category(
    category_id: int,
    repo: repository.CategoryRepository = Depends(repository.get_repository),
) -> dict:
    """
    Lookup by id. Soft-deleted categories are still returned, with `is_deleted` set.
    """
    return await service.get_category(repo, category_id)


@router.put("/categories/{category_id}")
async def update_category(
    category_id: int,
    payload: schemas.CategoryRequest | None = None,
    repo: repository.CategoryRepository = Depends(repository.get_repository),
) -> dict:
    return await service.update_category(repo, category_id, payload or schemas.CategoryRequest())


@router.delete("/categories/{category_id}")
async def delete_category(
    category_id: int,
    repo: repository.CategoryRepository = Depends(repository.get_repository),
) -> dict:
    return await service.delete_category(repo, category_id)
