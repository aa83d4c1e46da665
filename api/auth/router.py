"""
User sign-up and login endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from . import repository, schemas, service

router = APIRouter()


@router.post("/users", status_code=status.HTTP_201_CREATED)
async def create_user(
    payload: schemas.CredentialsRequest | None = None,
    repo: repository.UserRepository = Depends(repository.get_repository),
) -> schemas.UserResponse:
    return await service.create_user(repo, payload or schemas.CredentialsRequest())


@router.post("/users/login")
async def login(
    payload: schemas.CredentialsRequest | None = None,
    repo: repository.UserRepository = Depends(repository.get_repository),
) -> schemas.TokenPairResponse:
    return await service.login(repo, payload or schemas.CredentialsRequest())
