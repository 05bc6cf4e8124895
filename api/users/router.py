"""
User CRUD endpoints (`/usuarios`).
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Path, status

from core.db import Database, get_db
from core.schemas import MAX_ID, DeletedResponse, UpdatedResponse

from . import schemas, service

router = APIRouter(prefix="/usuarios")

UserId = Annotated[int, Path(gt=0, le=MAX_ID, description="User id (positive integer).")]


@router.get("")
async def list_users(db: Database = Depends(get_db)) -> list[schemas.UserResponse]:
    return await service.list_users(db)


@router.get("/{user_id}")
async def get_user(
    user_id: UserId,
    db: Database = Depends(get_db),
) -> schemas.UserResponse:
    return await service.get_user(db, user_id)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_user(
    payload: schemas.UserCreate,
    db: Database = Depends(get_db),
) -> schemas.UserCreatedResponse:
    return await service.create_user(db, payload)


@router.put("/{user_id}")
async def update_user(
    user_id: UserId,
    payload: schemas.UserUpdate | None = None,
    db: Database = Depends(get_db),
) -> UpdatedResponse:
    return await service.update_user(db, user_id, payload or schemas.UserUpdate())


@router.delete("/{user_id}")
async def delete_user(
    user_id: UserId,
    db: Database = Depends(get_db),
) -> DeletedResponse:
    return await service.delete_user(db, user_id)
