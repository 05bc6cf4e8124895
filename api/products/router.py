"""
Product CRUD endpoints (`/productos`).
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Path, status

from core.db import Database, get_db
from core.schemas import MAX_ID, DeletedResponse, UpdatedResponse

from . import schemas, service

router = APIRouter(prefix="/productos")

ProductId = Annotated[int, Path(gt=0, le=MAX_ID, description="Product id (positive integer).")]


@router.get("")
async def list_products(db: Database = Depends(get_db)) -> list[schemas.ProductResponse]:
    return await service.list_products(db)


@router.get("/{product_id}")
async def get_product(
    product_id: ProductId,
    db: Database = Depends(get_db),
) -> schemas.ProductResponse:
    return await service.get_product(db, product_id)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_product(
    payload: schemas.ProductCreate,
    db: Database = Depends(get_db),
) -> schemas.ProductCreatedResponse:
    return await service.create_product(db, payload)


@router.put("/{product_id}")
async def update_product(
    product_id: ProductId,
    payload: schemas.ProductUpdate | None = None,
    db: Database = Depends(get_db),
) -> UpdatedResponse:
    return await service.update_product(db, product_id, payload or schemas.ProductUpdate())


@router.delete("/{product_id}")
async def delete_product(
    product_id: ProductId,
    db: Database = Depends(get_db),
) -> DeletedResponse:
    return await service.delete_product(db, product_id)
