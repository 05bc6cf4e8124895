"""
Product business logic.
"""

from __future__ import annotations

import logging

from core.db import Database, GatewayError
from core.errors import BadRequestError, InternalError, NotFoundError
from core.schemas import DeletedResponse, UpdatedResponse

from . import repository, schemas

logger = logging.getLogger(__name__)

NOT_FOUND = "product not found"


def _price(value: object) -> float:
    return float(value) if value is not None else 0.0


def _to_product_response(product_row: dict) -> schemas.ProductResponse:
    descripcion = product_row.get("descripcion")
    return schemas.ProductResponse(
        id=int(product_row["id"]),
        nombre=str(product_row["nombre"]),
        descripcion=str(descripcion) if descripcion is not None else None,
        precio=_price(product_row.get("precio")),
        fecha_creacion=product_row.get("fecha_creacion"),
    )


async def list_products(db: Database) -> list[schemas.ProductResponse]:
    try:
        rows = await repository.list_products(db)
    except GatewayError as exc:
        logger.exception("list_products_failed")
        raise InternalError("error fetching products") from exc
    return [_to_product_response(row) for row in rows]


async def get_product(db: Database, product_id: int) -> schemas.ProductResponse:
    try:
        row = await repository.get_product_by_id(db, product_id)
    except GatewayError as exc:
        logger.exception("get_product_failed product_id=%s", product_id)
        raise InternalError("error fetching product") from exc
    if row is None:
        raise NotFoundError(NOT_FOUND)
    return _to_product_response(row)


async def create_product(db: Database, payload: schemas.ProductCreate) -> schemas.ProductCreatedResponse:
    precio = payload.precio
    try:
        product_id = await repository.insert_product(
            db,
            nombre=payload.nombre,
            descripcion=payload.descripcion,
            precio=precio,
        )
    except GatewayError as exc:
        logger.exception("create_product_failed")
        raise InternalError("error creating product") from exc

    return schemas.ProductCreatedResponse(
        id=product_id,
        nombre=payload.nombre,
        descripcion=payload.descripcion,
        precio=_price(precio),
    )


async def update_product(
    db: Database,
    product_id: int,
    payload: schemas.ProductUpdate,
) -> UpdatedResponse:
    changes = payload.changes()
    if not changes:
        raise BadRequestError("no fields to update")

    try:
        affected = await repository.update_product(db, product_id, changes)
    except GatewayError as exc:
        logger.exception("update_product_failed product_id=%s", product_id)
        raise InternalError("error updating product") from exc

    if affected == 0:
        raise NotFoundError(NOT_FOUND)
    return UpdatedResponse(id=product_id)


async def delete_product(db: Database, product_id: int) -> DeletedResponse:
    try:
        affected = await repository.delete_product(db, product_id)
    except GatewayError as exc:
        logger.exception("delete_product_failed product_id=%s", product_id)
        raise InternalError("error deleting product") from exc

    if affected == 0:
        raise NotFoundError(NOT_FOUND)
    return DeletedResponse()
