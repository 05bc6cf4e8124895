"""
Product persistence helpers (raw SQL against `productos`).
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Mapping

from core.db import Database
from core.sql import build_update

UPDATABLE_COLUMNS = ("nombre", "descripcion", "precio")


async def list_products(db: Database) -> list[dict[str, Any]]:
    return await db.fetch_all(
        """
        SELECT id, nombre, descripcion, precio, fecha_creacion
        FROM productos
        ORDER BY id DESC
        """
    )


async def get_product_by_id(db: Database, product_id: int) -> dict[str, Any] | None:
    return await db.fetch_one(
        """
        SELECT id, nombre, descripcion, precio, fecha_creacion
        FROM productos
        WHERE id = $1
        """,
        product_id,
    )


async def insert_product(
    db: Database,
    *,
    nombre: str,
    descripcion: str | None,
    precio: Decimal,
) -> int:
    row = await db.fetch_one(
        """
        INSERT INTO productos (nombre, descripcion, precio)
        VALUES ($1, $2, $3)
        RETURNING id
        """,
        nombre,
        descripcion,
        precio,
    )
    if row is None:
        raise RuntimeError("Failed to insert product.")
    return int(row["id"])


async def update_product(db: Database, product_id: int, changes: Mapping[str, Any]) -> int:
    values = {column: changes[column] for column in UPDATABLE_COLUMNS if column in changes}
    sql, args = build_update("productos", values, key=product_id)
    return await db.execute(sql, *args)


async def delete_product(db: Database, product_id: int) -> int:
    return await db.execute("DELETE FROM productos WHERE id = $1", product_id)
