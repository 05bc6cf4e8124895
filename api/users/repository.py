"""
User persistence helpers (raw SQL against `usuarios`).
"""

from __future__ import annotations

from typing import Any, Mapping

from core.db import Database
from core.sql import build_update

UPDATABLE_COLUMNS = ("nombre", "apellido", "correo")


async def list_users(db: Database) -> list[dict[str, Any]]:
    return await db.fetch_all(
        """
        SELECT id, nombre, apellido, correo, fecha_creacion
        FROM usuarios
        ORDER BY id DESC
        """
    )


async def get_user_by_id(db: Database, user_id: int) -> dict[str, Any] | None:
    return await db.fetch_one(
        """
        SELECT id, nombre, apellido, correo, fecha_creacion
        FROM usuarios
        WHERE id = $1
        """,
        user_id,
    )


async def insert_user(db: Database, *, nombre: str, apellido: str, correo: str) -> int:
    row = await db.fetch_one(
        """
        INSERT INTO usuarios (nombre, apellido, correo)
        VALUES ($1, $2, $3)
        RETURNING id
        """,
        nombre,
        apellido,
        correo,
    )
    if row is None:
        raise RuntimeError("Failed to insert user.")
    return int(row["id"])


async def update_user(db: Database, user_id: int, changes: Mapping[str, Any]) -> int:
    """
    Apply `changes` to one user. Returns the number of rows affected.
    """
    values = {column: changes[column] for column in UPDATABLE_COLUMNS if column in changes}
    sql, args = build_update("usuarios", values, key=user_id)
    return await db.execute(sql, *args)


async def delete_user(db: Database, user_id: int) -> int:
    return await db.execute("DELETE FROM usuarios WHERE id = $1", user_id)
