"""
User business logic.

Maps repository outcomes to API errors:
- no row / zero affected rows -> NotFoundError (404)
- duplicate `correo` -> ConflictError (409)
- any other gateway failure -> InternalError (500), details logged only
"""

from __future__ import annotations

import logging

from core.db import Database, DuplicateKeyError, GatewayError
from core.errors import BadRequestError, ConflictError, InternalError, NotFoundError
from core.schemas import DeletedResponse, UpdatedResponse

from . import repository, schemas

logger = logging.getLogger(__name__)

NOT_FOUND = "user not found"
DUPLICATE_EMAIL = "email already registered"


def _to_user_response(user_row: dict) -> schemas.UserResponse:
    return schemas.UserResponse(
        id=int(user_row["id"]),
        nombre=str(user_row["nombre"]),
        apellido=str(user_row["apellido"]),
        correo=str(user_row["correo"]),
        fecha_creacion=user_row.get("fecha_creacion"),
    )


async def list_users(db: Database) -> list[schemas.UserResponse]:
    try:
        rows = await repository.list_users(db)
    except GatewayError as exc:
        logger.exception("list_users_failed")
        raise InternalError("error fetching users") from exc
    return [_to_user_response(row) for row in rows]


async def get_user(db: Database, user_id: int) -> schemas.UserResponse:
    try:
        row = await repository.get_user_by_id(db, user_id)
    except GatewayError as exc:
        logger.exception("get_user_failed user_id=%s", user_id)
        raise InternalError("error fetching user") from exc
    if row is None:
        raise NotFoundError(NOT_FOUND)
    return _to_user_response(row)


async def create_user(db: Database, payload: schemas.UserCreate) -> schemas.UserCreatedResponse:
    try:
        user_id = await repository.insert_user(
            db,
            nombre=payload.nombre,
            apellido=payload.apellido,
            correo=payload.correo,
        )
    except DuplicateKeyError as exc:
        logger.info("create_user_conflict constraint=%s", exc.constraint)
        raise ConflictError(DUPLICATE_EMAIL) from exc
    except GatewayError as exc:
        logger.exception("create_user_failed")
        raise InternalError("error creating user") from exc

    # Echo the submitted (normalized) fields rather than re-reading the row.
    return schemas.UserCreatedResponse(
        id=user_id,
        nombre=payload.nombre,
        apellido=payload.apellido,
        correo=payload.correo,
    )


async def update_user(db: Database, user_id: int, payload: schemas.UserUpdate) -> UpdatedResponse:
    changes = payload.changes()
    if not changes:
        raise BadRequestError("no fields to update")

    try:
        affected = await repository.update_user(db, user_id, changes)
    except DuplicateKeyError as exc:
        logger.info("update_user_conflict user_id=%s constraint=%s", user_id, exc.constraint)
        raise ConflictError(DUPLICATE_EMAIL) from exc
    except GatewayError as exc:
        logger.exception("update_user_failed user_id=%s", user_id)
        raise InternalError("error updating user") from exc

    if affected == 0:
        raise NotFoundError(NOT_FOUND)
    return UpdatedResponse(id=user_id)


async def delete_user(db: Database, user_id: int) -> DeletedResponse:
    try:
        affected = await repository.delete_user(db, user_id)
    except GatewayError as exc:
        logger.exception("delete_user_failed user_id=%s", user_id)
        raise InternalError("error deleting user") from exc

    if affected == 0:
        raise NotFoundError(NOT_FOUND)
    return DeletedResponse()
