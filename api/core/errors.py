"""
API error taxonomy and the FastAPI exception handlers that render it.

Error bodies are always `{"error": "..."}`, except validation failures which
carry the full list of violations: `{"errors": [{"field", "message"}, ...]}`.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class AppError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def body(self) -> dict[str, Any]:
        return {"error": self.message}


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, violations: list[dict[str, str]]) -> None:
        super().__init__("validation failed")
        self.violations = violations

    def body(self) -> dict[str, Any]:
        return {"errors": self.violations}


class BadRequestError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(AppError):
    status_code = status.HTTP_409_CONFLICT


class InternalError(AppError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


_LOCATIONS = ("body", "path", "query", "header", "cookie")


def _violation_field(loc: tuple[Any, ...]) -> str:
    # ("body", "correo") -> "correo", ("path", "user_id") -> "user_id",
    # ("body",) and ("body", 12) (malformed JSON at offset 12) -> "body"
    if loc and loc[0] in _LOCATIONS:
        names = [p for p in loc[1:] if isinstance(p, str)]
        return ".".join(names) or str(loc[0])
    return ".".join(str(p) for p in loc) or "request"


def _violation_message(error: dict[str, Any]) -> str:
    message = str(error.get("msg") or "Invalid value")
    # pydantic prefixes messages raised from custom validators.
    return message.removeprefix("Value error, ")


def violations_from(exc: RequestValidationError) -> list[dict[str, str]]:
    return [
        {"field": _violation_field(tuple(err.get("loc") or ())), "message": _violation_message(err)}
        for err in exc.errors()
    ]


async def _app_error_handler(_: Request, exc: AppError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.body())


async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return await _app_error_handler(request, ValidationError(violations_from(exc)))


async def _http_exception_handler(_: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def _unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled_error method=%s path=%s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "internal server error"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, _app_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _unhandled_exception_handler)
