"""
Async database access helpers (raw SQL) using asyncpg.

`Database` owns the connection pool. The app lifespan opens it on startup,
keeps it on `app.state.db` and closes it on shutdown (see `api/main.py`).
Routes receive it through the `get_db` dependency.

SQL parameter style:
- asyncpg uses positional placeholders: $1, $2, $3, ...

Driver failures never leave this module as asyncpg exceptions: a unique
violation becomes `DuplicateKeyError`, everything else `GatewayError`.
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

import asyncpg
from fastapi import Request

from .config import DatabaseSettings

logger = logging.getLogger(__name__)

_DRIVER_ERRORS = (
    asyncpg.PostgresError,
    asyncpg.InterfaceError,
    OSError,
    asyncio.TimeoutError,
)


class GatewayError(RuntimeError):
    pass


class DuplicateKeyError(GatewayError):
    def __init__(self, message: str, *, constraint: str | None = None) -> None:
        super().__init__(message)
        self.constraint = constraint


def affected_rows(status: str | None) -> int:
    """
    Parse asyncpg's command tag ("UPDATE 3", "DELETE 0", "INSERT 0 1").
    """
    last = (status or "").rsplit(" ", 1)[-1]
    return int(last) if last.isdigit() else 0


def _record_to_dict(record: asyncpg.Record) -> dict[str, Any]:
    return dict(record)


class Database:
    def __init__(self, settings: DatabaseSettings) -> None:
        self.settings = settings
        self._pool: asyncpg.Pool | None = None

    async def connect(self) -> None:
        if self._pool is not None:
            return None
        s = self.settings
        self._pool = await asyncpg.create_pool(
            **s.connect_kwargs(),
            min_size=min(s.pool_min_size, s.pool_max_size),
            max_size=s.pool_max_size,
            timeout=s.connect_timeout_s,
            command_timeout=s.command_timeout_s,
        )
        logger.info("db_pool_open max_size=%s", s.pool_max_size)

    async def close(self) -> None:
        if self._pool is None:
            return None
        await self._pool.close()
        self._pool = None
        logger.info("db_pool_closed")

    def pool(self) -> asyncpg.Pool:
        if self._pool is None:
            raise GatewayError("DB pool is not initialized. Call connect() on startup.")
        return self._pool

    @asynccontextmanager
    async def _connection(self) -> AsyncIterator[asyncpg.Connection]:
        try:
            async with self.pool().acquire(timeout=self.settings.acquire_timeout_s) as conn:
                yield conn
        except asyncpg.UniqueViolationError as exc:
            raise DuplicateKeyError(
                str(exc),
                constraint=getattr(exc, "constraint_name", None),
            ) from exc
        except _DRIVER_ERRORS as exc:
            raise GatewayError(f"{type(exc).__name__}: {exc}") from exc

    async def fetch_one(self, sql: str, *args: Any) -> dict[str, Any] | None:
        """
        Run a query and return a single row as a dict (or None).
        """
        async with self._connection() as conn:
            row = await conn.fetchrow(sql, *args)
        return _record_to_dict(row) if row is not None else None

    async def fetch_all(self, sql: str, *args: Any) -> list[dict[str, Any]]:
        """
        Run a query and return all rows as a list of dicts.
        """
        async with self._connection() as conn:
            rows = await conn.fetch(sql, *args)
        return [_record_to_dict(r) for r in rows]

    async def execute(self, sql: str, *args: Any) -> int:
        """
        Run a statement (INSERT/UPDATE/DELETE) and return the affected row count.
        """
        async with self._connection() as conn:
            status = await conn.execute(sql, *args)
        return affected_rows(status)


def get_db(request: Request) -> Database:
    return request.app.state.db
