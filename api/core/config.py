"""
Runtime settings loaded from environment variables.

A `.env` file in the working directory is honored when reading the real
process environment. Tests pass an explicit mapping instead.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any, Mapping
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from dotenv import load_dotenv

DEFAULT_PORT = 3000
DEFAULT_DB_PORT = 5432

REQUIRED_DB_VARS = ("DB_HOST", "DB_USER", "DB_PASS", "DB_NAME")


class ConfigError(RuntimeError):
    pass


def _get(env: Mapping[str, str], name: str) -> str:
    return (env.get(name) or "").strip()


def _env_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = _get(env, name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(env: Mapping[str, str], name: str, default: float) -> float:
    raw = _get(env, name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _sanitize_database_url(url: str) -> str:
    parts = urlsplit(url)
    if not parts.query:
        return url

    params = [(k, v) for (k, v) in parse_qsl(parts.query, keep_blank_values=True) if k != "sslmode"]
    query = urlencode(params)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))


@dataclass(frozen=True)
class DatabaseSettings:
    url: str | None = None
    host: str | None = None
    port: int = DEFAULT_DB_PORT
    user: str | None = None
    password: str | None = None
    name: str | None = None
    pool_min_size: int = 1
    pool_max_size: int = 10
    connect_timeout_s: float = 10.0
    acquire_timeout_s: float = 10.0
    command_timeout_s: float = 30.0

    def missing(self) -> list[str]:
        """
        Names of required variables that are not set.

        A DATABASE_URL satisfies everything on its own.
        """
        if self.url:
            return []
        values = {
            "DB_HOST": self.host,
            "DB_USER": self.user,
            "DB_PASS": self.password,
            "DB_NAME": self.name,
        }
        return [name for name in REQUIRED_DB_VARS if not values[name]]

    def connect_kwargs(self) -> dict[str, Any]:
        if self.url:
            return {"dsn": _sanitize_database_url(self.url)}
        return {
            "host": self.host,
            "port": self.port,
            "user": self.user,
            "password": self.password,
            "database": self.name,
        }


@dataclass(frozen=True)
class Settings:
    database: DatabaseSettings = field(default_factory=DatabaseSettings)
    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT
    environment: str = "production"
    log_level: str = "INFO"
    cors_origins: tuple[str, ...] = ("*",)


def _cors_origins(env: Mapping[str, str]) -> tuple[str, ...]:
    raw = _get(env, "CORS_ORIGINS")
    if not raw:
        return ("*",)
    origins = tuple(o.strip() for o in raw.split(",") if o.strip())
    return origins or ("*",)


def load_settings(env: Mapping[str, str] | None = None) -> Settings:
    if env is None:
        load_dotenv()
        env = os.environ

    database = DatabaseSettings(
        url=_get(env, "DATABASE_URL") or None,
        host=_get(env, "DB_HOST") or None,
        port=_env_int(env, "DB_PORT", DEFAULT_DB_PORT),
        user=_get(env, "DB_USER") or None,
        password=_get(env, "DB_PASS") or None,
        name=_get(env, "DB_NAME") or None,
        pool_min_size=_env_int(env, "DB_POOL_MIN_SIZE", 1),
        pool_max_size=_env_int(env, "DB_POOL_MAX_SIZE", 10),
        connect_timeout_s=_env_float(env, "DB_CONNECT_TIMEOUT", 10.0),
        acquire_timeout_s=_env_float(env, "DB_ACQUIRE_TIMEOUT", 10.0),
        command_timeout_s=_env_float(env, "DB_COMMAND_TIMEOUT", 30.0),
    )
    return Settings(
        database=database,
        host=_get(env, "HOST") or "0.0.0.0",
        port=_env_int(env, "PORT", DEFAULT_PORT),
        environment=_get(env, "APP_ENV") or "production",
        log_level=(_get(env, "LOG_LEVEL") or "INFO").upper(),
        cors_origins=_cors_origins(env),
    )


def require_database(settings: Settings) -> None:
    missing = settings.database.missing()
    if missing:
        raise ConfigError(f"Missing environment variables: {', '.join(missing)}")
