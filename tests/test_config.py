"""Unit tests for settings loading."""

from __future__ import annotations

import pytest

from core.config import ConfigError, Settings, load_settings, require_database

FULL_DB_ENV = {
    "DB_HOST": "db.internal",
    "DB_USER": "app",
    "DB_PASS": "secret",
    "DB_NAME": "proyecto_api",
}


class TestDatabaseSettings:
    def test_url_takes_precedence(self):
        settings = load_settings({"DATABASE_URL": "postgresql://u:p@h:5433/db", **FULL_DB_ENV})

        assert settings.database.missing() == []
        assert settings.database.connect_kwargs() == {"dsn": "postgresql://u:p@h:5433/db"}

    def test_url_drops_sslmode(self):
        settings = load_settings({"DATABASE_URL": "postgresql://u:p@h/db?sslmode=require&application_name=api"})

        assert settings.database.connect_kwargs() == {"dsn": "postgresql://u:p@h/db?application_name=api"}

    def test_separate_variables(self):
        settings = load_settings({**FULL_DB_ENV, "DB_PORT": "6543"})

        assert settings.database.missing() == []
        assert settings.database.connect_kwargs() == {
            "host": "db.internal",
            "port": 6543,
            "user": "app",
            "password": "secret",
            "database": "proyecto_api",
        }

    def test_default_port(self):
        assert load_settings(FULL_DB_ENV).database.port == 5432

    def test_reports_missing_variables(self):
        env = {"DB_HOST": "db.internal", "DB_USER": "app", "DB_PASS": "  "}

        settings = load_settings(env)

        assert settings.database.missing() == ["DB_PASS", "DB_NAME"]
        with pytest.raises(ConfigError) as exc_info:
            require_database(settings)
        assert "DB_PASS, DB_NAME" in str(exc_info.value)

    def test_require_database_passes_when_complete(self):
        require_database(load_settings(FULL_DB_ENV))

    def test_pool_settings(self):
        env = {
            **FULL_DB_ENV,
            "DB_POOL_MIN_SIZE": "2",
            "DB_POOL_MAX_SIZE": "20",
            "DB_ACQUIRE_TIMEOUT": "2.5",
        }

        db = load_settings(env).database

        assert (db.pool_min_size, db.pool_max_size, db.acquire_timeout_s) == (2, 20, 2.5)
        assert db.connect_timeout_s == 10.0
        assert db.command_timeout_s == 30.0


class TestServerSettings:
    def test_defaults(self):
        settings = load_settings({})

        assert settings == Settings(database=settings.database)
        assert settings.port == 3000
        assert settings.environment == "production"
        assert settings.cors_origins == ("*",)

    def test_malformed_numbers_fall_back_to_defaults(self):
        settings = load_settings({"PORT": "http", "DB_POOL_MAX_SIZE": "many"})

        assert settings.port == 3000
        assert settings.database.pool_max_size == 10

    def test_overrides(self):
        settings = load_settings(
            {
                "PORT": "8080",
                "APP_ENV": "development",
                "LOG_LEVEL": "debug",
                "CORS_ORIGINS": "http://localhost:5173, http://127.0.0.1:5173,",
            }
        )

        assert settings.port == 8080
        assert settings.environment == "development"
        assert settings.log_level == "DEBUG"
        assert settings.cors_origins == ("http://localhost:5173", "http://127.0.0.1:5173")
