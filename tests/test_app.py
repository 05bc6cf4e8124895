"""Application wiring: health routes, error envelope, CORS, startup."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

import main
from core.config import Settings
from main import create_app


def test_root_health_check(client, fake_db):
    resp = client.get("/")

    assert resp.status_code == 200
    assert resp.json() == {"ok": True, "msg": "API running"}
    assert fake_db.calls == []


def test_health_endpoint(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_unknown_route_uses_error_envelope(client):
    resp = client.get("/pedidos")

    assert resp.status_code == 404
    assert resp.json() == {"error": "Not Found"}


def test_wrong_method_uses_error_envelope(client):
    resp = client.patch("/usuarios/1", json={"nombre": "Ana"})

    assert resp.status_code == 405
    assert resp.json() == {"error": "Method Not Allowed"}


def test_malformed_json_is_a_validation_error(client, fake_db):
    resp = client.post(
        "/usuarios",
        content=b'{"nombre": "Ana",',
        headers={"content-type": "application/json"},
    )

    assert resp.status_code == 400
    errors = resp.json()["errors"]
    assert errors[0]["field"] == "body"
    assert fake_db.calls == []


def test_non_object_body_is_a_validation_error(client, fake_db):
    resp = client.post("/productos", json=["Lapiz"])

    assert resp.status_code == 400
    assert resp.json()["errors"][0]["field"] == "body"
    assert fake_db.calls == []


def test_cors_allows_any_origin_by_default(client):
    resp = client.get("/", headers={"Origin": "http://localhost:5173"})

    assert resp.headers["access-control-allow-origin"] == "*"


def test_cors_restricted_origins(fake_db):
    from core.db import get_db

    app = create_app(Settings(cors_origins=("http://localhost:5173",)))
    app.dependency_overrides[get_db] = lambda: fake_db
    client = TestClient(app)

    allowed = client.get("/", headers={"Origin": "http://localhost:5173"})
    denied = client.get("/", headers={"Origin": "http://evil.example.com"})

    assert allowed.headers["access-control-allow-origin"] == "http://localhost:5173"
    assert "access-control-allow-origin" not in denied.headers


def test_unhandled_errors_are_genericized(app, fake_db):
    fake_db.error = ValueError("secret detail")
    client = TestClient(app, raise_server_exceptions=False)

    resp = client.get("/usuarios")

    assert resp.status_code == 500
    assert resp.json() == {"error": "internal server error"}
    assert "secret" not in resp.text


def test_run_exits_when_database_settings_are_missing(monkeypatch):
    monkeypatch.setattr(main, "load_settings", lambda: Settings())

    with pytest.raises(SystemExit) as exc_info:
        main.run()

    assert exc_info.value.code == 1
