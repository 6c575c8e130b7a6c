from datetime import datetime
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError
from inventory_api.main import create_app
from inventory_api.application.service import InventoryService
from inventory_api.infrastructure.db import DataStoreGateway

ALLOWED_ORIGIN = "http://localhost:5173"

def test_health_reports_store_reachable(client):
    resp = client.get("/api/health")
    assert resp.status_code == 200
    body = resp.json()
    assert body["success"] is True
    assert body["message"] == "Server and database are running properly"
    datetime.fromisoformat(body["timestamp"])

def test_health_fails_once_store_unreachable(client, gateway, monkeypatch):
    assert client.get("/api/health").status_code == 200

    def unreachable(statement, params=None):
        raise OperationalError(str(statement), {}, Exception("connection refused"))
    monkeypatch.setattr(gateway, "execute", unreachable)

    resp = client.get("/api/health")
    assert resp.status_code == 500
    assert resp.json() == {"success": False, "error": "Database connection failed"}

def test_liveness_and_metrics(client):
    assert client.get("/api/health/live").json() == {"success": True, "status": "alive"}
    client.get("/api/health")
    metrics = client.get("/api/metrics").json()
    assert metrics["service"] == "inventory-service"
    assert metrics["checks_performed"] == 1
    assert metrics["system"]["memory_rss_bytes"] > 0

def test_unknown_endpoint(client):
    resp = client.get("/api/nope")
    assert resp.status_code == 404
    assert resp.json() == {"success": False, "error": "Endpoint GET /api/nope not found"}

def test_unsupported_method_is_unknown_endpoint(client):
    resp = client.post("/api/items?page=2")
    assert resp.status_code == 404
    assert resp.json() == {"success": False, "error": "Endpoint POST /api/items?page=2 not found"}

def test_non_integer_id_is_rejected(client):
    resp = client.get("/api/items/abc")
    assert resp.status_code == 400
    assert resp.json() == {"success": False, "error": "Invalid request payload"}

def test_cors_preflight_for_configured_origin(client):
    resp = client.options("/api/items/1", headers={
        "Origin": ALLOWED_ORIGIN,
        "Access-Control-Request-Method": "PUT",
    })
    assert resp.status_code == 200
    assert resp.headers["access-control-allow-origin"] == ALLOWED_ORIGIN
    assert resp.headers["access-control-allow-credentials"] == "true"
    assert "PUT" in resp.headers["access-control-allow-methods"]

def test_cors_ignores_other_origins(client):
    resp = client.get("/api/items", headers={"Origin": "http://evil.example"})
    assert resp.status_code == 200
    assert "access-control-allow-origin" not in resp.headers

def test_request_id_is_echoed(client):
    resp = client.get("/api/items", headers={"X-Request-ID": "req-42"})
    assert resp.headers["X-Request-ID"] == "req-42"
    assert client.get("/api/items").headers["X-Request-ID"]

def test_unhandled_error_returns_generic_envelope(gateway, monkeypatch):
    def explode(self):
        raise RuntimeError("unexpected")
    monkeypatch.setattr(InventoryService, "list", explode)

    with TestClient(create_app(gateway), raise_server_exceptions=False) as client:
        resp = client.get("/api/items")
    assert resp.status_code == 500
    assert resp.json() == {"success": False, "error": "Internal server error"}

def test_startup_aborts_without_database():
    app = create_app(DataStoreGateway("sqlite:////nonexistent-dir/inventory.db"))
    with pytest.raises(RuntimeError):
        with TestClient(app):
            pass

def test_startup_survives_schema_failure(gateway, monkeypatch):
    monkeypatch.setattr(gateway, "initialize_schema", lambda: False)
    with TestClient(create_app(gateway)) as client:
        assert client.get("/api/health/live").status_code == 200
        assert client.get("/api/health").status_code == 200
