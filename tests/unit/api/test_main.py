"""
Tests for app setup (main.py).

Covers:
- Health and root endpoints
- Lifespan opens the database and closes the gateway
- Startup route log and gateway re-creation on restart
- Public page mount
- CORS middleware
"""

import logging

from fastapi import status
from fastapi.testclient import TestClient

from app.services.payment_gateway_service import RazorpayGateway
from main import create_app


def test_health_check_endpoint(client):
    response = client.get("/health")

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["status"] == "healthy"
    assert data["database"]["status"] == "connected"


def test_root_without_public_dir(client):
    response = client.get("/")

    assert response.status_code == status.HTTP_200_OK
    assert "message" in response.json()


def test_public_dir_is_served_at_root(tmp_path, test_settings, fake_gateway):
    public = tmp_path / "public"
    public.mkdir()
    (public / "index.html").write_text("<h1>Apply</h1>")

    app = create_app(settings=test_settings, gateway=fake_gateway)
    with TestClient(app) as client:
        page = client.get("/")
        health = client.get("/health")

    assert page.status_code == status.HTTP_200_OK
    assert "<h1>Apply</h1>" in page.text
    # API routes take precedence over the root mount
    assert health.status_code == status.HTTP_200_OK


def test_lifespan_closes_gateway_and_database(app, fake_gateway):
    with TestClient(app) as client:
        client.get("/health")
        assert app.state.db.engine is not None

    assert fake_gateway.closed is True
    assert app.state.db.engine is None


def test_schema_created_on_startup_is_idempotent(test_settings, fake_gateway):
    for _ in range(2):
        app = create_app(settings=test_settings, gateway=fake_gateway)
        with TestClient(app) as client:
            response = client.get("/api/applications")
            assert response.status_code == status.HTTP_200_OK


def test_unknown_upload_returns_404(client):
    response = client.get("/uploads/does-not-exist.pdf")

    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_cors_headers_present(client):
    response = client.get("/health", headers={"Origin": "http://localhost:5173"})

    assert response.status_code == status.HTTP_200_OK
    assert "access-control-allow-origin" in response.headers


def test_startup_logs_route_paths(app, caplog):
    with caplog.at_level(logging.INFO, logger="careerpay.main"):
        with TestClient(app):
            pass

    logged = " ".join(r.getMessage() for r in caplog.records if "Registered routes" in r.getMessage())
    assert "/api/submit" in logged
    assert "/api/verify-payment" in logged
    assert "/health" in logged
    assert "Router(" not in logged


def test_lifespan_recreates_own_gateway_on_restart(test_settings):
    app = create_app(settings=test_settings)

    with TestClient(app) as client:
        first = app.state.gateway
        assert isinstance(first, RazorpayGateway)
        assert client.get("/health").status_code == status.HTTP_200_OK

    assert app.state.gateway is None

    with TestClient(app) as client:
        second = app.state.gateway
        assert client.get("/health").status_code == status.HTTP_200_OK

    assert isinstance(second, RazorpayGateway)
    assert second is not first
    assert first._client.is_closed


def test_lifespan_keeps_injected_gateway(app, fake_gateway):
    with TestClient(app):
        pass

    assert app.state.gateway is fake_gateway
