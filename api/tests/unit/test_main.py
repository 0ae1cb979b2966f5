"""Tests for main FastAPI application."""

import pytest
from unittest.mock import AsyncMock, patch
from fastapi.testclient import TestClient

from docpager import __version__
from docpager.errors import StoreConnectionError
from docpager.main import create_app
from docpager.store import store_manager


class TestMainApp:
    """Test main FastAPI application."""

    def test_create_app(self):
        app = create_app()

        assert app.title == "docpager API"
        assert app.version == __version__
        assert app.docs_url == "/docs"
        assert app.openapi_url == "/openapi.json"

    def test_routes_registered(self):
        paths = {route.path for route in create_app().routes}

        assert {"/v1/documents", "/health", "/ready", "/live", "/"} <= paths

    def test_root_endpoint(self, test_client):
        response = test_client.get("/")

        assert response.status_code == 200
        data = response.json()
        assert data["service"] == "docpager"
        assert data["documents"] == "/v1/documents"

    def test_liveness_check(self, test_client):
        response = test_client.get("/live")

        assert response.status_code == 200
        assert response.json()["status"] == "alive"

    def test_health_check_pings_store(self, test_client, fake_store):
        response = test_client.get("/health")

        assert response.status_code == 200
        assert response.json()["database"] == "connected"
        assert fake_store.pings == 1

    def test_health_check_store_down(self, test_client, fake_store):
        fake_store.error = StoreConnectionError("no servers")

        response = test_client.get("/health")

        assert response.status_code == 503
        assert response.headers["content-type"] == "application/problem+json"
        assert response.json()["detail"] == "Document store connection failed"

    def test_health_check_before_startup(self, test_client):
        store_manager.store = None

        response = test_client.get("/health")

        assert response.status_code == 503

    def test_ready_check(self, test_client):
        response = test_client.get("/ready")

        assert response.status_code == 200
        assert response.json()["status"] == "ready"

    def test_ready_check_without_store(self, test_client):
        store_manager.store = None

        assert test_client.get("/ready").status_code == 503

    def test_unknown_route_is_problem_detail(self, test_client):
        response = test_client.get("/nope")

        assert response.status_code == 404
        assert response.headers["content-type"] == "application/problem+json"


class TestLifespan:
    """Test startup and shutdown of the store connection."""

    def test_lifespan_opens_and_closes_store(self, test_settings):
        app = create_app()

        with patch("docpager.main.get_settings", return_value=test_settings), \
             patch("docpager.main.store_manager") as mock_manager:
            mock_manager.initialize = AsyncMock()
            mock_manager.close = AsyncMock()

            with TestClient(app):
                mock_manager.initialize.assert_awaited_once_with(test_settings)

            mock_manager.close.assert_awaited_once()

    def test_lifespan_fails_when_store_unreachable(self, test_settings):
        app = create_app()

        with patch("docpager.main.get_settings", return_value=test_settings), \
             patch("docpager.main.store_manager") as mock_manager:
            mock_manager.initialize = AsyncMock(side_effect=StoreConnectionError("no servers"))

            with pytest.raises(StoreConnectionError):
                with TestClient(app):
                    pass
