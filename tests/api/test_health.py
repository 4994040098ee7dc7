"""
Test suite for the health endpoints.

Tests server liveness and search service configuration status.

System role: Verification of health checks
"""

import pytest
from fastapi.testclient import TestClient

from indexer.api.deps import get_search_service
from indexer.application.services import SearchService
from indexer.main import create_app


@pytest.fixture
def client():
    app = create_app()
    return TestClient(app)


def test_health_check(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "message": "Server Healthy"}


def test_health_check_search_configured(client, mock_store, search_settings):
    client.app.dependency_overrides[get_search_service] = lambda: SearchService(
        store=mock_store, settings=search_settings
    )

    response = client.get("/health/search")

    assert response.status_code == 200
    assert response.json() == {
        "status": "healthy",
        "message": "Search index 'documents' configured",
    }


def test_health_check_search_not_configured(client, unconfigured_search_settings):
    client.app.dependency_overrides[get_search_service] = lambda: SearchService(
        store=None, settings=unconfigured_search_settings
    )

    response = client.get("/health/search")

    assert response.status_code == 200
    assert response.json()["status"] == "degraded"


def test_health_does_not_require_authorization(client):
    response = client.get("/health")
    assert "WWW-Authenticate" not in response.headers
