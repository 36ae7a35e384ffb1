"""Pytest fixtures for API integration tests."""

import pytest
from fastapi.testclient import TestClient

from tollgate.presentation.api.app import API_V1_PREFIX, create_app


@pytest.fixture
def api_v1_prefix() -> str:
    """Get the API v1 prefix for building URLs."""
    return API_V1_PREFIX


@pytest.fixture
def api_settings(make_settings):
    """Test API settings: debug enabled, non-Secure cookies for plain HTTP."""
    return make_settings(api_debug=True, api_cors_origins="http://localhost:3000")


@pytest.fixture
def test_client(api_settings):
    """Test client over a fresh SQLite file; the lifespan creates the schema."""
    app = create_app(settings=api_settings)
    with TestClient(app) as client:
        yield client


@pytest.fixture
def registered_user_data() -> dict:
    return {
        "email": "test@example.com",
        "password": "SecurePassword123!",
        "display_name": "Test User",
    }


@pytest.fixture
def registered_user(test_client, registered_user_data, api_v1_prefix) -> dict:
    response = test_client.post(
        f"{api_v1_prefix}/auth/register",
        json=registered_user_data,
    )
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def logged_in(test_client, registered_user, registered_user_data, api_v1_prefix):
    """Log the registered user in; returns the login response."""
    response = test_client.post(
        f"{api_v1_prefix}/auth/login",
        json={
            "email": registered_user_data["email"],
            "password": registered_user_data["password"],
        },
    )
    assert response.status_code == 200
    return response
