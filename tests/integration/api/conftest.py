"""Pytest fixtures for API integration tests."""

import pytest
from fastapi.testclient import TestClient
from pydantic import SecretStr

from warden.presentation.api.app import API_V1_PREFIX, create_app
from warden.presentation.api.dependencies import get_db_session
from warden_config.settings import Settings


@pytest.fixture
def api_v1_prefix() -> str:
    """Get the API v1 prefix for building URLs."""
    return API_V1_PREFIX


@pytest.fixture
def api_settings(rsa_key_paths) -> Settings:
    """Test API settings with debug enabled and a cheap bcrypt cost."""
    return Settings(
        postgres_password=SecretStr("test-password"),
        api_host="127.0.0.1",
        api_port=8000,
        api_debug=True,
        api_cors_origins="http://localhost:3000",
        jwt_private_key_path=rsa_key_paths.private_key_path,
        jwt_public_key_path=rsa_key_paths.public_key_path,
        jwt_access_token_expire_minutes=15,
        jwt_refresh_token_expire_days=7,
        jwt_issuer="warden",
        password_hash_rounds=4,
    )


@pytest.fixture
def test_app(api_settings, sqlite_session_maker):
    """App wired to the in-memory database."""
    app = create_app(settings=api_settings)

    async def override_get_db_session():
        async with sqlite_session_maker() as session:
            yield session

    app.dependency_overrides[get_db_session] = override_get_db_session
    return app


@pytest.fixture
def test_client(test_app) -> TestClient:
    """Create a test client with an in-memory database.

    Unhandled errors come back as the 500 response the app produces
    instead of being re-raised into the test.
    """
    return TestClient(test_app, raise_server_exceptions=False)


@pytest.fixture
def registered_user_data() -> dict:
    """Test account registration data."""
    return {
        "email": "test@example.com",
        "password": "SecurePassword123!",
        "name": "Test User",
    }


@pytest.fixture
def registered(test_client, registered_user_data, api_v1_prefix) -> dict:
    """Register the test account and return the response body."""
    response = test_client.post(
        f"{api_v1_prefix}/auth/register",
        json=registered_user_data,
    )
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def auth_headers(registered) -> dict:
    """Get auth headers for the registered account."""
    return {"Authorization": f"Bearer {registered['access_token']}"}
