"""Pytest configuration and fixtures."""

import pytest
from fastapi.testclient import TestClient

from core.config import Settings
from main import create_app


TEST_SECRET = "test-secret"


@pytest.fixture
def settings(tmp_path):
    """Settings pointing at a throwaway SQLite file, bcrypt at its minimum cost."""
    return Settings(
        secret_key=TEST_SECRET,
        database_url=f"sqlite:///{tmp_path / 'test.db'}",
        bcrypt_rounds=4,
        log_level="WARNING",
    )


@pytest.fixture
def app(settings):
    app = create_app(settings)
    yield app
    app.state.engine.dispose()


@pytest.fixture
def client(app):
    with TestClient(app) as client:
        yield client


@pytest.fixture
def db(app):
    """A session on the same database the app uses."""
    session = app.state.session_factory()
    yield session
    session.close()


@pytest.fixture
def token(client):
    """Register and log in a user, returning its bearer token."""
    client.post("/auth/register", json={"username": "agent", "password": "secret"})
    response = client.post("/auth/login", json={"username": "agent", "password": "secret"})
    return response.json()["accessToken"]


@pytest.fixture
def auth_headers(token):
    return {"Authorization": f"Bearer {token}"}
