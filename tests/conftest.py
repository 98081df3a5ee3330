from collections.abc import Generator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from app.api import create_app


@pytest.fixture
def database_url(tmp_path) -> str:
    """File-backed SQLite so that concurrent requests share one database."""
    return f"sqlite:///{tmp_path / 'users.db'}"


@pytest.fixture
def app(database_url) -> FastAPI:
    return create_app(database_url=database_url, request_timeout=5)


@pytest.fixture
def client(app) -> Generator[TestClient, None, None]:
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def create_user(client):
    """Factory fixture creating a user through the API and returning its JSON."""

    def _create_user(name: str = "Ann", email: str = "ann@x.com") -> dict:
        response = client.post("/api/users", json={"name": name, "email": email})
        assert response.status_code == 201
        return response.json()

    return _create_user
