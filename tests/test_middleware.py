"""Tests for the CORS and JSON content-type middleware."""

import pytest
from fastapi.testclient import TestClient

from app.api import create_app
from app.api.middleware import CORS_HEADERS


def assert_cors_headers(response):
    for header, value in CORS_HEADERS.items():
        assert response.headers[header] == value


class TestCORS:
    @pytest.mark.parametrize("path", ["/api/users", "/api/users/1", "/no/such/route", "/"])
    def test_preflight_short_circuits_on_any_path(self, client, path):
        response = client.options(path)

        assert response.status_code == 200
        assert response.content == b""
        assert response.headers["content-type"] == "application/json"
        assert_cors_headers(response)

    def test_preflight_never_reaches_handlers(self, client, monkeypatch):
        from app.services import user_service

        def fail(*args, **kwargs):
            raise AssertionError("handler should not run for OPTIONS")

        monkeypatch.setattr(user_service.UserService, "get_user", fail)
        response = client.options("/api/users/1")

        assert response.status_code == 200

    def test_headers_on_regular_and_error_responses(self, client):
        assert_cors_headers(client.get("/api/users"))
        assert_cors_headers(client.get("/api/users/999999"))
        assert_cors_headers(client.get("/api/users/abc"))


class TestJSONContentType:
    def test_empty_not_found_body_is_json_typed(self, client):
        response = client.get("/api/users/999999")

        assert response.headers["content-type"] == "application/json"

    def test_delete_response_is_json_typed(self, client, create_user):
        user = create_user()

        response = client.delete(f"/api/users/{user['id']}")

        assert response.status_code == 200
        assert response.headers["content-type"] == "application/json"

    def test_unknown_route_is_json_typed(self, client):
        response = client.get("/nowhere")

        assert response.status_code == 404
        assert response.headers["content-type"] == "application/json"


class TestUnhandledErrors:
    def test_unexpected_exception_is_json_with_cors(self, database_url, monkeypatch):
        from app.services import user_service

        def boom(self):
            raise RuntimeError("unexpected")

        monkeypatch.setattr(user_service.UserService, "list_users", boom)
        app = create_app(database_url=database_url, request_timeout=5)

        with TestClient(app, raise_server_exceptions=False) as client:
            response = client.get("/api/users")

        assert response.status_code == 500
        assert response.headers["content-type"] == "application/json"
        assert response.json() == {"error": "internal server error"}
        assert_cors_headers(response)
