import pytest
from fastapi import FastAPI, status
from fastapi.testclient import TestClient
from pydantic import BaseModel
from pymongo.errors import DuplicateKeyError

from core.exceptions import InvalidStateError, PermissionDeniedError, TokenError
from interface.middleware import register_exception_handlers


class Payload(BaseModel):
    name: str
    count: int


@pytest.fixture
def app():
    app = FastAPI()
    register_exception_handlers(app)

    @app.post("/echo")
    async def echo(payload: Payload):
        return payload

    @app.get("/duplicate")
    async def duplicate():
        raise DuplicateKeyError(
            "E11000 duplicate key", 11000, {"keyValue": {"email": "a@example.com"}}
        )

    @app.get("/state")
    async def state():
        raise InvalidStateError("Session is already finished")

    @app.get("/forbidden")
    async def forbidden():
        raise PermissionDeniedError("Insufficient permissions")

    @app.get("/token")
    async def token():
        raise TokenError("Invalid refresh token")

    @app.get("/boom")
    async def boom():
        raise RuntimeError("secret internals")

    return app


@pytest.fixture
def client(app):
    return TestClient(app, raise_server_exceptions=False)


class TestErrorHandlers:
    def test_unknown_route(self, client):
        response = client.get("/nope")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json() == {"success": False, "data": None, "error": "Route /nope not found"}

    def test_request_validation(self, client):
        response = client.post("/echo", json={"name": "x", "count": "many"})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        error = response.json()["error"]
        assert error.startswith("Invalid input data: ")
        assert "count" in error

    def test_duplicate_key(self, client):
        response = client.get("/duplicate")

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.json()["error"] == "email 'a@example.com' already exists"

    def test_invalid_state_is_conflict(self, client):
        assert client.get("/state").status_code == status.HTTP_409_CONFLICT

    def test_permission_denied(self, client):
        assert client.get("/forbidden").status_code == status.HTTP_403_FORBIDDEN

    def test_token_error_sets_bearer_challenge(self, client):
        response = client.get("/token")

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.headers["www-authenticate"] == "Bearer"

    def test_unhandled_error_hides_details(self, client):
        response = client.get("/boom")

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.json() == {"success": False, "data": None, "error": "Something went wrong!"}
