"""Greeting and error handling tests."""

from fastapi.testclient import TestClient

from filecast.app import create_app
from filecast.config import Settings


def test_root_returns_plain_greeting(client: TestClient) -> None:
    response = client.get("/")
    assert response.status_code == 200
    assert response.text == "Hello, world!"
    assert response.headers["content-type"].startswith("text/plain")


def test_abc_and_api_messages(client: TestClient) -> None:
    assert client.get("/abc").json() == {"message": "Welcome to the API"}
    assert client.get("/api").json() == {"message": "Welcome to the abc"}


def test_unknown_route_uses_error_shape(client: TestClient) -> None:
    """HTTP errors are rendered as {"error": ...}."""
    response = client.get("/does-not-exist")
    assert response.status_code == 404
    assert response.json() == {"error": "Not Found"}


def test_api_docs_are_served(client: TestClient) -> None:
    assert client.get("/api-docs").status_code == 200
    paths = client.get("/openapi.json").json()["paths"]
    assert {"/upload", "/events", "/api/users"} <= set(paths)


def test_request_id_is_echoed(client: TestClient) -> None:
    response = client.get("/abc", headers={"X-Request-ID": "abc123"})
    assert response.headers["X-Request-ID"] == "abc123"


def test_unhandled_error_returns_generic_500(settings: Settings) -> None:
    """Unexpected exceptions are logged and answered with a plain 500."""
    app = create_app(settings)

    @app.get("/boom")
    async def boom() -> None:
        raise ValueError("kaboom")

    with TestClient(app, raise_server_exceptions=False) as test_client:
        response = test_client.get("/boom")

    assert response.status_code == 500
    assert response.text == "Something went wrong!"
