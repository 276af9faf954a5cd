"""Tests for app-level behaviour: envelope errors, health, CORS."""

from fastapi.testclient import TestClient

from whattoeat.api.app import create_app
from whattoeat.domain.errors import IdentityServiceError, StorageError


def test_health_endpoint(client) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_storage_errors_render_generic_500(
    client, container, auth_headers, monkeypatch
) -> None:
    def failing_list(_owner_id):  # type: ignore[no-untyped-def]
        raise StorageError("Supabase recipe list failed: connection refused")

    monkeypatch.setattr(container.recipe_service, "list_recipes", failing_list)

    response = client.get("/api/recipes", headers=auth_headers)

    assert response.status_code == 500
    assert response.json() == {"success": False, "error": "Internal server error"}


def test_identity_outage_is_500_not_401(container, auth_headers, monkeypatch) -> None:
    async def unavailable(_token):  # type: ignore[no-untyped-def]
        raise IdentityServiceError("Identity service unreachable")

    monkeypatch.setattr(container.identity_verifier, "resolve_owner", unavailable)
    client = TestClient(create_app(container))

    response = client.get("/api/recipes", headers=auth_headers)

    assert response.status_code == 500
    assert response.json()["error"] == "Internal server error"


def test_unhandled_errors_render_generic_500(
    container, auth_headers, monkeypatch
) -> None:
    def broken(_owner_id, _start=None, _end=None):  # type: ignore[no-untyped-def]
        raise RuntimeError("unexpected")

    monkeypatch.setattr(container.analytics_service, "get_analytics", broken)
    client = TestClient(create_app(container), raise_server_exceptions=False)

    response = client.get("/api/analytics", headers=auth_headers)

    assert response.status_code == 500
    assert response.json() == {"success": False, "error": "Internal server error"}


def test_unknown_route_uses_error_envelope(client) -> None:
    response = client.get("/api/nothing-here")

    assert response.status_code == 404
    assert response.json()["success"] is False


def test_cors_preflight_allows_api_methods(client) -> None:
    response = client.options(
        "/api/recipes",
        headers={
            "Origin": "https://app.example.com",
            "Access-Control-Request-Method": "PUT",
            "Access-Control-Request-Headers": "Authorization, Content-Type",
        },
    )

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "*"
    assert "PUT" in response.headers["access-control-allow-methods"]


def test_wildcard_cors_never_allows_credentials(
    container, settings, monkeypatch
) -> None:
    monkeypatch.setattr(settings, "cors_allowed_origins", " , ")
    client = TestClient(create_app(container))

    response = client.get("/health", headers={"Origin": "https://evil.example"})

    assert response.headers["access-control-allow-origin"] == "*"
    assert "access-control-allow-credentials" not in response.headers


def test_listed_cors_origins_allow_credentials(
    container, settings, monkeypatch
) -> None:
    monkeypatch.setattr(settings, "cors_allowed_origins", "https://app.example")
    client = TestClient(create_app(container))

    allowed = client.get("/health", headers={"Origin": "https://app.example"})
    other = client.get("/health", headers={"Origin": "https://evil.example"})

    assert allowed.headers["access-control-allow-origin"] == "https://app.example"
    assert allowed.headers["access-control-allow-credentials"] == "true"
    assert "access-control-allow-origin" not in other.headers
