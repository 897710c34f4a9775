"""End-to-end tests for the current-user and admin management routes."""

from fastapi.testclient import TestClient


def test_me_anonymous(client: TestClient) -> None:
    response = client.get("/v1/users/me")

    assert response.status_code == 200
    assert response.json() is None
    assert client.get("/v1/users/me/is-admin").json() is False


def test_me_member(client: TestClient, alice_headers: dict[str, str]) -> None:
    response = client.get("/v1/users/me", headers=alice_headers)

    assert response.json() == {"id": "u1", "name": "Alice", "email": "alice@example.com", "role": "member"}
    assert client.get("/v1/users/me/is-admin", headers=alice_headers).json() is False


def test_me_admin(client: TestClient, admin_headers: dict[str, str]) -> None:
    assert client.get("/v1/users/me", headers=admin_headers).json()["role"] == "admin"
    assert client.get("/v1/users/me/is-admin", headers=admin_headers).json() is True


def test_granted_admin_applies_to_next_request(
    client: TestClient, admin_headers: dict[str, str], alice_headers: dict[str, str]
) -> None:
    response = client.put("/v1/users/admins/alice@example.com", json={"is_admin": True}, headers=admin_headers)

    assert response.status_code == 200
    assert response.json()["changed"] is True
    assert client.get("/v1/users/me/is-admin", headers=alice_headers).json() is True

    client.put("/v1/users/admins/alice@example.com", json={"is_admin": False}, headers=admin_headers)
    assert client.get("/v1/users/me/is-admin", headers=alice_headers).json() is False


def test_member_cannot_grant(client: TestClient, alice_headers: dict[str, str]) -> None:
    response = client.put("/v1/users/admins/alice@example.com", json={"is_admin": True}, headers=alice_headers)

    assert response.status_code == 403
    assert client.get("/v1/users/me/is-admin", headers=alice_headers).json() is False


def test_anonymous_cannot_grant(client: TestClient) -> None:
    response = client.put("/v1/users/admins/alice@example.com", json={"is_admin": True})

    assert response.status_code == 401


def test_invalid_email(client: TestClient, admin_headers: dict[str, str]) -> None:
    response = client.put("/v1/users/admins/not-an-email", json={"is_admin": True}, headers=admin_headers)

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "invalid_email"


def test_openapi_marks_session_routes(client: TestClient) -> None:
    schema = client.get("/openapi.json").json()

    assert "SessionBearer" in schema["components"]["securitySchemes"]
    assert schema["paths"]["/v1/files"]["get"]["security"] == [{"SessionBearer": []}]
    assert "security" not in schema["paths"]["/v1/messages"]["post"]
