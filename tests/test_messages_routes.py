"""End-to-end tests for the message board routes."""

from fastapi.testclient import TestClient


def _send(client: TestClient, content: str, headers: dict[str, str] | None = None):
    return client.post("/v1/messages", json={"content": content}, headers=headers or {})


class TestSendMessage:
    def test_anonymous_send(self, client: TestClient) -> None:
        response = _send(client, "  hello  ")

        assert response.status_code == 201
        body = response.json()
        assert body["id"] == body["message"]["id"]
        assert body["message"]["content"] == "hello"
        assert body["message"]["author_id"] is None
        assert body["message"]["author_name"] == "Anonymous"

    def test_authenticated_send(self, client: TestClient, alice_headers: dict[str, str]) -> None:
        response = _send(client, "hi", alice_headers)

        assert response.status_code == 201
        assert response.json()["message"]["author_id"] == "u1"
        assert response.json()["message"]["author_name"] == "Alice"

    def test_session_cookie_is_accepted(self, client: TestClient) -> None:
        client.cookies.set("session_token", "bob-token")

        response = _send(client, "via cookie")

        assert response.json()["message"]["author_id"] == "u2"

    def test_unknown_token_posts_anonymously(self, client: TestClient) -> None:
        response = _send(client, "hi", {"Authorization": "Bearer expired"})

        assert response.status_code == 201
        assert response.json()["message"]["author_id"] is None

    def test_empty_content(self, client: TestClient) -> None:
        response = _send(client, "   ")

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "message_empty"
        assert response.json()["error"]["message"] == "Message cannot be empty"

    def test_too_long_content(self, client: TestClient) -> None:
        response = _send(client, "x" * 2001)

        assert response.status_code == 400
        assert response.json()["error"]["message"] == "Message too long (max 2000 characters)"

    def test_content_at_limit_is_accepted(self, client: TestClient) -> None:
        assert _send(client, "x" * 2000).status_code == 201

    def test_sixteenth_send_is_rate_limited(self, client: TestClient, alice_headers: dict[str, str]) -> None:
        for _ in range(15):
            assert _send(client, "spam", alice_headers).status_code == 201

        response = _send(client, "spam", alice_headers)

        assert response.status_code == 429
        assert response.json()["error"]["code"] == "rate_limit_exceeded"
        assert response.headers["Retry-After"] == "6"
        assert response.headers["X-RateLimit-Limit"] == "15"
        assert response.headers["X-RateLimit-Remaining"] == "0"

        # Another user has their own bucket
        assert _send(client, "fine", {"Authorization": "Bearer bob-token"}).status_code == 201

        listed = client.get("/v1/messages").json()
        assert listed["count"] == 16


class TestListMessages:
    def test_newest_first(self, client: TestClient) -> None:
        for content in ("first", "second", "third"):
            _send(client, content)

        response = client.get("/v1/messages", params={"limit": 2})

        assert response.status_code == 200
        assert [m["content"] for m in response.json()["items"]] == ["third", "second"]

    def test_limit_is_bounded(self, client: TestClient) -> None:
        assert client.get("/v1/messages", params={"limit": 0}).status_code == 422


class TestDeleteMessage:
    def test_author_deletes(self, client: TestClient, alice_headers: dict[str, str]) -> None:
        message_id = _send(client, "mine", alice_headers).json()["id"]

        response = client.delete(f"/v1/messages/{message_id}", headers=alice_headers)

        assert response.status_code == 204
        assert client.get("/v1/messages").json()["count"] == 0

    def test_requires_session(self, client: TestClient) -> None:
        message_id = _send(client, "anon").json()["id"]

        response = client.delete(f"/v1/messages/{message_id}")

        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "Bearer"

    def test_other_user_forbidden(
        self, client: TestClient, alice_headers: dict[str, str], bob_headers: dict[str, str]
    ) -> None:
        message_id = _send(client, "mine", alice_headers).json()["id"]

        response = client.delete(f"/v1/messages/{message_id}", headers=bob_headers)

        assert response.status_code == 403
        assert response.json()["error"]["message"] == "Not authorized to delete this message"
        assert client.get("/v1/messages").json()["count"] == 1

    def test_missing_message(self, client: TestClient, alice_headers: dict[str, str]) -> None:
        response = client.delete("/v1/messages/nope", headers=alice_headers)

        assert response.status_code == 404
        assert response.json()["error"]["message"] == "Message not found"


class TestAdminDelete:
    def test_admin_deletes_any_message(
        self, client: TestClient, alice_headers: dict[str, str], admin_headers: dict[str, str]
    ) -> None:
        message_id = _send(client, "mine", alice_headers).json()["id"]

        response = client.delete(f"/v1/admin/messages/{message_id}", headers=admin_headers)

        assert response.status_code == 204
        assert client.get("/v1/messages").json()["count"] == 0

    def test_member_forbidden(self, client: TestClient, alice_headers: dict[str, str]) -> None:
        message_id = _send(client, "mine", alice_headers).json()["id"]

        response = client.delete(f"/v1/admin/messages/{message_id}", headers=alice_headers)

        assert response.status_code == 403
        assert response.json()["error"]["code"] == "admin_required"
