"""
Integration tests for User profile endpoints.
"""

import pytest


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


class TestProfile:

    @pytest.mark.api
    def test_get_profile(self, api_client, register_user):
        jane = register_user("Jane Doe", "jane@example.com")

        response = api_client.get("/api/user/profile", headers=bearer(jane["token"]))

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["data"] == {
            "id": jane["id"],
            "name": "Jane Doe",
            "email": "jane@example.com",
            "createdAt": jane["createdAt"],
        }

    @pytest.mark.api
    def test_get_profile_requires_token(self, api_client):
        assert api_client.get("/api/user/profile").status_code == 401

    @pytest.mark.api
    def test_update_profile(self, api_client, register_user):
        jane = register_user("Jane Doe", "jane@example.com")

        response = api_client.put(
            "/api/user/profile",
            headers=bearer(jane["token"]),
            json={"name": "Jane Smith", "email": "Jane.Smith@Example.com"}
        )

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Profile updated successfully"
        assert body["data"]["name"] == "Jane Smith"
        assert body["data"]["email"] == "jane.smith@example.com"

        # Old email no longer logs in, new one does
        assert api_client.post(
            "/api/auth/login", json={"email": "jane@example.com", "password": "secret1"}
        ).status_code == 401
        assert api_client.post(
            "/api/auth/login", json={"email": "jane.smith@example.com", "password": "secret1"}
        ).status_code == 200

    @pytest.mark.api
    def test_update_profile_partial(self, api_client, register_user):
        jane = register_user("Jane Doe", "jane@example.com")

        response = api_client.put(
            "/api/user/profile",
            headers=bearer(jane["token"]),
            json={"name": "Janet"}
        )

        assert response.status_code == 200
        assert response.json()["data"]["email"] == "jane@example.com"
        assert response.json()["data"]["name"] == "Janet"

    @pytest.mark.api
    def test_update_profile_email_in_use(self, api_client, register_user):
        register_user("Jane Doe", "jane@example.com")
        john = register_user("John Roe", "john@example.com")

        response = api_client.put(
            "/api/user/profile",
            headers=bearer(john["token"]),
            json={"email": "jane@example.com"}
        )

        assert response.status_code == 400
        assert response.json() == {"success": False, "message": "Email already in use"}

    @pytest.mark.api
    def test_update_profile_invalid(self, api_client, register_user):
        jane = register_user("Jane Doe", "jane@example.com")

        response = api_client.put(
            "/api/user/profile",
            headers=bearer(jane["token"]),
            json={"name": "J", "email": "nope"}
        )

        assert response.status_code == 400
        fields = sorted(e["field"] for e in response.json()["errors"])
        assert fields == ["email", "name"]
