"""Integration tests for application-wide behaviour: health, headers and auth."""
import pytest
from datetime import timedelta

from app.core.security import create_access_token


@pytest.mark.integration
class TestHealth:

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["database"] == {"status": "connected"}

    def test_version_and_request_id_headers(self, client):
        response = client.get("/health")

        assert response.headers["X-API-Version"] == "1.0.0"
        assert response.headers["X-Request-ID"]

    def test_request_id_is_echoed(self, client):
        response = client.get("/health", headers={"X-Request-ID": "kiosk-7"})
        assert response.headers["X-Request-ID"] == "kiosk-7"


@pytest.mark.integration
class TestAuthentication:
    """Every API route needs a valid bearer token."""

    @pytest.mark.parametrize("path", [
        "/api/v1/activities",
        "/api/v1/rewards/global",
        "/api/v1/hosts",
        "/api/v1/athletes/search?last_name=a",
    ])
    def test_missing_token(self, client, path):
        response = client.get(path)

        assert response.status_code == 401
        assert response.json() == {
            "success": False,
            "error": {"code": "missing_token", "message": "No authorization header"},
        }

    def test_expired_token(self, client):
        token = create_access_token({"sub": "someone"}, expires_delta=timedelta(minutes=-1))

        response = client.get("/api/v1/activities", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "token_expired"

    def test_garbage_token(self, client):
        response = client.get("/api/v1/activities", headers={"Authorization": "Bearer not.a.jwt"})

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "invalid_token"

    def test_any_signed_in_caller_can_read_catalog(self, client, athlete_headers, activity):
        response = client.get("/api/v1/activities", headers=athlete_headers)
        assert response.status_code == 200


@pytest.mark.integration
class TestValidationErrors:

    def test_unknown_reward_type(self, client, super_admin_headers):
        response = client.post(
            "/api/v1/rewards",
            json={"name": "Thing", "icon": "star", "required_count": 3, "reward_type": "bonus"},
            headers=super_admin_headers,
        )
        assert response.status_code == 422

    def test_invalid_icon(self, client, super_admin_headers):
        response = client.post(
            "/api/v1/activities",
            json={"name": "Climb", "icon": "<svg onload=x>"},
            headers=super_admin_headers,
        )
        assert response.status_code == 422
