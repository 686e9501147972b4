"""Test rate limiting functionality."""
import pytest


@pytest.mark.integration
@pytest.mark.rate_limit
class TestRateLimiting:
    """Test rate limiting on registration and kiosk endpoints."""

    def test_registration_rate_limit(self, client, athlete_headers):
        """Registration allows 30 requests per minute per caller."""
        for i in range(30):
            response = client.post(
                "/api/v1/athletes",
                json={"first_name": "Runner", "last_name": f"Number{i}", "email": f"runner{i}@example.com"},
                headers=athlete_headers,
            )
            assert response.status_code == 201, f"Request {i+1} should succeed under 30/min limit"

        response = client.post(
            "/api/v1/athletes",
            json={"first_name": "Runner", "last_name": "Extra", "email": "extra@example.com"},
            headers=athlete_headers,
        )
        assert response.status_code == 429, "Request 31 should be rate limited with 429 status"

    def test_callers_limited_separately(self, client, athlete_headers, host_headers):
        """Kiosks share an IP, so each signed-in caller gets its own bucket."""
        for i in range(30):
            client.post(
                "/api/v1/athletes",
                json={"first_name": "Runner", "last_name": f"Number{i}", "email": f"runner{i}@example.com"},
                headers=athlete_headers,
            )

        response = client.post(
            "/api/v1/athletes",
            json={"first_name": "Kiosk", "last_name": "Walkup", "email": "walkup@example.com"},
            headers=host_headers,
        )
        assert response.status_code == 201
