"""Integration tests for athlete and pet endpoints."""
import pytest


def register(client, headers, **overrides):
    body = {"first_name": "Alex", "last_name": "Smith", "email": "alex@example.com"}
    body.update(overrides)
    return client.post("/api/v1/athletes", json=body, headers=headers)


@pytest.mark.integration
class TestAthleteRegistration:

    def test_register(self, client, athlete_headers):
        response = register(client, athlete_headers, email="  Alex@Example.com ", middle_initial="q")

        assert response.status_code == 201
        data = response.json()
        assert data["email"] == "alex@example.com"
        assert data["middle_initial"] == "Q"
        assert data["legacy_count"] == 0
        assert data["weeks_active"] == 0

    def test_duplicate_email(self, client, athlete_headers):
        register(client, athlete_headers)
        response = register(client, athlete_headers, first_name="Alexis")

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "email_taken"

    def test_invalid_email(self, client, athlete_headers):
        response = register(client, athlete_headers, email="not-an-email")
        assert response.status_code == 422

    def test_html_stripped_from_names(self, client, athlete_headers):
        response = register(client, athlete_headers, first_name="<b>Alex</b>")
        assert response.json()["first_name"] == "Alex"

    def test_requires_token(self, client):
        response = register(client, {})
        assert response.status_code == 401


@pytest.mark.integration
class TestAthleteRecords:

    def test_get_athlete(self, client, athlete_headers, athlete):
        response = client.get(f"/api/v1/athletes/{athlete.id}", headers=athlete_headers)

        assert response.status_code == 200
        assert response.json()["first_name"] == "Jordan"

    def test_unknown_athlete(self, client, athlete_headers):
        response = client.get("/api/v1/athletes/missing", headers=athlete_headers)

        assert response.status_code == 404
        assert response.json() == {
            "success": False,
            "error": {"code": "athlete_not_found", "message": "Athlete not found"},
        }

    def test_search_by_last_name_prefix(self, client, athlete_headers, athlete):
        register(client, athlete_headers, first_name="Riley", last_name="Rivers", email="riley@example.com")

        response = client.get("/api/v1/athletes/search", params={"last_name": "riv"}, headers=athlete_headers)

        assert response.status_code == 200
        assert [a["last_name"] for a in response.json()] == ["Rivera", "Rivers"]

    def test_search_by_email(self, client, athlete_headers, athlete):
        response = client.get(
            "/api/v1/athletes/search",
            params={"email": "JORDAN@example.com"},
            headers=athlete_headers,
        )
        assert [a["id"] for a in response.json()] == [athlete.id]

    def test_search_needs_a_term(self, client, athlete_headers):
        response = client.get("/api/v1/athletes/search", headers=athlete_headers)

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "missing_search_term"

    def test_partial_update(self, client, athlete_headers, athlete):
        response = client.patch(
            f"/api/v1/athletes/{athlete.id}",
            json={"shirt_size": "M"},
            headers=athlete_headers,
        )

        assert response.status_code == 200
        data = response.json()
        assert data["shirt_size"] == "M"
        assert data["last_name"] == "Rivera"

    def test_delete_requires_host(self, client, athlete_headers, athlete):
        response = client.delete(f"/api/v1/athletes/{athlete.id}", headers=athlete_headers)
        assert response.status_code == 403

    def test_deleted_athlete_is_hidden(self, client, host_headers, athlete):
        response = client.delete(f"/api/v1/athletes/{athlete.id}", headers=host_headers)
        assert response.status_code == 200

        assert client.get(f"/api/v1/athletes/{athlete.id}", headers=host_headers).status_code == 404

    def test_disclaimer_status(self, client, athlete_headers, db_session, host):
        from app.services.athlete import register_athlete

        newcomer = register_athlete(db_session, "Sam", "Lee", "sam@example.com")
        url = f"/api/v1/athletes/{newcomer.id}/disclaimers/{host.id}"

        before = client.get(url, headers=athlete_headers).json()
        assert before["signed"] is False
        assert before["disclaimer"] == "Participate at your own risk."

        after = client.post(url, headers=athlete_headers).json()
        assert after["signed"] is True
        assert after["signed_at"] is not None


@pytest.mark.integration
class TestPets:

    def test_add_pet(self, client, athlete_headers, athlete):
        response = client.post(f"/api/v1/athletes/{athlete.id}/pets", json={"name": "Pepper"}, headers=athlete_headers)

        assert response.status_code == 201
        assert response.json()["athlete_id"] == athlete.id

        pets = client.get(f"/api/v1/athletes/{athlete.id}/pets", headers=athlete_headers).json()
        assert [p["name"] for p in pets] == ["Pepper"]

    def test_pet_names_unique_ignoring_case(self, client, athlete_headers, athlete, pet):
        response = client.post(f"/api/v1/athletes/{athlete.id}/pets", json={"name": "BISCUIT"}, headers=athlete_headers)

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "pet_name_taken"

    def test_pet_name_exists(self, client, athlete_headers, athlete, pet):
        url = f"/api/v1/athletes/{athlete.id}/pets/exists"

        assert client.get(url, params={"name": "biscuit"}, headers=athlete_headers).json() == {"exists": True}
        assert client.get(url, params={"name": "Pepper"}, headers=athlete_headers).json() == {"exists": False}

    def test_rename_and_delete(self, client, athlete_headers, pet):
        renamed = client.patch(f"/api/v1/pets/{pet.id}", json={"name": "Biscuit II"}, headers=athlete_headers)
        assert renamed.json()["name"] == "Biscuit II"

        assert client.delete(f"/api/v1/pets/{pet.id}", headers=athlete_headers).status_code == 200
        assert client.get(f"/api/v1/pets/{pet.id}", headers=athlete_headers).status_code == 404
