"""Integration tests for check-in endpoints."""
from datetime import timedelta

import pytest

MONDAY = "2024-06-03T10:00:00-04:00"
SATURDAY_NIGHT = "2024-06-08T23:59:00-04:00"
NEXT_SUNDAY = "2024-06-09T00:00:00-04:00"


@pytest.fixture(autouse=True)
def pinned_clock(clock):
    return clock


def check_in_body(athlete, host, location, activity, timestamp=MONDAY):
    return {
        "athlete_id": athlete.id,
        "host_id": host.id,
        "location_id": location.id,
        "activity_id": activity.id,
        "timestamp": timestamp,
    }


@pytest.mark.integration
class TestCheckInAdmission:
    """Once per athlete, per host, per week."""

    def test_check_in(self, client, host_headers, athlete, host, location, activity):
        response = client.post(
            "/api/v1/checkins",
            json=check_in_body(athlete, host, location, activity),
            headers=host_headers,
        )

        assert response.status_code == 201
        data = response.json()
        assert data["athlete_id"] == athlete.id
        assert data["timestamp"] == "2024-06-03T10:00:00-04:00"
        assert data["week_start"] == "2024-06-02T00:00:00-04:00"
        assert data["first_of_week"] is True

    def test_second_check_in_same_week_declined(
        self, client, clock, host_headers, athlete, host, location, activity
    ):
        first = client.post(
            "/api/v1/checkins",
            json=check_in_body(athlete, host, location, activity),
            headers=host_headers,
        )
        assert first.status_code == 201

        clock.set(SATURDAY_NIGHT)
        second = client.post(
            "/api/v1/checkins",
            json=check_in_body(athlete, host, location, activity, timestamp=SATURDAY_NIGHT),
            headers=host_headers,
        )

        assert second.status_code == 409
        assert second.json() == {
            "success": False,
            "error": {
                "code": "already_checked_in_this_week",
                "message": "Athlete has already checked in at this host this week",
            },
        }

    def test_new_week_starts_sunday_midnight(self, client, clock, host_headers, athlete, host, location, activity):
        clock.set(SATURDAY_NIGHT)
        client.post(
            "/api/v1/checkins",
            json=check_in_body(athlete, host, location, activity, timestamp=SATURDAY_NIGHT),
            headers=host_headers,
        )

        clock.set(NEXT_SUNDAY)
        response = client.post(
            "/api/v1/checkins",
            json=check_in_body(athlete, host, location, activity, timestamp=NEXT_SUNDAY),
            headers=host_headers,
        )

        assert response.status_code == 201
        assert response.json()["week_start"] == "2024-06-09T00:00:00-04:00"

    def test_epoch_milliseconds_accepted(self, client, host_headers, athlete, host, location, activity):
        response = client.post(
            "/api/v1/checkins",
            json=check_in_body(athlete, host, location, activity, timestamp=1717423200000),
            headers=host_headers,
        )

        assert response.status_code == 201
        assert response.json()["timestamp"] == "2024-06-03T10:00:00-04:00"

    def test_epoch_seconds_rejected(self, client, host_headers, athlete, host, location, activity):
        response = client.post(
            "/api/v1/checkins",
            json=check_in_body(athlete, host, location, activity, timestamp=1717423200),
            headers=host_headers,
        )
        assert response.status_code == 422

    def test_out_of_range_epoch_rejected(self, client, host_headers, athlete, host, location, activity):
        response = client.post(
            "/api/v1/checkins",
            json=check_in_body(athlete, host, location, activity, timestamp=1e300),
            headers=host_headers,
        )
        assert response.status_code == 422

    def test_backdated_check_in_cannot_reuse_a_past_week(
        self, client, clock, host_headers, athlete, host, location, activity
    ):
        first = client.post(
            "/api/v1/checkins",
            json=check_in_body(athlete, host, location, activity),
            headers=host_headers,
        )
        assert first.status_code == 201

        backdated = (clock.now - timedelta(days=8)).isoformat()
        response = client.post(
            "/api/v1/checkins",
            json=check_in_body(athlete, host, location, activity, timestamp=backdated),
            headers=host_headers,
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "timestamp_outside_current_week"
        count = client.get(f"/api/v1/athletes/{athlete.id}/checkins/count", headers=host_headers)
        assert count.json() == {"count": 1}

    def test_future_check_in_cannot_claim_a_later_week(
        self, client, clock, host_headers, athlete, host, location, activity
    ):
        first = client.post(
            "/api/v1/checkins",
            json=check_in_body(athlete, host, location, activity),
            headers=host_headers,
        )
        assert first.status_code == 201

        future = (clock.now + timedelta(days=30)).isoformat()
        response = client.post(
            "/api/v1/checkins",
            json=check_in_body(athlete, host, location, activity, timestamp=future),
            headers=host_headers,
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "timestamp_in_future"
        count = client.get(f"/api/v1/athletes/{athlete.id}/checkins/count", headers=host_headers)
        assert count.json() == {"count": 1}

    def test_other_host_same_week_not_first_of_week(
        self, client, super_admin_headers, athlete, host, other_host, location, other_location, activity
    ):
        client.post(
            "/api/v1/checkins",
            json=check_in_body(athlete, host, location, activity),
            headers=super_admin_headers,
        )

        response = client.post(
            "/api/v1/checkins",
            json=check_in_body(athlete, other_host, other_location, activity),
            headers=super_admin_headers,
        )

        assert response.status_code == 201
        assert response.json()["first_of_week"] is False

        athlete_response = client.get(f"/api/v1/athletes/{athlete.id}", headers=super_admin_headers)
        assert athlete_response.json()["weeks_active"] == 1

    def test_delete_allows_check_in_again(self, client, host_headers, athlete, host, location, activity):
        created = client.post(
            "/api/v1/checkins",
            json=check_in_body(athlete, host, location, activity),
            headers=host_headers,
        ).json()

        response = client.delete(f"/api/v1/checkins/{created['id']}", headers=host_headers)
        assert response.status_code == 200

        again = client.post(
            "/api/v1/checkins",
            json=check_in_body(athlete, host, location, activity),
            headers=host_headers,
        )
        assert again.status_code == 201

    def test_reassign_activity(self, client, host_headers, db_session, athlete, host, location, activity):
        from app.services.activity import create_activity
        from app.services.location import set_location_activities

        swim = create_activity(db_session, "Swim", "pool")
        set_location_activities(db_session, host.id, location.id, [activity.id, swim.id])

        created = client.post(
            "/api/v1/checkins",
            json=check_in_body(athlete, host, location, activity),
            headers=host_headers,
        ).json()

        response = client.patch(
            f"/api/v1/checkins/{created['id']}",
            json={"activity_id": swim.id},
            headers=host_headers,
        )

        assert response.status_code == 200
        assert response.json()["activity_id"] == swim.id

    def test_unsigned_disclaimer(self, client, host_headers, db_session, host, location, activity):
        from app.services.athlete import register_athlete

        newcomer = register_athlete(db_session, "Sam", "Lee", "sam@example.com")

        response = client.post(
            "/api/v1/checkins",
            json=check_in_body(newcomer, host, location, activity),
            headers=host_headers,
        )

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "disclaimer_required"

    def test_unknown_athlete(self, client, host_headers, host, location, activity):
        body = {
            "athlete_id": "doesnotexist",
            "host_id": host.id,
            "location_id": location.id,
            "activity_id": activity.id,
        }
        response = client.post("/api/v1/checkins", json=body, headers=host_headers)

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "athlete_not_found"


@pytest.mark.integration
class TestCheckInAccess:

    def test_requires_token(self, client, athlete, host, location, activity):
        response = client.post("/api/v1/checkins", json=check_in_body(athlete, host, location, activity))

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "missing_token"
        assert response.headers["WWW-Authenticate"] == "Bearer"

    def test_requires_host_group(self, client, athlete_headers, athlete, host, location, activity):
        response = client.post(
            "/api/v1/checkins",
            json=check_in_body(athlete, host, location, activity),
            headers=athlete_headers,
        )

        assert response.status_code == 403
        assert response.json()["error"]["code"] == "host_required"

    def test_host_cannot_check_in_for_another_host(
        self, client, other_host_headers, athlete, host, location, activity
    ):
        response = client.post(
            "/api/v1/checkins",
            json=check_in_body(athlete, host, location, activity),
            headers=other_host_headers,
        )

        assert response.status_code == 403
        assert response.json()["error"]["code"] == "host_access_denied"


@pytest.mark.integration
class TestPetCheckIns:

    def pet_body(self, athlete, pet, host, location, timestamp=MONDAY):
        return {
            "athlete_id": athlete.id,
            "pet_id": pet.id,
            "host_id": host.id,
            "location_id": location.id,
            "timestamp": timestamp,
        }

    def test_pet_checks_in_after_owner(self, client, host_headers, athlete, pet, host, location, activity):
        client.post(
            "/api/v1/checkins",
            json=check_in_body(athlete, host, location, activity),
            headers=host_headers,
        )

        response = client.post(
            "/api/v1/pet-checkins",
            json=self.pet_body(athlete, pet, host, location),
            headers=host_headers,
        )

        assert response.status_code == 201
        assert response.json()["pet_id"] == pet.id

        count = client.get(f"/api/v1/pets/{pet.id}/checkins/count", headers=host_headers)
        assert count.json() == {"count": 1}

    def test_owner_must_check_in_first(self, client, host_headers, athlete, pet, host, location):
        response = client.post(
            "/api/v1/pet-checkins",
            json=self.pet_body(athlete, pet, host, location),
            headers=host_headers,
        )

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "athlete_not_checked_in"

    def test_pet_of_another_athlete(self, client, host_headers, db_session, athlete, pet, host, location, activity):
        from app.services.athlete import register_athlete, sign_disclaimer

        other = register_athlete(db_session, "Casey", "Morgan", "casey@example.com")
        sign_disclaimer(db_session, other.id, host.id)
        client.post(
            "/api/v1/checkins",
            json=check_in_body(other, host, location, activity),
            headers=host_headers,
        )

        response = client.post(
            "/api/v1/pet-checkins",
            json=self.pet_body(other, pet, host, location),
            headers=host_headers,
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "pet_not_owned_by_athlete"
