"""REST surface of the profile backend."""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.testclient import TestClient

from app import developer_routes

BIO = "Investor and coach focused on small multifamily deals across central Texas."


def _complete_coach(client: TestClient, register) -> str:
    user = register("coach@example.com", "COACH", first_name="Sam", last_name="Ortiz")
    user_id = user["id"]
    assert client.put(
        f"/api/profile/{user_id}/general",
        json={"display_name": "Sam O.", "primary_market": "Austin, TX", "bio": BIO},
    ).status_code == 200
    assert client.put(f"/api/profile/{user_id}/languages", json={"languages": ["English"]}).status_code == 200
    assert client.post(f"/api/profile/{user_id}/coach").status_code == 201
    response = client.put(
        f"/api/profile/{user_id}/coach",
        json={
            "years_coaching": 6,
            "hourly_rate": 220,
            "coach_skills": ["INVESTOR"],
            "calendly_url": "https://calendly.com/sam",
            "event_type_url": "https://calendly.com/sam/intro",
            "profile_image_url": "https://cdn.example/sam.png",
            "languages": ["English"],
        },
    )
    assert response.status_code == 200, response.text
    return user_id


def test_register_and_fetch_user(client, register) -> None:
    user = register("Mentee@Example.com", "MENTEE")
    assert user["email"] == "mentee@example.com"
    assert user["is_mentee"] is True

    response = client.get(f"/api/profile/{user['id']}")
    assert response.status_code == 200
    assert response.json()["capabilities"] == ["MENTEE"]


def test_missing_user_returns_structured_404(client) -> None:
    response = client.get("/api/profile/does-not-exist")
    assert response.status_code == 404
    detail = response.json()["detail"]
    assert detail["code"] == "USER_NOT_FOUND"
    assert detail["details"] == {"user_id": "does-not-exist"}


def test_duplicate_registration_is_422(client, register) -> None:
    register("dup@example.com")
    response = client.post("/api/profile", json={"email": "dup@example.com"})
    assert response.status_code == 422
    assert response.json()["detail"]["code"] == "INVALID_INPUT"


def test_mentee_cannot_create_coach_profile(client, register) -> None:
    user = register("mentee@example.com", "MENTEE")
    response = client.post(f"/api/profile/{user['id']}/coach")
    assert response.status_code == 403
    assert response.json()["detail"]["code"] == "UNAUTHORIZED"


def test_create_coach_profile_is_idempotent(client, register) -> None:
    user = register("coach@example.com", "COACH")
    assert client.post(f"/api/profile/{user['id']}/coach").status_code == 201
    second = client.post(f"/api/profile/{user['id']}/coach")
    assert second.status_code == 200
    assert second.json()["profile_status"] == "DRAFT"


def test_coach_update_returns_completion(client, register) -> None:
    user_id = _complete_coach(client, register)

    view = client.get(f"/api/profile/{user_id}/coach").json()
    assert view["completion"]["percentage"] == 100
    assert view["languages"] == ["English"]
    assert view["coach_profile"]["coach_real_estate_domains"] == ["INVESTOR"]

    completion = client.get(f"/api/profile/{user_id}/completion").json()
    assert completion["can_publish"] is True


def test_languages_and_domains_endpoints(client, register) -> None:
    user = register("agent@example.com", "MENTEE")
    user_id = user["id"]

    languages = client.put(f"/api/profile/{user_id}/languages", json={"languages": [" French ", "French", ""]})
    assert languages.json()["languages"] == ["French"]

    domains = client.put(
        f"/api/profile/{user_id}/domains",
        json={"real_estate_domains": ["REALTOR", "TITLE_ESCROW"], "primary_domain": "TITLE_ESCROW"},
    )
    assert domains.status_code == 200
    assert domains.json()["primary_domain"] == "TITLE_ESCROW"

    capabilities = client.get(f"/api/profile/{user_id}/capabilities").json()
    assert capabilities["real_estate_domains"] == ["REALTOR", "TITLE_ESCROW"]
    assert capabilities["active_domains"] == []


def test_specialties_round_trip(client, register) -> None:
    user = register("coach@example.com", "COACH")
    response = client.put(f"/api/profile/{user['id']}/specialties", json={"specialties": ["COMMERCIAL", "INSURANCE"]})
    assert response.status_code == 200
    assert response.json() == {"active_domains": ["COMMERCIAL", "INSURANCE"]}

    invalid = client.put(f"/api/profile/{user['id']}/specialties", json={"specialties": ["ASTRONAUT"]})
    assert invalid.status_code == 422


def test_publish_flow_and_public_view(client, register) -> None:
    user_id = _complete_coach(client, register)
    assert client.get(f"/api/public/coaches/{user_id}").status_code == 404

    published = client.put(f"/api/profile/{user_id}/status", json={"status": "PUBLISHED"})
    assert published.status_code == 200
    assert published.json()["previous_status"] == "DRAFT"

    public = client.get(f"/api/public/coaches/{user_id}")
    assert public.status_code == 200
    assert public.json()["coach_profile"]["profile_status"] == "PUBLISHED"


def test_publish_incomplete_profile_is_rejected(client, register) -> None:
    user = register("coach@example.com", "COACH")
    client.post(f"/api/profile/{user['id']}/coach")
    response = client.put(f"/api/profile/{user['id']}/status", json={"status": "PUBLISHED"})
    assert response.status_code == 422
    assert "completion" in response.json()["detail"]["details"]["missing_requirements"]


def test_owner_cannot_archive_own_profile(client, register) -> None:
    user_id = _complete_coach(client, register)
    response = client.put(f"/api/profile/{user_id}/status", json={"status": "ARCHIVED"})
    assert response.status_code == 403


def test_status_change_events_are_recorded(client, register) -> None:
    user_id = _complete_coach(client, register)
    client.put(f"/api/profile/{user_id}/status", json={"status": "PUBLISHED"})

    events = client.get(f"/api/profile/{user_id}/events", params={"limit": 100}).json()
    status_events = [event for event in events if event["event_type"] == "profile_status_changed"]
    assert {event["actor"] for event in status_events} == {user_id, "telemetry"}


def test_events_limit_is_bounded(client, register) -> None:
    user = register("mentee@example.com")
    assert client.get(f"/api/profile/{user['id']}/events", params={"limit": 0}).status_code == 422


def test_portfolio_crud(client, register) -> None:
    user = register("coach@example.com", "COACH")
    base = f"/api/portfolio/{user['id']}"

    created = client.post(base, json={"type": "PROPERTY_SALE", "title": "Lakeside duplex", "date": "2024-04-02"})
    assert created.status_code == 201
    item_id = created.json()["id"]

    updated = client.put(
        f"{base}/{item_id}",
        json={"type": "PROPERTY_SALE", "title": "Lakeside duplex", "is_visible": False},
    )
    assert updated.json()["is_visible"] is False
    assert client.get(base, params={"visible_only": True}).json() == []

    assert client.delete(f"{base}/{item_id}").status_code == 204
    assert client.delete(f"{base}/{item_id}").status_code == 404


def test_recognition_bulk_replace(client, register) -> None:
    user = register("coach@example.com", "COACH")
    base = f"/api/recognitions/{user['id']}"
    client.post(base, json={"title": "Old award", "issue_date": "2019-05-01"})

    response = client.put(
        base,
        json=[
            {"title": "Top Producer", "issue_date": "2023-01-15", "type": "ACHIEVEMENT"},
            {"title": "Circle of Excellence", "issue_date": "2022-01-15"},
        ],
    )
    assert response.status_code == 200
    assert [item["title"] for item in response.json()] == ["Top Producer", "Circle of Excellence"]


def test_goal_and_listing_routes(client, register) -> None:
    user = register("agent@example.com", "COACH")
    goal = client.post(
        f"/api/goals/{user['id']}",
        json={"title": "GCI", "target": 250000, "deadline": "2999-12-31", "type": "gci"},
    )
    assert goal.status_code == 201
    assert client.get(f"/api/goals/{user['id']}").json()[0]["status"] == "IN_PROGRESS"

    draft = client.post(
        f"/api/listings/{user['id']}",
        json={"street_name": "Cedar Ln", "city": "Round Rock", "status": "Incomplete"},
    )
    assert draft.status_code == 201
    assert draft.json()["listing_key"]
    overview = client.get(f"/api/listings/{user['id']}").json()
    assert [listing["status"] for listing in overview["active_listings"]] == ["Incomplete"]
    assert overview["successful_transactions"] == []


def test_marketing_and_domain_profile_routes(client, register) -> None:
    user = register("coach@example.com", "COACH")
    user_id = user["id"]
    assert client.get(f"/api/marketing/{user_id}").json() is None

    saved = client.put(
        f"/api/marketing/{user_id}",
        json={"slogan": "Keys to the city", "social_media_links": {"LINKEDIN": "https://linkedin.com/in/x"}},
    )
    assert saved.status_code == 200
    assert saved.json()["social_media_links"] == {"LINKEDIN": "https://linkedin.com/in/x"}

    rejected = client.put(f"/api/domain-profiles/{user_id}/INSURANCE", json={"insurance_types": ["home"]})
    assert rejected.status_code == 422

    client.put(f"/api/profile/{user_id}/domains", json={"real_estate_domains": ["INSURANCE"]})
    accepted = client.put(f"/api/domain-profiles/{user_id}/INSURANCE", json={"insurance_types": ["home"]})
    assert accepted.status_code == 200
    assert client.get(f"/api/domain-profiles/{user_id}/INSURANCE").json()["data"]["insurance_types"] == ["home"]


def test_database_failure_maps_to_503(client, monkeypatch) -> None:
    from app.profile_store import profile_store

    def broken(user_id: str):
        raise RuntimeError("REALTY_COACH_DATABASE_URL must be configured before using the database.")

    monkeypatch.setattr(profile_store, "fetch_user_profile", broken)
    response = client.get("/api/profile/anyone")
    assert response.status_code == 503
    assert response.json()["detail"]["code"] == "DATABASE_ERROR"


def test_developer_reset_routes(client, register) -> None:
    developer_app = FastAPI()
    developer_app.include_router(developer_routes.router)
    developer = TestClient(developer_app)

    user = register("coach@example.com", "COACH")
    client.put(f"/api/profile/{user['id']}/specialties", json={"specialties": ["REALTOR"]})

    assert developer.post("/api/developer/reset-specialties", json={"user_id": user["id"]}).status_code == 204
    assert client.get(f"/api/profile/{user['id']}/capabilities").json()["active_domains"] == []

    assert developer.post("/api/developer/reset", json={"user_id": user["id"]}).status_code == 204
    assert client.get(f"/api/profile/{user['id']}").status_code == 404

    missing = developer.post("/api/developer/reset-specialties", json={"user_id": user["id"]})
    assert missing.status_code == 404
