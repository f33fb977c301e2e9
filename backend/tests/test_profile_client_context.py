"""ProfileApiClient and ProfileContext driven against the app through TestClient."""

from __future__ import annotations

from datetime import date, timedelta

import httpx
import pytest

from app.profile_client import ProfileApiClient, ProfileApiError
from app.profile_context import ProfileContext
from app.profile_forms import CoachProfileForm
from app.profile_schemas import (
    CoachProfileFormData,
    GeneralFormData,
    GoalFormData,
    RecognitionFormData,
    UserRegistration,
)
from app.profile_types import GoalStatus, GoalType, ProfileStatus, RealEstateDomain, UserCapability

BIO = "Mortgage broker coaching loan officers on pipeline management and referrals."


@pytest.fixture
def api(client) -> ProfileApiClient:
    return ProfileApiClient(client=client)


def _coach(api: ProfileApiClient) -> str:
    user = api.create_user(
        UserRegistration(
            email="lee@example.com",
            first_name="Lee",
            last_name="Park",
            capabilities=[UserCapability.COACH],
        )
    )
    api.create_coach_profile(user.id)
    return user.id


def test_client_maps_error_details(api) -> None:
    with pytest.raises(ProfileApiError) as excinfo:
        api.get_user_profile("nobody")
    assert excinfo.value.status_code == 404
    assert excinfo.value.code == "USER_NOT_FOUND"


def test_client_maps_request_validation_errors(client) -> None:
    api = ProfileApiClient(client=client)
    with pytest.raises(ProfileApiError) as excinfo:
        api._request("POST", "/api/profile", json={"email": "not-an-email"})
    assert excinfo.value.status_code == 422
    assert excinfo.value.code == "VALIDATION_ERROR"


def test_client_wraps_transport_failures() -> None:
    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    transport_client = httpx.Client(transport=httpx.MockTransport(refuse), base_url="http://profiles.test")
    api = ProfileApiClient(client=transport_client)
    with pytest.raises(ProfileApiError) as excinfo:
        api.get_capabilities("user-1")
    assert excinfo.value.code == "REQUEST_FAILED"
    assert excinfo.value.status_code is None


def test_client_rejects_invalid_json() -> None:
    transport = httpx.MockTransport(lambda request: httpx.Response(200, content=b"<html>"))
    api = ProfileApiClient(client=httpx.Client(transport=transport, base_url="http://profiles.test"))
    with pytest.raises(ProfileApiError) as excinfo:
        api.get_user_profile("user-1")
    assert excinfo.value.code == "INVALID_RESPONSE"


def test_context_loads_coach_profile(api) -> None:
    user_id = _coach(api)
    api.save_specialties(user_id, ["MORTGAGE"])
    api.update_domain_profile(user_id, RealEstateDomain.MORTGAGE, {"loan_types": ["VA"]})

    context = ProfileContext(user_id, api)
    state = context.load()

    assert state.is_loading is False
    assert state.general_data.email == "lee@example.com"
    assert state.user_capabilities == [UserCapability.COACH]
    assert state.confirmed_specialties == [RealEstateDomain.MORTGAGE]
    assert state.selected_specialties == [RealEstateDomain.MORTGAGE]
    assert state.domain_data[RealEstateDomain.MORTGAGE]["loan_types"] == ["VA"]
    assert state.coach_data.user_id == user_id
    assert state.profile_status == ProfileStatus.DRAFT
    assert "hourly_rate" in state.missing_required_fields
    assert context.notices == []


def test_context_load_survives_missing_user(api) -> None:
    context = ProfileContext("ghost", api)
    state = context.load()

    assert state.is_loading is False
    assert state.general_data is None
    assert state.user_capabilities == []
    assert {notice.kind for notice in context.notices} == {"error"}


def test_update_coach_data_refreshes_completion(api) -> None:
    user_id = _coach(api)
    context = ProfileContext(user_id, api)
    context.load()
    assert context.update_general_data(GeneralFormData(display_name="Lee P.", primary_market="Denver", bio=BIO))

    ok = context.update_coach_data(
        CoachProfileFormData(
            years_coaching=2,
            hourly_rate=120,
            coach_skills=["MORTGAGE"],
            calendly_url="https://calendly.com/lee",
            event_type_url="https://calendly.com/lee/45",
            profile_image_url="https://cdn.example/lee.png",
            languages=["English", "Korean"],
        )
    )

    assert ok is True
    assert context.state.is_submitting is False
    assert context.state.general_data.languages == ["English", "Korean"]
    assert context.state.completion_percentage == 100
    assert context.state.can_publish is True
    assert context.notices[-1].title == "Coach profile updated successfully"

    assert context.update_profile_status(ProfileStatus.PUBLISHED) is True
    assert context.state.profile_status == ProfileStatus.PUBLISHED


def test_failed_update_keeps_state_and_notifies(api) -> None:
    user_id = _coach(api)
    seen = []
    context = ProfileContext(user_id, api, on_notice=seen.append)
    context.load()

    assert context.update_profile_status(ProfileStatus.PUBLISHED) is False

    assert context.state.profile_status == ProfileStatus.DRAFT
    assert context.state.is_submitting is False
    assert seen[-1].kind == "error"
    assert seen[-1].title == "Failed to update profile status"


def test_save_specialties_validates_shape(api) -> None:
    user_id = _coach(api)
    context = ProfileContext(user_id, api)

    assert context.save_specialties("REALTOR") is False
    assert context.notices[-1].title == "Invalid specialties format"

    assert context.save_specialties([RealEstateDomain.REALTOR, "COMMERCIAL"]) is True
    assert context.state.confirmed_specialties == [RealEstateDomain.REALTOR, RealEstateDomain.COMMERCIAL]
    assert context.state.real_estate_domains == [RealEstateDomain.REALTOR, RealEstateDomain.COMMERCIAL]


def test_update_recognitions_and_goals(api) -> None:
    user_id = _coach(api)
    context = ProfileContext(user_id, api)
    context.load()

    assert context.update_recognitions([RecognitionFormData(title="Top Originator", issue_date=date(2023, 3, 1))])
    assert [item.title for item in context.state.recognitions_data] == ["Top Originator"]

    goal = api.create_goal(
        user_id,
        GoalFormData(
            title="Fund 20 loans",
            target=20,
            deadline=date.today() + timedelta(days=30),
            type=GoalType.CLOSED_DEALS,
        ),
    )
    edited = goal.model_copy(update={"deadline": date.today() - timedelta(days=1)})

    assert context.update_goals([edited]) is True
    assert [item.status for item in context.state.goals_data] == [GoalStatus.OVERDUE]


def _complete_coach_form(**overrides) -> CoachProfileFormData:
    values = {
        "years_coaching": 2,
        "hourly_rate": 120,
        "coach_skills": ["MORTGAGE"],
        "calendly_url": "https://calendly.com/lee",
        "event_type_url": "https://calendly.com/lee/45",
        "languages": ["English"],
    }
    values.update(overrides)
    return CoachProfileFormData(**values)


def test_coach_update_without_image_keeps_stored_image(api) -> None:
    user_id = _coach(api)
    context = ProfileContext(user_id, api)
    context.load()
    assert context.update_general_data(GeneralFormData(display_name="Lee P.", primary_market="Denver", bio=BIO))
    assert context.update_coach_data(_complete_coach_form(profile_image_url="https://cdn.example/lee.png"))
    assert context.update_profile_status(ProfileStatus.PUBLISHED) is True

    assert context.update_coach_data(_complete_coach_form(hourly_rate=150)) is True

    assert context.state.general_data.profile_image_url == "https://cdn.example/lee.png"
    assert context.state.coach_data.hourly_rate == 150
    assert context.state.profile_status == ProfileStatus.PUBLISHED
    completion = api.get_profile_completion(user_id)
    assert completion.percentage == 100
    assert completion.can_publish is True


def test_client_reads_public_coach_profile(api) -> None:
    user_id = _coach(api)
    with pytest.raises(ProfileApiError) as excinfo:
        api.get_public_coach_profile(user_id)
    assert excinfo.value.status_code == 404
    assert excinfo.value.code == "ITEM_NOT_FOUND"

    context = ProfileContext(user_id, api)
    context.load()
    assert context.update_general_data(GeneralFormData(display_name="Lee P.", primary_market="Denver", bio=BIO))
    assert context.update_coach_data(_complete_coach_form(profile_image_url="https://cdn.example/lee.png"))
    assert context.update_profile_status(ProfileStatus.PUBLISHED) is True

    public = api.get_public_coach_profile(user_id)
    assert public.display_name == "Lee P."
    assert public.profile_image_url == "https://cdn.example/lee.png"
    assert public.coach_profile.profile_status == ProfileStatus.PUBLISHED
    assert public.languages == ["English"]


def test_fresh_coach_form_submits_without_optional_fields(api) -> None:
    user_id = _coach(api)
    context = ProfileContext(user_id, api)
    context.load()

    form = CoachProfileForm(context)
    form.set_value("hourly_rate", 100)
    form.set_value("coach_skills", ["REALTOR"])

    assert form.submit_to(context) is True
    assert form.errors == {}
    assert context.state.coach_data.hourly_rate == 100
    assert context.state.coach_data.years_coaching == 0
    assert context.state.coach_data.coach_skills == ["REALTOR"]
    assert "years_coaching" not in context.state.missing_fields
