"""Profile store behaviour against a sqlite database."""

from __future__ import annotations

from datetime import date

import pytest

from app.cache import capabilities_cache
from app.profile_errors import ProfileAuthorizationError, ProfileNotFoundError, ProfileValidationError
from app.profile_schemas import (
    CoachProfileFormData,
    GeneralFormData,
    GoalFormData,
    ListingFormData,
    PortfolioItemFormData,
    RecognitionFormData,
    UserRegistration,
)
from app.profile_store import profile_store
from app.profile_types import (
    GoalStatus,
    GoalType,
    ListingStatus,
    PortfolioItemType,
    ProfileStatus,
    RealEstateDomain,
    SystemRole,
    UserCapability,
)

BIO = "Team lead in Austin helping newer agents build a referral-based business."


def _user(email: str, *capabilities: UserCapability, **fields: object) -> str:
    registration = UserRegistration(
        email=email,
        first_name="Dana",
        last_name="Reyes",
        capabilities=list(capabilities),
        **fields,
    )
    return profile_store.create_user(registration).id


def _complete_coach(email: str = "coach@example.com") -> str:
    user_id = _user(email, UserCapability.COACH)
    profile_store.update_general_profile(
        user_id,
        GeneralFormData(display_name="Dana R.", primary_market="Austin, TX", bio=BIO),
    )
    profile_store.create_coach_profile_if_needed(user_id)
    profile_store.update_coach_profile(
        user_id,
        CoachProfileFormData(
            years_coaching=3,
            hourly_rate=175,
            coach_skills=["REALTOR", "INVESTOR"],
            calendly_url="https://calendly.com/dana",
            event_type_url="https://calendly.com/dana/60min",
            profile_image_url="https://cdn.example/dana.png",
        ),
    )
    return user_id


def test_duplicate_email_is_rejected(database) -> None:
    _user("dana@example.com")
    with pytest.raises(ProfileValidationError) as excinfo:
        _user("DANA@example.com")
    assert excinfo.value.code == "INVALID_INPUT"


def test_unknown_user_raises_not_found(database) -> None:
    with pytest.raises(ProfileNotFoundError) as excinfo:
        profile_store.fetch_user_profile("missing")
    assert excinfo.value.code == "USER_NOT_FOUND"


def test_coach_profile_requires_coach_capability(database) -> None:
    mentee_id = _user("mentee@example.com", UserCapability.MENTEE)
    with pytest.raises(ProfileAuthorizationError):
        profile_store.create_coach_profile_if_needed(mentee_id)

    coach_id = _user("coach@example.com", UserCapability.COACH)
    profile, created = profile_store.create_coach_profile_if_needed(coach_id)
    assert created is True
    assert profile.profile_status == ProfileStatus.DRAFT
    again, created_again = profile_store.create_coach_profile_if_needed(coach_id)
    assert created_again is False
    assert again.id == profile.id


def test_save_specialties_mirrors_domains(database) -> None:
    user_id = _user("coach@example.com", UserCapability.COACH)
    assert profile_store.fetch_user_capabilities(user_id).active_domains == []

    result = profile_store.save_specialties(user_id, ["mortgage", "REALTOR", "MORTGAGE"])

    assert result.active_domains == [RealEstateDomain.MORTGAGE, RealEstateDomain.REALTOR]
    user = profile_store.fetch_user_profile(user_id)
    assert user.real_estate_domains == [RealEstateDomain.MORTGAGE, RealEstateDomain.REALTOR]
    assert user.primary_domain == RealEstateDomain.MORTGAGE
    snapshot = profile_store.fetch_user_capabilities(user_id)
    assert snapshot.active_domains == [RealEstateDomain.MORTGAGE, RealEstateDomain.REALTOR]


def test_save_specialties_rejects_unknown_domain(database) -> None:
    user_id = _user("coach@example.com", UserCapability.COACH)
    with pytest.raises(ProfileValidationError) as excinfo:
        profile_store.save_specialties(user_id, ["ASTRONAUT"])
    assert excinfo.value.code == "INVALID_INPUT"


def test_domain_update_invalidates_cached_capabilities(database) -> None:
    user_id = _user("mentee@example.com", UserCapability.MENTEE)
    assert profile_store.fetch_user_capabilities(user_id).real_estate_domains == []
    assert capabilities_cache.get(user_id) is not None

    profile_store.update_user_domains(user_id, ["INSURANCE", "COMMERCIAL"], RealEstateDomain.COMMERCIAL)

    snapshot = profile_store.fetch_user_capabilities(user_id)
    assert snapshot.real_estate_domains == [RealEstateDomain.INSURANCE, RealEstateDomain.COMMERCIAL]
    assert snapshot.primary_domain == RealEstateDomain.COMMERCIAL


def test_coach_update_scores_completion(database) -> None:
    user_id = _complete_coach()
    view = profile_store.fetch_coach_profile(user_id)
    assert view.completion.percentage == 100
    assert view.profile_image_url == "https://cdn.example/dana.png"
    assert view.coach_profile.coach_real_estate_domains == [RealEstateDomain.REALTOR, RealEstateDomain.INVESTOR]
    assert profile_store.fetch_user_profile(user_id).primary_domain == RealEstateDomain.REALTOR


def test_publish_requires_completion(database) -> None:
    user_id = _user("coach@example.com", UserCapability.COACH)
    profile_store.create_coach_profile_if_needed(user_id)

    with pytest.raises(ProfileValidationError) as excinfo:
        profile_store.update_profile_status(user_id, ProfileStatus.PUBLISHED)
    assert excinfo.value.details["missing_requirements"] == ["completion", "domains", "rate"]


def test_publish_then_incomplete_edit_returns_to_draft(database) -> None:
    user_id = _complete_coach()

    result = profile_store.update_profile_status(user_id, ProfileStatus.PUBLISHED)
    assert result.previous_status == ProfileStatus.DRAFT
    assert result.profile_status == ProfileStatus.PUBLISHED

    profile, completion, previous = profile_store.update_coach_profile(
        user_id,
        CoachProfileFormData(hourly_rate=0, coach_skills=["REALTOR"]),
    )
    assert previous == ProfileStatus.PUBLISHED
    assert completion.can_publish is False
    assert profile.profile_status == ProfileStatus.DRAFT


def test_archiving_needs_system_owner(database) -> None:
    user_id = _complete_coach()
    with pytest.raises(ProfileAuthorizationError):
        profile_store.update_profile_status(user_id, ProfileStatus.ARCHIVED)

    stranger_id = _user("stranger@example.com")
    with pytest.raises(ProfileAuthorizationError):
        profile_store.update_profile_status(user_id, ProfileStatus.DRAFT, actor_user_id=stranger_id)

    owner_id = _user("owner@example.com", system_role=SystemRole.SYSTEM_OWNER)
    result = profile_store.update_profile_status(user_id, ProfileStatus.ARCHIVED, actor_user_id=owner_id)
    assert result.profile_status == ProfileStatus.ARCHIVED

    profile, _, _ = profile_store.update_coach_profile(user_id, CoachProfileFormData(hourly_rate=200))
    assert profile.profile_status == ProfileStatus.ARCHIVED

    events = profile_store.recent_events(user_id, limit=50)
    archived = [event for event in events if event.event_type == "profile_status_changed"]
    assert archived and archived[0].actor == owner_id


def test_recognitions_link_to_new_coach_profile(database) -> None:
    user_id = _user("coach@example.com", UserCapability.COACH)
    recognition = profile_store.create_recognition(
        user_id,
        RecognitionFormData(title="Rookie of the Year", issue_date=date(2023, 12, 1)),
    )
    assert recognition.coach_profile_id is None

    coach, _ = profile_store.create_coach_profile_if_needed(user_id)

    linked = profile_store.list_recognitions(user_id)
    assert [item.coach_profile_id for item in linked] == [coach.id]


def test_save_recognitions_replaces_existing(database) -> None:
    user_id = _user("coach@example.com", UserCapability.COACH)
    profile_store.create_recognition(user_id, RecognitionFormData(title="Old", issue_date=date(2020, 1, 1)))

    saved = profile_store.save_recognitions(
        user_id,
        [
            RecognitionFormData(title="Top 1%", issue_date=date(2022, 1, 1)),
            RecognitionFormData(title="Hidden", issue_date=date(2024, 1, 1), is_visible=False),
        ],
    )

    assert [item.title for item in saved] == ["Hidden", "Top 1%"]
    assert [item.title for item in profile_store.list_recognitions(user_id, visible_only=True)] == ["Top 1%"]


def test_passed_goals_become_overdue(database) -> None:
    user_id = _user("mentee@example.com", UserCapability.MENTEE)
    late = profile_store.create_goal(
        user_id,
        GoalFormData(title="Close 10 deals", target=10, deadline=date(2024, 3, 31), type=GoalType.CLOSED_DEALS),
    )
    done = profile_store.create_goal(
        user_id,
        GoalFormData(
            title="Get certified",
            target=1,
            current=1,
            deadline=date(2024, 1, 31),
            type=GoalType.CERTIFICATIONS,
            status=GoalStatus.COMPLETED,
        ),
    )

    listed = {goal.id: goal for goal in profile_store.list_goals(user_id, today=date(2024, 4, 1))}

    assert listed[late.id].status == GoalStatus.OVERDUE
    assert listed[done.id].status == GoalStatus.COMPLETED


def test_listings_split_into_active_and_closed(database) -> None:
    user_id = _user("agent@example.com", UserCapability.COACH)
    profile_store.create_listing(user_id, ListingFormData(listing_key="A-1", street_name="Elm St", city="Austin"))
    profile_store.create_listing(
        user_id,
        ListingFormData(
            listing_key="C-1",
            street_name="Oak Ave",
            city="Austin",
            status=ListingStatus.CLOSED,
            close_date=date(2024, 6, 1),
            close_price=510000,
        ),
    )

    overview = profile_store.list_listings(user_id)

    assert [listing.listing_key for listing in overview.active_listings] == ["A-1"]
    assert [listing.listing_key for listing in overview.successful_transactions] == ["C-1"]
    with pytest.raises(ProfileValidationError):
        profile_store.create_listing(user_id, ListingFormData(listing_key="A-1", street_name="Pine", city="Austin"))


def test_domain_profile_requires_selected_domain(database) -> None:
    user_id = _user("coach@example.com", UserCapability.COACH)
    with pytest.raises(ProfileValidationError):
        profile_store.update_domain_profile(user_id, RealEstateDomain.MORTGAGE, {"loan_types": ["FHA"]})

    profile_store.update_user_domains(user_id, ["MORTGAGE"])
    saved = profile_store.update_domain_profile(user_id, RealEstateDomain.MORTGAGE, {"loan_types": ["FHA"]})
    assert saved.data["loan_types"] == ["FHA"]
    assert profile_store.fetch_domain_profile(user_id, RealEstateDomain.MORTGAGE).data["loan_types"] == ["FHA"]


def test_public_profile_only_when_published(database) -> None:
    user_id = _complete_coach()
    profile_store.create_portfolio_item(
        user_id,
        PortfolioItemFormData(type=PortfolioItemType.PROPERTY_SALE, title="Downtown condo"),
    )
    profile_store.create_portfolio_item(
        user_id,
        PortfolioItemFormData(type=PortfolioItemType.PROPERTY_SALE, title="Private deal", is_visible=False),
    )
    with pytest.raises(ProfileNotFoundError):
        profile_store.fetch_public_coach_profile(user_id)

    profile_store.update_profile_status(user_id, ProfileStatus.PUBLISHED)
    public = profile_store.fetch_public_coach_profile(user_id)

    assert public.display_name == "Dana R."
    assert [item.title for item in public.portfolio_items] == ["Downtown condo"]
    assert public.marketing is None


def test_delete_user_removes_profile(database) -> None:
    user_id = _complete_coach()
    assert profile_store.delete_user(user_id) is True
    assert profile_store.get_user(user_id) is None
    assert profile_store.delete_user(user_id) is False
