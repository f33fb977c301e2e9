from __future__ import annotations

from datetime import date

import pytest
from pydantic import ValidationError

from app.profile_schemas import (
    CoachProfileFormData,
    GeneralFormData,
    ListingFormData,
    MarketingInfoFormData,
    MortgageProfileData,
    RecognitionFormData,
    UserRegistration,
    validate_domain_profile,
)
from app.profile_types import ListingStatus, RealEstateDomain, SocialMediaPlatform, parse_domains


def test_registration_normalizes_email() -> None:
    registration = UserRegistration(email="  Dana@Example.COM ", first_name="  ")
    assert registration.email == "dana@example.com"
    assert registration.first_name is None


def test_general_form_requires_display_name_and_market() -> None:
    with pytest.raises(ValidationError):
        GeneralFormData(display_name="   ", primary_market="Austin")
    form = GeneralFormData(display_name=" Dana ", primary_market="Austin, TX", bio="  ")
    assert form.display_name == "Dana"
    assert form.bio is None


def test_coach_form_cleans_lists_and_urls() -> None:
    form = CoachProfileFormData(
        coach_skills=["REALTOR", " REALTOR ", ""],
        languages=["English", "Spanish", "English"],
        calendly_url="  ",
    )
    assert form.coach_skills == ["REALTOR"]
    assert form.languages == ["English", "Spanish"]
    assert form.calendly_url is None


@pytest.mark.parametrize(
    "durations",
    [
        {"minimum_duration": 90, "maximum_duration": 60, "default_duration": 60},
        {"minimum_duration": 30, "maximum_duration": 60, "default_duration": 90},
        {"minimum_duration": 5},
    ],
)
def test_coach_form_rejects_bad_durations(durations) -> None:
    with pytest.raises(ValidationError):
        CoachProfileFormData(**durations)


def test_recognition_expiry_after_issue() -> None:
    with pytest.raises(ValidationError):
        RecognitionFormData(title="Top Producer", issue_date=date(2024, 5, 1), expiry_date=date(2024, 1, 1))


def test_closed_listing_needs_close_date() -> None:
    with pytest.raises(ValidationError):
        ListingFormData(street_name="Main St", city="Austin", status=ListingStatus.CLOSED)
    listing = ListingFormData(
        street_name="Main St",
        city="Austin",
        status=ListingStatus.CLOSED,
        listing_contract_date=date(2024, 2, 1),
        close_date=date(2024, 3, 15),
    )
    assert listing.close_date == date(2024, 3, 15)


def test_marketing_form_drops_blank_social_links() -> None:
    form = MarketingInfoFormData(
        social_media_links={"INSTAGRAM": " https://instagram.com/dana ", "FACEBOOK": "  "},
        marketing_areas=["Austin", "austin ", "Austin"],
    )
    assert form.social_media_links == {SocialMediaPlatform.INSTAGRAM: "https://instagram.com/dana"}
    assert form.marketing_areas == ["Austin", "austin"]


def test_domain_profiles_validate_per_domain() -> None:
    realtor = validate_domain_profile(RealEstateDomain.REALTOR, {"primary_market": "Austin", "years_experience": 3})
    assert realtor.model_dump()["primary_market"] == "Austin"
    with pytest.raises(ValidationError):
        validate_domain_profile(RealEstateDomain.MORTGAGE, {"min_loan_amount": 500000, "max_loan_amount": 100000})
    assert isinstance(validate_domain_profile(RealEstateDomain.MORTGAGE, {}), MortgageProfileData)


def test_parse_domains() -> None:
    assert parse_domains(["realtor", "REALTOR", RealEstateDomain.MORTGAGE]) == [
        RealEstateDomain.REALTOR,
        RealEstateDomain.MORTGAGE,
    ]
    assert parse_domains(None) == []
    with pytest.raises(ValueError):
        parse_domains(["ASTRONAUT"])
