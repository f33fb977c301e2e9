"""Validated payloads bound by the profile forms and accepted by the REST layer."""

from __future__ import annotations

from datetime import date
from typing import Dict, List, Optional, Type

from pydantic import BaseModel, Field, field_validator, model_validator

from .profile_types import (
    DURATION_BOUNDS,
    DEFAULT_SESSION_DURATION,
    MAXIMUM_SESSION_DURATION,
    MINIMUM_SESSION_DURATION,
    GoalStatus,
    GoalType,
    ListingStatus,
    PortfolioItemType,
    ProfileStatus,
    PropertyType,
    RealEstateDomain,
    RecognitionType,
    SocialMediaPlatform,
    SystemRole,
    UserCapability,
)

_MIN_DURATION, _MAX_DURATION = DURATION_BOUNDS
DateValue = date


def _clean_strings(values: List[str]) -> List[str]:
    cleaned: List[str] = []
    for value in values:
        trimmed = value.strip() if isinstance(value, str) else ""
        if trimmed and trimmed not in cleaned:
            cleaned.append(trimmed)
    return cleaned


def _blank_to_none(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    trimmed = value.strip()
    return trimmed or None


class GeneralFormData(BaseModel):
    display_name: str = Field(..., min_length=1, max_length=256)
    bio: Optional[str] = None
    primary_market: str = Field(..., min_length=1, max_length=256)
    total_years_re: int = Field(default=0, ge=0, le=100)

    @field_validator("display_name", "primary_market", mode="before")
    @classmethod
    def _strip_required(cls, value: object) -> object:
        return value.strip() if isinstance(value, str) else value

    @field_validator("bio")
    @classmethod
    def _strip_bio(cls, value: Optional[str]) -> Optional[str]:
        return _blank_to_none(value)


class UserRegistration(BaseModel):
    email: str = Field(..., min_length=3, max_length=320, pattern=r"^[^@\s]+@[^@\s]+$")
    external_id: Optional[str] = Field(default=None, max_length=128)
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    capabilities: List[UserCapability] = Field(default_factory=list)
    system_role: SystemRole = SystemRole.USER

    @field_validator("email", mode="before")
    @classmethod
    def _normalize_email(cls, value: object) -> object:
        return value.strip().lower() if isinstance(value, str) else value

    @field_validator("first_name", "last_name")
    @classmethod
    def _strip_names(cls, value: Optional[str]) -> Optional[str]:
        return _blank_to_none(value)


class LanguagesUpdate(BaseModel):
    languages: List[str] = Field(default_factory=list)

    @field_validator("languages")
    @classmethod
    def _clean_languages(cls, value: List[str]) -> List[str]:
        return _clean_strings(value)


class DomainsUpdate(BaseModel):
    real_estate_domains: List[RealEstateDomain] = Field(default_factory=list)
    primary_domain: Optional[RealEstateDomain] = None


class SpecialtiesUpdate(BaseModel):
    specialties: List[RealEstateDomain]


class ProfileStatusRequest(BaseModel):
    status: ProfileStatus
    actor_user_id: Optional[str] = None


class CoachProfileFormData(BaseModel):
    years_coaching: int = Field(default=0, ge=0, le=100)
    hourly_rate: float = Field(default=0, ge=0)
    coach_skills: List[str] = Field(default_factory=list)
    default_duration: int = Field(default=DEFAULT_SESSION_DURATION, ge=_MIN_DURATION, le=_MAX_DURATION)
    minimum_duration: int = Field(default=MINIMUM_SESSION_DURATION, ge=_MIN_DURATION, le=_MAX_DURATION)
    maximum_duration: int = Field(default=MAXIMUM_SESSION_DURATION, ge=_MIN_DURATION, le=_MAX_DURATION)
    allow_custom_duration: bool = False
    calendly_url: Optional[str] = None
    event_type_url: Optional[str] = None
    profile_image_url: Optional[str] = None
    languages: List[str] = Field(default_factory=list)

    @field_validator("calendly_url", "event_type_url", "profile_image_url")
    @classmethod
    def _strip_urls(cls, value: Optional[str]) -> Optional[str]:
        return _blank_to_none(value)

    @field_validator("coach_skills", "languages")
    @classmethod
    def _clean_lists(cls, value: List[str]) -> List[str]:
        return _clean_strings(value)

    @model_validator(mode="after")
    def _check_durations(self) -> "CoachProfileFormData":
        if self.minimum_duration > self.maximum_duration:
            raise ValueError("Minimum duration cannot exceed maximum duration.")
        if not self.minimum_duration <= self.default_duration <= self.maximum_duration:
            raise ValueError("Default duration must fall between the minimum and maximum durations.")
        return self


class PortfolioLocation(BaseModel):
    city: str = ""
    state: str = ""
    zip: str = ""


class PortfolioItemFormData(BaseModel):
    type: PortfolioItemType
    title: str = Field(..., min_length=1, max_length=256)
    description: Optional[str] = None
    date: Optional[DateValue] = None
    location: Optional[PortfolioLocation] = None
    financial_details: Dict[str, float] = Field(default_factory=dict)
    metrics: Dict[str, float] = Field(default_factory=dict)
    image_urls: List[str] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)
    featured: bool = False
    is_visible: bool = True

    @field_validator("title", mode="before")
    @classmethod
    def _strip_title(cls, value: object) -> object:
        return value.strip() if isinstance(value, str) else value

    @field_validator("image_urls", "tags")
    @classmethod
    def _clean_lists(cls, value: List[str]) -> List[str]:
        return _clean_strings(value)


class RecognitionFormData(BaseModel):
    title: str = Field(..., min_length=1, max_length=256)
    type: RecognitionType = RecognitionType.AWARD
    issuer: Optional[str] = None
    issue_date: date
    expiry_date: Optional[date] = None
    description: Optional[str] = None
    is_visible: bool = True
    industry_type: Optional[RealEstateDomain] = None
    verification_url: Optional[str] = None
    certificate_url: Optional[str] = None

    @field_validator("title", mode="before")
    @classmethod
    def _strip_title(cls, value: object) -> object:
        return value.strip() if isinstance(value, str) else value

    @model_validator(mode="after")
    def _check_dates(self) -> "RecognitionFormData":
        if self.expiry_date is not None and self.expiry_date < self.issue_date:
            raise ValueError("Expiry date cannot be earlier than the issue date.")
        return self


class GoalFormData(BaseModel):
    title: str = Field(..., min_length=1, max_length=256)
    description: Optional[str] = None
    target: float = Field(..., ge=0)
    current: float = Field(default=0, ge=0)
    deadline: date
    type: GoalType
    status: GoalStatus = GoalStatus.IN_PROGRESS

    @field_validator("title", mode="before")
    @classmethod
    def _strip_title(cls, value: object) -> object:
        return value.strip() if isinstance(value, str) else value


class ListingFormData(BaseModel):
    listing_key: Optional[str] = Field(default=None, max_length=64)
    street_number: Optional[str] = None
    street_name: str = Field(..., min_length=1, max_length=256)
    city: str = Field(..., min_length=1, max_length=128)
    state_or_province: Optional[str] = None
    postal_code: Optional[str] = None
    list_price: Optional[float] = Field(default=None, ge=0)
    status: ListingStatus = ListingStatus.ACTIVE
    property_type: PropertyType = PropertyType.RESIDENTIAL
    bedrooms_total: Optional[int] = Field(default=None, ge=0)
    bathrooms_total: Optional[float] = Field(default=None, ge=0)
    living_area: Optional[float] = Field(default=None, ge=0)
    year_built: Optional[int] = Field(default=None, ge=1600, le=2100)
    public_remarks: Optional[str] = None
    listing_contract_date: Optional[date] = None
    close_date: Optional[date] = None
    close_price: Optional[float] = Field(default=None, ge=0)
    is_featured: bool = False

    @model_validator(mode="after")
    def _check_closing(self) -> "ListingFormData":
        if self.status == ListingStatus.CLOSED and self.close_date is None:
            raise ValueError("Closed listings require a close date.")
        if (
            self.close_date is not None
            and self.listing_contract_date is not None
            and self.close_date < self.listing_contract_date
        ):
            raise ValueError("Close date cannot be earlier than the listing contract date.")
        return self


class Testimonial(BaseModel):
    name: str = Field(..., min_length=1)
    title: Optional[str] = None
    content: str = Field(..., min_length=1)
    date: Optional[str] = None


class MarketingInfoFormData(BaseModel):
    slogan: Optional[str] = Field(default=None, max_length=256)
    website_url: Optional[str] = None
    blog_url: Optional[str] = None
    social_media_links: Dict[SocialMediaPlatform, str] = Field(default_factory=dict)
    marketing_areas: List[str] = Field(default_factory=list)
    target_audience: List[str] = Field(default_factory=list)
    testimonials: List[Testimonial] = Field(default_factory=list)

    @field_validator("slogan", "website_url", "blog_url")
    @classmethod
    def _strip_text(cls, value: Optional[str]) -> Optional[str]:
        return _blank_to_none(value)

    @field_validator("social_media_links")
    @classmethod
    def _drop_blank_links(cls, value: Dict[SocialMediaPlatform, str]) -> Dict[SocialMediaPlatform, str]:
        return {platform: url.strip() for platform, url in value.items() if url and url.strip()}

    @field_validator("marketing_areas", "target_audience")
    @classmethod
    def _clean_lists(cls, value: List[str]) -> List[str]:
        return _clean_strings(value)


class _IndustryProfileData(BaseModel):
    company_name: Optional[str] = None
    license_number: Optional[str] = None
    years_experience: int = Field(default=0, ge=0, le=100)
    specializations: List[str] = Field(default_factory=list)
    certifications: List[str] = Field(default_factory=list)
    languages: List[str] = Field(default_factory=list)
    service_areas: List[str] = Field(default_factory=list)


class GeographicFocus(BaseModel):
    cities: List[str] = Field(default_factory=list)
    neighborhoods: List[str] = Field(default_factory=list)
    counties: List[str] = Field(default_factory=list)


class RealtorProfileData(_IndustryProfileData):
    primary_market: Optional[str] = None
    property_types: List[PropertyType] = Field(default_factory=list)
    marketing_areas: List[str] = Field(default_factory=list)
    geographic_focus: GeographicFocus = Field(default_factory=GeographicFocus)


class InvestorProfileData(_IndustryProfileData):
    investment_strategies: List[str] = Field(default_factory=list)
    property_types: List[PropertyType] = Field(default_factory=list)
    properties_owned: Optional[int] = Field(default=None, ge=0)
    total_portfolio_value: Optional[float] = Field(default=None, ge=0)
    target_markets: List[str] = Field(default_factory=list)


class MortgageProfileData(_IndustryProfileData):
    loan_types: List[str] = Field(default_factory=list)
    licensed_states: List[str] = Field(default_factory=list)
    min_loan_amount: Optional[float] = Field(default=None, ge=0)
    max_loan_amount: Optional[float] = Field(default=None, ge=0)
    average_closing_time: Optional[int] = Field(default=None, ge=0)
    monthly_transactions: Optional[int] = Field(default=None, ge=0)
    total_loan_volume: Optional[float] = Field(default=None, ge=0)
    lender_relationships: List[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_loan_range(self) -> "MortgageProfileData":
        if (
            self.min_loan_amount is not None
            and self.max_loan_amount is not None
            and self.min_loan_amount > self.max_loan_amount
        ):
            raise ValueError("Minimum loan amount cannot exceed the maximum loan amount.")
        return self


class PropertyManagerProfileData(_IndustryProfileData):
    license_state: Optional[str] = None
    property_types: List[PropertyType] = Field(default_factory=list)
    units_managed: Optional[int] = Field(default=None, ge=0)
    properties_managed: Optional[int] = Field(default=None, ge=0)


class TitleEscrowProfileData(_IndustryProfileData):
    title_types: List[str] = Field(default_factory=list)
    escrow_types: List[str] = Field(default_factory=list)
    licensed_states: List[str] = Field(default_factory=list)
    average_closing_time: Optional[int] = Field(default=None, ge=0)
    monthly_transactions: Optional[int] = Field(default=None, ge=0)
    total_transaction_volume: Optional[float] = Field(default=None, ge=0)


class InsuranceProfileData(_IndustryProfileData):
    insurance_types: List[str] = Field(default_factory=list)
    licensed_states: List[str] = Field(default_factory=list)
    annual_premium_volume: Optional[float] = Field(default=None, ge=0)
    total_policies_managed: Optional[int] = Field(default=None, ge=0)
    average_claim_processing_time: Optional[int] = Field(default=None, ge=0)
    carrier_relationships: List[str] = Field(default_factory=list)


class CommercialProfileData(_IndustryProfileData):
    property_types: List[PropertyType] = Field(default_factory=list)
    deal_types: List[str] = Field(default_factory=list)
    typical_deal_size: Optional[float] = Field(default=None, ge=0)
    total_transaction_volume: Optional[float] = Field(default=None, ge=0)
    completed_deals: Optional[int] = Field(default=None, ge=0)
    primary_market: Optional[str] = None


class PrivateCreditProfileData(_IndustryProfileData):
    loan_types: List[str] = Field(default_factory=list)
    min_loan_amount: Optional[float] = Field(default=None, ge=0)
    max_loan_amount: Optional[float] = Field(default=None, ge=0)
    typical_term_months: Optional[int] = Field(default=None, ge=0)
    total_capital_deployed: Optional[float] = Field(default=None, ge=0)


DOMAIN_PROFILE_SCHEMAS: Dict[RealEstateDomain, Type[_IndustryProfileData]] = {
    RealEstateDomain.REALTOR: RealtorProfileData,
    RealEstateDomain.INVESTOR: InvestorProfileData,
    RealEstateDomain.MORTGAGE: MortgageProfileData,
    RealEstateDomain.PROPERTY_MANAGER: PropertyManagerProfileData,
    RealEstateDomain.TITLE_ESCROW: TitleEscrowProfileData,
    RealEstateDomain.INSURANCE: InsuranceProfileData,
    RealEstateDomain.COMMERCIAL: CommercialProfileData,
    RealEstateDomain.PRIVATE_CREDIT: PrivateCreditProfileData,
}


def validate_domain_profile(domain: RealEstateDomain, payload: Dict[str, object]) -> _IndustryProfileData:
    """Validate ``payload`` against the schema registered for ``domain``."""
    schema = DOMAIN_PROFILE_SCHEMAS[domain]
    return schema.model_validate(payload)


__all__ = [
    "CoachProfileFormData",
    "CommercialProfileData",
    "DOMAIN_PROFILE_SCHEMAS",
    "DomainsUpdate",
    "GeneralFormData",
    "GeographicFocus",
    "GoalFormData",
    "InsuranceProfileData",
    "InvestorProfileData",
    "LanguagesUpdate",
    "ListingFormData",
    "MarketingInfoFormData",
    "MortgageProfileData",
    "PortfolioItemFormData",
    "PortfolioLocation",
    "PrivateCreditProfileData",
    "ProfileStatusRequest",
    "PropertyManagerProfileData",
    "RealtorProfileData",
    "RecognitionFormData",
    "SpecialtiesUpdate",
    "TitleEscrowProfileData",
    "Testimonial",
    "UserRegistration",
    "validate_domain_profile",
]
