"""Read models returned by the profile store and serialized by the REST layer."""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from .profile_schemas import PortfolioLocation, Testimonial
from .profile_types import (
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
    RecognitionStatus,
    RecognitionType,
    SocialMediaPlatform,
    SystemRole,
    UserCapability,
    UserStatus,
)

DateValue = date


class UserProfile(BaseModel):
    id: str
    external_id: Optional[str] = None
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    display_name: Optional[str] = None
    bio: Optional[str] = None
    profile_image_url: Optional[str] = None
    primary_market: Optional[str] = None
    total_years_re: int = 0
    capabilities: List[UserCapability] = Field(default_factory=list)
    is_coach: bool = False
    is_mentee: bool = False
    languages: List[str] = Field(default_factory=list)
    real_estate_domains: List[RealEstateDomain] = Field(default_factory=list)
    primary_domain: Optional[RealEstateDomain] = None
    system_role: SystemRole = SystemRole.USER
    status: UserStatus = UserStatus.ACTIVE


class ProfileCompletion(BaseModel):
    percentage: int = 0
    required_percentage: int = 0
    optional_percentage: int = 0
    missing_fields: List[str] = Field(default_factory=list)
    missing_required_fields: List[str] = Field(default_factory=list)
    optional_missing_fields: List[str] = Field(default_factory=list)
    validation_messages: Dict[str, str] = Field(default_factory=dict)
    can_publish: bool = False


class Recognition(BaseModel):
    id: str
    user_id: str
    coach_profile_id: Optional[str] = None
    title: str
    type: RecognitionType
    issuer: Optional[str] = None
    issue_date: date
    expiry_date: Optional[date] = None
    description: Optional[str] = None
    is_visible: bool = True
    industry_type: Optional[RealEstateDomain] = None
    status: RecognitionStatus = RecognitionStatus.ACTIVE
    verification_url: Optional[str] = None
    certificate_url: Optional[str] = None


class CoachProfile(BaseModel):
    id: Optional[str] = None
    user_id: Optional[str] = None
    coach_skills: List[str] = Field(default_factory=list)
    coach_real_estate_domains: List[RealEstateDomain] = Field(default_factory=list)
    coach_primary_domain: Optional[RealEstateDomain] = None
    years_coaching: Optional[int] = 0
    hourly_rate: Optional[float] = 0
    calendly_url: Optional[str] = None
    event_type_url: Optional[str] = None
    default_duration: int = DEFAULT_SESSION_DURATION
    minimum_duration: int = MINIMUM_SESSION_DURATION
    maximum_duration: int = MAXIMUM_SESSION_DURATION
    allow_custom_duration: bool = False
    profile_status: ProfileStatus = ProfileStatus.DRAFT
    completion_percentage: int = 0
    is_active: bool = True
    total_sessions: int = 0
    average_rating: Optional[float] = None


class CoachProfileView(BaseModel):
    """Coach profile bundled with the user fields and live completion status."""

    coach_profile: CoachProfile
    languages: List[str] = Field(default_factory=list)
    profile_image_url: Optional[str] = None
    recognitions: List[Recognition] = Field(default_factory=list)
    completion: ProfileCompletion = Field(default_factory=ProfileCompletion)


class ProfileStatusUpdate(BaseModel):
    previous_status: ProfileStatus
    profile_status: ProfileStatus
    completion: ProfileCompletion


class CapabilitiesSnapshot(BaseModel):
    capabilities: List[UserCapability] = Field(default_factory=list)
    real_estate_domains: List[RealEstateDomain] = Field(default_factory=list)
    primary_domain: Optional[RealEstateDomain] = None
    active_domains: List[RealEstateDomain] = Field(default_factory=list)


class SpecialtiesResult(BaseModel):
    active_domains: List[RealEstateDomain] = Field(default_factory=list)


class DomainProfile(BaseModel):
    user_id: str
    domain: RealEstateDomain
    data: Dict[str, Any] = Field(default_factory=dict)
    updated_at: Optional[datetime] = None


class PortfolioItem(BaseModel):
    id: str
    user_id: str
    type: PortfolioItemType
    title: str
    description: Optional[str] = None
    date: Optional[DateValue] = None
    location: Optional[PortfolioLocation] = None
    financial_details: Dict[str, float] = Field(default_factory=dict)
    metrics: Dict[str, float] = Field(default_factory=dict)
    image_urls: List[str] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)
    featured: bool = False
    is_visible: bool = True


class Goal(BaseModel):
    id: str
    user_id: str
    organization_id: Optional[str] = None
    title: str
    description: Optional[str] = None
    target: float
    current: float = 0
    deadline: date
    type: GoalType
    status: GoalStatus = GoalStatus.IN_PROGRESS


class Listing(BaseModel):
    id: str
    user_id: str
    listing_key: str
    street_number: Optional[str] = None
    street_name: str
    city: str
    state_or_province: Optional[str] = None
    postal_code: Optional[str] = None
    list_price: Optional[float] = None
    status: ListingStatus = ListingStatus.ACTIVE
    property_type: PropertyType = PropertyType.RESIDENTIAL
    bedrooms_total: Optional[int] = None
    bathrooms_total: Optional[float] = None
    living_area: Optional[float] = None
    year_built: Optional[int] = None
    public_remarks: Optional[str] = None
    listing_contract_date: Optional[date] = None
    close_date: Optional[date] = None
    close_price: Optional[float] = None
    is_featured: bool = False


class ListingsOverview(BaseModel):
    active_listings: List[Listing] = Field(default_factory=list)
    successful_transactions: List[Listing] = Field(default_factory=list)


class MarketingInfo(BaseModel):
    user_id: str
    organization_id: Optional[str] = None
    slogan: Optional[str] = None
    website_url: Optional[str] = None
    blog_url: Optional[str] = None
    social_media_links: Dict[SocialMediaPlatform, str] = Field(default_factory=dict)
    marketing_areas: List[str] = Field(default_factory=list)
    target_audience: List[str] = Field(default_factory=list)
    testimonials: List[Testimonial] = Field(default_factory=list)


class PublicCoachProfile(BaseModel):
    user_id: str
    display_name: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    bio: Optional[str] = None
    profile_image_url: Optional[str] = None
    primary_market: Optional[str] = None
    languages: List[str] = Field(default_factory=list)
    coach_profile: CoachProfile
    portfolio_items: List[PortfolioItem] = Field(default_factory=list)
    recognitions: List[Recognition] = Field(default_factory=list)
    marketing: Optional[MarketingInfo] = None


class AuditEvent(BaseModel):
    event_type: str
    payload: Dict[str, Any] = Field(default_factory=dict)
    actor: Optional[str] = None
    created_at: datetime


__all__ = [
    "AuditEvent",
    "CapabilitiesSnapshot",
    "CoachProfile",
    "CoachProfileView",
    "DomainProfile",
    "Goal",
    "Listing",
    "ListingsOverview",
    "MarketingInfo",
    "PortfolioItem",
    "ProfileCompletion",
    "ProfileStatusUpdate",
    "PublicCoachProfile",
    "Recognition",
    "SpecialtiesResult",
    "UserProfile",
]
