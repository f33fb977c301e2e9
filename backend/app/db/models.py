"""ORM models backing the Realty Coach profile schema."""

from __future__ import annotations

import uuid
from datetime import date, datetime, timezone
from typing import Optional

from sqlalchemy import (
    Boolean,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.types import JSON

from .base import Base, TimestampMixin

JSONType = JSON
DateValue = date


def _uuid() -> str:
    return str(uuid.uuid4())


class UserModel(TimestampMixin, Base):
    __tablename__ = "users"
    __table_args__ = (
        Index("ix_users_email", "email", unique=True),
        Index("ix_users_external_id", "external_id", unique=True),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    external_id: Mapped[str | None] = mapped_column(String(128), nullable=True)
    email: Mapped[str] = mapped_column(String(320), nullable=False)
    first_name: Mapped[str | None] = mapped_column(String(128))
    last_name: Mapped[str | None] = mapped_column(String(128))
    display_name: Mapped[str | None] = mapped_column(String(256))
    bio: Mapped[str | None] = mapped_column(Text)
    profile_image_url: Mapped[str | None] = mapped_column(String(1024))
    primary_market: Mapped[str | None] = mapped_column(String(256))
    total_years_re: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    capabilities: Mapped[list[str]] = mapped_column(JSONType, default=list, nullable=False)
    is_coach: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    is_mentee: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    languages: Mapped[list[str]] = mapped_column(JSONType, default=list, nullable=False)
    real_estate_domains: Mapped[list[str]] = mapped_column(JSONType, default=list, nullable=False)
    primary_domain: Mapped[str | None] = mapped_column(String(32))
    system_role: Mapped[str] = mapped_column(String(32), default="USER", nullable=False)
    status: Mapped[str] = mapped_column(String(32), default="ACTIVE", nullable=False)

    coach_profile: Mapped[Optional["CoachProfileModel"]] = relationship(
        back_populates="user", cascade="all, delete-orphan", uselist=False
    )
    domain_profiles: Mapped[list["DomainProfileModel"]] = relationship(
        back_populates="user", cascade="all, delete-orphan"
    )
    portfolio_items: Mapped[list["PortfolioItemModel"]] = relationship(
        back_populates="user", cascade="all, delete-orphan"
    )
    recognitions: Mapped[list["ProfessionalRecognitionModel"]] = relationship(
        back_populates="user", cascade="all, delete-orphan"
    )
    goals: Mapped[list["GoalModel"]] = relationship(back_populates="user", cascade="all, delete-orphan")
    listings: Mapped[list["ListingModel"]] = relationship(back_populates="user", cascade="all, delete-orphan")
    marketing_profile: Mapped[Optional["MarketingProfileModel"]] = relationship(
        back_populates="user", cascade="all, delete-orphan", uselist=False
    )


class CoachProfileModel(TimestampMixin, Base):
    __tablename__ = "coach_profiles"
    __table_args__ = (UniqueConstraint("user_id", name="uq_coach_profiles_user"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    user_id: Mapped[str] = mapped_column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    coach_skills: Mapped[list[str]] = mapped_column(JSONType, default=list, nullable=False)
    coach_real_estate_domains: Mapped[list[str]] = mapped_column(JSONType, default=list, nullable=False)
    coach_primary_domain: Mapped[str | None] = mapped_column(String(32))
    years_coaching: Mapped[int | None] = mapped_column(Integer)
    hourly_rate: Mapped[float | None] = mapped_column(Float)
    calendly_url: Mapped[str | None] = mapped_column(String(1024))
    event_type_url: Mapped[str | None] = mapped_column(String(1024))
    default_duration: Mapped[int] = mapped_column(Integer, default=60, nullable=False)
    minimum_duration: Mapped[int] = mapped_column(Integer, default=30, nullable=False)
    maximum_duration: Mapped[int] = mapped_column(Integer, default=120, nullable=False)
    allow_custom_duration: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    profile_status: Mapped[str] = mapped_column(String(16), default="DRAFT", nullable=False)
    completion_percentage: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    total_sessions: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    average_rating: Mapped[float | None] = mapped_column(Float)

    user: Mapped[UserModel] = relationship(back_populates="coach_profile")


class DomainProfileModel(TimestampMixin, Base):
    __tablename__ = "domain_profiles"
    __table_args__ = (UniqueConstraint("user_id", "domain", name="uq_domain_profiles_user_domain"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    user_id: Mapped[str] = mapped_column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    domain: Mapped[str] = mapped_column(String(32), nullable=False)
    data: Mapped[dict] = mapped_column(JSONType, default=dict, nullable=False)

    user: Mapped[UserModel] = relationship(back_populates="domain_profiles")


class PortfolioItemModel(TimestampMixin, Base):
    __tablename__ = "portfolio_items"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    user_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    type: Mapped[str] = mapped_column(String(32), nullable=False)
    title: Mapped[str] = mapped_column(String(256), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    date: Mapped[DateValue | None] = mapped_column(Date)
    location: Mapped[dict | None] = mapped_column(JSONType)
    financial_details: Mapped[dict] = mapped_column(JSONType, default=dict, nullable=False)
    metrics: Mapped[dict] = mapped_column(JSONType, default=dict, nullable=False)
    image_urls: Mapped[list[str]] = mapped_column(JSONType, default=list, nullable=False)
    tags: Mapped[list[str]] = mapped_column(JSONType, default=list, nullable=False)
    featured: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    is_visible: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    user: Mapped[UserModel] = relationship(back_populates="portfolio_items")


class ProfessionalRecognitionModel(TimestampMixin, Base):
    __tablename__ = "professional_recognitions"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    user_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    coach_profile_id: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("coach_profiles.id", ondelete="SET NULL"), nullable=True
    )
    title: Mapped[str] = mapped_column(String(256), nullable=False)
    type: Mapped[str] = mapped_column(String(32), nullable=False)
    issuer: Mapped[str | None] = mapped_column(String(256))
    issue_date: Mapped[date] = mapped_column(Date, nullable=False)
    expiry_date: Mapped[date | None] = mapped_column(Date)
    description: Mapped[str | None] = mapped_column(Text)
    is_visible: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    industry_type: Mapped[str | None] = mapped_column(String(32))
    status: Mapped[str] = mapped_column(String(16), default="ACTIVE", nullable=False)
    verification_url: Mapped[str | None] = mapped_column(String(1024))
    certificate_url: Mapped[str | None] = mapped_column(String(1024))

    user: Mapped[UserModel] = relationship(back_populates="recognitions")


class GoalModel(TimestampMixin, Base):
    __tablename__ = "goals"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    user_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    organization_id: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("organizations.id", ondelete="SET NULL"), nullable=True
    )
    title: Mapped[str] = mapped_column(String(256), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    target: Mapped[float] = mapped_column(Float, default=0, nullable=False)
    current: Mapped[float] = mapped_column(Float, default=0, nullable=False)
    deadline: Mapped[date] = mapped_column(Date, nullable=False)
    type: Mapped[str] = mapped_column(String(32), nullable=False)
    status: Mapped[str] = mapped_column(String(16), default="IN_PROGRESS", nullable=False)

    user: Mapped[UserModel] = relationship(back_populates="goals")


class ListingModel(TimestampMixin, Base):
    __tablename__ = "listings"
    __table_args__ = (UniqueConstraint("user_id", "listing_key", name="uq_listings_user_key"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    user_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    listing_key: Mapped[str] = mapped_column(String(64), nullable=False)
    street_number: Mapped[str | None] = mapped_column(String(32))
    street_name: Mapped[str] = mapped_column(String(256), nullable=False)
    city: Mapped[str] = mapped_column(String(128), nullable=False)
    state_or_province: Mapped[str | None] = mapped_column(String(64))
    postal_code: Mapped[str | None] = mapped_column(String(16))
    list_price: Mapped[float | None] = mapped_column(Float)
    status: Mapped[str] = mapped_column(String(32), default="Active", nullable=False)
    property_type: Mapped[str] = mapped_column(String(32), default="Residential", nullable=False)
    bedrooms_total: Mapped[int | None] = mapped_column(Integer)
    bathrooms_total: Mapped[float | None] = mapped_column(Float)
    living_area: Mapped[float | None] = mapped_column(Float)
    year_built: Mapped[int | None] = mapped_column(Integer)
    public_remarks: Mapped[str | None] = mapped_column(Text)
    listing_contract_date: Mapped[date | None] = mapped_column(Date)
    close_date: Mapped[date | None] = mapped_column(Date)
    close_price: Mapped[float | None] = mapped_column(Float)
    is_featured: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    user: Mapped[UserModel] = relationship(back_populates="listings")


class MarketingProfileModel(TimestampMixin, Base):
    __tablename__ = "marketing_profiles"
    __table_args__ = (UniqueConstraint("user_id", name="uq_marketing_profiles_user"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    user_id: Mapped[str] = mapped_column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    organization_id: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("organizations.id", ondelete="SET NULL"), nullable=True
    )
    slogan: Mapped[str | None] = mapped_column(String(256))
    website_url: Mapped[str | None] = mapped_column(String(1024))
    blog_url: Mapped[str | None] = mapped_column(String(1024))
    social_media_links: Mapped[dict[str, str]] = mapped_column(JSONType, default=dict, nullable=False)
    marketing_areas: Mapped[list[str]] = mapped_column(JSONType, default=list, nullable=False)
    target_audience: Mapped[list[str]] = mapped_column(JSONType, default=list, nullable=False)
    testimonials: Mapped[list[dict]] = mapped_column(JSONType, default=list, nullable=False)

    user: Mapped[UserModel] = relationship(back_populates="marketing_profile")


class OrganizationModel(TimestampMixin, Base):
    __tablename__ = "organizations"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    parent_id: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("organizations.id", ondelete="SET NULL"), nullable=True
    )
    name: Mapped[str] = mapped_column(String(256), nullable=False)
    type: Mapped[str] = mapped_column(String(32), default="BUSINESS", nullable=False)
    level: Mapped[str] = mapped_column(String(32), default="LOCAL", nullable=False)
    tier: Mapped[str] = mapped_column(String(32), default="FREE", nullable=False)
    status: Mapped[str] = mapped_column(String(32), default="PENDING", nullable=False)
    description: Mapped[str | None] = mapped_column(Text)

    members: Mapped[list["OrganizationMemberModel"]] = relationship(
        back_populates="organization", cascade="all, delete-orphan"
    )


class OrganizationMemberModel(TimestampMixin, Base):
    __tablename__ = "organization_members"
    __table_args__ = (UniqueConstraint("organization_id", "user_id", name="uq_org_member"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    organization_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("organizations.id", ondelete="CASCADE"), nullable=False
    )
    user_id: Mapped[str] = mapped_column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    role: Mapped[str] = mapped_column(String(32), default="MEMBER", nullable=False)
    status: Mapped[str] = mapped_column(String(32), default="ACTIVE", nullable=False)

    organization: Mapped[OrganizationModel] = relationship(back_populates="members")


class CoachingSessionModel(TimestampMixin, Base):
    __tablename__ = "coaching_sessions"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    coach_user_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    mentee_user_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    start_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    end_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    status: Mapped[str] = mapped_column(String(16), default="SCHEDULED", nullable=False)
    session_type: Mapped[str] = mapped_column(String(16), default="MENTORSHIP", nullable=False)
    price_amount: Mapped[float | None] = mapped_column(Float)
    currency: Mapped[str] = mapped_column(String(3), default="USD", nullable=False)
    payment_status: Mapped[str] = mapped_column(String(16), default="PENDING", nullable=False)


class SubscriptionModel(TimestampMixin, Base):
    __tablename__ = "subscriptions"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    user_id: Mapped[str | None] = mapped_column(String(36), ForeignKey("users.id", ondelete="CASCADE"))
    organization_id: Mapped[str | None] = mapped_column(String(36), ForeignKey("organizations.id", ondelete="CASCADE"))
    plan_id: Mapped[str] = mapped_column(String(64), nullable=False)
    status: Mapped[str] = mapped_column(String(16), default="ACTIVE", nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, default=1, nullable=False)
    current_period_start: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    current_period_end: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))


class PaymentModel(TimestampMixin, Base):
    __tablename__ = "payments"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    session_id: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("coaching_sessions.id", ondelete="SET NULL"), nullable=True
    )
    payer_user_id: Mapped[str] = mapped_column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    payee_user_id: Mapped[str] = mapped_column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    amount: Mapped[float] = mapped_column(Float, nullable=False)
    currency: Mapped[str] = mapped_column(String(3), default="USD", nullable=False)
    status: Mapped[str] = mapped_column(String(16), default="PENDING", nullable=False)
    processor_reference: Mapped[str | None] = mapped_column(String(128))


class AuditEventModel(Base):
    __tablename__ = "audit_events"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    user_id: Mapped[Optional[str]] = mapped_column(
        String(36), ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True
    )
    event_type: Mapped[str] = mapped_column(String(64), nullable=False)
    payload: Mapped[dict] = mapped_column(JSONType, default=dict, nullable=False)
    actor: Mapped[str | None] = mapped_column(String(128))
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc)
    )


__all__ = [
    "AuditEventModel",
    "CoachProfileModel",
    "CoachingSessionModel",
    "DomainProfileModel",
    "GoalModel",
    "ListingModel",
    "MarketingProfileModel",
    "OrganizationMemberModel",
    "OrganizationModel",
    "PaymentModel",
    "PortfolioItemModel",
    "ProfessionalRecognitionModel",
    "SubscriptionModel",
    "UserModel",
]
