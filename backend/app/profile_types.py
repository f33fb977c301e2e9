"""Enumerations and constants shared by the profile backend and client layer."""

from __future__ import annotations

from enum import Enum
from typing import Dict, Tuple

PUBLICATION_THRESHOLD = 70
MINIMUM_DOMAINS = 1
BIO_MIN_LENGTH = 50
DEFAULT_SESSION_DURATION = 60
MINIMUM_SESSION_DURATION = 30
MAXIMUM_SESSION_DURATION = 120
DURATION_BOUNDS: Tuple[int, int] = (15, 240)


class ProfileStatus(str, Enum):
    DRAFT = "DRAFT"
    PUBLISHED = "PUBLISHED"
    ARCHIVED = "ARCHIVED"


class RealEstateDomain(str, Enum):
    REALTOR = "REALTOR"
    INVESTOR = "INVESTOR"
    MORTGAGE = "MORTGAGE"
    PROPERTY_MANAGER = "PROPERTY_MANAGER"
    TITLE_ESCROW = "TITLE_ESCROW"
    INSURANCE = "INSURANCE"
    COMMERCIAL = "COMMERCIAL"
    PRIVATE_CREDIT = "PRIVATE_CREDIT"


class UserCapability(str, Enum):
    COACH = "COACH"
    MENTEE = "MENTEE"


class SystemRole(str, Enum):
    SYSTEM_OWNER = "SYSTEM_OWNER"
    SYSTEM_MODERATOR = "SYSTEM_MODERATOR"
    USER = "USER"


class UserStatus(str, Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    SUSPENDED = "SUSPENDED"


class RecognitionType(str, Enum):
    AWARD = "AWARD"
    ACHIEVEMENT = "ACHIEVEMENT"


class RecognitionStatus(str, Enum):
    ACTIVE = "ACTIVE"
    EXPIRED = "EXPIRED"
    REVOKED = "REVOKED"
    PENDING = "PENDING"


class GoalStatus(str, Enum):
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    OVERDUE = "OVERDUE"


class GoalType(str, Enum):
    SALES_VOLUME = "sales_volume"
    COMMISSION_INCOME = "commission_income"
    GCI = "gci"
    AVG_SALE_PRICE = "avg_sale_price"
    LISTINGS = "listings"
    BUYER_TRANSACTIONS = "buyer_transactions"
    CLOSED_DEALS = "closed_deals"
    DAYS_ON_MARKET = "days_on_market"
    COACHING_SESSIONS = "coaching_sessions"
    GROUP_SESSIONS = "group_sessions"
    SESSION_REVENUE = "session_revenue"
    ACTIVE_MENTEES = "active_mentees"
    MENTEE_SATISFACTION = "mentee_satisfaction"
    RESPONSE_TIME = "response_time"
    SESSION_COMPLETION = "session_completion"
    MENTEE_MILESTONES = "mentee_milestones"
    NEW_CLIENTS = "new_clients"
    REFERRALS = "referrals"
    CLIENT_RETENTION = "client_retention"
    REVIEWS = "reviews"
    MARKET_SHARE = "market_share"
    TERRITORY_EXPANSION = "territory_expansion"
    SOCIAL_MEDIA = "social_media"
    WEBSITE_TRAFFIC = "website_traffic"
    CERTIFICATIONS = "certifications"
    TRAINING_HOURS = "training_hours"
    NETWORKING_EVENTS = "networking_events"
    CUSTOM = "custom"

    @property
    def label(self) -> str:
        return GOAL_TYPE_LABELS.get(self, self.value.replace("_", " ").title())


GOAL_TYPE_LABELS: Dict[GoalType, str] = {
    GoalType.GCI: "Gross Commission Income",
    GoalType.AVG_SALE_PRICE: "Average Sale Price",
    GoalType.DAYS_ON_MARKET: "Average Days on Market",
    GoalType.MENTEE_SATISFACTION: "Mentee Satisfaction Rate",
    GoalType.SESSION_COMPLETION: "Session Completion Rate",
    GoalType.CUSTOM: "Custom Goal",
}


class ListingStatus(str, Enum):
    ACTIVE = "Active"
    ACTIVE_UNDER_CONTRACT = "ActiveUnderContract"
    CANCELED = "Canceled"
    CLOSED = "Closed"
    COMING_SOON = "ComingSoon"
    DELETE = "Delete"
    EXPIRED = "Expired"
    HOLD = "Hold"
    INCOMPLETE = "Incomplete"
    PENDING = "Pending"
    WITHDRAWN = "Withdrawn"


# Listings saved as drafts carry the RESO "Incomplete" status.
DRAFT_LISTING_STATUS = ListingStatus.INCOMPLETE


class PropertyType(str, Enum):
    BUSINESS_OPPORTUNITY = "BusinessOpportunity"
    COMMERCIAL_LEASE = "CommercialLease"
    COMMERCIAL_SALE = "CommercialSale"
    FARM = "Farm"
    LAND = "Land"
    MANUFACTURED_IN_PARK = "ManufacturedInPark"
    RESIDENTIAL = "Residential"


class PortfolioItemType(str, Enum):
    PROPERTY_SALE = "PROPERTY_SALE"
    PROPERTY_PURCHASE = "PROPERTY_PURCHASE"
    LOAN_ORIGINATION = "LOAN_ORIGINATION"
    PROPERTY_MANAGEMENT = "PROPERTY_MANAGEMENT"
    INSURANCE_POLICY = "INSURANCE_POLICY"
    COMMERCIAL_DEAL = "COMMERCIAL_DEAL"
    PRIVATE_LENDING = "PRIVATE_LENDING"
    TITLE_SERVICE = "TITLE_SERVICE"
    OTHER = "OTHER"


class SocialMediaPlatform(str, Enum):
    FACEBOOK = "FACEBOOK"
    INSTAGRAM = "INSTAGRAM"
    LINKEDIN = "LINKEDIN"
    YOUTUBE = "YOUTUBE"
    TWITTER = "TWITTER"
    TIKTOK = "TIKTOK"
    PINTEREST = "PINTEREST"
    OTHER = "OTHER"


class SessionStatus(str, Enum):
    SCHEDULED = "SCHEDULED"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"
    NO_SHOW = "NO_SHOW"


class SessionType(str, Enum):
    PEER_TO_PEER = "PEER_TO_PEER"
    MENTORSHIP = "MENTORSHIP"
    GROUP = "GROUP"


class PaymentStatus(str, Enum):
    PENDING = "PENDING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"
    REFUNDED = "REFUNDED"


class Currency(str, Enum):
    USD = "USD"
    EUR = "EUR"
    GBP = "GBP"


class OrgType(str, Enum):
    INDIVIDUAL = "INDIVIDUAL"
    TEAM = "TEAM"
    BUSINESS = "BUSINESS"
    ENTERPRISE = "ENTERPRISE"
    FRANCHISE = "FRANCHISE"
    NETWORK = "NETWORK"


class OrgLevel(str, Enum):
    GLOBAL = "GLOBAL"
    REGIONAL = "REGIONAL"
    LOCAL = "LOCAL"
    BRANCH = "BRANCH"


class OrgTier(str, Enum):
    FREE = "FREE"
    STARTER = "STARTER"
    PROFESSIONAL = "PROFESSIONAL"
    ENTERPRISE = "ENTERPRISE"
    PARTNER = "PARTNER"


class OrgStatus(str, Enum):
    PENDING = "PENDING"
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    SUSPENDED = "SUSPENDED"


class SubscriptionStatus(str, Enum):
    ACTIVE = "ACTIVE"
    PAST_DUE = "PAST_DUE"
    CANCELED = "CANCELED"
    TRIALING = "TRIALING"


DOMAIN_LABELS: Dict[RealEstateDomain, str] = {
    RealEstateDomain.REALTOR: "Realtor",
    RealEstateDomain.INVESTOR: "Investor",
    RealEstateDomain.MORTGAGE: "Mortgage",
    RealEstateDomain.PROPERTY_MANAGER: "Property Manager",
    RealEstateDomain.TITLE_ESCROW: "Title & Escrow",
    RealEstateDomain.INSURANCE: "Insurance",
    RealEstateDomain.COMMERCIAL: "Commercial",
    RealEstateDomain.PRIVATE_CREDIT: "Private Credit",
}


def parse_domains(values) -> list[RealEstateDomain]:
    """Coerce raw strings into domains, dropping duplicates and preserving order.

    Raises ``ValueError`` for values that are not known domains.
    """
    parsed: list[RealEstateDomain] = []
    for value in values or []:
        domain = value if isinstance(value, RealEstateDomain) else RealEstateDomain(str(value).strip().upper())
        if domain not in parsed:
            parsed.append(domain)
    return parsed


__all__ = [
    "BIO_MIN_LENGTH",
    "Currency",
    "DEFAULT_SESSION_DURATION",
    "DOMAIN_LABELS",
    "DRAFT_LISTING_STATUS",
    "DURATION_BOUNDS",
    "GOAL_TYPE_LABELS",
    "GoalStatus",
    "GoalType",
    "ListingStatus",
    "MAXIMUM_SESSION_DURATION",
    "MINIMUM_DOMAINS",
    "MINIMUM_SESSION_DURATION",
    "OrgLevel",
    "OrgStatus",
    "OrgTier",
    "OrgType",
    "PUBLICATION_THRESHOLD",
    "PaymentStatus",
    "PortfolioItemType",
    "ProfileStatus",
    "PropertyType",
    "RealEstateDomain",
    "RecognitionStatus",
    "RecognitionType",
    "SessionStatus",
    "SessionType",
    "SocialMediaPlatform",
    "SubscriptionStatus",
    "SystemRole",
    "UserCapability",
    "UserStatus",
    "parse_domains",
]
