"""Profile store: one transaction per server action over the repositories."""

from __future__ import annotations

import logging
from datetime import date
from typing import Any, Dict, List, Optional, Sequence

from .cache import capabilities_cache
from .config import get_settings
from .db.session import session_scope
from .profile_errors import ProfileNotFoundError, ProfileValidationError
from .profile_models import (
    AuditEvent,
    CapabilitiesSnapshot,
    CoachProfile,
    CoachProfileView,
    DomainProfile,
    Goal,
    Listing,
    ListingsOverview,
    MarketingInfo,
    PortfolioItem,
    ProfileCompletion,
    ProfileStatusUpdate,
    PublicCoachProfile,
    Recognition,
    SpecialtiesResult,
    UserProfile,
)
from .profile_schemas import (
    CoachProfileFormData,
    GeneralFormData,
    GoalFormData,
    ListingFormData,
    MarketingInfoFormData,
    PortfolioItemFormData,
    RecognitionFormData,
    UserRegistration,
)
from .profile_types import ProfileStatus, RealEstateDomain, RecognitionStatus, parse_domains
from .repositories.coach_profiles import coach_profiles
from .repositories.domain_profiles import domain_profiles
from .repositories.goals import goals
from .repositories.listings import listings
from .repositories.marketing import marketing_profiles
from .repositories.portfolio_items import portfolio_items
from .repositories.recognitions import recognitions
from .repositories.users import UNSET, users

logger = logging.getLogger(__name__)


class ProfileStore:
    """Server actions backing the profile REST routes."""

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------

    def create_user(self, payload: UserRegistration) -> UserProfile:
        with session_scope() as session:
            return users.create(session, payload)

    def get_user(self, user_id: str) -> Optional[UserProfile]:
        with session_scope(commit=False) as session:
            return users.get(session, user_id)

    def fetch_user_profile(self, user_id: str) -> UserProfile:
        profile = self.get_user(user_id)
        if profile is None:
            raise ProfileNotFoundError(f"User '{user_id}' was not found.", details={"user_id": user_id})
        return profile

    def update_general_profile(self, user_id: str, data: GeneralFormData) -> UserProfile:
        with session_scope() as session:
            return users.update_general(session, user_id, data)

    def update_user_languages(self, user_id: str, languages: List[str]) -> UserProfile:
        with session_scope() as session:
            return users.update_languages(session, user_id, languages)

    def update_user_domains(
        self,
        user_id: str,
        domains: Sequence[Any],
        primary_domain: Any = UNSET,
    ) -> UserProfile:
        with session_scope() as session:
            profile = users.update_domains(session, user_id, domains, primary_domain)
        capabilities_cache.invalidate(user_id)
        return profile

    def fetch_user_capabilities(self, user_id: str) -> CapabilitiesSnapshot:
        capabilities_cache.ttl_seconds = get_settings().capabilities_cache_ttl
        cached = capabilities_cache.get(user_id)
        if cached is not None:
            return cached
        with session_scope(commit=False) as session:
            snapshot = users.capabilities(session, user_id)
        capabilities_cache.set(user_id, snapshot)
        return snapshot

    def delete_user(self, user_id: str) -> bool:
        with session_scope() as session:
            deleted = users.delete(session, user_id)
        capabilities_cache.invalidate(user_id)
        return deleted

    def recent_events(self, user_id: str, limit: int = 20) -> List[AuditEvent]:
        with session_scope(commit=False) as session:
            return users.recent_events(session, user_id, limit=limit)

    # ------------------------------------------------------------------
    # Coach profile
    # ------------------------------------------------------------------

    def fetch_coach_profile(self, user_id: str) -> CoachProfileView:
        with session_scope(commit=False) as session:
            return coach_profiles.view(session, user_id)

    def fetch_profile_completion(self, user_id: str) -> ProfileCompletion:
        return self.fetch_coach_profile(user_id).completion

    def create_coach_profile_if_needed(self, user_id: str) -> tuple[CoachProfile, bool]:
        with session_scope() as session:
            profile, created = coach_profiles.create_if_needed(session, user_id)
        if created:
            capabilities_cache.invalidate(user_id)
        return profile, created

    def update_coach_profile(
        self,
        user_id: str,
        data: CoachProfileFormData,
    ) -> tuple[CoachProfile, ProfileCompletion, ProfileStatus]:
        with session_scope() as session:
            result = coach_profiles.update(session, user_id, data)
        capabilities_cache.invalidate(user_id)
        return result

    def update_profile_status(
        self,
        user_id: str,
        status: ProfileStatus,
        actor_user_id: Optional[str] = None,
    ) -> ProfileStatusUpdate:
        threshold = get_settings().publication_threshold
        with session_scope() as session:
            return coach_profiles.change_status(
                session,
                user_id,
                status,
                actor_user_id=actor_user_id,
                publication_threshold=threshold,
            )

    def save_specialties(self, user_id: str, specialties: Sequence[Any]) -> SpecialtiesResult:
        """Store validated specialties as coach skills and mirror them onto the user's domains."""
        try:
            parsed = parse_domains(specialties)
        except ValueError as exc:
            raise ProfileValidationError(str(exc), code="INVALID_INPUT") from exc
        with session_scope() as session:
            coach_profiles.create_if_needed(session, user_id)
            coach = coach_profiles.save_skills(session, user_id, parsed)
            users.update_domains(session, user_id, parsed, coach.coach_primary_domain)
        capabilities_cache.invalidate(user_id)
        return SpecialtiesResult(active_domains=list(coach.coach_real_estate_domains))

    save_coach_skills = save_specialties

    def reset_specialties(self, user_id: str) -> bool:
        with session_scope() as session:
            reset = coach_profiles.reset_skills(session, user_id)
        capabilities_cache.invalidate(user_id)
        return reset

    # ------------------------------------------------------------------
    # Domain profiles
    # ------------------------------------------------------------------

    def fetch_domain_profile(self, user_id: str, domain: RealEstateDomain) -> Optional[DomainProfile]:
        with session_scope(commit=False) as session:
            return domain_profiles.get(session, user_id, domain)

    def list_domain_profiles(self, user_id: str) -> List[DomainProfile]:
        with session_scope(commit=False) as session:
            return domain_profiles.list_for_user(session, user_id)

    def update_domain_profile(self, user_id: str, domain: RealEstateDomain, payload: Dict[str, Any]) -> DomainProfile:
        with session_scope() as session:
            return domain_profiles.upsert(session, user_id, domain, payload)

    # ------------------------------------------------------------------
    # Portfolio
    # ------------------------------------------------------------------

    def list_portfolio_items(self, user_id: str, visible_only: bool = False) -> List[PortfolioItem]:
        with session_scope(commit=False) as session:
            return portfolio_items.list_for_user(session, user_id, visible_only=visible_only)

    def create_portfolio_item(self, user_id: str, data: PortfolioItemFormData) -> PortfolioItem:
        with session_scope() as session:
            return portfolio_items.create(session, user_id, data)

    def update_portfolio_item(self, user_id: str, item_id: str, data: PortfolioItemFormData) -> PortfolioItem:
        with session_scope() as session:
            return portfolio_items.update(session, user_id, item_id, data)

    def delete_portfolio_item(self, user_id: str, item_id: str) -> None:
        with session_scope() as session:
            portfolio_items.delete(session, user_id, item_id)

    # ------------------------------------------------------------------
    # Recognitions
    # ------------------------------------------------------------------

    def list_recognitions(self, user_id: str, visible_only: bool = False) -> List[Recognition]:
        with session_scope(commit=False) as session:
            users.require(session, user_id)
            return recognitions.list_for_user(session, user_id, visible_only=visible_only)

    def create_recognition(self, user_id: str, data: RecognitionFormData) -> Recognition:
        with session_scope() as session:
            return recognitions.create(session, user_id, data)

    def update_recognition(self, user_id: str, recognition_id: str, data: RecognitionFormData) -> Recognition:
        with session_scope() as session:
            return recognitions.update(session, user_id, recognition_id, data)

    def delete_recognition(self, user_id: str, recognition_id: str) -> None:
        with session_scope() as session:
            recognitions.delete(session, user_id, recognition_id)

    def save_recognitions(self, user_id: str, items: Sequence[RecognitionFormData]) -> List[Recognition]:
        with session_scope() as session:
            return recognitions.replace_all(session, user_id, items)

    # ------------------------------------------------------------------
    # Goals
    # ------------------------------------------------------------------

    def list_goals(self, user_id: str, today: Optional[date] = None) -> List[Goal]:
        # Writes: overdue goals are persisted.
        with session_scope() as session:
            return goals.list_for_user(session, user_id, today=today)

    def create_goal(self, user_id: str, data: GoalFormData) -> Goal:
        with session_scope() as session:
            return goals.create(session, user_id, data)

    def update_goal(self, user_id: str, goal_id: str, data: GoalFormData) -> Goal:
        with session_scope() as session:
            return goals.update(session, user_id, goal_id, data)

    def delete_goal(self, user_id: str, goal_id: str) -> None:
        with session_scope() as session:
            goals.delete(session, user_id, goal_id)

    # ------------------------------------------------------------------
    # Listings
    # ------------------------------------------------------------------

    def list_listings(self, user_id: str) -> ListingsOverview:
        with session_scope(commit=False) as session:
            return listings.overview(session, user_id)

    def create_listing(self, user_id: str, data: ListingFormData) -> Listing:
        with session_scope() as session:
            return listings.create(session, user_id, data)

    def update_listing(self, user_id: str, listing_id: str, data: ListingFormData) -> Listing:
        with session_scope() as session:
            return listings.update(session, user_id, listing_id, data)

    def delete_listing(self, user_id: str, listing_id: str) -> None:
        with session_scope() as session:
            listings.delete(session, user_id, listing_id)

    # ------------------------------------------------------------------
    # Marketing
    # ------------------------------------------------------------------

    def fetch_marketing_info(self, user_id: str) -> Optional[MarketingInfo]:
        with session_scope(commit=False) as session:
            return marketing_profiles.get(session, user_id)

    def update_marketing_info(self, user_id: str, data: MarketingInfoFormData) -> MarketingInfo:
        with session_scope() as session:
            return marketing_profiles.upsert(session, user_id, data)

    # ------------------------------------------------------------------
    # Public view
    # ------------------------------------------------------------------

    def fetch_public_coach_profile(self, user_id: str) -> PublicCoachProfile:
        with session_scope(commit=False) as session:
            user = users.require(session, user_id)
            coach = coach_profiles.get(session, user_id)
            if coach is None or coach.profile_status != ProfileStatus.PUBLISHED:
                raise ProfileNotFoundError(
                    f"No published coach profile for user '{user_id}'.",
                    code="ITEM_NOT_FOUND",
                    details={"user_id": user_id},
                )
            return PublicCoachProfile(
                user_id=user.id,
                display_name=user.display_name,
                first_name=user.first_name,
                last_name=user.last_name,
                bio=user.bio,
                profile_image_url=user.profile_image_url,
                primary_market=user.primary_market,
                languages=list(user.languages),
                coach_profile=coach,
                portfolio_items=portfolio_items.list_for_user(session, user_id, visible_only=True),
                recognitions=recognitions.list_for_user(
                    session,
                    user_id,
                    visible_only=True,
                    status=RecognitionStatus.ACTIVE,
                ),
                marketing=marketing_profiles.get(session, user_id),
            )


profile_store = ProfileStore()

__all__ = ["ProfileStore", "profile_store"]
