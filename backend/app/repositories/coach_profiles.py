"""Database-backed coach profile repository."""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..db.models import CoachProfileModel, ProfessionalRecognitionModel, UserModel
from ..profile_completion import (
    calculate_profile_completion,
    can_transition_to,
    check_publication_requirements,
    resolve_status_after_update,
)
from ..profile_errors import ProfileAuthorizationError, ProfileNotFoundError, ProfileValidationError
from ..profile_models import CoachProfile, CoachProfileView, ProfileCompletion, ProfileStatusUpdate
from ..profile_schemas import CoachProfileFormData
from ..profile_types import (
    DEFAULT_SESSION_DURATION,
    MAXIMUM_SESSION_DURATION,
    MINIMUM_SESSION_DURATION,
    PUBLICATION_THRESHOLD,
    ProfileStatus,
    RealEstateDomain,
    RecognitionStatus,
    SystemRole,
    UserCapability,
    parse_domains,
)
from .base import RepositoryBase
from .recognitions import recognitions
from .users import resolve_primary_domain, users

logger = logging.getLogger(__name__)


class CoachProfileRepository(RepositoryBase):
    def get(self, session: Session, user_id: str) -> CoachProfile | None:
        model = self._get_model(session, user_id)
        return self._to_domain(model) if model is not None else None

    def view(self, session: Session, user_id: str) -> CoachProfileView:
        """Coach profile with visible active recognitions and live completion."""
        user = self._require_user(session, user_id)
        model = self._get_model(session, user.id)
        coach = self._to_domain(model) if model is not None else CoachProfile(user_id=user.id)
        visible = recognitions.list_for_user(
            session,
            user.id,
            visible_only=True,
            status=RecognitionStatus.ACTIVE,
        )
        completion = calculate_profile_completion(user, model)
        return CoachProfileView(
            coach_profile=coach,
            languages=list(user.languages or []),
            profile_image_url=user.profile_image_url,
            recognitions=visible,
            completion=completion,
        )

    def create_if_needed(self, session: Session, user_id: str) -> Tuple[CoachProfile, bool]:
        user = self._require_user(session, user_id)
        if not user.is_coach or UserCapability.COACH.value not in (user.capabilities or []):
            raise ProfileAuthorizationError(
                "Only users with the coach capability can have a coach profile.",
                details={"user_id": user.id},
            )
        existing = self._get_model(session, user.id)
        if existing is not None:
            return self._to_domain(existing), False
        model = CoachProfileModel(
            user_id=user.id,
            coach_skills=[],
            coach_real_estate_domains=[],
            default_duration=DEFAULT_SESSION_DURATION,
            minimum_duration=MINIMUM_SESSION_DURATION,
            maximum_duration=MAXIMUM_SESSION_DURATION,
            years_coaching=0,
            hourly_rate=0,
            allow_custom_duration=False,
            profile_status=ProfileStatus.DRAFT.value,
            completion_percentage=0,
            is_active=True,
            total_sessions=0,
        )
        session.add(model)
        session.flush()
        link_recognitions(session, model)
        self._record_audit(session, user.id, "coach_profile_created", {"coach_profile_id": model.id})
        return self._to_domain(model), True

    def update(
        self,
        session: Session,
        user_id: str,
        data: CoachProfileFormData,
    ) -> Tuple[CoachProfile, ProfileCompletion, ProfileStatus]:
        user = self._require_user(session, user_id)
        model = self._require_model(session, user.id)
        previous_status = ProfileStatus(model.profile_status)

        model.years_coaching = data.years_coaching
        model.hourly_rate = data.hourly_rate
        model.coach_skills = list(data.coach_skills)
        model.default_duration = data.default_duration
        model.minimum_duration = data.minimum_duration
        model.maximum_duration = data.maximum_duration
        model.allow_custom_duration = data.allow_custom_duration
        model.calendly_url = data.calendly_url
        model.event_type_url = data.event_type_url
        # A missing image keeps the stored one.
        if data.profile_image_url is not None:
            users.update_profile_image(session, user.id, data.profile_image_url)

        completion = calculate_profile_completion(user, model)
        model.profile_status = resolve_status_after_update(previous_status, completion).value
        model.completion_percentage = completion.percentage
        self._sync_user_domains(user, model)
        session.flush()
        self._record_audit(
            session,
            user.id,
            "coach_profile_updated",
            {
                "completion_percentage": completion.percentage,
                "profile_status": model.profile_status,
                "previous_status": previous_status.value,
            },
        )
        return self._to_domain(model), completion, previous_status

    def change_status(
        self,
        session: Session,
        user_id: str,
        status: ProfileStatus,
        *,
        actor_user_id: Optional[str] = None,
        publication_threshold: int = PUBLICATION_THRESHOLD,
    ) -> ProfileStatusUpdate:
        user = self._require_user(session, user_id)
        actor = user if not actor_user_id or actor_user_id == user.id else self._require_user(session, actor_user_id)
        is_system_owner = actor.system_role == SystemRole.SYSTEM_OWNER.value
        if actor.id != user.id and not is_system_owner:
            raise ProfileAuthorizationError(
                "Only the profile owner or a system owner can change this profile's status.",
                details={"actor_user_id": actor.id},
            )
        model = self._require_model(session, user.id)
        current = ProfileStatus(model.profile_status)
        if not can_transition_to(current, status, is_system_owner):
            if is_system_owner:
                message = f"Profile status cannot change from {current.value} to {status.value}."
            else:
                message = (
                    f"You do not have permission to change the profile status from {current.value} to {status.value}."
                )
            raise ProfileAuthorizationError(
                message,
                details={"current_status": current.value, "requested_status": status.value},
            )

        completion = calculate_profile_completion(user, model)
        if status == ProfileStatus.PUBLISHED:
            domains = model.coach_real_estate_domains or user.real_estate_domains or []
            missing = check_publication_requirements(
                completion.percentage,
                domains,
                model.hourly_rate,
                threshold=publication_threshold,
            )
            if missing:
                raise ProfileValidationError(
                    "Profile does not meet the publication requirements.",
                    details={
                        "missing_requirements": missing,
                        "completion_percentage": completion.percentage,
                        "threshold": publication_threshold,
                    },
                )

        model.profile_status = status.value
        model.completion_percentage = completion.percentage
        session.flush()
        self._record_audit(
            session,
            user.id,
            "profile_status_changed",
            {"previous_status": current.value, "profile_status": status.value, "actor": actor.id},
            actor=actor.id,
        )
        return ProfileStatusUpdate(previous_status=current, profile_status=status, completion=completion)

    def save_skills(self, session: Session, user_id: str, specialties: List[RealEstateDomain]) -> CoachProfile:
        user = self._require_user(session, user_id)
        model = self._require_model(session, user.id)
        values = [domain.value for domain in specialties]
        model.coach_skills = list(values)
        model.coach_real_estate_domains = list(values)
        primary = resolve_primary_domain(list(specialties), self._primary(model))
        model.coach_primary_domain = primary.value if primary else None
        completion = calculate_profile_completion(user, model)
        model.completion_percentage = completion.percentage
        session.flush()
        self._record_audit(session, user.id, "coach_skills_saved", {"specialties": values})
        return self._to_domain(model)

    def reset_skills(self, session: Session, user_id: str) -> bool:
        model = self._get_model(session, user_id)
        if model is None:
            return False
        model.coach_skills = []
        model.coach_real_estate_domains = []
        model.coach_primary_domain = None
        session.flush()
        self._record_audit(session, model.user_id, "coach_skills_reset", {})
        return True

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _get_model(self, session: Session, user_id: str) -> Optional[CoachProfileModel]:
        stmt = select(CoachProfileModel).where(CoachProfileModel.user_id == user_id)
        return session.execute(stmt).scalar_one_or_none()

    def _require_model(self, session: Session, user_id: str) -> CoachProfileModel:
        model = self._get_model(session, user_id)
        if model is None:
            raise ProfileNotFoundError(
                f"Coach profile for user '{user_id}' was not found.",
                code="ITEM_NOT_FOUND",
                details={"user_id": user_id},
            )
        return model

    @staticmethod
    def _primary(model: CoachProfileModel) -> Optional[RealEstateDomain]:
        if model.coach_primary_domain in RealEstateDomain._value2member_map_:
            return RealEstateDomain(model.coach_primary_domain)
        return None

    def _sync_user_domains(self, user: UserModel, model: CoachProfileModel) -> None:
        """Mirror coach skills onto the user's domains; skills that are not domains leave them untouched."""
        try:
            domains = parse_domains(model.coach_skills)
        except ValueError as exc:
            logger.warning("Skipping domain sync for user %s: %s", user.id, exc)
            return
        values = [domain.value for domain in domains]
        user.real_estate_domains = values
        primary = resolve_primary_domain(domains, self._primary(model))
        user.primary_domain = primary.value if primary else None
        model.coach_real_estate_domains = list(values)
        model.coach_primary_domain = user.primary_domain

    def _to_domain(self, model: CoachProfileModel) -> CoachProfile:
        domains = [
            RealEstateDomain(value)
            for value in model.coach_real_estate_domains or []
            if value in RealEstateDomain._value2member_map_
        ]
        return CoachProfile(
            id=model.id,
            user_id=model.user_id,
            coach_skills=list(model.coach_skills or []),
            coach_real_estate_domains=domains,
            coach_primary_domain=self._primary(model),
            years_coaching=model.years_coaching,
            hourly_rate=model.hourly_rate,
            calendly_url=model.calendly_url,
            event_type_url=model.event_type_url,
            default_duration=model.default_duration or DEFAULT_SESSION_DURATION,
            minimum_duration=model.minimum_duration or MINIMUM_SESSION_DURATION,
            maximum_duration=model.maximum_duration or MAXIMUM_SESSION_DURATION,
            allow_custom_duration=bool(model.allow_custom_duration),
            profile_status=ProfileStatus(model.profile_status),
            completion_percentage=model.completion_percentage or 0,
            is_active=bool(model.is_active),
            total_sessions=model.total_sessions or 0,
            average_rating=model.average_rating,
        )


def link_recognitions(session: Session, coach: CoachProfileModel) -> None:
    """Attach unlinked recognitions of the coach's user to the coach profile."""
    stmt = select(ProfessionalRecognitionModel).where(
        ProfessionalRecognitionModel.user_id == coach.user_id,
        ProfessionalRecognitionModel.coach_profile_id.is_(None),
    )
    for recognition in session.execute(stmt).scalars():
        recognition.coach_profile_id = coach.id


coach_profiles = CoachProfileRepository()

__all__ = ["CoachProfileRepository", "coach_profiles", "link_recognitions"]
