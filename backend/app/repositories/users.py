"""Database-backed user repository: general profile, languages, domains and capabilities."""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from ..db.models import AuditEventModel, CoachProfileModel, UserModel
from ..profile_errors import ProfileValidationError
from ..profile_models import AuditEvent, CapabilitiesSnapshot, UserProfile
from ..profile_schemas import GeneralFormData, UserRegistration
from ..profile_types import RealEstateDomain, UserCapability, parse_domains
from .base import RepositoryBase

logger = logging.getLogger(__name__)

UNSET = object()


def _known_domains(values: Iterable[str]) -> List[RealEstateDomain]:
    domains: List[RealEstateDomain] = []
    for value in values or []:
        try:
            domain = RealEstateDomain(value)
        except ValueError:
            logger.warning("Ignoring unknown real estate domain %r", value)
            continue
        if domain not in domains:
            domains.append(domain)
    return domains


def resolve_primary_domain(domains: List[RealEstateDomain], requested: Any = UNSET) -> Optional[RealEstateDomain]:
    """Pick the primary domain: none without domains, the requested one when listed, else the first."""
    if not domains:
        return None
    if requested is not UNSET and requested in domains:
        return requested
    return domains[0]


class UserRepository(RepositoryBase):
    def create(self, session: Session, payload: UserRegistration) -> UserProfile:
        existing = session.execute(
            select(UserModel).where(func.lower(UserModel.email) == payload.email)
        ).scalar_one_or_none()
        if existing is not None:
            raise ProfileValidationError(
                f"A user with email '{payload.email}' already exists.",
                code="INVALID_INPUT",
                details={"email": payload.email},
            )
        capabilities = list(dict.fromkeys(capability.value for capability in payload.capabilities))
        model = UserModel(
            email=payload.email,
            external_id=payload.external_id,
            first_name=payload.first_name,
            last_name=payload.last_name,
            capabilities=capabilities,
            is_coach=UserCapability.COACH.value in capabilities,
            is_mentee=UserCapability.MENTEE.value in capabilities,
            system_role=payload.system_role.value,
            languages=[],
            real_estate_domains=[],
        )
        session.add(model)
        session.flush()
        self._record_audit(session, model.id, "user_created", {"email": model.email, "capabilities": capabilities})
        return self._to_domain(model)

    def get(self, session: Session, user_id: str) -> UserProfile | None:
        model = session.get(UserModel, user_id)
        if model is None:
            return None
        return self._to_domain(model)

    def require(self, session: Session, user_id: str) -> UserProfile:
        return self._to_domain(self._require_user(session, user_id))

    def update_general(self, session: Session, user_id: str, data: GeneralFormData) -> UserProfile:
        model = self._require_user(session, user_id)
        model.display_name = data.display_name
        model.bio = data.bio
        model.primary_market = data.primary_market
        model.total_years_re = data.total_years_re
        session.flush()
        self._record_audit(session, model.id, "general_profile_updated", {"fields": sorted(data.model_fields_set)})
        return self._to_domain(model)

    def update_languages(self, session: Session, user_id: str, languages: List[str]) -> UserProfile:
        model = self._require_user(session, user_id)
        if list(model.languages or []) != languages:
            model.languages = list(languages)
            session.flush()
            self._record_audit(session, model.id, "languages_updated", {"languages": languages})
        return self._to_domain(model)

    def update_profile_image(self, session: Session, user_id: str, url: Optional[str]) -> None:
        model = self._require_user(session, user_id)
        if model.profile_image_url != url:
            model.profile_image_url = url
            session.flush()
            self._record_audit(session, model.id, "profile_image_updated", {"profile_image_url": url})

    def update_domains(
        self,
        session: Session,
        user_id: str,
        domains: Iterable[Any],
        primary_domain: Any = UNSET,
    ) -> UserProfile:
        try:
            parsed = parse_domains(domains)
        except ValueError as exc:
            raise ProfileValidationError(str(exc), code="INVALID_INPUT") from exc
        model = self._require_user(session, user_id)
        primary = resolve_primary_domain(parsed, primary_domain)
        values = [domain.value for domain in parsed]
        model.real_estate_domains = values
        model.primary_domain = primary.value if primary else None

        if model.is_coach:
            coach = session.execute(
                select(CoachProfileModel).where(CoachProfileModel.user_id == model.id)
            ).scalar_one_or_none()
            if coach is not None:
                coach.coach_real_estate_domains = list(values)
                coach.coach_primary_domain = model.primary_domain
        session.flush()
        self._record_audit(
            session,
            model.id,
            "domains_updated",
            {"domains": values, "primary_domain": model.primary_domain},
        )
        return self._to_domain(model)

    def capabilities(self, session: Session, user_id: str) -> CapabilitiesSnapshot:
        model = self._require_user(session, user_id)
        coach = session.execute(
            select(CoachProfileModel).where(CoachProfileModel.user_id == model.id)
        ).scalar_one_or_none()
        capabilities: List[UserCapability] = []
        for value in model.capabilities or []:
            if value in UserCapability._value2member_map_:
                capabilities.append(UserCapability(value))
        domains = _known_domains(model.real_estate_domains or [])
        primary = _known_domains([model.primary_domain] if model.primary_domain else [])
        active = _known_domains(coach.coach_real_estate_domains or []) if coach is not None else []
        return CapabilitiesSnapshot(
            capabilities=capabilities,
            real_estate_domains=domains,
            primary_domain=primary[0] if primary else None,
            active_domains=active,
        )

    def delete(self, session: Session, user_id: str) -> bool:
        model = session.get(UserModel, user_id)
        if model is None:
            return False
        email = model.email
        session.delete(model)
        session.flush()
        self._record_audit(session, None, "user_deleted", {"user_id": user_id, "email": email})
        return True

    def record_event(self, session: Session, user_id: str, event_type: str, payload: Dict[str, Any]) -> None:
        model = self._require_user(session, user_id)
        self._record_audit(session, model.id, event_type, dict(payload), actor="telemetry")

    def recent_events(self, session: Session, user_id: str, *, limit: int = 20) -> List[AuditEvent]:
        stmt = (
            select(AuditEventModel)
            .where(AuditEventModel.user_id == user_id)
            .order_by(AuditEventModel.created_at.desc())
            .limit(limit)
        )
        return [
            AuditEvent(
                event_type=row.event_type,
                payload=dict(row.payload or {}),
                actor=row.actor,
                created_at=row.created_at,
            )
            for row in session.execute(stmt).scalars()
        ]

    def _to_domain(self, model: UserModel) -> UserProfile:
        capabilities = [
            UserCapability(value) for value in model.capabilities or [] if value in UserCapability._value2member_map_
        ]
        primary = _known_domains([model.primary_domain] if model.primary_domain else [])
        return UserProfile(
            id=model.id,
            external_id=model.external_id,
            email=model.email,
            first_name=model.first_name,
            last_name=model.last_name,
            display_name=model.display_name,
            bio=model.bio,
            profile_image_url=model.profile_image_url,
            primary_market=model.primary_market,
            total_years_re=model.total_years_re or 0,
            capabilities=capabilities,
            is_coach=bool(model.is_coach),
            is_mentee=bool(model.is_mentee),
            languages=list(model.languages or []),
            real_estate_domains=_known_domains(model.real_estate_domains or []),
            primary_domain=primary[0] if primary else None,
            system_role=model.system_role,
            status=model.status,
        )


users = UserRepository()

__all__ = ["UNSET", "UserRepository", "resolve_primary_domain", "users"]
