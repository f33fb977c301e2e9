"""Per-industry profile documents (realtor, mortgage, insurance, ...)."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.orm import Session

from ..db.models import DomainProfileModel
from ..profile_errors import ProfileValidationError
from ..profile_models import DomainProfile
from ..profile_schemas import validate_domain_profile
from ..profile_types import RealEstateDomain
from .base import RepositoryBase


class DomainProfileRepository(RepositoryBase):
    def get(self, session: Session, user_id: str, domain: RealEstateDomain) -> Optional[DomainProfile]:
        self._require_user(session, user_id)
        model = self._get_model(session, user_id, domain)
        return self._to_domain(model) if model is not None else None

    def list_for_user(self, session: Session, user_id: str) -> List[DomainProfile]:
        self._require_user(session, user_id)
        stmt = select(DomainProfileModel).where(DomainProfileModel.user_id == user_id)
        return [self._to_domain(model) for model in session.execute(stmt).scalars()]

    def upsert(
        self,
        session: Session,
        user_id: str,
        domain: RealEstateDomain,
        payload: Dict[str, Any],
    ) -> DomainProfile:
        user = self._require_user(session, user_id)
        if domain.value not in (user.real_estate_domains or []):
            raise ProfileValidationError(
                f"{domain.value} is not one of the user's real estate domains.",
                code="INVALID_INPUT",
                details={"domain": domain.value, "domains": list(user.real_estate_domains or [])},
            )
        try:
            data = validate_domain_profile(domain, payload).model_dump(mode="json")
        except ValidationError as exc:
            raise ProfileValidationError(
                f"Invalid {domain.value} profile.",
                details=exc.errors(include_url=False, include_context=False, include_input=False),
            ) from exc
        model = self._get_model(session, user.id, domain)
        if model is None:
            model = DomainProfileModel(user_id=user.id, domain=domain.value, data=data)
            session.add(model)
        else:
            model.data = data
        session.flush()
        self._record_audit(session, user.id, "domain_profile_saved", {"domain": domain.value})
        return self._to_domain(model)

    @staticmethod
    def _get_model(session: Session, user_id: str, domain: RealEstateDomain) -> Optional[DomainProfileModel]:
        stmt = select(DomainProfileModel).where(
            DomainProfileModel.user_id == user_id,
            DomainProfileModel.domain == domain.value,
        )
        return session.execute(stmt).scalar_one_or_none()

    @staticmethod
    def _to_domain(model: DomainProfileModel) -> DomainProfile:
        return DomainProfile(
            user_id=model.user_id,
            domain=model.domain,
            data=dict(model.data or {}),
            updated_at=model.updated_at,
        )


domain_profiles = DomainProfileRepository()

__all__ = ["DomainProfileRepository", "domain_profiles"]
