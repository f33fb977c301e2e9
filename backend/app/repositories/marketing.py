"""Database-backed marketing profile repository."""

from __future__ import annotations

from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..db.models import MarketingProfileModel
from ..profile_models import MarketingInfo
from ..profile_schemas import MarketingInfoFormData
from .base import RepositoryBase


class MarketingRepository(RepositoryBase):
    def get(self, session: Session, user_id: str) -> Optional[MarketingInfo]:
        self._require_user(session, user_id)
        model = self._get_model(session, user_id)
        return self._to_domain(model) if model is not None else None

    def upsert(self, session: Session, user_id: str, data: MarketingInfoFormData) -> MarketingInfo:
        user = self._require_user(session, user_id)
        model = self._get_model(session, user.id)
        created = model is None
        if model is None:
            model = MarketingProfileModel(user_id=user.id)
            session.add(model)
        payload = data.model_dump(mode="json")
        model.slogan = payload["slogan"]
        model.website_url = payload["website_url"]
        model.blog_url = payload["blog_url"]
        model.social_media_links = payload["social_media_links"]
        model.marketing_areas = payload["marketing_areas"]
        model.target_audience = payload["target_audience"]
        model.testimonials = payload["testimonials"]
        session.flush()
        self._record_audit(
            session,
            user.id,
            "marketing_info_created" if created else "marketing_info_updated",
            {"testimonials": len(model.testimonials or [])},
        )
        return self._to_domain(model)

    @staticmethod
    def _get_model(session: Session, user_id: str) -> Optional[MarketingProfileModel]:
        stmt = select(MarketingProfileModel).where(MarketingProfileModel.user_id == user_id)
        return session.execute(stmt).scalar_one_or_none()

    @staticmethod
    def _to_domain(model: MarketingProfileModel) -> MarketingInfo:
        return MarketingInfo(
            user_id=model.user_id,
            organization_id=model.organization_id,
            slogan=model.slogan,
            website_url=model.website_url,
            blog_url=model.blog_url,
            social_media_links=dict(model.social_media_links or {}),
            marketing_areas=list(model.marketing_areas or []),
            target_audience=list(model.target_audience or []),
            testimonials=list(model.testimonials or []),
        )


marketing_profiles = MarketingRepository()

__all__ = ["MarketingRepository", "marketing_profiles"]
