"""Database-backed portfolio repository."""

from __future__ import annotations

from typing import List

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..db.models import PortfolioItemModel
from ..profile_errors import item_not_found
from ..profile_models import PortfolioItem
from ..profile_schemas import PortfolioItemFormData
from .base import RepositoryBase


class PortfolioItemRepository(RepositoryBase):
    def list_for_user(self, session: Session, user_id: str, *, visible_only: bool = False) -> List[PortfolioItem]:
        self._require_user(session, user_id)
        stmt = select(PortfolioItemModel).where(PortfolioItemModel.user_id == user_id)
        if visible_only:
            stmt = stmt.where(PortfolioItemModel.is_visible.is_(True))
        stmt = stmt.order_by(
            PortfolioItemModel.featured.desc(),
            PortfolioItemModel.date.desc().nulls_last(),
            PortfolioItemModel.created_at.desc(),
        )
        return [self._to_domain(model) for model in session.execute(stmt).scalars()]

    def create(self, session: Session, user_id: str, data: PortfolioItemFormData) -> PortfolioItem:
        user = self._require_user(session, user_id)
        model = PortfolioItemModel(user_id=user.id)
        self._apply(model, data)
        session.add(model)
        session.flush()
        self._record_audit(session, user.id, "portfolio_item_created", {"item_id": model.id, "type": model.type})
        return self._to_domain(model)

    def update(self, session: Session, user_id: str, item_id: str, data: PortfolioItemFormData) -> PortfolioItem:
        model = self._require_model(session, user_id, item_id)
        self._apply(model, data)
        session.flush()
        self._record_audit(session, model.user_id, "portfolio_item_updated", {"item_id": model.id})
        return self._to_domain(model)

    def delete(self, session: Session, user_id: str, item_id: str) -> None:
        model = self._require_model(session, user_id, item_id)
        session.delete(model)
        session.flush()
        self._record_audit(session, user_id, "portfolio_item_deleted", {"item_id": item_id})

    def _require_model(self, session: Session, user_id: str, item_id: str) -> PortfolioItemModel:
        model = session.get(PortfolioItemModel, item_id)
        if model is None or model.user_id != user_id:
            raise item_not_found("Portfolio item", item_id)
        return model

    @staticmethod
    def _apply(model: PortfolioItemModel, data: PortfolioItemFormData) -> None:
        model.type = data.type.value
        model.title = data.title
        model.description = data.description
        model.date = data.date
        model.location = data.location.model_dump() if data.location else None
        model.financial_details = dict(data.financial_details)
        model.metrics = dict(data.metrics)
        model.image_urls = list(data.image_urls)
        model.tags = list(data.tags)
        model.featured = data.featured
        model.is_visible = data.is_visible

    @staticmethod
    def _to_domain(model: PortfolioItemModel) -> PortfolioItem:
        return PortfolioItem(
            id=model.id,
            user_id=model.user_id,
            type=model.type,
            title=model.title,
            description=model.description,
            date=model.date,
            location=model.location,
            financial_details=dict(model.financial_details or {}),
            metrics=dict(model.metrics or {}),
            image_urls=list(model.image_urls or []),
            tags=list(model.tags or []),
            featured=bool(model.featured),
            is_visible=bool(model.is_visible),
        )


portfolio_items = PortfolioItemRepository()

__all__ = ["PortfolioItemRepository", "portfolio_items"]
