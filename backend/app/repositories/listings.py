"""Database-backed listing repository."""

from __future__ import annotations

import uuid

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..db.models import ListingModel
from ..profile_errors import ProfileValidationError, item_not_found
from ..profile_models import Listing, ListingsOverview
from ..profile_schemas import ListingFormData
from ..profile_types import ListingStatus
from .base import RepositoryBase


class ListingRepository(RepositoryBase):
    def overview(self, session: Session, user_id: str) -> ListingsOverview:
        """Split a user's listings into active ones and closed (successful) transactions."""
        self._require_user(session, user_id)
        stmt = (
            select(ListingModel)
            .where(ListingModel.user_id == user_id)
            .order_by(ListingModel.is_featured.desc(), ListingModel.created_at.desc())
        )
        overview = ListingsOverview()
        for model in session.execute(stmt).scalars():
            listing = self._to_domain(model)
            if listing.status == ListingStatus.CLOSED:
                overview.successful_transactions.append(listing)
            else:
                overview.active_listings.append(listing)
        return overview

    def create(self, session: Session, user_id: str, data: ListingFormData) -> Listing:
        user = self._require_user(session, user_id)
        listing_key = (data.listing_key or "").strip() or uuid.uuid4().hex[:12].upper()
        self._ensure_unique_key(session, user.id, listing_key)
        model = ListingModel(user_id=user.id, listing_key=listing_key)
        self._apply(model, data)
        session.add(model)
        session.flush()
        self._record_audit(session, user.id, "listing_created", {"listing_id": model.id, "status": model.status})
        return self._to_domain(model)

    def update(self, session: Session, user_id: str, listing_id: str, data: ListingFormData) -> Listing:
        model = self._require_model(session, user_id, listing_id)
        new_key = (data.listing_key or "").strip()
        if new_key and new_key != model.listing_key:
            self._ensure_unique_key(session, model.user_id, new_key)
            model.listing_key = new_key
        self._apply(model, data)
        session.flush()
        self._record_audit(session, model.user_id, "listing_updated", {"listing_id": model.id, "status": model.status})
        return self._to_domain(model)

    def delete(self, session: Session, user_id: str, listing_id: str) -> None:
        model = self._require_model(session, user_id, listing_id)
        session.delete(model)
        session.flush()
        self._record_audit(session, user_id, "listing_deleted", {"listing_id": listing_id})

    def _ensure_unique_key(self, session: Session, user_id: str, listing_key: str) -> None:
        stmt = select(ListingModel.id).where(
            ListingModel.user_id == user_id,
            ListingModel.listing_key == listing_key,
        )
        if session.execute(stmt).first() is not None:
            raise ProfileValidationError(
                f"Listing key '{listing_key}' is already in use.",
                code="INVALID_INPUT",
                details={"listing_key": listing_key},
            )

    def _require_model(self, session: Session, user_id: str, listing_id: str) -> ListingModel:
        model = session.get(ListingModel, listing_id)
        if model is None or model.user_id != user_id:
            raise item_not_found("Listing", listing_id)
        return model

    @staticmethod
    def _apply(model: ListingModel, data: ListingFormData) -> None:
        model.street_number = data.street_number
        model.street_name = data.street_name
        model.city = data.city
        model.state_or_province = data.state_or_province
        model.postal_code = data.postal_code
        model.list_price = data.list_price
        model.status = data.status.value
        model.property_type = data.property_type.value
        model.bedrooms_total = data.bedrooms_total
        model.bathrooms_total = data.bathrooms_total
        model.living_area = data.living_area
        model.year_built = data.year_built
        model.public_remarks = data.public_remarks
        model.listing_contract_date = data.listing_contract_date
        model.close_date = data.close_date
        model.close_price = data.close_price
        model.is_featured = data.is_featured

    @staticmethod
    def _to_domain(model: ListingModel) -> Listing:
        return Listing(
            id=model.id,
            user_id=model.user_id,
            listing_key=model.listing_key,
            street_number=model.street_number,
            street_name=model.street_name,
            city=model.city,
            state_or_province=model.state_or_province,
            postal_code=model.postal_code,
            list_price=model.list_price,
            status=model.status,
            property_type=model.property_type,
            bedrooms_total=model.bedrooms_total,
            bathrooms_total=model.bathrooms_total,
            living_area=model.living_area,
            year_built=model.year_built,
            public_remarks=model.public_remarks,
            listing_contract_date=model.listing_contract_date,
            close_date=model.close_date,
            close_price=model.close_price,
            is_featured=bool(model.is_featured),
        )


listings = ListingRepository()

__all__ = ["ListingRepository", "listings"]
