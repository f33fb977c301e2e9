"""Marketing info endpoints."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, status

from .profile_models import MarketingInfo
from .profile_schemas import MarketingInfoFormData
from .profile_store import profile_store
from .route_errors import profile_errors


router = APIRouter(prefix="/api/marketing", tags=["marketing"])


@router.get("/{user_id}", response_model=Optional[MarketingInfo], status_code=status.HTTP_200_OK)
def get_marketing_info(user_id: str) -> Optional[MarketingInfo]:
    with profile_errors("load marketing info"):
        return profile_store.fetch_marketing_info(user_id)


@router.put("/{user_id}", response_model=MarketingInfo, status_code=status.HTTP_200_OK)
def update_marketing_info(user_id: str, payload: MarketingInfoFormData) -> MarketingInfo:
    with profile_errors("update marketing info"):
        return profile_store.update_marketing_info(user_id, payload)


__all__ = ["router"]
