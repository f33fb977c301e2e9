"""Read-only view of published coach profiles."""

from __future__ import annotations

from fastapi import APIRouter, status

from .profile_models import PublicCoachProfile
from .profile_store import profile_store
from .route_errors import profile_errors


router = APIRouter(prefix="/api/public/coaches", tags=["public"])


@router.get("/{user_id}", response_model=PublicCoachProfile, status_code=status.HTTP_200_OK)
def get_public_coach_profile(user_id: str) -> PublicCoachProfile:
    with profile_errors("load the coach profile"):
        return profile_store.fetch_public_coach_profile(user_id)


__all__ = ["router"]
