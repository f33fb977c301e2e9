"""Per-industry profile endpoints (realtor, mortgage, insurance, ...)."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, status

from .profile_models import DomainProfile
from .profile_store import profile_store
from .profile_types import RealEstateDomain
from .route_errors import profile_errors


router = APIRouter(prefix="/api/domain-profiles", tags=["domain-profiles"])


@router.get("/{user_id}", response_model=List[DomainProfile], status_code=status.HTTP_200_OK)
def list_domain_profiles(user_id: str) -> List[DomainProfile]:
    with profile_errors("load domain profiles"):
        return profile_store.list_domain_profiles(user_id)


@router.get("/{user_id}/{domain}", response_model=Optional[DomainProfile], status_code=status.HTTP_200_OK)
def get_domain_profile(user_id: str, domain: RealEstateDomain) -> Optional[DomainProfile]:
    with profile_errors("load the domain profile"):
        return profile_store.fetch_domain_profile(user_id, domain)


@router.put("/{user_id}/{domain}", response_model=DomainProfile, status_code=status.HTTP_200_OK)
def update_domain_profile(
    user_id: str,
    domain: RealEstateDomain,
    payload: Dict[str, Any] = Body(...),
) -> DomainProfile:
    with profile_errors("update the domain profile"):
        return profile_store.update_domain_profile(user_id, domain, payload)


__all__ = ["router"]
