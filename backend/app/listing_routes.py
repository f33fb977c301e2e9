"""Property listing endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Response, status

from .profile_models import Listing, ListingsOverview
from .profile_schemas import ListingFormData
from .profile_store import profile_store
from .route_errors import profile_errors


router = APIRouter(prefix="/api/listings", tags=["listings"])


@router.get("/{user_id}", response_model=ListingsOverview, status_code=status.HTTP_200_OK)
def list_listings(user_id: str) -> ListingsOverview:
    with profile_errors("load listings"):
        return profile_store.list_listings(user_id)


@router.post("/{user_id}", response_model=Listing, status_code=status.HTTP_201_CREATED)
def create_listing(user_id: str, payload: ListingFormData) -> Listing:
    with profile_errors("create the listing"):
        return profile_store.create_listing(user_id, payload)


@router.put("/{user_id}/{listing_id}", response_model=Listing, status_code=status.HTTP_200_OK)
def update_listing(user_id: str, listing_id: str, payload: ListingFormData) -> Listing:
    with profile_errors("update the listing"):
        return profile_store.update_listing(user_id, listing_id, payload)


@router.delete("/{user_id}/{listing_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_listing(user_id: str, listing_id: str) -> Response:
    with profile_errors("delete the listing"):
        profile_store.delete_listing(user_id, listing_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


__all__ = ["router"]
