"""Portfolio item endpoints."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Query, Response, status

from .profile_models import PortfolioItem
from .profile_schemas import PortfolioItemFormData
from .profile_store import profile_store
from .route_errors import profile_errors


router = APIRouter(prefix="/api/portfolio", tags=["portfolio"])


@router.get("/{user_id}", response_model=List[PortfolioItem], status_code=status.HTTP_200_OK)
def list_portfolio_items(user_id: str, visible_only: bool = Query(default=False)) -> List[PortfolioItem]:
    with profile_errors("load portfolio items"):
        return profile_store.list_portfolio_items(user_id, visible_only=visible_only)


@router.post("/{user_id}", response_model=PortfolioItem, status_code=status.HTTP_201_CREATED)
def create_portfolio_item(user_id: str, payload: PortfolioItemFormData) -> PortfolioItem:
    with profile_errors("create the portfolio item"):
        return profile_store.create_portfolio_item(user_id, payload)


@router.put("/{user_id}/{item_id}", response_model=PortfolioItem, status_code=status.HTTP_200_OK)
def update_portfolio_item(user_id: str, item_id: str, payload: PortfolioItemFormData) -> PortfolioItem:
    with profile_errors("update the portfolio item"):
        return profile_store.update_portfolio_item(user_id, item_id, payload)


@router.delete("/{user_id}/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_portfolio_item(user_id: str, item_id: str) -> Response:
    with profile_errors("delete the portfolio item"):
        profile_store.delete_portfolio_item(user_id, item_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


__all__ = ["router"]
