"""Goal tracking endpoints."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Response, status

from .profile_models import Goal
from .profile_schemas import GoalFormData
from .profile_store import profile_store
from .route_errors import profile_errors


router = APIRouter(prefix="/api/goals", tags=["goals"])


@router.get("/{user_id}", response_model=List[Goal], status_code=status.HTTP_200_OK)
def list_goals(user_id: str) -> List[Goal]:
    with profile_errors("load goals"):
        return profile_store.list_goals(user_id)


@router.post("/{user_id}", response_model=Goal, status_code=status.HTTP_201_CREATED)
def create_goal(user_id: str, payload: GoalFormData) -> Goal:
    with profile_errors("create the goal"):
        return profile_store.create_goal(user_id, payload)


@router.put("/{user_id}/{goal_id}", response_model=Goal, status_code=status.HTTP_200_OK)
def update_goal(user_id: str, goal_id: str, payload: GoalFormData) -> Goal:
    with profile_errors("update the goal"):
        return profile_store.update_goal(user_id, goal_id, payload)


@router.delete("/{user_id}/{goal_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_goal(user_id: str, goal_id: str) -> Response:
    with profile_errors("delete the goal"):
        profile_store.delete_goal(user_id, goal_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


__all__ = ["router"]
