"""Developer utilities for manual resets of test users."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Response, status
from pydantic import BaseModel, Field

from .profile_store import profile_store
from .route_errors import profile_errors
from .telemetry import emit_event


router = APIRouter(prefix="/api/developer", tags=["developer"])


class DeveloperResetRequest(BaseModel):
    user_id: str = Field(..., min_length=1)


@router.post("/reset", status_code=status.HTTP_204_NO_CONTENT)
def developer_reset(payload: DeveloperResetRequest) -> Response:
    user_id = payload.user_id.strip()
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="User id cannot be empty.",
        )
    with profile_errors("reset the user"):
        deleted = profile_store.delete_user(user_id)
    emit_event("developer_reset", user_id=user_id, deleted=deleted)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/reset-specialties", status_code=status.HTTP_204_NO_CONTENT)
def developer_reset_specialties(payload: DeveloperResetRequest) -> Response:
    user_id = payload.user_id.strip()
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="User id cannot be empty.",
        )
    with profile_errors("reset specialties"):
        reset = profile_store.reset_specialties(user_id)
    if not reset:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={
                "code": "ITEM_NOT_FOUND",
                "message": f"Coach profile for user '{user_id}' was not found.",
                "details": {"user_id": user_id},
            },
        )
    emit_event("developer_specialties_reset", user_id=user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


__all__ = ["router"]
