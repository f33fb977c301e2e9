"""Professional recognition endpoints."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Query, Response, status

from .profile_models import Recognition
from .profile_schemas import RecognitionFormData
from .profile_store import profile_store
from .route_errors import profile_errors


router = APIRouter(prefix="/api/recognitions", tags=["recognitions"])


@router.get("/{user_id}", response_model=List[Recognition], status_code=status.HTTP_200_OK)
def list_recognitions(user_id: str, visible_only: bool = Query(default=False)) -> List[Recognition]:
    with profile_errors("load recognitions"):
        return profile_store.list_recognitions(user_id, visible_only=visible_only)


@router.put("/{user_id}", response_model=List[Recognition], status_code=status.HTTP_200_OK)
def save_recognitions(user_id: str, payload: List[RecognitionFormData]) -> List[Recognition]:
    """Replace every recognition of the user with the submitted list."""
    with profile_errors("save recognitions"):
        return profile_store.save_recognitions(user_id, payload)


@router.post("/{user_id}", response_model=Recognition, status_code=status.HTTP_201_CREATED)
def create_recognition(user_id: str, payload: RecognitionFormData) -> Recognition:
    with profile_errors("create the recognition"):
        return profile_store.create_recognition(user_id, payload)


@router.put("/{user_id}/{recognition_id}", response_model=Recognition, status_code=status.HTTP_200_OK)
def update_recognition(user_id: str, recognition_id: str, payload: RecognitionFormData) -> Recognition:
    with profile_errors("update the recognition"):
        return profile_store.update_recognition(user_id, recognition_id, payload)


@router.delete("/{user_id}/{recognition_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_recognition(user_id: str, recognition_id: str) -> Response:
    with profile_errors("delete the recognition"):
        profile_store.delete_recognition(user_id, recognition_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


__all__ = ["router"]
