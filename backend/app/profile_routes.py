"""User, coach profile and capability endpoints."""

from __future__ import annotations

import logging
from time import perf_counter
from typing import List

from fastapi import APIRouter, Query, Response, status
from pydantic import BaseModel

from .profile_models import (
    AuditEvent,
    CapabilitiesSnapshot,
    CoachProfile,
    CoachProfileView,
    ProfileCompletion,
    ProfileStatusUpdate,
    SpecialtiesResult,
    UserProfile,
)
from .profile_schemas import (
    CoachProfileFormData,
    DomainsUpdate,
    GeneralFormData,
    LanguagesUpdate,
    ProfileStatusRequest,
    SpecialtiesUpdate,
    UserRegistration,
)
from .profile_store import profile_store
from .profile_types import ProfileStatus
from .repositories.users import UNSET
from .route_errors import profile_errors
from .telemetry import emit_event


router = APIRouter(prefix="/api/profile", tags=["profile"])
logger = logging.getLogger(__name__)


class CoachProfileUpdateResult(BaseModel):
    coach_profile: CoachProfile
    completion: ProfileCompletion
    previous_status: ProfileStatus


def _elapsed_ms(started_at: float) -> float:
    return round((perf_counter() - started_at) * 1000.0, 2)


@router.post("", response_model=UserProfile, status_code=status.HTTP_201_CREATED)
def create_user(payload: UserRegistration) -> UserProfile:
    with profile_errors("create the user"):
        profile = profile_store.create_user(payload)
    logger.info("Registered user %s with capabilities %s", profile.id, [c.value for c in profile.capabilities])
    return profile


@router.get("/{user_id}", response_model=UserProfile, status_code=status.HTTP_200_OK)
def get_user_profile(user_id: str) -> UserProfile:
    with profile_errors("load the profile"):
        return profile_store.fetch_user_profile(user_id)


@router.put("/{user_id}/general", response_model=UserProfile, status_code=status.HTTP_200_OK)
def update_general_profile(user_id: str, payload: GeneralFormData) -> UserProfile:
    with profile_errors("update the general profile"):
        return profile_store.update_general_profile(user_id, payload)


@router.put("/{user_id}/languages", response_model=UserProfile, status_code=status.HTTP_200_OK)
def update_languages(user_id: str, payload: LanguagesUpdate) -> UserProfile:
    with profile_errors("update languages"):
        return profile_store.update_user_languages(user_id, payload.languages)


@router.put("/{user_id}/domains", response_model=UserProfile, status_code=status.HTTP_200_OK)
def update_domains(user_id: str, payload: DomainsUpdate) -> UserProfile:
    primary = payload.primary_domain if "primary_domain" in payload.model_fields_set else UNSET
    with profile_errors("update real estate domains"):
        return profile_store.update_user_domains(user_id, payload.real_estate_domains, primary)


@router.get("/{user_id}/capabilities", response_model=CapabilitiesSnapshot, status_code=status.HTTP_200_OK)
def get_capabilities(user_id: str) -> CapabilitiesSnapshot:
    with profile_errors("load capabilities"):
        return profile_store.fetch_user_capabilities(user_id)


@router.get("/{user_id}/coach", response_model=CoachProfileView, status_code=status.HTTP_200_OK)
def get_coach_profile(user_id: str) -> CoachProfileView:
    with profile_errors("load the coach profile"):
        return profile_store.fetch_coach_profile(user_id)


@router.post("/{user_id}/coach", response_model=CoachProfile, status_code=status.HTTP_201_CREATED)
def create_coach_profile(user_id: str, response: Response) -> CoachProfile:
    with profile_errors("create the coach profile"):
        profile, created = profile_store.create_coach_profile_if_needed(user_id)
    if created:
        emit_event("coach_profile_created", user_id=user_id, coach_profile_id=profile.id)
    else:
        response.status_code = status.HTTP_200_OK
    return profile


@router.put("/{user_id}/coach", response_model=CoachProfileUpdateResult, status_code=status.HTTP_200_OK)
def update_coach_profile(user_id: str, payload: CoachProfileFormData) -> CoachProfileUpdateResult:
    started_at = perf_counter()
    with profile_errors("update the coach profile"):
        profile, completion, previous_status = profile_store.update_coach_profile(user_id, payload)
    emit_event(
        "coach_profile_updated",
        user_id=user_id,
        completion_percentage=completion.percentage,
        previous_status=previous_status,
        profile_status=profile.profile_status,
        missing_required=len(completion.missing_required_fields),
        duration_ms=_elapsed_ms(started_at),
    )
    return CoachProfileUpdateResult(coach_profile=profile, completion=completion, previous_status=previous_status)


@router.put("/{user_id}/status", response_model=ProfileStatusUpdate, status_code=status.HTTP_200_OK)
def update_profile_status(user_id: str, payload: ProfileStatusRequest) -> ProfileStatusUpdate:
    with profile_errors("change the profile status"):
        result = profile_store.update_profile_status(user_id, payload.status, payload.actor_user_id)
    emit_event(
        "profile_status_changed",
        user_id=user_id,
        actor_user_id=payload.actor_user_id or user_id,
        previous_status=result.previous_status,
        profile_status=result.profile_status,
        completion_percentage=result.completion.percentage,
    )
    return result


@router.put("/{user_id}/specialties", response_model=SpecialtiesResult, status_code=status.HTTP_200_OK)
def save_specialties(user_id: str, payload: SpecialtiesUpdate) -> SpecialtiesResult:
    with profile_errors("save specialties"):
        result = profile_store.save_specialties(user_id, payload.specialties)
    emit_event("specialties_saved", user_id=user_id, active_domains=result.active_domains)
    return result


@router.get("/{user_id}/completion", response_model=ProfileCompletion, status_code=status.HTTP_200_OK)
def get_profile_completion(user_id: str) -> ProfileCompletion:
    with profile_errors("calculate profile completion"):
        return profile_store.fetch_profile_completion(user_id)


@router.get("/{user_id}/events", response_model=List[AuditEvent], status_code=status.HTTP_200_OK)
def get_recent_events(user_id: str, limit: int = Query(default=20, ge=1, le=200)) -> List[AuditEvent]:
    with profile_errors("load profile events"):
        profile_store.fetch_user_profile(user_id)
        return profile_store.recent_events(user_id, limit=limit)


__all__ = ["router"]
