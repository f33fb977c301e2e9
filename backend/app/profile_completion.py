"""Profile completion scoring and profile status rules."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence

from .profile_models import ProfileCompletion
from .profile_types import (
    BIO_MIN_LENGTH,
    MINIMUM_DOMAINS,
    PUBLICATION_THRESHOLD,
    ProfileStatus,
)

REQUIRED_WEIGHT_SHARE = 0.8
OPTIONAL_WEIGHT_SHARE = 0.2


@dataclass(frozen=True)
class CompletionField:
    key: str
    display_name: str
    weight: int
    required: bool
    is_complete: Callable[[Any, Any], bool]


def _text(source: Any, attribute: str) -> str:
    value = getattr(source, attribute, None) if source is not None else None
    return value.strip() if isinstance(value, str) else ""


def _number(source: Any, attribute: str) -> Optional[float]:
    value = getattr(source, attribute, None) if source is not None else None
    if isinstance(value, bool) or value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


COMPLETION_FIELDS: Sequence[CompletionField] = (
    CompletionField("first_name", "First Name", 10, True, lambda user, coach: bool(_text(user, "first_name"))),
    CompletionField("last_name", "Last Name", 10, True, lambda user, coach: bool(_text(user, "last_name"))),
    CompletionField("bio", "Coach Bio", 15, True, lambda user, coach: len(_text(user, "bio")) >= BIO_MIN_LENGTH),
    CompletionField(
        "profile_image_url",
        "Profile Image",
        15,
        True,
        lambda user, coach: bool(_text(user, "profile_image_url")),
    ),
    CompletionField(
        "coaching_specialties",
        "Coaching Specialties",
        15,
        True,
        lambda user, coach: bool(getattr(coach, "coach_skills", None) or []),
    ),
    CompletionField(
        "hourly_rate",
        "Hourly Rate",
        10,
        True,
        lambda user, coach: (_number(coach, "hourly_rate") or 0) > 0,
    ),
    CompletionField(
        "years_coaching",
        "Years of Experience",
        5,
        False,
        lambda user, coach: (_number(coach, "years_coaching") is not None and _number(coach, "years_coaching") >= 0),
    ),
    CompletionField("calendly_url", "Calendly URL", 10, True, lambda user, coach: bool(_text(coach, "calendly_url"))),
    CompletionField(
        "event_type_url",
        "Event Type URL",
        10,
        True,
        lambda user, coach: bool(_text(coach, "event_type_url")),
    ),
)

FIELD_DISPLAY_NAMES: Dict[str, str] = {field.key: field.display_name for field in COMPLETION_FIELDS}

# current -> {target: requires system owner}
ALLOWED_STATUS_TRANSITIONS: Dict[ProfileStatus, Dict[ProfileStatus, bool]] = {
    ProfileStatus.DRAFT: {
        ProfileStatus.PUBLISHED: False,
        ProfileStatus.ARCHIVED: True,
    },
    ProfileStatus.PUBLISHED: {
        ProfileStatus.DRAFT: False,
        ProfileStatus.ARCHIVED: True,
    },
    ProfileStatus.ARCHIVED: {
        ProfileStatus.DRAFT: True,
    },
}


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _percentage(done: int, total: int) -> int:
    if total <= 0:
        return 100
    return _round_half_up(done / total * 100)


def calculate_profile_completion(user: Any, coach_profile: Any = None) -> ProfileCompletion:
    """Score a profile from the user record and the optional coach profile.

    Both arguments may be ORM rows or read models; attributes are looked up by name.
    Required fields carry 80% of the final percentage and optional fields 20%.
    """
    required_total = required_done = 0
    optional_total = optional_done = 0
    missing: List[str] = []
    missing_required: List[str] = []
    missing_optional: List[str] = []
    messages: Dict[str, str] = {}

    for field in COMPLETION_FIELDS:
        complete = field.is_complete(user, coach_profile)
        if field.required:
            required_total += field.weight
            if complete:
                required_done += field.weight
            else:
                missing.append(field.key)
                missing_required.append(field.key)
                if field.key == "bio":
                    messages[field.key] = f"Bio must be at least {BIO_MIN_LENGTH} characters long"
                else:
                    messages[field.key] = f"{field.display_name} is required"
        else:
            optional_total += field.weight
            if complete:
                optional_done += field.weight
            else:
                missing.append(field.key)
                missing_optional.append(field.key)
                messages[field.key] = f"Adding {field.display_name} will improve your profile"

    required_pct = _percentage(required_done, required_total)
    optional_pct = _percentage(optional_done, optional_total)
    percentage = _round_half_up(required_pct * REQUIRED_WEIGHT_SHARE + optional_pct * OPTIONAL_WEIGHT_SHARE)

    return ProfileCompletion(
        percentage=percentage,
        required_percentage=required_pct,
        optional_percentage=optional_pct,
        missing_fields=missing,
        missing_required_fields=missing_required,
        optional_missing_fields=missing_optional,
        validation_messages=messages,
        can_publish=not missing_required,
    )


def get_missing_fields_message(missing_fields: Sequence[str]) -> str:
    names = [FIELD_DISPLAY_NAMES.get(field, field) for field in missing_fields]
    if not names:
        return ""
    if len(names) == 1:
        return f"{names[0]} would improve your profile completion."
    listed = f"{', '.join(names[:-1])} and {names[-1]}"
    return f"Adding {listed} would improve your profile completion."


def can_transition_to(current: ProfileStatus, target: ProfileStatus, is_system_owner: bool) -> bool:
    if current == target:
        return True
    allowed = ALLOWED_STATUS_TRANSITIONS.get(current, {})
    if target not in allowed:
        return False
    requires_owner = allowed[target]
    return is_system_owner or not requires_owner


def check_publication_requirements(
    completion_percentage: int,
    domains: Sequence[Any],
    hourly_rate: Optional[float],
    *,
    threshold: int = PUBLICATION_THRESHOLD,
) -> List[str]:
    """Return the unmet publication requirement keys (``completion``, ``domains``, ``rate``)."""
    missing: List[str] = []
    if completion_percentage < threshold:
        missing.append("completion")
    if len(domains or []) < MINIMUM_DOMAINS:
        missing.append("domains")
    if not hourly_rate or hourly_rate <= 0:
        missing.append("rate")
    return missing


def resolve_status_after_update(current: ProfileStatus, completion: ProfileCompletion) -> ProfileStatus:
    """Keep a published profile published only while it still satisfies every required field."""
    if current == ProfileStatus.ARCHIVED:
        return current
    if completion.can_publish and current == ProfileStatus.PUBLISHED:
        return ProfileStatus.PUBLISHED
    return ProfileStatus.DRAFT


__all__ = [
    "ALLOWED_STATUS_TRANSITIONS",
    "COMPLETION_FIELDS",
    "CompletionField",
    "FIELD_DISPLAY_NAMES",
    "calculate_profile_completion",
    "can_transition_to",
    "check_publication_requirements",
    "get_missing_fields_message",
    "resolve_status_after_update",
]
