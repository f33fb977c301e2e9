"""Telemetry listener that persists key profile events as audit rows."""

from __future__ import annotations

import logging
from typing import Set

from .telemetry import TelemetryEvent, register_listener
from .db.session import session_scope
from .repositories.users import users

logger = logging.getLogger(__name__)

_MONITORED_EVENTS: Set[str] = {
    "profile_status_changed",
    "coach_profile_updated",
    "coach_profile_created",
    "specialties_saved",
}


def _persist_event(event: TelemetryEvent) -> None:
    if event.name not in _MONITORED_EVENTS:
        return
    user_id = event.payload.get("user_id")
    if not isinstance(user_id, str) or not user_id.strip():
        return
    try:
        with session_scope() as session:
            users.record_event(session, user_id, event.name, event.payload)
    except Exception:  # noqa: BLE001
        logger.exception("Failed to persist telemetry event for user_id=%s", user_id)


register_listener(_persist_event)

__all__ = ["_MONITORED_EVENTS"]
