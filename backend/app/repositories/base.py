"""Helpers shared by the profile repositories."""

from __future__ import annotations

from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from ..db.models import AuditEventModel, UserModel
from ..profile_errors import user_not_found


class RepositoryBase:
    def _require_user(self, session: Session, user_id: str) -> UserModel:
        normalized = (user_id or "").strip()
        model = session.get(UserModel, normalized) if normalized else None
        if model is None:
            raise user_not_found(user_id)
        return model

    def _record_audit(
        self,
        session: Session,
        user_id: Optional[str],
        event_type: str,
        payload: Dict[str, Any],
        *,
        actor: str = "system",
    ) -> None:
        session.add(
            AuditEventModel(
                user_id=user_id,
                event_type=event_type,
                payload=payload,
                actor=actor,
            )
        )


__all__ = ["RepositoryBase"]
