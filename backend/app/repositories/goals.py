"""Database-backed goal repository."""

from __future__ import annotations

from datetime import date
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..db.models import GoalModel
from ..profile_errors import item_not_found
from ..profile_models import Goal
from ..profile_schemas import GoalFormData
from ..profile_types import GoalStatus
from .base import RepositoryBase


def is_overdue(status: str, deadline: date, today: date) -> bool:
    return status == GoalStatus.IN_PROGRESS.value and deadline < today


class GoalRepository(RepositoryBase):
    def list_for_user(self, session: Session, user_id: str, *, today: Optional[date] = None) -> List[Goal]:
        """Return goals by deadline, flipping passed in-progress goals to OVERDUE."""
        self._require_user(session, user_id)
        reference = today or date.today()
        stmt = select(GoalModel).where(GoalModel.user_id == user_id).order_by(GoalModel.deadline.asc())
        models = list(session.execute(stmt).scalars())
        overdue = [model for model in models if is_overdue(model.status, model.deadline, reference)]
        for model in overdue:
            model.status = GoalStatus.OVERDUE.value
        if overdue:
            session.flush()
            self._record_audit(session, user_id, "goals_marked_overdue", {"goal_ids": [model.id for model in overdue]})
        return [self._to_domain(model) for model in models]

    def create(self, session: Session, user_id: str, data: GoalFormData) -> Goal:
        user = self._require_user(session, user_id)
        model = GoalModel(user_id=user.id)
        self._apply(model, data)
        session.add(model)
        session.flush()
        self._record_audit(session, user.id, "goal_created", {"goal_id": model.id, "type": model.type})
        return self._to_domain(model)

    def update(self, session: Session, user_id: str, goal_id: str, data: GoalFormData) -> Goal:
        model = self._require_model(session, user_id, goal_id)
        self._apply(model, data)
        session.flush()
        self._record_audit(session, model.user_id, "goal_updated", {"goal_id": model.id, "status": model.status})
        return self._to_domain(model)

    def delete(self, session: Session, user_id: str, goal_id: str) -> None:
        model = self._require_model(session, user_id, goal_id)
        session.delete(model)
        session.flush()
        self._record_audit(session, user_id, "goal_deleted", {"goal_id": goal_id})

    def _require_model(self, session: Session, user_id: str, goal_id: str) -> GoalModel:
        model = session.get(GoalModel, goal_id)
        if model is None or model.user_id != user_id:
            raise item_not_found("Goal", goal_id)
        return model

    @staticmethod
    def _apply(model: GoalModel, data: GoalFormData) -> None:
        model.title = data.title
        model.description = data.description
        model.target = data.target
        model.current = data.current
        model.deadline = data.deadline
        model.type = data.type.value
        model.status = data.status.value

    @staticmethod
    def _to_domain(model: GoalModel) -> Goal:
        return Goal(
            id=model.id,
            user_id=model.user_id,
            organization_id=model.organization_id,
            title=model.title,
            description=model.description,
            target=model.target,
            current=model.current,
            deadline=model.deadline,
            type=model.type,
            status=model.status,
        )


goals = GoalRepository()

__all__ = ["GoalRepository", "goals", "is_overdue"]
