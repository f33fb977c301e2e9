"""Database-backed professional recognition repository."""

from __future__ import annotations

from typing import List, Optional, Sequence

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from ..db.models import CoachProfileModel, ProfessionalRecognitionModel
from ..profile_errors import item_not_found
from ..profile_models import Recognition
from ..profile_schemas import RecognitionFormData
from ..profile_types import RecognitionStatus
from .base import RepositoryBase


class RecognitionRepository(RepositoryBase):
    def list_for_user(
        self,
        session: Session,
        user_id: str,
        *,
        visible_only: bool = False,
        status: Optional[RecognitionStatus] = None,
    ) -> List[Recognition]:
        stmt = select(ProfessionalRecognitionModel).where(ProfessionalRecognitionModel.user_id == user_id)
        if visible_only:
            stmt = stmt.where(ProfessionalRecognitionModel.is_visible.is_(True))
        if status is not None:
            stmt = stmt.where(ProfessionalRecognitionModel.status == status.value)
        stmt = stmt.order_by(ProfessionalRecognitionModel.issue_date.desc())
        return [self._to_domain(model) for model in session.execute(stmt).scalars()]

    def create(self, session: Session, user_id: str, data: RecognitionFormData) -> Recognition:
        user = self._require_user(session, user_id)
        model = ProfessionalRecognitionModel(user_id=user.id, coach_profile_id=self._coach_profile_id(session, user.id))
        self._apply(model, data)
        session.add(model)
        session.flush()
        self._record_audit(session, user.id, "recognition_created", {"recognition_id": model.id})
        return self._to_domain(model)

    def update(self, session: Session, user_id: str, recognition_id: str, data: RecognitionFormData) -> Recognition:
        model = self._require_model(session, user_id, recognition_id)
        self._apply(model, data)
        session.flush()
        self._record_audit(session, model.user_id, "recognition_updated", {"recognition_id": model.id})
        return self._to_domain(model)

    def delete(self, session: Session, user_id: str, recognition_id: str) -> None:
        model = self._require_model(session, user_id, recognition_id)
        session.delete(model)
        session.flush()
        self._record_audit(session, user_id, "recognition_deleted", {"recognition_id": recognition_id})

    def replace_all(self, session: Session, user_id: str, items: Sequence[RecognitionFormData]) -> List[Recognition]:
        user = self._require_user(session, user_id)
        session.execute(delete(ProfessionalRecognitionModel).where(ProfessionalRecognitionModel.user_id == user.id))
        coach_profile_id = self._coach_profile_id(session, user.id)
        for data in items:
            model = ProfessionalRecognitionModel(user_id=user.id, coach_profile_id=coach_profile_id)
            self._apply(model, data)
            session.add(model)
        session.flush()
        self._record_audit(session, user.id, "recognitions_replaced", {"count": len(items)})
        return self.list_for_user(session, user.id)

    def _require_model(self, session: Session, user_id: str, recognition_id: str) -> ProfessionalRecognitionModel:
        model = session.get(ProfessionalRecognitionModel, recognition_id)
        if model is None or model.user_id != user_id:
            raise item_not_found("Recognition", recognition_id)
        return model

    @staticmethod
    def _coach_profile_id(session: Session, user_id: str) -> Optional[str]:
        stmt = select(CoachProfileModel.id).where(CoachProfileModel.user_id == user_id)
        return session.execute(stmt).scalar_one_or_none()

    @staticmethod
    def _apply(model: ProfessionalRecognitionModel, data: RecognitionFormData) -> None:
        model.title = data.title
        model.type = data.type.value
        model.issuer = data.issuer
        model.issue_date = data.issue_date
        model.expiry_date = data.expiry_date
        model.description = data.description
        model.is_visible = data.is_visible
        model.industry_type = data.industry_type.value if data.industry_type else None
        model.verification_url = data.verification_url
        model.certificate_url = data.certificate_url
        if model.status is None:
            model.status = RecognitionStatus.ACTIVE.value

    @staticmethod
    def _to_domain(model: ProfessionalRecognitionModel) -> Recognition:
        return Recognition(
            id=model.id,
            user_id=model.user_id,
            coach_profile_id=model.coach_profile_id,
            title=model.title,
            type=model.type,
            issuer=model.issuer,
            issue_date=model.issue_date,
            expiry_date=model.expiry_date,
            description=model.description,
            is_visible=bool(model.is_visible),
            industry_type=model.industry_type,
            status=model.status or RecognitionStatus.ACTIVE.value,
            verification_url=model.verification_url,
            certificate_url=model.certificate_url,
        )


recognitions = RecognitionRepository()

__all__ = ["RecognitionRepository", "recognitions"]
