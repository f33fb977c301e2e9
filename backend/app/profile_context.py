"""Client-side profile state: fetched data, completion status and user notices."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Literal, Optional, Sequence

from pydantic import BaseModel, Field

from .profile_client import ProfileApiClient, ProfileApiError
from .profile_models import (
    CapabilitiesSnapshot,
    CoachProfile,
    CoachProfileView,
    Goal,
    MarketingInfo,
    PortfolioItem,
    Recognition,
    UserProfile,
)
from .profile_schemas import (
    CoachProfileFormData,
    GeneralFormData,
    GoalFormData,
    MarketingInfoFormData,
    RecognitionFormData,
)
from .profile_types import ProfileStatus, RealEstateDomain, UserCapability

logger = logging.getLogger(__name__)

NoticeKind = Literal["success", "error", "info"]


@dataclass(frozen=True)
class Notice:
    kind: NoticeKind
    title: str
    message: str


class ProfileState(BaseModel):
    general_data: Optional[UserProfile] = None
    coach_data: Optional[CoachProfile] = None
    domain_data: Dict[RealEstateDomain, Dict[str, Any]] = Field(default_factory=dict)
    recognitions_data: List[Recognition] = Field(default_factory=list)
    marketing_data: Optional[MarketingInfo] = None
    goals_data: List[Goal] = Field(default_factory=list)
    portfolio_data: List[PortfolioItem] = Field(default_factory=list)

    profile_status: ProfileStatus = ProfileStatus.DRAFT
    completion_percentage: int = 0
    missing_fields: List[str] = Field(default_factory=list)
    missing_required_fields: List[str] = Field(default_factory=list)
    optional_missing_fields: List[str] = Field(default_factory=list)
    validation_messages: Dict[str, str] = Field(default_factory=dict)
    can_publish: bool = False

    is_loading: bool = True
    is_submitting: bool = False

    user_capabilities: List[UserCapability] = Field(default_factory=list)
    real_estate_domains: List[RealEstateDomain] = Field(default_factory=list)
    selected_specialties: List[RealEstateDomain] = Field(default_factory=list)
    confirmed_specialties: List[RealEstateDomain] = Field(default_factory=list)


class ProfileContext:
    """Single in-memory store of a user's profile; every updater wraps one remote call.

    Failures never raise: they are logged, surfaced as an error ``Notice`` and the
    previous state is kept.
    """

    def __init__(
        self,
        user_id: str,
        client: ProfileApiClient,
        *,
        on_notice: Optional[Callable[[Notice], None]] = None,
    ) -> None:
        self.user_id = user_id
        self.client = client
        self.state = ProfileState()
        self.notices: List[Notice] = []
        self._on_notice = on_notice

    # ------------------------------------------------------------------
    # Notices
    # ------------------------------------------------------------------

    def notify(self, kind: NoticeKind, title: str, message: str = "") -> Notice:
        notice = Notice(kind=kind, title=title, message=message)
        self.notices.append(notice)
        if self._on_notice is not None:
            self._on_notice(notice)
        return notice

    def _fail(self, action: str, title: str, exc: ProfileApiError) -> None:
        logger.warning("Profile action %s failed for user %s: %s", action, self.user_id, exc.message)
        self.notify("error", title, exc.message)

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load(self) -> ProfileState:
        self.state.is_loading = True
        try:
            try:
                self.state.general_data = self.client.get_user_profile(self.user_id)
            except ProfileApiError as exc:
                self._fail("load_general", "Failed to load profile", exc)

            self.fetch_capabilities()

            if UserCapability.COACH in self.state.user_capabilities:
                self._load_coach_profile()

            for domain in list(self.state.confirmed_specialties):
                try:
                    profile = self.client.get_domain_profile(self.user_id, domain)
                except ProfileApiError as exc:
                    self._fail("load_domain", f"Failed to load {domain.value} profile", exc)
                    continue
                if profile is not None:
                    self.state.domain_data[domain] = dict(profile.data)

            try:
                self.state.recognitions_data = self.client.list_recognitions(self.user_id)
            except ProfileApiError as exc:
                self._fail("load_recognitions", "Failed to load recognitions", exc)

            try:
                self.state.marketing_data = self.client.get_marketing_info(self.user_id)
            except ProfileApiError as exc:
                self._fail("load_marketing", "Failed to load marketing info", exc)

            try:
                self.state.goals_data = self.client.list_goals(self.user_id)
            except ProfileApiError as exc:
                self._fail("load_goals", "Failed to load goals", exc)

            if UserCapability.COACH in self.state.user_capabilities:
                try:
                    self.state.portfolio_data = self.client.list_portfolio_items(self.user_id)
                except ProfileApiError as exc:
                    self._fail("load_portfolio", "Failed to load portfolio", exc)
        finally:
            self.state.is_loading = False
        return self.state

    def _load_coach_profile(self) -> None:
        try:
            view = self.client.get_coach_profile(self.user_id)
        except ProfileApiError as exc:
            self._fail("load_coach", "Failed to load coach profile", exc)
            self.state.coach_data = CoachProfile(user_id=self.user_id)
            return
        self.state.coach_data = view.coach_profile
        self.update_completion_status(view)

    def fetch_capabilities(self) -> CapabilitiesSnapshot:
        try:
            snapshot = self.client.get_capabilities(self.user_id)
        except ProfileApiError as exc:
            self._fail("fetch_capabilities", "Failed to load capabilities", exc)
            self.state.user_capabilities = []
            self.state.real_estate_domains = []
            return CapabilitiesSnapshot()
        self.state.user_capabilities = list(snapshot.capabilities)
        self.state.real_estate_domains = list(snapshot.real_estate_domains)
        self.state.confirmed_specialties = list(snapshot.active_domains)
        if not self.state.selected_specialties:
            self.state.selected_specialties = list(snapshot.active_domains)
        return snapshot

    # ------------------------------------------------------------------
    # Completion
    # ------------------------------------------------------------------

    def update_completion_status(self, data: Any) -> None:
        """Copy completion fields from a coach profile view, completion or mapping."""
        if isinstance(data, CoachProfileView):
            completion: Any = data.completion
            status = data.coach_profile.profile_status
        else:
            completion = data
            status = _field(data, "profile_status", None)

        self.state.completion_percentage = _field(completion, "percentage", None) or _field(
            completion, "completion_percentage", 0
        )
        self.state.missing_fields = list(_field(completion, "missing_fields", []) or [])
        self.state.missing_required_fields = list(_field(completion, "missing_required_fields", []) or [])
        self.state.optional_missing_fields = list(_field(completion, "optional_missing_fields", []) or [])
        self.state.validation_messages = dict(_field(completion, "validation_messages", {}) or {})
        self.state.can_publish = bool(_field(completion, "can_publish", False))
        self.state.profile_status = ProfileStatus(status) if status else ProfileStatus.DRAFT

    def _refresh_completion(self) -> None:
        try:
            view = self.client.get_coach_profile(self.user_id)
        except ProfileApiError as exc:
            logger.warning("Could not refresh completion for user %s: %s", self.user_id, exc.message)
            return
        self.state.coach_data = view.coach_profile
        self.update_completion_status(view)

    # ------------------------------------------------------------------
    # Updaters
    # ------------------------------------------------------------------

    def _submit(self, action: str, failure_title: str, call: Callable[[], Any]) -> bool:
        self.state.is_submitting = True
        try:
            call()
        except ProfileApiError as exc:
            self._fail(action, failure_title, exc)
            return False
        finally:
            self.state.is_submitting = False
        return True

    def update_general_data(self, data: GeneralFormData) -> bool:
        def call() -> None:
            self.state.general_data = self.client.update_general_profile(self.user_id, data)
            self.notify("success", "Profile updated successfully")

        return self._submit("update_general", "Failed to update profile", call)

    def update_coach_data(self, data: CoachProfileFormData) -> bool:
        def call() -> None:
            # Languages live on the user; a failure here stops the coach update.
            self.state.general_data = self.client.update_languages(self.user_id, data.languages)
            self.state.coach_data = self.client.update_coach_profile(self.user_id, data)
            self.notify("success", "Coach profile updated successfully")
            self._refresh_completion()

        return self._submit("update_coach", "Failed to update coach profile", call)

    def update_domain_data(self, domain: RealEstateDomain, payload: Dict[str, Any]) -> bool:
        def call() -> None:
            profile = self.client.update_domain_profile(self.user_id, domain, payload)
            self.state.domain_data[RealEstateDomain(domain)] = dict(profile.data)
            self.notify("success", f"{RealEstateDomain(domain).value.replace('_', ' ').title()} profile updated")

        return self._submit("update_domain", "Failed to update domain profile", call)

    def update_recognitions(self, items: Sequence[RecognitionFormData]) -> bool:
        def call() -> None:
            self.state.recognitions_data = self.client.save_recognitions(self.user_id, items)
            self.notify("success", "Professional recognitions updated successfully")
            self._refresh_completion()

        return self._submit("update_recognitions", "Failed to update professional recognitions", call)

    def update_marketing_info(self, data: MarketingInfoFormData) -> bool:
        def call() -> None:
            self.state.marketing_data = self.client.update_marketing_info(self.user_id, data)
            self.notify("success", "Marketing info updated successfully")

        return self._submit("update_marketing", "Failed to update marketing info", call)

    def update_goals(self, goals: Sequence[Goal]) -> bool:
        """Persist edited goals and reload the list (deadlines may flip goals to overdue)."""

        def call() -> None:
            for goal in goals:
                data = GoalFormData.model_validate(
                    goal.model_dump(include=set(GoalFormData.model_fields.keys()))
                )
                self.client.update_goal(self.user_id, goal.id, data)
            self.state.goals_data = self.client.list_goals(self.user_id)
            self.notify("success", "Goals updated successfully")

        return self._submit("update_goals", "Failed to update goals", call)

    def update_profile_status(self, status: ProfileStatus, actor_user_id: Optional[str] = None) -> bool:
        def call() -> None:
            result = self.client.update_profile_status(self.user_id, status, actor_user_id)
            self.state.profile_status = result.profile_status
            self.notify("success", f"Profile status changed to {result.profile_status.value.title()}")
            self._refresh_completion()

        return self._submit("update_status", "Failed to update profile status", call)

    # ------------------------------------------------------------------
    # Specialties
    # ------------------------------------------------------------------

    def set_selected_specialties(self, specialties: Sequence[RealEstateDomain]) -> None:
        self.state.selected_specialties = [RealEstateDomain(value) for value in specialties]

    def save_specialties(self, specialties: Any) -> bool:
        if not isinstance(specialties, list):
            logger.error("Invalid specialties payload for user %s: %r", self.user_id, specialties)
            self.notify("error", "Invalid specialties format", "Specialties must be a list.")
            return False
        self.state.is_submitting = True
        try:
            result = self.client.save_specialties(self.user_id, [str(getattr(v, "value", v)) for v in specialties])
        except ProfileApiError as exc:
            self._fail("save_specialties", "Failed to save specialties", exc)
            return False
        finally:
            self.state.is_submitting = False
        self.state.confirmed_specialties = list(result.active_domains)
        self.notify("success", "Specialties saved successfully")
        self.fetch_capabilities()
        return True


def _field(source: Any, name: str, default: Any) -> Any:
    if isinstance(source, dict):
        return source.get(name, default)
    return getattr(source, name, default)


__all__ = ["Notice", "ProfileContext", "ProfileState"]
