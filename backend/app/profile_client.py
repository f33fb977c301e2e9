"""Synchronous HTTP client for the profile REST API."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Sequence, Type, TypeVar

import httpx
from pydantic import BaseModel, TypeAdapter, ValidationError

from .config import Settings, get_settings
from .profile_models import (
    CapabilitiesSnapshot,
    CoachProfile,
    CoachProfileView,
    DomainProfile,
    Goal,
    Listing,
    ListingsOverview,
    MarketingInfo,
    PortfolioItem,
    ProfileCompletion,
    ProfileStatusUpdate,
    PublicCoachProfile,
    Recognition,
    SpecialtiesResult,
    UserProfile,
)
from .profile_schemas import (
    CoachProfileFormData,
    GeneralFormData,
    GoalFormData,
    ListingFormData,
    MarketingInfoFormData,
    PortfolioItemFormData,
    RecognitionFormData,
    UserRegistration,
)
from .profile_types import ProfileStatus, RealEstateDomain

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class ProfileApiError(RuntimeError):
    """Raised when a profile API call fails in transport or returns a non-2xx reply."""

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        code: str = "REQUEST_FAILED",
        details: Any = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.code = code
        self.details = details


def _error_from_response(response: httpx.Response) -> ProfileApiError:
    try:
        body = response.json()
    except ValueError:
        body = None
    detail = body.get("detail") if isinstance(body, dict) else None
    if isinstance(detail, dict):
        return ProfileApiError(
            str(detail.get("message") or f"Request failed with status {response.status_code}."),
            status_code=response.status_code,
            code=str(detail.get("code") or "REQUEST_FAILED"),
            details=detail.get("details"),
        )
    if isinstance(detail, list):
        # FastAPI request validation errors.
        messages = [str(item.get("msg", item)) if isinstance(item, dict) else str(item) for item in detail]
        return ProfileApiError(
            "; ".join(messages) or "Invalid request.",
            status_code=response.status_code,
            code="VALIDATION_ERROR",
            details=detail,
        )
    message = str(detail) if detail else f"Request failed with status {response.status_code}."
    return ProfileApiError(message, status_code=response.status_code, details=body)


class ProfileApiClient:
    """One method per profile route; responses are parsed into the read models."""

    def __init__(self, settings: Optional[Settings] = None, *, client: Optional[httpx.Client] = None) -> None:
        if client is None:
            resolved = settings or get_settings()
            client = httpx.Client(base_url=resolved.api_base_url, timeout=resolved.api_timeout_seconds)
            self._owns_client = True
        else:
            self._owns_client = False
        self._client = client

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "ProfileApiClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    def _request(self, method: str, path: str, *, json: Any = None, params: Optional[Dict[str, Any]] = None) -> Any:
        try:
            response = self._client.request(method, path, json=json, params=params)
        except httpx.HTTPError as exc:
            raise ProfileApiError(f"Profile API call {method} {path} failed: {exc}") from exc
        if response.status_code >= 400:
            error = _error_from_response(response)
            logger.debug("Profile API %s %s returned %s: %s", method, path, response.status_code, error.message)
            raise error
        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise ProfileApiError(
                f"Profile API returned invalid JSON for {method} {path}.",
                status_code=response.status_code,
                code="INVALID_RESPONSE",
            ) from exc

    def _parse(self, model: Type[ModelT], data: Any) -> ModelT:
        try:
            return model.model_validate(data)
        except ValidationError as exc:
            raise ProfileApiError(
                f"Profile API returned an invalid {model.__name__} payload: {exc}",
                code="INVALID_RESPONSE",
            ) from exc

    def _parse_list(self, model: Type[ModelT], data: Any) -> List[ModelT]:
        try:
            return TypeAdapter(List[model]).validate_python(data or [])  # type: ignore[valid-type]
        except ValidationError as exc:
            raise ProfileApiError(
                f"Profile API returned an invalid {model.__name__} list: {exc}",
                code="INVALID_RESPONSE",
            ) from exc

    def _optional(self, model: Type[ModelT], data: Any) -> Optional[ModelT]:
        return self._parse(model, data) if data is not None else None

    # ------------------------------------------------------------------
    # Users and coach profile
    # ------------------------------------------------------------------

    def create_user(self, payload: UserRegistration) -> UserProfile:
        return self._parse(UserProfile, self._request("POST", "/api/profile", json=payload.model_dump(mode="json")))

    def get_user_profile(self, user_id: str) -> UserProfile:
        return self._parse(UserProfile, self._request("GET", f"/api/profile/{user_id}"))

    def update_general_profile(self, user_id: str, data: GeneralFormData) -> UserProfile:
        body = data.model_dump(mode="json")
        return self._parse(UserProfile, self._request("PUT", f"/api/profile/{user_id}/general", json=body))

    def update_languages(self, user_id: str, languages: Sequence[str]) -> UserProfile:
        body = {"languages": list(languages)}
        return self._parse(UserProfile, self._request("PUT", f"/api/profile/{user_id}/languages", json=body))

    def update_domains(
        self,
        user_id: str,
        domains: Sequence[RealEstateDomain],
        primary_domain: Optional[RealEstateDomain] = None,
    ) -> UserProfile:
        body: Dict[str, Any] = {"real_estate_domains": [RealEstateDomain(domain).value for domain in domains]}
        if primary_domain is not None:
            body["primary_domain"] = RealEstateDomain(primary_domain).value
        return self._parse(UserProfile, self._request("PUT", f"/api/profile/{user_id}/domains", json=body))

    def get_capabilities(self, user_id: str) -> CapabilitiesSnapshot:
        return self._parse(CapabilitiesSnapshot, self._request("GET", f"/api/profile/{user_id}/capabilities"))

    def get_coach_profile(self, user_id: str) -> CoachProfileView:
        return self._parse(CoachProfileView, self._request("GET", f"/api/profile/{user_id}/coach"))

    def create_coach_profile(self, user_id: str) -> CoachProfile:
        return self._parse(CoachProfile, self._request("POST", f"/api/profile/{user_id}/coach"))

    def update_coach_profile(self, user_id: str, data: CoachProfileFormData) -> CoachProfile:
        body = data.model_dump(mode="json", exclude={"languages"})
        result = self._request("PUT", f"/api/profile/{user_id}/coach", json=body)
        if not isinstance(result, dict):
            raise ProfileApiError("Profile API returned an empty coach profile update.", code="INVALID_RESPONSE")
        return self._parse(CoachProfile, result.get("coach_profile"))

    def update_profile_status(
        self,
        user_id: str,
        status: ProfileStatus,
        actor_user_id: Optional[str] = None,
    ) -> ProfileStatusUpdate:
        body = {"status": ProfileStatus(status).value, "actor_user_id": actor_user_id}
        return self._parse(ProfileStatusUpdate, self._request("PUT", f"/api/profile/{user_id}/status", json=body))

    def save_specialties(self, user_id: str, specialties: Sequence[str]) -> SpecialtiesResult:
        body = {"specialties": list(specialties)}
        return self._parse(SpecialtiesResult, self._request("PUT", f"/api/profile/{user_id}/specialties", json=body))

    def get_profile_completion(self, user_id: str) -> ProfileCompletion:
        return self._parse(ProfileCompletion, self._request("GET", f"/api/profile/{user_id}/completion"))

    # ------------------------------------------------------------------
    # Domain profiles
    # ------------------------------------------------------------------

    def get_domain_profile(self, user_id: str, domain: RealEstateDomain) -> Optional[DomainProfile]:
        data = self._request("GET", f"/api/domain-profiles/{user_id}/{RealEstateDomain(domain).value}")
        return self._optional(DomainProfile, data)

    def update_domain_profile(self, user_id: str, domain: RealEstateDomain, payload: Dict[str, Any]) -> DomainProfile:
        path = f"/api/domain-profiles/{user_id}/{RealEstateDomain(domain).value}"
        return self._parse(DomainProfile, self._request("PUT", path, json=payload))

    # ------------------------------------------------------------------
    # Portfolio, recognitions, goals, listings, marketing
    # ------------------------------------------------------------------

    def list_portfolio_items(self, user_id: str, *, visible_only: bool = False) -> List[PortfolioItem]:
        data = self._request("GET", f"/api/portfolio/{user_id}", params={"visible_only": visible_only})
        return self._parse_list(PortfolioItem, data)

    def create_portfolio_item(self, user_id: str, data: PortfolioItemFormData) -> PortfolioItem:
        body = data.model_dump(mode="json")
        return self._parse(PortfolioItem, self._request("POST", f"/api/portfolio/{user_id}", json=body))

    def update_portfolio_item(self, user_id: str, item_id: str, data: PortfolioItemFormData) -> PortfolioItem:
        body = data.model_dump(mode="json")
        return self._parse(PortfolioItem, self._request("PUT", f"/api/portfolio/{user_id}/{item_id}", json=body))

    def delete_portfolio_item(self, user_id: str, item_id: str) -> None:
        self._request("DELETE", f"/api/portfolio/{user_id}/{item_id}")

    def list_recognitions(self, user_id: str, *, visible_only: bool = False) -> List[Recognition]:
        data = self._request("GET", f"/api/recognitions/{user_id}", params={"visible_only": visible_only})
        return self._parse_list(Recognition, data)

    def save_recognitions(self, user_id: str, items: Sequence[RecognitionFormData]) -> List[Recognition]:
        body = [item.model_dump(mode="json") for item in items]
        return self._parse_list(Recognition, self._request("PUT", f"/api/recognitions/{user_id}", json=body))

    def create_recognition(self, user_id: str, data: RecognitionFormData) -> Recognition:
        body = data.model_dump(mode="json")
        return self._parse(Recognition, self._request("POST", f"/api/recognitions/{user_id}", json=body))

    def update_recognition(self, user_id: str, recognition_id: str, data: RecognitionFormData) -> Recognition:
        path = f"/api/recognitions/{user_id}/{recognition_id}"
        return self._parse(Recognition, self._request("PUT", path, json=data.model_dump(mode="json")))

    def delete_recognition(self, user_id: str, recognition_id: str) -> None:
        self._request("DELETE", f"/api/recognitions/{user_id}/{recognition_id}")

    def list_goals(self, user_id: str) -> List[Goal]:
        return self._parse_list(Goal, self._request("GET", f"/api/goals/{user_id}"))

    def create_goal(self, user_id: str, data: GoalFormData) -> Goal:
        return self._parse(Goal, self._request("POST", f"/api/goals/{user_id}", json=data.model_dump(mode="json")))

    def update_goal(self, user_id: str, goal_id: str, data: GoalFormData) -> Goal:
        body = data.model_dump(mode="json")
        return self._parse(Goal, self._request("PUT", f"/api/goals/{user_id}/{goal_id}", json=body))

    def delete_goal(self, user_id: str, goal_id: str) -> None:
        self._request("DELETE", f"/api/goals/{user_id}/{goal_id}")

    def list_listings(self, user_id: str) -> ListingsOverview:
        return self._parse(ListingsOverview, self._request("GET", f"/api/listings/{user_id}"))

    def create_listing(self, user_id: str, data: ListingFormData) -> Listing:
        body = data.model_dump(mode="json")
        return self._parse(Listing, self._request("POST", f"/api/listings/{user_id}", json=body))

    def update_listing(self, user_id: str, listing_id: str, data: ListingFormData) -> Listing:
        body = data.model_dump(mode="json")
        return self._parse(Listing, self._request("PUT", f"/api/listings/{user_id}/{listing_id}", json=body))

    def delete_listing(self, user_id: str, listing_id: str) -> None:
        self._request("DELETE", f"/api/listings/{user_id}/{listing_id}")

    def get_marketing_info(self, user_id: str) -> Optional[MarketingInfo]:
        return self._optional(MarketingInfo, self._request("GET", f"/api/marketing/{user_id}"))

    def update_marketing_info(self, user_id: str, data: MarketingInfoFormData) -> MarketingInfo:
        body = data.model_dump(mode="json")
        return self._parse(MarketingInfo, self._request("PUT", f"/api/marketing/{user_id}", json=body))

    def get_public_coach_profile(self, user_id: str) -> PublicCoachProfile:
        return self._parse(PublicCoachProfile, self._request("GET", f"/api/public/coaches/{user_id}"))


__all__ = ["ProfileApiClient", "ProfileApiError"]
