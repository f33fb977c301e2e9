"""Form controllers binding validated schemas to local editing state."""

from __future__ import annotations

import logging
from collections import OrderedDict
from dataclasses import dataclass, field
from datetime import date
from types import SimpleNamespace
from typing import Any, Callable, Dict, Generic, Iterable, List, Literal, Optional, Set, Type, TypeVar

from pydantic import BaseModel, ValidationError

from .profile_completion import calculate_profile_completion, get_missing_fields_message
from .profile_context import ProfileContext
from .profile_models import Goal, Listing, ListingsOverview, PortfolioItem, ProfileCompletion, Recognition
from .profile_schemas import (
    CoachProfileFormData,
    GeneralFormData,
    GoalFormData,
    ListingFormData,
    MarketingInfoFormData,
    PortfolioItemFormData,
    RecognitionFormData,
)
from .profile_types import DRAFT_LISTING_STATUS, GoalStatus, ListingStatus, SocialMediaPlatform

logger = logging.getLogger(__name__)

S = TypeVar("S", bound=BaseModel)
T = TypeVar("T", bound=BaseModel)


class FormController(Generic[S]):
    """Local values and errors for one schema; ``submit`` only calls back with valid data."""

    def __init__(self, schema: Type[S], initial: Optional[Dict[str, Any]] = None) -> None:
        self.schema = schema
        self._initial: Dict[str, Any] = dict(initial or {})
        self.values: Dict[str, Any] = dict(self._initial)
        self.errors: Dict[str, str] = {}
        self.is_dirty = False
        self.is_submitting = False
        self.submit_error: Optional[str] = None

    def set_value(self, name: str, value: Any) -> None:
        self.values[name] = value
        self.errors.pop(name, None)
        self.is_dirty = self.values != self._initial

    def reset(self, values: Optional[Dict[str, Any]] = None) -> None:
        if values is not None:
            self._initial = dict(values)
        self.values = dict(self._initial)
        self.errors = {}
        self.is_dirty = False
        self.submit_error = None

    def validate(self) -> Optional[S]:
        try:
            data = self.schema.model_validate(self.values)
        except ValidationError as exc:
            self.errors = {}
            for error in exc.errors(include_url=False):
                key = ".".join(str(part) for part in error["loc"]) or "__root__"
                self.errors.setdefault(key, error["msg"])
            return None
        self.errors = {}
        return data

    def submit(self, callback: Callable[[S], Any]) -> bool:
        data = self.validate()
        if data is None:
            return False
        self.is_submitting = True
        self.submit_error = None
        try:
            result = callback(data)
        except Exception as exc:  # noqa: BLE001
            logger.exception("Form submission failed for %s", self.schema.__name__)
            self.submit_error = str(exc) or exc.__class__.__name__
            return False
        finally:
            self.is_submitting = False
        if result is False:
            self.submit_error = "Submission failed."
            return False
        self._initial = dict(self.values)
        self.is_dirty = False
        return True


class GeneralForm(FormController[GeneralFormData]):
    def __init__(self, context: Optional[ProfileContext] = None) -> None:
        super().__init__(GeneralFormData)
        if context is not None:
            self.sync_from(context)

    def sync_from(self, context: ProfileContext) -> None:
        general = context.state.general_data
        if general is None:
            self.reset({})
            return
        self.reset(
            {
                "display_name": general.display_name or "",
                "bio": general.bio or "",
                "primary_market": general.primary_market or "",
                "total_years_re": general.total_years_re,
            }
        )

    def submit_to(self, context: ProfileContext) -> bool:
        return self.submit(context.update_general_data)


class CoachProfileForm(FormController[CoachProfileFormData]):
    def __init__(self, context: Optional[ProfileContext] = None) -> None:
        super().__init__(CoachProfileFormData)
        self._context = context
        if context is not None:
            self.sync_from(context)

    def sync_from(self, context: ProfileContext) -> None:
        self._context = context
        coach = context.state.coach_data
        general = context.state.general_data
        values: Dict[str, Any] = {}
        if coach is not None:
            dumped = coach.model_dump(include=set(CoachProfileFormData.model_fields))
            # Unset columns fall back to the schema defaults.
            values.update({name: value for name, value in dumped.items() if value is not None})
        if general is not None:
            values["languages"] = list(general.languages)
            if general.profile_image_url:
                values["profile_image_url"] = general.profile_image_url
        self.reset(values)

    @property
    def specialties(self) -> List[str]:
        return list(self.values.get("coach_skills") or [])

    def toggle_specialty(self, specialty: str) -> List[str]:
        skills = self.specialties
        if specialty in skills:
            skills.remove(specialty)
        else:
            skills.append(specialty)
        self.set_value("coach_skills", skills)
        return skills

    def preview_completion(self) -> ProfileCompletion:
        general = self._context.state.general_data if self._context is not None else None
        user = SimpleNamespace(
            first_name=getattr(general, "first_name", None),
            last_name=getattr(general, "last_name", None),
            bio=getattr(general, "bio", None),
            profile_image_url=self.values.get("profile_image_url"),
        )
        return calculate_profile_completion(user, SimpleNamespace(**self.values))

    def missing_fields_message(self) -> str:
        return get_missing_fields_message(self.preview_completion().missing_fields)

    def submit_to(self, context: ProfileContext) -> bool:
        return self.submit(context.update_coach_data)


class _CollectionForm(Generic[S, T]):
    """A list of saved items plus one editor for the item being added or edited."""

    schema: Type[S]

    def __init__(self, items: Iterable[T] = ()) -> None:
        self.items: List[T] = list(items)
        self.editor: FormController[S] = FormController(self.schema)
        self.editing_id: Optional[str] = None
        self.error: Optional[str] = None

    def start_add(self, values: Optional[Dict[str, Any]] = None) -> None:
        self.editing_id = None
        self.editor.reset(dict(values or {}))

    def start_edit(self, item_id: str) -> None:
        item = self._find(item_id)
        if item is None:
            raise KeyError(item_id)
        self.editing_id = item_id
        self.editor.reset(self._values_of(item))

    def save(self, callback: Callable[[Optional[str], S], T]) -> bool:
        saved: List[T] = []
        editing_id = self.editing_id
        if not self.editor.submit(lambda data: saved.append(callback(editing_id, data))):
            return False
        item = saved[0]
        if editing_id is None:
            self.items.append(item)
        else:
            self.items = [item if getattr(existing, "id", None) == editing_id else existing for existing in self.items]
        self.editing_id = None
        self.editor.reset({})
        return True

    def remove(self, item_id: str, callback: Callable[[str], Any]) -> bool:
        self.error = None
        try:
            callback(item_id)
        except Exception as exc:  # noqa: BLE001
            logger.exception("Failed to remove %s %s", self.schema.__name__, item_id)
            self.error = str(exc) or exc.__class__.__name__
            return False
        self.items = [item for item in self.items if getattr(item, "id", None) != item_id]
        return True

    def _find(self, item_id: str) -> Optional[T]:
        return next((item for item in self.items if getattr(item, "id", None) == item_id), None)

    def _values_of(self, item: T) -> Dict[str, Any]:
        return item.model_dump(include=set(self.schema.model_fields))


class PortfolioForm(_CollectionForm[PortfolioItemFormData, PortfolioItem]):
    schema = PortfolioItemFormData

    @property
    def sorted_items(self) -> List[PortfolioItem]:
        by_date = sorted(self.items, key=lambda item: item.date or date.min, reverse=True)
        return sorted(by_date, key=lambda item: not item.featured)

    @property
    def visible_items(self) -> List[PortfolioItem]:
        return [item for item in self.sorted_items if item.is_visible]


class RecognitionsForm(_CollectionForm[RecognitionFormData, Recognition]):
    schema = RecognitionFormData

    def toggle_visibility(self, recognition_id: str, callback: Callable[[str, RecognitionFormData], Recognition]) -> bool:
        item = self._find(recognition_id)
        if item is None:
            return False
        values = self._values_of(item)
        values["is_visible"] = not item.is_visible
        self.error = None
        try:
            updated = callback(recognition_id, RecognitionFormData.model_validate(values))
        except Exception as exc:  # noqa: BLE001
            logger.exception("Failed to toggle visibility for recognition %s", recognition_id)
            self.error = str(exc) or exc.__class__.__name__
            return False
        self.items = [updated if existing.id == recognition_id else existing for existing in self.items]
        return True


class GoalsForm(_CollectionForm[GoalFormData, Goal]):
    schema = GoalFormData

    def update_status(
        self,
        goal_id: str,
        status: GoalStatus,
        callback: Callable[[str, GoalFormData], Goal],
    ) -> bool:
        item = self._find(goal_id)
        if item is None:
            return False
        values = self._values_of(item)
        values["status"] = GoalStatus(status)
        self.error = None
        try:
            updated = callback(goal_id, GoalFormData.model_validate(values))
        except Exception as exc:  # noqa: BLE001
            logger.exception("Failed to update status for goal %s", goal_id)
            self.error = str(exc) or exc.__class__.__name__
            return False
        self.items = [updated if existing.id == goal_id else existing for existing in self.items]
        return True

    @staticmethod
    def progress(goal: Goal) -> int:
        if goal.target <= 0:
            return 0
        return min(round(goal.current / goal.target * 100), 100)


SortBy = Literal["date", "price", "status"]
SortOrder = Literal["asc", "desc"]


@dataclass
class MonthlyVolume:
    month: str
    volume: float = 0.0
    count: int = 0


@dataclass
class ListingMetrics:
    successful_transactions: int = 0
    total_volume: float = 0.0
    average_price: float = 0.0
    closed_this_year: int = 0
    average_days_on_market: float = 0.0
    monthly: List[MonthlyVolume] = field(default_factory=list)


class ListingsForm(_CollectionForm[ListingFormData, Listing]):
    schema = ListingFormData

    def __init__(self, overview: Optional[ListingsOverview] = None) -> None:
        overview = overview or ListingsOverview()
        super().__init__([*overview.active_listings, *overview.successful_transactions])
        self.search_query = ""
        self.sort_by: SortBy = "date"
        self.sort_order: SortOrder = "desc"
        self.show_drafts_only = False
        self.selected: Set[str] = set()

    @property
    def active_listings(self) -> List[Listing]:
        return self._featured_first(self.filtered(item for item in self.items if item.status != ListingStatus.CLOSED))

    @property
    def successful_transactions(self) -> List[Listing]:
        return self._featured_first(self.filtered(item for item in self.items if item.status == ListingStatus.CLOSED))

    def filtered(self, listings: Iterable[Listing]) -> List[Listing]:
        query = self.search_query.strip().lower()
        matches = []
        for listing in listings:
            if self.show_drafts_only and listing.status != DRAFT_LISTING_STATUS:
                continue
            if query and not (
                query in listing.street_name.lower()
                or query in listing.city.lower()
                or query in listing.listing_key.lower()
            ):
                continue
            matches.append(listing)
        reverse = self.sort_order == "desc"
        if self.sort_by == "date":
            matches.sort(key=lambda listing: listing.listing_contract_date or date(1970, 1, 1), reverse=reverse)
        elif self.sort_by == "price":
            matches.sort(key=lambda listing: listing.list_price or 0, reverse=reverse)
        return matches

    @staticmethod
    def _featured_first(listings: List[Listing]) -> List[Listing]:
        return sorted(listings, key=lambda listing: not listing.is_featured)

    def toggle_selection(self, listing_key: str) -> None:
        if listing_key in self.selected:
            self.selected.discard(listing_key)
        else:
            self.selected.add(listing_key)

    def select_all(self) -> None:
        self.selected = {listing.listing_key for listing in self.active_listings}

    def clear_selection(self) -> None:
        self.selected.clear()

    def metrics(self, today: Optional[date] = None) -> ListingMetrics:
        reference = today or date.today()
        closed = [item for item in self.items if item.status == ListingStatus.CLOSED]
        count = len(closed)
        total_volume = sum(item.close_price or 0 for item in closed)
        days = sum(
            ((item.close_date or reference) - (item.listing_contract_date or reference)).days for item in closed
        )
        monthly: "OrderedDict[str, MonthlyVolume]" = OrderedDict()
        for item in closed:
            label = (item.close_date or reference).strftime("%b %y")
            bucket = monthly.setdefault(label, MonthlyVolume(month=label))
            bucket.volume += item.close_price or 0
            bucket.count += 1
        return ListingMetrics(
            successful_transactions=count,
            total_volume=total_volume,
            average_price=total_volume / (count or 1),
            closed_this_year=sum(1 for item in closed if item.close_date and item.close_date.year == reference.year),
            average_days_on_market=days / (count or 1),
            monthly=list(monthly.values()),
        )

    @staticmethod
    def format_price(price: float) -> str:
        if price >= 1_000_000:
            return f"${price / 1_000_000:.1f}M"
        return f"${price / 1_000:.0f}K"


class MarketingInfoForm(FormController[MarketingInfoFormData]):
    def __init__(self, context: Optional[ProfileContext] = None) -> None:
        super().__init__(MarketingInfoFormData)
        if context is not None:
            self.sync_from(context)

    def sync_from(self, context: ProfileContext) -> None:
        marketing = context.state.marketing_data
        if marketing is None:
            self.reset({})
            return
        self.reset(marketing.model_dump(mode="json", include=set(MarketingInfoFormData.model_fields)))

    def add_testimonial(self, name: str, content: str, *, title: Optional[str] = None, when: Optional[str] = None) -> None:
        testimonials = list(self.values.get("testimonials") or [])
        testimonials.append({"name": name, "title": title, "content": content, "date": when})
        self.set_value("testimonials", testimonials)

    def remove_testimonial(self, index: int) -> None:
        testimonials = list(self.values.get("testimonials") or [])
        if not 0 <= index < len(testimonials):
            return
        del testimonials[index]
        self.set_value("testimonials", testimonials)

    def set_social_link(self, platform: SocialMediaPlatform, url: Optional[str]) -> None:
        links = dict(self.values.get("social_media_links") or {})
        key = SocialMediaPlatform(platform).value
        if url and url.strip():
            links[key] = url.strip()
        else:
            links.pop(key, None)
        self.set_value("social_media_links", links)

    def update_marketing_info(self, callback: Callable[[MarketingInfoFormData], Any]) -> bool:
        return self.submit(callback)


__all__ = [
    "CoachProfileForm",
    "FormController",
    "GeneralForm",
    "GoalsForm",
    "ListingMetrics",
    "ListingsForm",
    "MarketingInfoForm",
    "MonthlyVolume",
    "PortfolioForm",
    "RecognitionsForm",
]
