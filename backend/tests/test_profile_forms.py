from __future__ import annotations

from datetime import date

from app.profile_context import ProfileState
from app.profile_forms import (
    CoachProfileForm,
    GeneralForm,
    GoalsForm,
    ListingsForm,
    MarketingInfoForm,
    PortfolioForm,
    RecognitionsForm,
)
from app.profile_models import (
    CoachProfile,
    Goal,
    Listing,
    ListingsOverview,
    MarketingInfo,
    PortfolioItem,
    Recognition,
    UserProfile,
)
from app.profile_types import GoalStatus, GoalType, ListingStatus, SocialMediaPlatform


class FakeContext:
    def __init__(self, state: ProfileState, succeed: bool = True) -> None:
        self.state = state
        self.succeed = succeed
        self.calls = []

    def update_general_data(self, data) -> bool:
        self.calls.append(data)
        return self.succeed

    def update_coach_data(self, data) -> bool:
        self.calls.append(data)
        return self.succeed


def _user(**fields) -> UserProfile:
    values = {"id": "u-1", "email": "kim@example.com", "first_name": "Kim", "last_name": "Lowe"}
    values.update(fields)
    return UserProfile(**values)


def _listing(key: str, **fields) -> Listing:
    values = {"id": key, "user_id": "u-1", "listing_key": key, "street_name": "Main St", "city": "Austin"}
    values.update(fields)
    return Listing(**values)


def test_general_form_tracks_dirty_state_and_errors() -> None:
    context = FakeContext(ProfileState(general_data=_user(display_name="Kim", primary_market="Austin")))
    form = GeneralForm(context)
    assert form.is_dirty is False

    form.set_value("display_name", "")
    assert form.is_dirty is True
    assert form.submit_to(context) is False
    assert "display_name" in form.errors
    assert context.calls == []

    form.set_value("display_name", "Kim L.")
    assert form.submit_to(context) is True
    assert context.calls[0].display_name == "Kim L."
    assert form.is_dirty is False


def test_failed_callback_sets_submit_error() -> None:
    context = FakeContext(ProfileState(general_data=_user(display_name="Kim", primary_market="Austin")), succeed=False)
    form = GeneralForm(context)
    assert form.submit_to(context) is False
    assert form.submit_error == "Submission failed."
    assert form.is_submitting is False


def test_coach_form_previews_completion() -> None:
    state = ProfileState(
        general_data=_user(
            bio="Relocation specialist mentoring agents on corporate and military moves.",
            languages=["English"],
        ),
        coach_data=CoachProfile(user_id="u-1", hourly_rate=90, years_coaching=1),
    )
    form = CoachProfileForm(FakeContext(state))
    assert form.values["languages"] == ["English"]

    form.toggle_specialty("REALTOR")
    form.toggle_specialty("INVESTOR")
    form.toggle_specialty("REALTOR")
    assert form.specialties == ["INVESTOR"]

    completion = form.preview_completion()
    assert completion.missing_required_fields == ["profile_image_url", "calendly_url", "event_type_url"]
    assert form.missing_fields_message() == (
        "Adding Profile Image, Calendly URL and Event Type URL would improve your profile completion."
    )


def test_coach_form_fills_schema_defaults_for_unset_columns() -> None:
    state = ProfileState(
        general_data=_user(),
        coach_data=CoachProfile(user_id="u-1", years_coaching=None, hourly_rate=None),
    )
    form = CoachProfileForm(FakeContext(state))
    assert "years_coaching" not in form.values
    assert "profile_image_url" not in form.values

    form.set_value("hourly_rate", 100)
    submitted = []
    assert form.submit(submitted.append) is True
    assert submitted[0].years_coaching == 0
    assert submitted[0].profile_image_url is None


def test_portfolio_sorting_and_editing() -> None:
    items = [
        PortfolioItem(id="a", user_id="u-1", type="PROPERTY_SALE", title="Old", date=date(2021, 1, 1)),
        PortfolioItem(id="b", user_id="u-1", type="PROPERTY_SALE", title="New", date=date(2024, 1, 1)),
        PortfolioItem(id="c", user_id="u-1", type="COMMERCIAL_DEAL", title="Star", featured=True, is_visible=False),
    ]
    form = PortfolioForm(items)
    assert [item.id for item in form.sorted_items] == ["c", "b", "a"]
    assert [item.id for item in form.visible_items] == ["b", "a"]

    form.start_edit("a")
    form.editor.set_value("title", "Renamed")
    assert form.save(lambda item_id, data: items[0].model_copy(update={"title": data.title}))
    assert [item.title for item in form.items] == ["Renamed", "New", "Star"]
    assert form.editing_id is None


def test_collection_remove_reports_errors() -> None:
    recognition = Recognition(id="r-1", user_id="u-1", title="Award", type="AWARD", issue_date=date(2022, 1, 1))
    form = RecognitionsForm([recognition])

    def fail(item_id: str) -> None:
        raise RuntimeError("offline")

    assert form.remove("r-1", fail) is False
    assert form.error == "offline"
    assert form.remove("r-1", lambda item_id: None) is True
    assert form.items == []


def test_recognition_visibility_toggle() -> None:
    recognition = Recognition(id="r-1", user_id="u-1", title="Award", type="AWARD", issue_date=date(2022, 1, 1))
    form = RecognitionsForm([recognition])

    def update(recognition_id, data):
        return recognition.model_copy(update={"is_visible": data.is_visible})

    assert form.toggle_visibility("r-1", update) is True
    assert form.items[0].is_visible is False
    assert form.toggle_visibility("missing", update) is False


def test_goal_progress_and_status() -> None:
    goal = Goal(
        id="g-1",
        user_id="u-1",
        title="Referrals",
        target=8,
        current=6,
        deadline=date(2030, 1, 1),
        type=GoalType.REFERRALS,
    )
    assert GoalsForm.progress(goal) == 75
    assert GoalsForm.progress(goal.model_copy(update={"current": 20})) == 100
    assert GoalsForm.progress(goal.model_copy(update={"target": 0})) == 0

    form = GoalsForm([goal])
    assert form.update_status("g-1", GoalStatus.COMPLETED, lambda goal_id, data: goal.model_copy(update={"status": data.status}))
    assert form.items[0].status == GoalStatus.COMPLETED


def test_listings_filtering_and_selection() -> None:
    overview = ListingsOverview(
        active_listings=[
            _listing("A1", list_price=400000, listing_contract_date=date(2024, 2, 1)),
            _listing("A2", city="Round Rock", list_price=650000, status=ListingStatus.INCOMPLETE),
            _listing("A3", list_price=300000, is_featured=True, listing_contract_date=date(2023, 1, 1)),
        ],
    )
    form = ListingsForm(overview)
    assert [listing.listing_key for listing in form.active_listings] == ["A3", "A1", "A2"]

    form.sort_by = "price"
    form.sort_order = "asc"
    assert [listing.listing_key for listing in form.active_listings] == ["A3", "A1", "A2"]

    form.search_query = "round"
    assert [listing.listing_key for listing in form.active_listings] == ["A2"]

    form.search_query = ""
    form.show_drafts_only = True
    assert [listing.listing_key for listing in form.active_listings] == ["A2"]

    form.show_drafts_only = False
    form.select_all()
    assert form.selected == {"A1", "A2", "A3"}
    form.toggle_selection("A1")
    assert form.selected == {"A2", "A3"}
    form.clear_selection()
    assert form.selected == set()


def test_listing_metrics() -> None:
    closed = [
        _listing(
            "C1",
            status=ListingStatus.CLOSED,
            listing_contract_date=date(2024, 1, 1),
            close_date=date(2024, 1, 31),
            close_price=500000,
        ),
        _listing(
            "C2",
            status=ListingStatus.CLOSED,
            listing_contract_date=date(2023, 11, 1),
            close_date=date(2023, 12, 11),
            close_price=1500000,
        ),
    ]
    form = ListingsForm(ListingsOverview(successful_transactions=closed))

    metrics = form.metrics(today=date(2024, 6, 1))

    assert metrics.successful_transactions == 2
    assert metrics.total_volume == 2000000
    assert metrics.average_price == 1000000
    assert metrics.closed_this_year == 1
    assert metrics.average_days_on_market == 35
    assert [(bucket.month, bucket.count) for bucket in metrics.monthly] == [("Jan 24", 1), ("Dec 23", 1)]
    assert ListingsForm.format_price(1500000) == "$1.5M"
    assert ListingsForm.format_price(425000) == "$425K"


def test_marketing_form_testimonials_and_links() -> None:
    state = ProfileState(marketing_data=MarketingInfo(user_id="u-1", slogan="Home starts here"))
    form = MarketingInfoForm(FakeContext(state))
    assert form.values["slogan"] == "Home starts here"

    form.add_testimonial("Ana", "Sold in a week!", title="Seller")
    form.add_testimonial("Raj", "Great negotiator")
    form.remove_testimonial(0)
    form.remove_testimonial(5)
    form.set_social_link(SocialMediaPlatform.YOUTUBE, " https://youtube.com/@home ")
    form.set_social_link(SocialMediaPlatform.TIKTOK, "")

    submitted = []
    assert form.update_marketing_info(submitted.append) is True
    data = submitted[0]
    assert [item.name for item in data.testimonials] == ["Raj"]
    assert data.social_media_links == {SocialMediaPlatform.YOUTUBE: "https://youtube.com/@home"}
