"""Tab visibility for the profile editor, derived from capabilities and specialties."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, Tuple

from .profile_types import DOMAIN_LABELS, RealEstateDomain, UserCapability

DEFAULT_TAB = "general"
DEFAULT_SUB_TAB = "basic-info"


@dataclass(frozen=True)
class ProfileTab:
    id: str
    label: str
    required_capabilities: Tuple[UserCapability, ...] = ()
    domain: Optional[RealEstateDomain] = None

    def is_visible(self, capabilities: Iterable[UserCapability]) -> bool:
        if not self.required_capabilities:
            return True
        held = set(capabilities)
        return any(capability in held for capability in self.required_capabilities)


BASE_TABS: Tuple[ProfileTab, ...] = (
    ProfileTab("general", "General Profile"),
    ProfileTab("coach", "Coach Profile", (UserCapability.COACH,)),
    ProfileTab("portfolio", "Portfolio", (UserCapability.COACH,)),
    ProfileTab("recognitions", "Recognitions", (UserCapability.COACH,)),
    ProfileTab("marketing", "Marketing Info", (UserCapability.COACH,)),
    ProfileTab("goals", "Goals", (UserCapability.COACH, UserCapability.MENTEE)),
)

# Domains with a listings sub-tab next to their profile tab.
_LISTING_DOMAINS = {
    RealEstateDomain.REALTOR,
    RealEstateDomain.INVESTOR,
    RealEstateDomain.PROPERTY_MANAGER,
    RealEstateDomain.COMMERCIAL,
}


def domain_tabs(specialties: Iterable[RealEstateDomain]) -> List[ProfileTab]:
    """Sub-tabs for confirmed specialties, in domain declaration order."""
    selected = {RealEstateDomain(value) for value in specialties}
    tabs: List[ProfileTab] = []
    for domain in RealEstateDomain:
        if domain not in selected:
            continue
        slug = domain.value.lower().replace("_", "-")
        tabs.append(ProfileTab(slug, f"{DOMAIN_LABELS[domain]} Profile", domain=domain))
        if domain in _LISTING_DOMAINS:
            tabs.append(ProfileTab(f"{slug}-listings", "Listings", domain=domain))
    return tabs


@dataclass
class ProfileTabsManager:
    capabilities: List[UserCapability] = field(default_factory=list)
    confirmed_specialties: List[RealEstateDomain] = field(default_factory=list)
    active_tab: str = DEFAULT_TAB
    active_sub_tab: str = DEFAULT_SUB_TAB

    @property
    def visible_tabs(self) -> List[ProfileTab]:
        return [tab for tab in BASE_TABS if tab.is_visible(self.capabilities)]

    @property
    def sub_tabs(self) -> List[ProfileTab]:
        return domain_tabs(self.confirmed_specialties)

    def is_tab_visible(self, tab_id: str) -> bool:
        return any(tab.id == tab_id for tab in self.visible_tabs)

    def select_tab(self, tab_id: str) -> str:
        self.active_tab = tab_id if self.is_tab_visible(tab_id) else DEFAULT_TAB
        return self.active_tab

    def select_sub_tab(self, sub_tab_id: str) -> str:
        known = {DEFAULT_SUB_TAB, *(tab.id for tab in self.sub_tabs)}
        self.active_sub_tab = sub_tab_id if sub_tab_id in known else DEFAULT_SUB_TAB
        return self.active_sub_tab

    def update_capabilities(self, capabilities: Sequence[UserCapability]) -> None:
        self.capabilities = [UserCapability(value) for value in capabilities]
        if not self.is_tab_visible(self.active_tab):
            self.active_tab = DEFAULT_TAB

    def update_specialties(self, specialties: Sequence[RealEstateDomain]) -> None:
        self.confirmed_specialties = [RealEstateDomain(value) for value in specialties]
        if self.active_sub_tab != DEFAULT_SUB_TAB and all(tab.id != self.active_sub_tab for tab in self.sub_tabs):
            self.active_sub_tab = DEFAULT_SUB_TAB


__all__ = ["BASE_TABS", "DEFAULT_SUB_TAB", "DEFAULT_TAB", "ProfileTab", "ProfileTabsManager", "domain_tabs"]
