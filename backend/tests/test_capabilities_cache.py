from __future__ import annotations

import pytest

from app.cache import CapabilitiesCache
from app.profile_models import CapabilitiesSnapshot
from app.profile_types import RealEstateDomain, UserCapability


class FakeClock:
    def __init__(self) -> None:
        self.now = 100.0

    def __call__(self) -> float:
        return self.now


def _snapshot() -> CapabilitiesSnapshot:
    return CapabilitiesSnapshot(
        capabilities=[UserCapability.COACH],
        real_estate_domains=[RealEstateDomain.REALTOR],
        active_domains=[RealEstateDomain.REALTOR],
    )


def test_entries_expire_after_ttl() -> None:
    clock = FakeClock()
    cache = CapabilitiesCache(ttl_seconds=10, clock=clock)
    cache.set("user-1", _snapshot())

    clock.now += 9.5
    assert cache.get("user-1") == _snapshot()
    clock.now += 0.5
    assert cache.get("user-1") is None


def test_cached_snapshots_are_copies() -> None:
    cache = CapabilitiesCache(ttl_seconds=10)
    snapshot = _snapshot()
    cache.set("user-1", snapshot)
    snapshot.active_domains.append(RealEstateDomain.MORTGAGE)

    cached = cache.get("user-1")
    assert cached.active_domains == [RealEstateDomain.REALTOR]
    cached.capabilities.clear()
    assert cache.get("user-1").capabilities == [UserCapability.COACH]


def test_invalidate_and_disabled_cache() -> None:
    cache = CapabilitiesCache(ttl_seconds=10)
    cache.set(" user-1 ", _snapshot())
    cache.invalidate("user-1")
    assert cache.get("user-1") is None

    disabled = CapabilitiesCache(ttl_seconds=0)
    disabled.set("user-1", _snapshot())
    assert disabled.get("user-1") is None


def test_blank_user_id_is_rejected() -> None:
    with pytest.raises(ValueError):
        CapabilitiesCache().get("  ")
