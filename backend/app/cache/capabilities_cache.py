"""Short-lived in-memory cache for per-user capability snapshots."""

from __future__ import annotations

import time
from dataclasses import dataclass
from threading import Lock
from typing import Callable, Dict, Optional

from ..profile_models import CapabilitiesSnapshot


def _normalize_user_id(user_id: str) -> str:
    normalized = (user_id or "").strip()
    if not normalized:
        raise ValueError("User id cannot be empty when caching capabilities.")
    return normalized


@dataclass
class _CapabilitiesEntry:
    snapshot: CapabilitiesSnapshot
    cached_at: float


class CapabilitiesCache:
    """Process-local TTL cache; a non-positive TTL disables caching."""

    def __init__(self, ttl_seconds: float = 10.0, clock: Callable[[], float] = time.monotonic) -> None:
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: Dict[str, _CapabilitiesEntry] = {}
        self._lock = Lock()

    def get(self, user_id: str) -> Optional[CapabilitiesSnapshot]:
        key = _normalize_user_id(user_id)
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if self.ttl_seconds <= 0 or self._clock() - entry.cached_at >= self.ttl_seconds:
                self._entries.pop(key, None)
                return None
            return entry.snapshot.model_copy(deep=True)

    def set(self, user_id: str, snapshot: CapabilitiesSnapshot) -> None:
        if self.ttl_seconds <= 0:
            return
        key = _normalize_user_id(user_id)
        with self._lock:
            self._entries[key] = _CapabilitiesEntry(snapshot=snapshot.model_copy(deep=True), cached_at=self._clock())

    def invalidate(self, user_id: str) -> None:
        key = _normalize_user_id(user_id)
        with self._lock:
            self._entries.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()


capabilities_cache = CapabilitiesCache()

__all__ = ["CapabilitiesCache", "capabilities_cache"]
