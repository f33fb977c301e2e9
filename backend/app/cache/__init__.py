"""In-memory caches shared across backend services."""

from .capabilities_cache import CapabilitiesCache, capabilities_cache

__all__ = ["CapabilitiesCache", "capabilities_cache"]
