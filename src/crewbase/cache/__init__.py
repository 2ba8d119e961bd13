# ABOUTME: Cache layer: last-good value per upstream source with disk persistence
# ABOUTME: Exposes the CacheManager and its storage backends

from .manager import DEFAULT_TTL_SECONDS, CacheEntry, CacheManager, Clock
from .storage import CacheStorage, JsonFileStorage, MemoryStorage

__all__ = [
    "DEFAULT_TTL_SECONDS",
    "CacheEntry",
    "CacheManager",
    "CacheStorage",
    "Clock",
    "JsonFileStorage",
    "MemoryStorage",
]
