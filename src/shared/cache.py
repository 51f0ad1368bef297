"""Per-process TTL caches with explicit invalidation.

Storefront reads go through a named :class:`TTLCache`; back-office writes call
:meth:`CacheService.invalidate` for every cache their change affects, so admin
edits are visible on the next request rather than after expiry.

Usage:
    carousel_cache = caches.register("carousel", ttl=300)
    slides = carousel_cache.get_or_set("active", lambda: load_slides())
    ...
    caches.invalidate("carousel")
"""

import threading
import time
from collections.abc import Callable
from typing import Any

import structlog

logger = structlog.get_logger(__name__)

_MISSING = object()


class TTLCache:
    def __init__(self, name: str, ttl: float, clock: Callable[[], float] = time.monotonic) -> None:
        self.name = name
        self.ttl = ttl
        self._clock = clock
        self._entries: dict[Any, tuple[float, Any]] = {}
        self._lock = threading.Lock()

    def get(self, key, default=None):
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return default
            expires_at, value = entry
            if expires_at <= self._clock():
                del self._entries[key]
                return default
            return value

    def set(self, key, value) -> None:
        with self._lock:
            self._entries[key] = (self._clock() + self.ttl, value)

    def get_or_set(self, key, factory: Callable[[], Any]):
        value = self.get(key, _MISSING)
        if value is _MISSING:
            value = factory()
            self.set(key, value)
        return value

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)


class CacheService:
    """Registry of named caches plus the invalidation hooks writes call into."""

    def __init__(self) -> None:
        self._caches: dict[str, TTLCache] = {}

    def register(self, name: str, ttl: float) -> TTLCache:
        cache = self._caches.get(name)
        if cache is None:
            cache = TTLCache(name, ttl)
            self._caches[name] = cache
        return cache

    def get(self, name: str) -> TTLCache:
        return self._caches[name]

    def invalidate(self, *names: str) -> None:
        for name in names:
            cache = self._caches.get(name)
            if cache is not None:
                cache.clear()
                logger.debug("cache_invalidated", cache=name)

    def clear_all(self) -> None:
        for cache in self._caches.values():
            cache.clear()


caches = CacheService()
