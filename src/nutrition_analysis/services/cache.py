"""Bounded, expiring cache for nutrition estimates."""

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from nutrition_analysis.domain.nutrition import CacheStats, NutritionFacts

_logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class _CacheEntry:
    value: NutritionFacts
    created_at: datetime
    access_count: int = 0


class NutritionCache:
    """In-memory nutrition cache with lazy expiry and least-used eviction.

    Entries expire ``ttl_hours`` after they were stored, but are only removed
    when read past that point. When the cache is full, ``set`` evicts the entry
    with the lowest access count; ties go to the oldest inserted entry.
    """

    def __init__(
        self,
        max_size: int = 1000,
        ttl_hours: float = 24,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        if max_size <= 0:
            raise ValueError("max_size must be positive")
        if ttl_hours <= 0:
            raise ValueError("ttl_hours must be positive")
        self.max_size = max_size
        self.ttl = timedelta(hours=ttl_hours)
        self._clock = clock
        self._entries: dict[str, _CacheEntry] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> NutritionFacts | None:
        """Return cached facts, or None when missing or expired."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if self._clock() - entry.created_at > self.ttl:
                del self._entries[key]
                _logger.debug("Nutrition cache entry expired: key=%s", key)
                return None
            entry.access_count += 1
            return entry.value

    def set(self, key: str, value: NutritionFacts) -> None:
        """Store facts under key, evicting one entry first if full."""
        with self._lock:
            if len(self._entries) >= self.max_size:
                self._evict_least_used()
            # Overwrites keep their slot but start over with a zero access count.
            self._entries[key] =_CacheEntry(value=value, created_at=self._clock())

    def clear(self) -> None:
        """Drop every cached entry."""
        with self._lock:
            self._entries.clear()

    def get_stats(self) -> CacheStats:
        """Return size, capacity and average accesses per live entry."""
        with self._lock:
            size = len(self._entries)
            total_accesses = sum(entry.access_count for entry in self._entries.values())
        hit_rate = total_accesses / size if size else 0.0
        return CacheStats(size=size, max_size=self.max_size, hit_rate=hit_rate)

    def _evict_least_used(self) -> None:
        least_used_key: str | None = None
        least_used_count: int | None = None
        for key, entry in self._entries.items():
            if least_used_count is None or entry.access_count < least_used_count:
                least_used_key = key
                least_used_count = entry.access_count
        if least_used_key is not None:
            del self._entries[least_used_key]
            _logger.debug(
                "Nutrition cache evicted: key=%s access_count=%s",
                least_used_key,
                least_used_count,
            )
