"""
CacheManager - Async-compatible response cache with TTL.

Features:
- Memory-based cache; the oldest write is evicted when full
- TTL checked against the caller's requested TTL on every read
- Injectable clock for deterministic tests
- Async lock around reads and writes
"""

import asyncio
import hashlib
import json
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Callable, Generic, TypeVar

from loguru import logger

T = TypeVar("T")

Clock = Callable[[], datetime]


@dataclass(frozen=True)
class CacheEntry(Generic[T]):
    """A single cache entry. Replaced wholesale, never updated in place."""

    data: T
    stored_at: datetime

    def is_live(self, now: datetime, ttl: timedelta) -> bool:
        """An entry is usable only while ``now - stored_at < ttl``."""
        return now - self.stored_at < ttl


class CacheManager:
    """
    Async-compatible in-memory cache keyed by operation fingerprints.

    A TTL of zero disables both reads and writes.

    Usage:
        cache = CacheManager(prefix="gql_", max_size=100)

        key = cache.generate_key(query, variables)
        data = await cache.get(key, ttl=timedelta(minutes=5))
        if data is None:
            data = await fetch_data()
            await cache.set(key, data, ttl=timedelta(minutes=5))
    """

    def __init__(
        self,
        prefix: str = "gql_",
        max_size: int = 100,
        clock: Clock = datetime.now,
        debug: bool = False,
    ):
        self._memory: dict[str, CacheEntry[Any]] = {}
        self._prefix = prefix
        self._max_size = max_size
        self._clock = clock
        self._debug = debug
        self._lock = asyncio.Lock()
        self._stats = CacheStats()

    def generate_key(
        self, operation: str, variables: dict[str, Any] | None = None
    ) -> str:
        """Deterministic fingerprint of an operation and its variables."""
        payload = json.dumps(
            {"query": operation, "variables": variables or {}},
            sort_keys=True,
            separators=(",", ":"),
            default=str,
        )
        digest = hashlib.sha256(payload.encode()).hexdigest()
        return f"{self._prefix}{digest}"

    async def get(self, key: str, ttl: timedelta) -> Any | None:
        """
        Get value from cache.

        Returns the stored data if an entry exists and is younger than ``ttl``,
        None otherwise.
        """
        if ttl <= timedelta(0):
            return None

        async with self._lock:
            entry = self._memory.get(key)
            if entry is None:
                self._stats.misses += 1
                self._log(f"MISS: {key[:20]}...")
                return None

            if not entry.is_live(self._clock(), ttl):
                self._stats.misses += 1
                self._log(f"EXPIRED: {key[:20]}...")
                return None

            self._stats.hits += 1
            self._log(f"HIT: {key[:20]}...")
            return entry.data

    async def set(self, key: str, data: Any, ttl: timedelta) -> None:
        """
        Store a value under ``key``.

        Args:
            key: Cache key
            data: Data to cache
            ttl: Requested time to live; zero means the value is not stored
        """
        if ttl <= timedelta(0):
            return

        entry = CacheEntry(data=data, stored_at=self._clock())

        async with self._lock:
            if len(self._memory) >= self._max_size and key not in self._memory:
                self._evict_oldest()

            self._memory[key] = entry
            self._log(f"SET: {key[:20]}... (TTL: {ttl.total_seconds()}s)")

    async def clear(self) -> int:
        """Clear all cache entries. Returns count of removed entries."""
        async with self._lock:
            count = len(self._memory)
            self._memory.clear()
            self._log(f"CLEAR: {count} entries removed")
            return count

    def _evict_oldest(self) -> None:
        """Evict the oldest entry. Caller holds the lock."""
        if not self._memory:
            return

        oldest_key = min(
            self._memory.keys(),
            key=lambda k: self._memory[k].stored_at,
        )
        del self._memory[oldest_key]
        self._stats.evictions += 1
        self._log(f"EVICT: {oldest_key[:20]}...")

    def __len__(self) -> int:
        return len(self._memory)

    def get_stats(self) -> "CacheStats":
        """Get cache statistics."""
        self._stats.size = len(self._memory)
        self._stats.max_size = self._max_size
        return self._stats

    def _log(self, message: str) -> None:
        """Log debug message if debug mode is enabled."""
        if self._debug:
            logger.debug(f"[CacheManager] {message}")


@dataclass
class CacheStats:
    """Cache statistics."""

    hits: int = 0
    misses: int = 0
    evictions: int = 0
    size: int = 0
    max_size: int = 0

    @property
    def hit_rate(self) -> float:
        """Calculate cache hit rate."""
        total = self.hits + self.misses
        if total == 0:
            return 0.0
        return self.hits / total

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "hits": self.hits,
            "misses": self.misses,
            "evictions": self.evictions,
            "size": self.size,
            "max_size": self.max_size,
            "hit_rate": f"{self.hit_rate:.2%}",
        }
