"""Evaluation result cache.

In-memory key/value store with a time-to-live per entry and LRU eviction.
Expired entries are dropped lazily when read and swept periodically on write.
"""

import hashlib
import json
import logging
import threading
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 3600


@dataclass
class CacheEntry:
    """Cache entry with metadata."""

    value: Any
    created_at: float
    ttl_seconds: float

    def is_expired(self, now: float) -> bool:
        return now - self.created_at >= self.ttl_seconds


def build_cache_key(kind: str, *parts: Any) -> str:
    """Build a deterministic cache key from an evaluation kind and its inputs.

    Parts are encoded as canonical JSON so that ("a", None) and ("a", "None")
    produce different keys.
    """
    payload = json.dumps([kind, *parts], sort_keys=True, separators=(",", ":"), default=str)
    digest = hashlib.sha256(payload.encode("utf-8")).hexdigest()
    return f"{kind}:{digest}"


class ResultCache:
    """In-memory TTL cache safe to share between threads and coroutines."""

    def __init__(
        self,
        default_ttl_seconds: float = DEFAULT_TTL_SECONDS,
        max_size: int = 1000,
        cleanup_interval_seconds: float = 300,
        clock: Callable[[], float] = time.monotonic,
    ):
        if default_ttl_seconds <= 0:
            raise ValueError("default_ttl_seconds must be positive")
        if max_size <= 0:
            raise ValueError("max_size must be positive")
        self.default_ttl_seconds = default_ttl_seconds
        self.max_size = max_size
        self.cleanup_interval_seconds = cleanup_interval_seconds
        self._clock = clock
        self._entries: "OrderedDict[str, CacheEntry]" = OrderedDict()
        self._lock = threading.Lock()
        self._last_cleanup = clock()
        self._hits = 0
        self._misses = 0
        self._evictions = 0
        self._expirations = 0

    async def get(self, key: str) -> Optional[Any]:
        """Return the cached value, or None when absent or expired."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                self._misses += 1
                return None
            if entry.is_expired(self._clock()):
                del self._entries[key]
                self._expirations += 1
                self._misses += 1
                return None
            self._entries.move_to_end(key)
            self._hits += 1
            return entry.value

    async def set(self, key: str, value: Any, ttl_seconds: Optional[float] = None) -> None:
        ttl = self.default_ttl_seconds if ttl_seconds is None else ttl_seconds
        if ttl <= 0:
            raise ValueError("ttl_seconds must be positive")
        with self._lock:
            now = self._clock()
            if now - self._last_cleanup >= self.cleanup_interval_seconds:
                self._remove_expired(now)
            if key in self._entries:
                del self._entries[key]
            while len(self._entries) >= self.max_size:
                self._entries.popitem(last=False)
                self._evictions += 1
            self._entries[key] = CacheEntry(value=value, created_at=now, ttl_seconds=ttl)

    async def delete(self, key: str) -> bool:
        with self._lock:
            return self._entries.pop(key, None) is not None

    async def has(self, key: str) -> bool:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return False
            if entry.is_expired(self._clock()):
                del self._entries[key]
                self._expirations += 1
                return False
            return True

    async def clear(self) -> None:
        with self._lock:
            self._entries.clear()
        logger.info("Result cache cleared")

    def cleanup(self) -> int:
        """Remove every expired entry now and return how many were dropped."""
        with self._lock:
            return self._remove_expired(self._clock())

    def _remove_expired(self, now: float) -> int:
        expired = [key for key, entry in self._entries.items() if entry.is_expired(now)]
        for key in expired:
            del self._entries[key]
        self._expirations += len(expired)
        self._last_cleanup = now
        if expired:
            logger.debug("Removed %d expired cache entries", len(expired))
        return len(expired)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def get_stats(self) -> Dict[str, Any]:
        """Get cache statistics."""
        with self._lock:
            now = self._clock()
            total_entries = len(self._entries)
            expired_entries = sum(1 for e in self._entries.values() if e.is_expired(now))
            lookups = self._hits + self._misses
            return {
                "total_entries": total_entries,
                "expired_entries": expired_entries,
                "active_entries": total_entries - expired_entries,
                "max_size": self.max_size,
                "utilization": total_entries / self.max_size,
                "hits": self._hits,
                "misses": self._misses,
                "hit_rate": self._hits / lookups if lookups else 0.0,
                "evictions": self._evictions,
                "expirations": self._expirations,
            }


__all__ = ["CacheEntry", "ResultCache", "build_cache_key", "DEFAULT_TTL_SECONDS"]
