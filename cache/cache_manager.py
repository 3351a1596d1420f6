"""
Dataset Cache - parsed export files, keyed by path.

Only loaded files are cached. Processing results are always recomputed:
every chart request redoes interpolation, smoothing and the rest on the
cached records.
"""

import threading
import time
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Any, Optional

from config import config


@dataclass
class CacheEntry:
    """Single cache entry with value and expiration."""
    value: Any
    expires_at: float
    created_at: float = field(default_factory=time.time)


class LRUCache:
    """
    LRU cache with per-entry TTL.

    Request handlers run in FastAPI's threadpool, so every access holds the lock.
    """

    def __init__(self, max_size: int = 64):
        self._cache: "OrderedDict[str, CacheEntry]" = OrderedDict()
        self._max_size = max_size
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[Any]:
        """Get value if it exists and has not expired."""
        with self._lock:
            entry = self._cache.get(key)
            if entry is None:
                return None

            if time.time() > entry.expires_at:
                del self._cache[key]
                return None

            self._cache.move_to_end(key)
            return entry.value

    def set(self, key: str, value: Any, ttl: float) -> None:
        """Set value with TTL in seconds, evicting the oldest entries if full."""
        with self._lock:
            self._cache.pop(key, None)
            while self._cache and len(self._cache) >= self._max_size:
                self._cache.popitem(last=False)

            self._cache[key] = CacheEntry(value=value, expires_at=time.time() + ttl)

    def clear(self) -> None:
        with self._lock:
            self._cache.clear()

    def stats(self) -> dict:
        """Get cache statistics."""
        now = time.time()
        with self._lock:
            total = len(self._cache)
            valid = sum(1 for e in self._cache.values() if e.expires_at > now)
        return {
            'total_entries': total,
            'valid_entries': valid,
            'expired_entries': total - valid,
            'max_size': self._max_size,
        }


class CacheManager:
    """Holds parsed dataset files for config.data_cache_ttl seconds."""

    def __init__(self, max_size: int = config.max_cache_size, ttl: Optional[float] = None):
        self._datasets = LRUCache(max_size=max_size)
        self._ttl = ttl

    @property
    def ttl(self) -> float:
        return self._ttl if self._ttl is not None else config.data_cache_ttl

    def get_dataset(self, path: str) -> Optional[list]:
        """Get cached records for a dataset file."""
        return self._datasets.get(self._dataset_key(path))

    def set_dataset(self, path: str, records: Any) -> None:
        """Cache parsed records for a dataset file."""
        if self.ttl <= 0:
            return
        self._datasets.set(self._dataset_key(path), records, self.ttl)

    def _dataset_key(self, path: str) -> str:
        return f"dataset:{path}"

    def clear(self) -> None:
        self._datasets.clear()

    def stats(self) -> dict:
        return {'datasets': self._datasets.stats()}


# Global cache manager instance
cache_manager = CacheManager()
