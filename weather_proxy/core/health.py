"""In-memory health registry for the admin endpoint.

Counters live in process memory only; they are observability side effects and
never influence how a request is served.
"""
from __future__ import annotations

from dataclasses import dataclass
from threading import Lock
from typing import Dict, Optional

from .errors import ErrorKind


@dataclass(frozen=True)
class CacheStats:
    """Simple container for cache related counters."""

    hits: int = 0
    misses: int = 0
    keys: int = 0

    def as_dict(self) -> Dict[str, int]:
        return {"hits": self.hits, "misses": self.misses, "keys": self.keys}


class HealthRegistry:
    """Stores cache hit/miss counters and upstream failures by error kind."""

    def __init__(self) -> None:
        self._hits = 0
        self._misses = 0
        self._upstream_errors: Dict[ErrorKind, int] = {}
        self._lock = Lock()

    # -- Cache counters -----------------------------------------------------
    def record_cache_hit(self) -> None:
        with self._lock:
            self._hits += 1

    def record_cache_miss(self) -> None:
        with self._lock:
            self._misses += 1

    # -- Upstream errors ----------------------------------------------------
    def record_upstream_error(self, kind: ErrorKind, increment: int = 1) -> None:
        if increment <= 0:
            raise ValueError("increment must be positive")
        with self._lock:
            self._upstream_errors[kind] = self._upstream_errors.get(kind, 0) + increment

    # -- Snapshot -----------------------------------------------------------
    def snapshot(self, cache_keys: Optional[int] = None) -> Dict[str, object]:
        with self._lock:
            cache = CacheStats(hits=self._hits, misses=self._misses, keys=cache_keys or 0)
            errors = {kind.code: count for kind, count in self._upstream_errors.items()}
        return {"cache": cache.as_dict(), "upstream_errors": errors}


__all__ = ["CacheStats", "HealthRegistry"]
