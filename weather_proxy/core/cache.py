from __future__ import annotations

import itertools
import threading
import time
from collections import OrderedDict
from typing import Any, Callable, List, Optional, Tuple


class _Segment:
    __slots__ = ("lock", "entries")

    def __init__(self) -> None:
        self.lock = threading.Lock()
        # key -> (expires_at, last_used, value), least recently used first
        self.entries: "OrderedDict[str, Tuple[float, int, Any]]" = OrderedDict()


class WeatherCache:
    """Thread-safe TTL cache with a least-recently-used size bound.

    Keys hash into independent segments, each guarded by its own lock, so
    concurrent requests for different coordinates rarely contend. Entries
    expire ``ttl`` seconds after they are written and are never updated in
    place; ``put`` on an existing key replaces the entry and restarts its TTL.

    ``max_entries`` bounds the cache as a whole. The entry count is shared
    across segments; when an insert pushes it over the bound, expired entries
    in the written segment go first, then the globally least recently used
    entry is evicted.
    """

    DEFAULT_TTL = 60.0
    DEFAULT_MAX_ENTRIES = 10_000
    DEFAULT_SEGMENTS = 16

    def __init__(
        self,
        ttl: float = DEFAULT_TTL,
        max_entries: int = DEFAULT_MAX_ENTRIES,
        segments: int = DEFAULT_SEGMENTS,
        time_func: Callable[[], float] = time.monotonic,
    ) -> None:
        if ttl <= 0:
            raise ValueError("ttl must be positive")
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        if segments < 1:
            raise ValueError("segments must be at least 1")
        self._ttl = float(ttl)
        self._max_entries = max_entries
        self._time_func = time_func
        self._segments: List[_Segment] = [_Segment() for _ in range(segments)]
        self._size = 0
        self._size_lock = threading.Lock()
        self._ticks = itertools.count()

    @property
    def ttl(self) -> float:
        return self._ttl

    @property
    def max_entries(self) -> int:
        return self._max_entries

    def get(self, key: str) -> Optional[Any]:
        segment = self._segment_for(key)
        now = self._time_func()
        with segment.lock:
            item = segment.entries.get(key)
            if item is None:
                return None
            expires_at, _, value = item
            if expires_at <= now:
                del segment.entries[key]
                self._resize(-1)
                return None
            segment.entries[key] = (expires_at, next(self._ticks), value)
            segment.entries.move_to_end(key)
            return value

    def put(self, key: str, value: Any) -> None:
        segment = self._segment_for(key)
        now = self._time_func()
        with segment.lock:
            replaced = segment.entries.pop(key, None) is not None
            segment.entries[key] = (now + self._ttl, next(self._ticks), value)
            if not replaced:
                self._resize(1)
            if self._over_capacity():
                self._purge_expired(segment, now)
        while self._over_capacity():
            if not self._evict_least_recently_used():
                break

    def clear(self) -> None:
        for segment in self._segments:
            with segment.lock:
                self._resize(-len(segment.entries))
                segment.entries.clear()

    def __len__(self) -> int:
        """Number of live entries; expired ones are dropped while counting."""
        now = self._time_func()
        total = 0
        for segment in self._segments:
            with segment.lock:
                self._purge_expired(segment, now)
                total += len(segment.entries)
        return total

    # helpers ------------------------------------------------------------
    def _segment_for(self, key: str) -> _Segment:
        return self._segments[hash(key) % len(self._segments)]

    def _resize(self, delta: int) -> None:
        with self._size_lock:
            self._size += delta

    def _over_capacity(self) -> bool:
        with self._size_lock:
            return self._size > self._max_entries

    def _purge_expired(self, segment: _Segment, now: float) -> None:
        expired = [key for key, (expires_at, _, _) in segment.entries.items() if expires_at <= now]
        for key in expired:
            del segment.entries[key]
        if expired:
            self._resize(-len(expired))

    def _evict_least_recently_used(self) -> bool:
        victim: Optional[_Segment] = None
        oldest = None
        for segment in self._segments:
            with segment.lock:
                if not segment.entries:
                    continue
                _, last_used, _ = next(iter(segment.entries.values()))
            if oldest is None or last_used < oldest:
                victim, oldest = segment, last_used
        if victim is None:
            return False
        with victim.lock:
            if victim.entries:
                victim.entries.popitem(last=False)
                self._resize(-1)
        return True


__all__ = ["WeatherCache"]
