from __future__ import annotations

import logging
import threading
from datetime import datetime, timezone
from typing import Callable, Optional

from ..cache import WeatherCache
from ..entities import SOURCE_OPEN_METEO, Coordinate, NormalizedCoordinate, WeatherSnapshot
from ..errors import ErrorKind, WeatherError
from ..health import HealthRegistry
from ..normalizer import DEFAULT_PRECISION, cache_key, normalize
from ..schemas import UpstreamWeatherPayload


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class WeatherService:
    """Read-through cache in front of the upstream current-weather client.

    Concurrent misses for the same key each call upstream unless
    ``coalesce_misses`` is set, in which case misses for a key are serialized
    on a striped lock and the cache is re-checked before fetching.
    """

    INFLIGHT_STRIPES = 64

    def __init__(
        self,
        *,
        provider,
        cache: Optional[WeatherCache] = None,
        precision: int = DEFAULT_PRECISION,
        health: Optional[HealthRegistry] = None,
        coalesce_misses: bool = False,
        clock: Callable[[], datetime] = _utcnow,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.provider = provider
        self.cache = cache if cache is not None else WeatherCache()
        self.precision = precision
        self.health = health if health is not None else HealthRegistry()
        self.coalesce_misses = coalesce_misses
        self._clock = clock
        self._inflight = [threading.Lock() for _ in range(self.INFLIGHT_STRIPES)]
        self._log = logger or logging.getLogger(self.__class__.__name__)

    # Public API ---------------------------------------------------------
    def get_current_weather(self, coordinate: Coordinate) -> WeatherSnapshot:
        location = normalize(coordinate.latitude, coordinate.longitude, self.precision)
        key = cache_key(location)
        cached = self._lookup(key)
        if cached is not None:
            return cached
        if not self.coalesce_misses:
            return self._fetch_and_store(key, location)
        with self._inflight[hash(key) % len(self._inflight)]:
            cached = self._lookup(key)
            if cached is not None:
                return cached
            return self._fetch_and_store(key, location)

    def cache_key_for(self, latitude: float, longitude: float) -> str:
        return cache_key(normalize(latitude, longitude, self.precision))

    def flush(self) -> None:
        self._log.info("Flushing weather cache (%s entries)", len(self.cache))
        self.cache.clear()

    def health_snapshot(self) -> dict:
        return self.health.snapshot(cache_keys=len(self.cache))

    # Helpers ------------------------------------------------------------
    def _lookup(self, key: str) -> Optional[WeatherSnapshot]:
        cached = self.cache.get(key)
        if cached is not None:
            self.health.record_cache_hit()
            self._log.debug("Cache hit for %s", key)
        return cached

    def _fetch_and_store(self, key: str, location: NormalizedCoordinate) -> WeatherSnapshot:
        self._log.info("Cache miss - fetching weather for %s", key)
        self.health.record_cache_miss()
        try:
            payload = self.provider.fetch_current(location)
            snapshot = self._to_snapshot(location, payload)
        except WeatherError as exc:
            self.health.record_upstream_error(exc.kind)
            self._log.warning("Weather lookup for %s failed: %s %s", key, exc.code, exc.message)
            raise
        self.cache.put(key, snapshot)
        return snapshot

    def _to_snapshot(self, location: NormalizedCoordinate, payload: UpstreamWeatherPayload) -> WeatherSnapshot:
        current = payload.current
        if current is None:
            raise WeatherError(ErrorKind.DATA_PARSING_ERROR, "No current weather data in response")
        return WeatherSnapshot(
            location=location,
            temperature_c=current.temperature_2m,
            wind_speed_kmh=current.wind_speed_10m,
            source=SOURCE_OPEN_METEO,
            retrieved_at=self._clock().astimezone(timezone.utc).replace(microsecond=0),
        )


__all__ = ["WeatherService"]
