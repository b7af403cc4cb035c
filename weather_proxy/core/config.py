"""Plain configuration values consumed by the core."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from django.core.exceptions import ImproperlyConfigured


@dataclass(frozen=True)
class WeatherConfig:
    base_url: str = "https://api.open-meteo.com/v1"
    timeout_ms: int = 2000
    retry_max_attempts: int = 2
    retry_delay_ms: int = 100
    cache_ttl_seconds: int = 60
    coordinate_precision: int = 2
    cache_max_size: int = 10_000
    coalesce_misses: bool = False

    def __post_init__(self) -> None:
        if not self.base_url:
            raise ImproperlyConfigured("WEATHER_UPSTREAM_BASE_URL must not be empty")
        if self.timeout_ms <= 0:
            raise ImproperlyConfigured("WEATHER_UPSTREAM_TIMEOUT_MS must be positive")
        if self.retry_max_attempts < 0:
            raise ImproperlyConfigured("WEATHER_RETRY_MAX_ATTEMPTS must not be negative")
        if self.retry_delay_ms < 0:
            raise ImproperlyConfigured("WEATHER_RETRY_DELAY_MS must not be negative")
        if self.cache_ttl_seconds <= 0:
            raise ImproperlyConfigured("WEATHER_CACHE_TTL_SECONDS must be positive")
        if self.coordinate_precision < 0:
            raise ImproperlyConfigured("WEATHER_CACHE_COORDINATE_PRECISION must not be negative")
        if self.cache_max_size < 1:
            raise ImproperlyConfigured("WEATHER_CACHE_MAX_SIZE must be at least 1")

    @property
    def timeout(self) -> float:
        return self.timeout_ms / 1000.0

    @property
    def retry_delay(self) -> float:
        return self.retry_delay_ms / 1000.0

    @classmethod
    def from_settings(cls, settings: Any) -> "WeatherConfig":
        """Build the config from a Django settings object (or any namespace)."""

        defaults = cls()
        return cls(
            base_url=str(getattr(settings, "WEATHER_UPSTREAM_BASE_URL", defaults.base_url)).rstrip("/"),
            timeout_ms=_as_int(settings, "WEATHER_UPSTREAM_TIMEOUT_MS", defaults.timeout_ms),
            retry_max_attempts=_as_int(settings, "WEATHER_RETRY_MAX_ATTEMPTS", defaults.retry_max_attempts),
            retry_delay_ms=_as_int(settings, "WEATHER_RETRY_DELAY_MS", defaults.retry_delay_ms),
            cache_ttl_seconds=_as_int(settings, "WEATHER_CACHE_TTL_SECONDS", defaults.cache_ttl_seconds),
            coordinate_precision=_as_int(
                settings, "WEATHER_CACHE_COORDINATE_PRECISION", defaults.coordinate_precision
            ),
            cache_max_size=_as_int(settings, "WEATHER_CACHE_MAX_SIZE", defaults.cache_max_size),
            coalesce_misses=bool(getattr(settings, "WEATHER_COALESCE_MISSES", defaults.coalesce_misses)),
        )


def _as_int(settings: Any, name: str, default: int) -> int:
    value = getattr(settings, name, default)
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ImproperlyConfigured(f"{name} must be an integer, got {value!r}") from exc


__all__ = ["WeatherConfig"]
