from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


SOURCE_OPEN_METEO = "open-meteo"


@dataclass(frozen=True)
class Coordinate:
    """Raw coordinate exactly as received from the caller."""

    latitude: float
    longitude: float


@dataclass(frozen=True)
class NormalizedCoordinate:
    """Coordinate rounded to ``precision`` decimal digits on each axis."""

    latitude: float
    longitude: float
    precision: int


@dataclass(frozen=True)
class WeatherSnapshot:
    """Public current-weather result.

    Values keep the provider units:
    - temperature in Celsius
    - wind speed in kilometres per hour (km/h)

    ``retrieved_at`` is timezone aware (UTC) with whole-second precision.
    """

    location: NormalizedCoordinate
    temperature_c: float
    wind_speed_kmh: float
    source: str
    retrieved_at: datetime


__all__ = ["Coordinate", "NormalizedCoordinate", "WeatherSnapshot", "SOURCE_OPEN_METEO"]
