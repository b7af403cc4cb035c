from __future__ import annotations

from datetime import datetime, timezone
from typing import List


FORECAST_URL = "https://openmeteo.test/v1/forecast"
RETRIEVED_AT = datetime(2026, 1, 11, 10, 12, 54, 123456, tzinfo=timezone.utc)


class TimeController:
    def __init__(self) -> None:
        self.now = 0.0

    def advance(self, seconds: float) -> None:
        self.now += seconds

    def __call__(self) -> float:
        return self.now


class SleepRecorder:
    def __init__(self) -> None:
        self.calls: List[float] = []

    def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


def fixed_clock(when: datetime = RETRIEVED_AT):
    return lambda: when


def openmeteo_payload(
    latitude: float = 52.52,
    longitude: float = 13.41,
    temperature: float = 5.5,
    wind_speed: float = 10.2,
    include_current: bool = True,
) -> dict:
    payload = {
        "latitude": latitude,
        "longitude": longitude,
        "generationtime_ms": 0.5,
        "utc_offset_seconds": 0,
        "timezone": "GMT",
        "timezone_abbreviation": "GMT",
        "elevation": 38.0,
        "current_units": {
            "time": "iso8601",
            "interval": "seconds",
            "temperature_2m": "°C",
            "wind_speed_10m": "km/h",
        },
    }
    if include_current:
        payload["current"] = {
            "time": "2026-01-11T10:00",
            "interval": 900,
            "temperature_2m": temperature,
            "wind_speed_10m": wind_speed,
        }
    return payload
