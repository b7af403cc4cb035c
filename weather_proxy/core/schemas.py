"""Payload schemas for the Open-Meteo current-weather response."""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

__all__ = ["CurrentConditions", "CurrentUnits", "UpstreamWeatherPayload"]


class CurrentUnits(BaseModel):
    model_config = ConfigDict(extra="ignore")

    time: Optional[str] = Field(default=None)
    interval: Optional[str] = Field(default=None)
    temperature_2m: Optional[str] = Field(default=None)
    wind_speed_10m: Optional[str] = Field(default=None)


class CurrentConditions(BaseModel):
    model_config = ConfigDict(extra="ignore")

    time: Optional[str] = Field(default=None)
    interval: Optional[int] = Field(default=None)
    temperature_2m: float = Field(...)
    wind_speed_10m: float = Field(...)


class UpstreamWeatherPayload(BaseModel):
    """Raw provider response; ``current`` is optional on the wire only."""

    model_config = ConfigDict(extra="ignore")

    latitude: float = Field(...)
    longitude: float = Field(...)
    generationtime_ms: Optional[float] = Field(default=None)
    utc_offset_seconds: Optional[int] = Field(default=None)
    timezone: Optional[str] = Field(default=None)
    timezone_abbreviation: Optional[str] = Field(default=None)
    elevation: Optional[float] = Field(default=None)
    current_units: Optional[CurrentUnits] = Field(default=None)
    current: Optional[CurrentConditions] = Field(default=None)
