"""Serializers for the weather API boundary."""
from __future__ import annotations

import math
from datetime import timezone
from typing import Any, Mapping

from rest_framework import serializers

from weather_proxy.core.entities import Coordinate
from weather_proxy.core.errors import ErrorKind, WeatherError

TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


def _bounded_float(name: str, label: str, limit: int) -> serializers.FloatField:
    message = f"{label} must be between -{limit} and {limit}"
    return serializers.FloatField(
        min_value=-limit,
        max_value=limit,
        error_messages={
            "required": f"Required parameter '{name}' is missing",
            "null": f"Required parameter '{name}' is missing",
            "invalid": f"{label} must be a valid decimal number",
            "min_value": message,
            "max_value": message,
        },
    )


class CoordinateQuerySerializer(serializers.Serializer):
    lat = _bounded_float("lat", "Latitude", 90)
    lon = _bounded_float("lon", "Longitude", 180)

    def validate_lat(self, value: float) -> float:
        if not math.isfinite(value):
            raise serializers.ValidationError("Latitude must be between -90 and 90")
        return value

    def validate_lon(self, value: float) -> float:
        if not math.isfinite(value):
            raise serializers.ValidationError("Longitude must be between -180 and 180")
        return value


def parse_coordinate(data: Mapping[str, Any]) -> Coordinate:
    """Validate ``lat``/``lon`` query values or raise an invalid-input error."""

    serializer = CoordinateQuerySerializer(data=data)
    if not serializer.is_valid():
        messages = [str(message) for errors in serializer.errors.values() for message in errors]
        raise WeatherError(ErrorKind.INVALID_INPUT, "; ".join(messages) or None)
    return Coordinate(
        latitude=serializer.validated_data["lat"],
        longitude=serializer.validated_data["lon"],
    )


class LocationSerializer(serializers.Serializer):
    lat = serializers.FloatField(source="latitude")
    lon = serializers.FloatField(source="longitude")


class CurrentWeatherSerializer(serializers.Serializer):
    temperatureC = serializers.FloatField(source="temperature_c")
    windSpeedKmh = serializers.FloatField(source="wind_speed_kmh")


class WeatherSnapshotSerializer(serializers.Serializer):
    location = LocationSerializer()
    current = CurrentWeatherSerializer(source="*")
    source = serializers.CharField()
    retrievedAt = serializers.DateTimeField(
        source="retrieved_at",
        format=TIMESTAMP_FORMAT,
        default_timezone=timezone.utc,
    )


__all__ = [
    "CoordinateQuerySerializer",
    "TIMESTAMP_FORMAT",
    "WeatherSnapshotSerializer",
    "parse_coordinate",
]
