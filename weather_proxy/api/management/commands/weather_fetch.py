"""Management command to fetch weather using the same stack as the API."""
from __future__ import annotations

import json
from typing import Any

from django.core.management.base import BaseCommand, CommandError

from weather_proxy.api.serializers import parse_coordinate
from weather_proxy.api.views import get_weather_service, serialize_snapshot
from weather_proxy.core.errors import WeatherError


class Command(BaseCommand):
    help = "Fetch current weather for the provided coordinates"

    def add_arguments(self, parser) -> None:  # noqa: D401
        parser.add_argument("--lat", type=float, required=True, help="Latitude in [-90, 90]")
        parser.add_argument("--lon", type=float, required=True, help="Longitude in [-180, 180]")

    def handle(self, *args: Any, **options: Any) -> None:  # noqa: D401
        try:
            coordinate = parse_coordinate({"lat": options["lat"], "lon": options["lon"]})
            snapshot = get_weather_service().get_current_weather(coordinate)
        except WeatherError as exc:
            raise CommandError(f"{exc.code}: {exc.message}") from exc

        self.stdout.write(json.dumps(serialize_snapshot(snapshot)))
