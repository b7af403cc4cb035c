"""REST API views for current weather."""
from __future__ import annotations

import logging
from functools import lru_cache

from django.conf import settings
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from weather_proxy.api.serializers import WeatherSnapshotSerializer, parse_coordinate
from weather_proxy.core.cache import WeatherCache
from weather_proxy.core.config import WeatherConfig
from weather_proxy.core.entities import WeatherSnapshot
from weather_proxy.core.providers.base import RequestConfig
from weather_proxy.core.providers.openmeteo import OpenMeteoProvider
from weather_proxy.core.services.weather import WeatherService


logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_weather_service() -> WeatherService:
    config = WeatherConfig.from_settings(settings)
    provider = OpenMeteoProvider(
        base_url=config.base_url,
        request_config=RequestConfig(
            timeout=config.timeout,
            retries=config.retry_max_attempts,
            delay=config.retry_delay,
        ),
    )
    cache = WeatherCache(ttl=config.cache_ttl_seconds, max_entries=config.cache_max_size)
    logger.info(
        "Weather service ready: upstream=%s ttl=%ss precision=%s max_size=%s",
        config.base_url,
        config.cache_ttl_seconds,
        config.coordinate_precision,
        config.cache_max_size,
    )
    return WeatherService(
        provider=provider,
        cache=cache,
        precision=config.coordinate_precision,
        coalesce_misses=config.coalesce_misses,
    )


def serialize_snapshot(snapshot: WeatherSnapshot) -> dict:
    return dict(WeatherSnapshotSerializer(snapshot).data)


class CurrentWeatherView(APIView):
    """Provide current weather for the requested coordinates."""

    def get(self, request, *args, **kwargs):  # noqa: D401
        """Return the weather snapshot for ``lat``/``lon``."""
        coordinate = parse_coordinate(request.query_params)
        logger.info("Received request for weather at lat=%s, lon=%s", coordinate.latitude, coordinate.longitude)
        snapshot = get_weather_service().get_current_weather(coordinate)
        return Response(serialize_snapshot(snapshot), status=status.HTTP_200_OK)


class HealthView(APIView):
    """Serve cache and upstream counters for operators."""

    def get(self, request, *args, **kwargs):
        return Response(get_weather_service().health_snapshot(), status=status.HTTP_200_OK)


class CacheView(APIView):
    def delete(self, request, *args, **kwargs):
        get_weather_service().flush()
        return Response(status=status.HTTP_204_NO_CONTENT)
