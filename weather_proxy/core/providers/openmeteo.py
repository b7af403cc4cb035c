from __future__ import annotations

from typing import Optional

from pydantic import ValidationError

from .base import WeatherProvider
from ..entities import NormalizedCoordinate
from ..errors import ErrorKind, WeatherError
from ..schemas import UpstreamWeatherPayload


CURRENT_FIELDS = ("temperature_2m", "wind_speed_10m")


class OpenMeteoProvider(WeatherProvider):
    base_url = "https://api.open-meteo.com/v1"
    forecast_path = "/forecast"

    def __init__(self, base_url: Optional[str] = None, **kwargs) -> None:
        super().__init__(**kwargs)
        self.base_url = (base_url or self.base_url).rstrip("/")

    @property
    def forecast_url(self) -> str:
        return f"{self.base_url}{self.forecast_path}"

    def fetch_current(self, location: NormalizedCoordinate) -> UpstreamWeatherPayload:
        """Fetch current conditions for an already normalized coordinate.

        Returns the parsed provider payload; mapping to the public shape is
        left to the caller, which owns the coordinate stamped on the result.
        """
        self._log.debug("Fetching weather for lat=%s, lon=%s", location.latitude, location.longitude)
        params = {
            "latitude": location.latitude,
            "longitude": location.longitude,
            "current": ",".join(CURRENT_FIELDS),
        }
        response = self._request("GET", self.forecast_url, params=params)
        payload = self._parse(self._json(response))
        if payload.current is None:
            self._log.error("Provider response has no current block")
            raise WeatherError(ErrorKind.DATA_PARSING_ERROR, "No current weather data in response")
        return payload

    # helpers ------------------------------------------------------------
    def _json(self, response) -> dict:
        try:
            data = response.json()
        except ValueError as exc:
            self._log.error("Failed to decode JSON", exc_info=exc)
            raise WeatherError(ErrorKind.DATA_PARSING_ERROR, "Upstream returned invalid JSON") from exc
        if not isinstance(data, dict):
            raise WeatherError(ErrorKind.DATA_PARSING_ERROR, "Upstream returned an unexpected document")
        return data

    def _parse(self, data: dict) -> UpstreamWeatherPayload:
        try:
            return UpstreamWeatherPayload.model_validate(data)
        except ValidationError as exc:
            self._log.error("Provider payload failed validation: %s", exc)
            raise WeatherError(ErrorKind.DATA_PARSING_ERROR) from exc


__all__ = ["OpenMeteoProvider", "CURRENT_FIELDS"]
