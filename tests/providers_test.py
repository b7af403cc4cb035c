from __future__ import annotations

import pytest
import requests

from weather_proxy.core.entities import NormalizedCoordinate
from weather_proxy.core.errors import ErrorKind, WeatherError
from weather_proxy.core.providers.base import DEFAULT_USER_AGENT, RequestConfig
from weather_proxy.core.providers.openmeteo import OpenMeteoProvider

from support import FORECAST_URL, openmeteo_payload


BERLIN = NormalizedCoordinate(latitude=52.52, longitude=13.41, precision=2)


@pytest.fixture
def provider(sleep_recorder) -> OpenMeteoProvider:
    return OpenMeteoProvider(
        base_url="https://openmeteo.test/v1/",
        request_config=RequestConfig(timeout=1.0, retries=2, delay=0.1),
        sleep_func=sleep_recorder,
    )


def test_fetch_current_returns_parsed_payload(requests_mock, provider):
    requests_mock.get(FORECAST_URL, json=openmeteo_payload())

    payload = provider.fetch_current(BERLIN)

    assert payload.latitude == 52.52
    assert payload.longitude == 13.41
    assert payload.current.temperature_2m == 5.5
    assert payload.current.wind_speed_10m == 10.2
    assert requests_mock.call_count == 1


def test_fetch_current_sends_normalized_query(requests_mock, provider):
    requests_mock.get(FORECAST_URL, json=openmeteo_payload())

    provider.fetch_current(BERLIN)

    query = requests_mock.last_request.qs
    assert query["latitude"] == ["52.52"]
    assert query["longitude"] == ["13.41"]
    assert query["current"] == ["temperature_2m,wind_speed_10m"]
    assert requests_mock.last_request.timeout == 1.0


def test_session_sends_configured_headers(requests_mock, sleep_recorder):
    provider = OpenMeteoProvider(
        base_url="https://openmeteo.test/v1",
        request_config=RequestConfig(headers={"Accept": "application/json", "User-Agent": "forecast-client/2.0"}),
        sleep_func=sleep_recorder,
    )
    requests_mock.get(FORECAST_URL, json=openmeteo_payload())

    provider.fetch_current(BERLIN)

    headers = requests_mock.last_request.headers
    assert headers["Accept"] == "application/json"
    assert headers["User-Agent"] == "forecast-client/2.0"


def test_default_session_identifies_the_proxy(requests_mock, provider):
    requests_mock.get(FORECAST_URL, json=openmeteo_payload())

    provider.fetch_current(BERLIN)

    assert requests_mock.last_request.headers["User-Agent"] == DEFAULT_USER_AGENT


def test_retries_server_error_then_succeeds(requests_mock, provider, sleep_recorder):
    requests_mock.get(
        FORECAST_URL,
        [
            {"status_code": 503, "text": "unavailable"},
            {"json": openmeteo_payload()},
        ],
    )

    payload = provider.fetch_current(BERLIN)

    assert payload.current.temperature_2m == 5.5
    assert requests_mock.call_count == 2
    assert sleep_recorder.calls == [0.1]


def test_server_error_after_retries_is_service_error(requests_mock, provider, sleep_recorder):
    requests_mock.get(FORECAST_URL, status_code=500, text="boom")

    with pytest.raises(WeatherError) as excinfo:
        provider.fetch_current(BERLIN)

    assert excinfo.value.kind is ErrorKind.UPSTREAM_SERVICE_ERROR
    assert excinfo.value.upstream_status == 500
    assert requests_mock.call_count == 3
    assert sleep_recorder.calls == [0.1, 0.1]


def test_client_error_is_terminal(requests_mock, provider, sleep_recorder):
    requests_mock.get(FORECAST_URL, status_code=400, json={"error": True, "reason": "bad"})

    with pytest.raises(WeatherError) as excinfo:
        provider.fetch_current(BERLIN)

    assert excinfo.value.kind is ErrorKind.UPSTREAM_SERVICE_ERROR
    assert excinfo.value.upstream_status == 400
    assert requests_mock.call_count == 1
    assert sleep_recorder.calls == []


def test_quota_response_is_not_retried(requests_mock, provider):
    requests_mock.get(FORECAST_URL, status_code=429, text="quota exceeded")

    with pytest.raises(WeatherError) as excinfo:
        provider.fetch_current(BERLIN)

    assert excinfo.value.kind is ErrorKind.UPSTREAM_SERVICE_ERROR
    assert requests_mock.call_count == 1


def test_timeout_after_retries_is_upstream_timeout(requests_mock, provider):
    requests_mock.get(FORECAST_URL, exc=requests.exceptions.ReadTimeout)

    with pytest.raises(WeatherError) as excinfo:
        provider.fetch_current(BERLIN)

    assert excinfo.value.kind is ErrorKind.UPSTREAM_TIMEOUT
    assert isinstance(excinfo.value.__cause__, requests.Timeout)
    assert requests_mock.call_count == 3


def test_connect_timeout_is_classified_as_timeout(requests_mock, provider):
    requests_mock.get(FORECAST_URL, exc=requests.exceptions.ConnectTimeout)

    with pytest.raises(WeatherError) as excinfo:
        provider.fetch_current(BERLIN)

    assert excinfo.value.kind is ErrorKind.UPSTREAM_TIMEOUT


def test_connection_failure_is_upstream_unavailable(requests_mock, provider):
    requests_mock.get(FORECAST_URL, exc=requests.exceptions.ConnectionError)

    with pytest.raises(WeatherError) as excinfo:
        provider.fetch_current(BERLIN)

    assert excinfo.value.kind is ErrorKind.UPSTREAM_UNAVAILABLE
    assert requests_mock.call_count == 3


def test_kind_follows_last_failed_attempt(requests_mock, provider):
    requests_mock.get(
        FORECAST_URL,
        [
            {"exc": requests.exceptions.ReadTimeout},
            {"exc": requests.exceptions.ConnectionError},
            {"status_code": 502, "text": "bad gateway"},
        ],
    )

    with pytest.raises(WeatherError) as excinfo:
        provider.fetch_current(BERLIN)

    assert excinfo.value.kind is ErrorKind.UPSTREAM_SERVICE_ERROR
    assert requests_mock.call_count == 3


def test_transient_timeout_recovers(requests_mock, provider):
    requests_mock.get(
        FORECAST_URL,
        [
            {"exc": requests.exceptions.ReadTimeout},
            {"json": openmeteo_payload(temperature=-3.0)},
        ],
    )

    payload = provider.fetch_current(BERLIN)

    assert payload.current.temperature_2m == -3.0


def test_zero_retries_makes_a_single_attempt(requests_mock, sleep_recorder):
    provider = OpenMeteoProvider(
        base_url="https://openmeteo.test/v1",
        request_config=RequestConfig(retries=0),
        sleep_func=sleep_recorder,
    )
    requests_mock.get(FORECAST_URL, status_code=503)

    with pytest.raises(WeatherError):
        provider.fetch_current(BERLIN)

    assert requests_mock.call_count == 1
    assert sleep_recorder.calls == []


def test_missing_current_block_is_parsing_error(requests_mock, provider):
    requests_mock.get(FORECAST_URL, json=openmeteo_payload(include_current=False))

    with pytest.raises(WeatherError) as excinfo:
        provider.fetch_current(BERLIN)

    assert excinfo.value.kind is ErrorKind.DATA_PARSING_ERROR
    assert excinfo.value.message == "No current weather data in response"
    assert requests_mock.call_count == 1


def test_invalid_json_is_parsing_error(requests_mock, provider):
    requests_mock.get(FORECAST_URL, text="<html>not json</html>")

    with pytest.raises(WeatherError) as excinfo:
        provider.fetch_current(BERLIN)

    assert excinfo.value.kind is ErrorKind.DATA_PARSING_ERROR


def test_schema_mismatch_is_parsing_error(requests_mock, provider):
    payload = openmeteo_payload()
    payload["current"]["temperature_2m"] = "warm"
    requests_mock.get(FORECAST_URL, json=payload)

    with pytest.raises(WeatherError) as excinfo:
        provider.fetch_current(BERLIN)

    assert excinfo.value.kind is ErrorKind.DATA_PARSING_ERROR


def test_non_object_document_is_parsing_error(requests_mock, provider):
    requests_mock.get(FORECAST_URL, json=[1, 2, 3])

    with pytest.raises(WeatherError) as excinfo:
        provider.fetch_current(BERLIN)

    assert excinfo.value.kind is ErrorKind.DATA_PARSING_ERROR
