from __future__ import annotations

import pytest

from weather_proxy.api.views import get_weather_service

from support import SleepRecorder, TimeController


@pytest.fixture
def time_controller() -> TimeController:
    return TimeController()


@pytest.fixture
def sleep_recorder() -> SleepRecorder:
    return SleepRecorder()


@pytest.fixture
def weather_service():
    get_weather_service.cache_clear()
    service = get_weather_service()
    yield service
    get_weather_service.cache_clear()
