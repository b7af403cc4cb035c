from __future__ import annotations

import os

import django
import pytest
import requests_mock as requests_mock_lib


os.environ.setdefault("DJANGO_SECRET_KEY", "test-secret")
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "weather_proxy.settings")
os.environ.setdefault("WEATHER_UPSTREAM_BASE_URL", "https://openmeteo.test/v1")
os.environ.setdefault("WEATHER_RETRY_DELAY_MS", "0")

django.setup()


@pytest.fixture()
def requests_mock():
    with requests_mock_lib.Mocker() as mocker:
        yield mocker
