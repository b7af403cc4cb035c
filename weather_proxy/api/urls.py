"""API URL configuration."""
from __future__ import annotations

from django.urls import path

from weather_proxy.api.views import CacheView, CurrentWeatherView, HealthView

urlpatterns = [
    path("v1/weather/current", CurrentWeatherView.as_view(), name="weather-current"),
    path("admin/health", HealthView.as_view(), name="admin-health"),
    path("admin/cache", CacheView.as_view(), name="admin-cache"),
]
