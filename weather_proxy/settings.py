"""Django settings for the weather proxy."""
from __future__ import annotations

from pathlib import Path
import os

from django.core.exceptions import ImproperlyConfigured

BASE_DIR = Path(__file__).resolve().parent.parent


def env(name: str, default: str | None = None) -> str:
    """Fetch environment variables while allowing explicit defaults."""

    value = os.environ.get(name, default)
    if value is None:
        raise ImproperlyConfigured(f"Environment variable {name} is required")
    return value


SECRET_KEY = env("DJANGO_SECRET_KEY")
DEBUG = os.environ.get("DJANGO_DEBUG", "0") == "1"
ALLOWED_HOSTS = os.environ.get("DJANGO_ALLOWED_HOSTS", "*").split(",")

INSTALLED_APPS = [
    "django.contrib.contenttypes",
    "django.contrib.auth",
    "rest_framework",
    "weather_proxy.api",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
]

ROOT_URLCONF = "weather_proxy.urls"

WSGI_APPLICATION = "weather_proxy.wsgi.application"

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# Nothing is persisted; the database only satisfies contrib app checks.
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": os.environ.get("DB_NAME", ":memory:"),
    }
}

WEATHER_UPSTREAM_BASE_URL = env("WEATHER_UPSTREAM_BASE_URL", "https://api.open-meteo.com/v1")
WEATHER_UPSTREAM_TIMEOUT_MS = env("WEATHER_UPSTREAM_TIMEOUT_MS", "2000")
WEATHER_RETRY_MAX_ATTEMPTS = env("WEATHER_RETRY_MAX_ATTEMPTS", "2")
WEATHER_RETRY_DELAY_MS = env("WEATHER_RETRY_DELAY_MS", "100")
WEATHER_CACHE_TTL_SECONDS = env("WEATHER_CACHE_TTL_SECONDS", "60")
WEATHER_CACHE_COORDINATE_PRECISION = env("WEATHER_CACHE_COORDINATE_PRECISION", "2")
WEATHER_CACHE_MAX_SIZE = env("WEATHER_CACHE_MAX_SIZE", "10000")
WEATHER_COALESCE_MISSES = os.environ.get("WEATHER_COALESCE_MISSES", "0") == "1"

REST_FRAMEWORK = {
    "DEFAULT_RENDERER_CLASSES": [
        "rest_framework.renderers.JSONRenderer",
    ],
    "DEFAULT_PARSER_CLASSES": [
        "rest_framework.parsers.JSONParser",
    ],
    "DEFAULT_AUTHENTICATION_CLASSES": [],
    "DEFAULT_PERMISSION_CLASSES": [
        "rest_framework.permissions.AllowAny",
    ],
    "UNAUTHENTICATED_USER": None,
    "EXCEPTION_HANDLER": "weather_proxy.api.exceptions.weather_exception_handler",
}

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "default": {
            "format": "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "default",
        },
    },
    "root": {
        "handlers": ["console"],
        "level": LOG_LEVEL,
    },
}

LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True
