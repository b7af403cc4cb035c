"""Map core error kinds onto HTTP responses."""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from weather_proxy.api.serializers import TIMESTAMP_FORMAT
from weather_proxy.core.errors import ErrorKind, WeatherError


logger = logging.getLogger(__name__)

STATUS_BY_KIND: Dict[ErrorKind, int] = {
    ErrorKind.INVALID_INPUT: status.HTTP_400_BAD_REQUEST,
    ErrorKind.UPSTREAM_TIMEOUT: status.HTTP_504_GATEWAY_TIMEOUT,
    ErrorKind.UPSTREAM_UNAVAILABLE: status.HTTP_503_SERVICE_UNAVAILABLE,
    ErrorKind.UPSTREAM_SERVICE_ERROR: status.HTTP_502_BAD_GATEWAY,
    ErrorKind.DATA_PARSING_ERROR: status.HTTP_502_BAD_GATEWAY,
    ErrorKind.INTERNAL_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def error_payload(kind: ErrorKind, message: str, path: str) -> Dict[str, str]:
    return {
        "error": kind.code,
        "message": message,
        "timestamp": datetime.now(timezone.utc).strftime(TIMESTAMP_FORMAT),
        "path": path,
    }


def weather_exception_handler(exc: Exception, context: Dict[str, Any]) -> Optional[Response]:
    """DRF exception handler switching on :class:`ErrorKind`.

    DRF's own exceptions (404, 405, ...) keep the default rendering; anything
    else unexpected becomes a generic ``INTERNAL_ERROR`` without detail.
    """
    request = context.get("request")
    path = request.path if request is not None else ""

    if isinstance(exc, WeatherError):
        kind = exc.kind
        message = exc.message
        if kind is ErrorKind.INTERNAL_ERROR:
            logger.error("Internal error on %s", path, exc_info=exc)
            message = kind.default_message
        else:
            logger.warning("%s on %s: %s", kind.code, path, exc.message)
        return Response(error_payload(kind, message, path), status=STATUS_BY_KIND[kind])

    response = exception_handler(exc, context)
    if response is not None:
        return response

    logger.error("Unexpected error on %s", path, exc_info=exc)
    kind = ErrorKind.INTERNAL_ERROR
    return Response(error_payload(kind, kind.default_message, path), status=STATUS_BY_KIND[kind])


__all__ = ["STATUS_BY_KIND", "error_payload", "weather_exception_handler"]
