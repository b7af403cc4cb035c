"""Error taxonomy shared by the core and the HTTP boundary."""
from __future__ import annotations

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Closed set of failure kinds; the value is the wire error code."""

    INVALID_INPUT = "VALIDATION_ERROR"
    UPSTREAM_TIMEOUT = "UPSTREAM_TIMEOUT"
    UPSTREAM_UNAVAILABLE = "UPSTREAM_UNAVAILABLE"
    UPSTREAM_SERVICE_ERROR = "UPSTREAM_ERROR"
    DATA_PARSING_ERROR = "PARSING_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"

    @property
    def code(self) -> str:
        return self.value

    @property
    def default_message(self) -> str:
        return _DEFAULT_MESSAGES[self]


_DEFAULT_MESSAGES = {
    ErrorKind.INVALID_INPUT: "Invalid coordinates provided",
    ErrorKind.UPSTREAM_TIMEOUT: "Failed to fetch weather data within timeout",
    ErrorKind.UPSTREAM_UNAVAILABLE: "Upstream weather service is unavailable",
    ErrorKind.UPSTREAM_SERVICE_ERROR: "Upstream weather service returned an error",
    ErrorKind.DATA_PARSING_ERROR: "Failed to parse weather data from upstream",
    ErrorKind.INTERNAL_ERROR: "An unexpected error occurred",
}


class WeatherError(RuntimeError):
    """Tagged failure raised by the core.

    The boundary switches on :attr:`kind`; the wrapped cause, if any, is kept
    as ``__cause__`` through ``raise ... from``.
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: Optional[str] = None,
        *,
        upstream_status: Optional[int] = None,
    ) -> None:
        self.kind = kind
        self.upstream_status = upstream_status
        self.message = message or kind.default_message
        super().__init__(self.message)

    @property
    def code(self) -> str:
        return self.kind.code

    def __repr__(self) -> str:
        return f"WeatherError({self.kind.name}, {self.message!r})"


__all__ = ["ErrorKind", "WeatherError"]
