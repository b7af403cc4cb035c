"""Coordinate quantization used for both upstream queries and cache keys."""
from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Context, Decimal

from .entities import NormalizedCoordinate


DEFAULT_PRECISION = 2

# Enough significant digits for any finite float at any sane precision.
_BASE_DIGITS = 400


def round_coordinate(value: float, precision: int = DEFAULT_PRECISION) -> float:
    """Round ``value`` half away from zero to ``precision`` decimal digits.

    Works on the shortest decimal representation of the float so that
    ``52.525`` rounds to ``52.53`` even though its binary value is slightly
    below. Non-finite values are returned unchanged.
    """

    if not math.isfinite(value):
        return value
    context = Context(prec=_BASE_DIGITS + abs(precision))
    quantum = Decimal(1).scaleb(-precision)
    rounded = Decimal(repr(float(value))).quantize(quantum, rounding=ROUND_HALF_UP, context=context)
    # collapse -0.0 so equal coordinates share one key
    return float(rounded) + 0.0


def normalize(latitude: float, longitude: float, precision: int = DEFAULT_PRECISION) -> NormalizedCoordinate:
    return NormalizedCoordinate(
        latitude=round_coordinate(latitude, precision),
        longitude=round_coordinate(longitude, precision),
        precision=precision,
    )


def cache_key(normalized: NormalizedCoordinate) -> str:
    """Return ``"{lat}:{lon}"`` with both axes at fixed precision."""

    digits = max(normalized.precision, 0)
    return f"{normalized.latitude:.{digits}f}:{normalized.longitude:.{digits}f}"


__all__ = ["DEFAULT_PRECISION", "cache_key", "normalize", "round_coordinate"]
