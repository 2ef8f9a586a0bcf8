from __future__ import annotations

import math
from typing import Any, Optional

from ..core.exceptions import ValidationError
from ..geo.model import Coordinate


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def _as_float(value: Any, field_name: str) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number") from None
    if math.isnan(number) or math.isinf(number):
        raise ValidationError(f"{field_name} must be a finite number")
    return number


def require_coordinate(latitude: Any, longitude: Any) -> Coordinate:
    """Build a Coordinate, rejecting NaN and out-of-range degrees."""

    lat = _as_float(latitude, "latitude")
    lon = _as_float(longitude, "longitude")
    if not -90.0 <= lat <= 90.0:
        raise ValidationError("latitude must be within [-90, 90]")
    if not -180.0 <= lon <= 180.0:
        raise ValidationError("longitude must be within [-180, 180]")
    return Coordinate(latitude=lat, longitude=lon)


def optional_coordinate(latitude: Any, longitude: Any) -> Optional[Coordinate]:
    """Like ``require_coordinate`` but a missing leg yields None.

    A missing fix is reported by the recorder as LocationUnavailable, which
    is a different condition from a malformed one.
    """

    if latitude is None or longitude is None or latitude == "" or longitude == "":
        return None
    return require_coordinate(latitude, longitude)


def require_positive(value: Any, field_name: str) -> float:
    number = _as_float(value, field_name)
    if number <= 0:
        raise ValidationError(f"{field_name} must be greater than 0")
    return number
