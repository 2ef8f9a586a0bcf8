"""Great-circle distance helpers.

Uses the haversine formula on a spherical Earth (radius 6,371 km), which is
well within the accuracy of consumer GPS fixes at geofence scales.
"""

from __future__ import annotations

import math

from ..core.constants import EARTH_RADIUS_M
from .model import Coordinate


def haversine_distance(a: Coordinate, b: Coordinate) -> float:
    """Distance between ``a`` and ``b`` in meters.

    NaN inputs propagate to a NaN result.
    """

    phi1 = math.radians(a.latitude)
    phi2 = math.radians(b.latitude)
    d_phi = math.radians(b.latitude - a.latitude)
    d_lambda = math.radians(b.longitude - a.longitude)

    h = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))
    return EARTH_RADIUS_M * c


def format_distance(meters: float) -> str:
    """Render meters as ``"850m"`` below 1 km, else ``"1.24km"``."""

    if meters < 1000:
        return f"{math.floor(meters + 0.5)}m"
    return f"{meters / 1000:.2f}km"
