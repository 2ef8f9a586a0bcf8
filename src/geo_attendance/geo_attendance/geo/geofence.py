from __future__ import annotations

from dataclasses import dataclass

from .distance import haversine_distance
from .model import Coordinate


@dataclass(frozen=True)
class GeofenceResult:
    within_fence: bool
    distance_m: float


def check_geofence(user: Coordinate, center: Coordinate, radius_m: float) -> GeofenceResult:
    """Admit a point when it lies on or inside the circle around ``center``.

    Never raises; the caller decides what to do with a point outside.
    """

    distance = haversine_distance(user, center)
    return GeofenceResult(within_fence=distance <= radius_m, distance_m=distance)
