from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Coordinate:
    """WGS-84 point in degrees.

    No validation here: callers reject NaN/out-of-range values first
    (see ``common.validators.require_coordinate``).
    """

    latitude: float
    longitude: float

    def to_dict(self) -> dict:
        return {"latitude": self.latitude, "longitude": self.longitude}
