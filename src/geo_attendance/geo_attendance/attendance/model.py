from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import AttendanceStatus, EventKind
from ..geo.model import Coordinate


@dataclass(frozen=True)
class AttendanceEvent:
    """Domain entity: one check-in or check-out, immutable once created.

    ``timestamp`` is an aware UTC instant. ``status`` is only set on check-ins
    (and on check-outs when an early-departure policy is configured).
    """

    event_id: str
    user_id: str
    kind: EventKind
    timestamp: datetime
    coordinates: Coordinate
    distance_m: int
    device_id: Optional[str] = None
    status: Optional[AttendanceStatus] = None

    @property
    def is_check_in(self) -> bool:
        return self.kind == EventKind.CHECK_IN

    @property
    def is_check_out(self) -> bool:
        return self.kind == EventKind.CHECK_OUT

    def to_dict(self) -> dict:
        return {
            "id": self.event_id,
            "user_id": self.user_id,
            "type": self.kind.value,
            "timestamp": self.timestamp.isoformat(),
            "coordinates": self.coordinates.to_dict(),
            "distance_m": self.distance_m,
            "device_id": self.device_id,
            "status": self.status.value if self.status else None,
        }


@dataclass(frozen=True)
class DayRecord:
    """Read-model: one working day of a user's timeline. Derived, never stored."""

    day: date
    events: tuple[AttendanceEvent, ...]
    status: AttendanceStatus
    hours_worked: Optional[float] = None

    def to_dict(self) -> dict:
        return {
            "date": self.day.strftime("%Y-%m-%d"),
            "records": [e.to_dict() for e in self.events],
            "status": self.status.value,
            "hours_worked": self.hours_worked,
        }
