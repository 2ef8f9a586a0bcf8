from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, time
from typing import Mapping, Optional

from ..common.datetime_utils import sunday_weekday
from ..core.constants import DEFAULT_UTC_OFFSET_MINUTES
from ..geo.model import Coordinate


@dataclass(frozen=True)
class WorkingHours:
    start: time
    end: time

    def to_dict(self) -> dict:
        return {"start": self.start.strftime("%H:%M"), "end": self.end.strftime("%H:%M")}


@dataclass(frozen=True)
class Office:
    """Domain entity: a registered office and its geofence/working-hours policy.

    ``working_hours`` maps day-of-week (0=Sunday..6=Saturday) to the civil
    start/end for that day. A missing key means a non-working day.
    """

    office_id: int
    name: str
    center: Coordinate
    radius_m: float
    working_hours: Mapping[int, WorkingHours] = field(default_factory=dict)
    utc_offset_minutes: int = DEFAULT_UTC_OFFSET_MINUTES

    def hours_for_weekday(self, weekday: int) -> Optional[WorkingHours]:
        return self.working_hours.get(weekday)

    def hours_for_date(self, day: date) -> Optional[WorkingHours]:
        return self.hours_for_weekday(sunday_weekday(day))

    def to_dict(self) -> dict:
        return {
            "id": self.office_id,
            "name": self.name,
            "coordinates": self.center.to_dict(),
            "radius_m": self.radius_m,
            "working_hours": {str(k): v.to_dict() for k, v in sorted(self.working_hours.items())},
            "utc_offset_minutes": self.utc_offset_minutes,
        }
