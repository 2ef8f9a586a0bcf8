from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from ..common.datetime_utils import parse_hhmm
from ..common.validators import require_coordinate, require_non_empty, require_positive
from ..core.constants import DEFAULT_GEOFENCE_RADIUS_M, DEFAULT_UTC_OFFSET_MINUTES, DEFAULT_WORKING_HOURS
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, ValidationError
from .model import Office, WorkingHours
from .repository import OfficeRepository

logger = logging.getLogger(__name__)


def parse_working_hours(raw: Optional[Mapping[Any, Any]]) -> dict[int, WorkingHours]:
    """Parse ``{weekday: {"start": "HH:MM", "end": "HH:MM"}}``.

    Weekday keys may be ints or numeric strings (JSON objects only have string
    keys). ``None`` values mark a non-working day and are dropped.
    """

    if raw is None:
        raw = {k: {"start": s, "end": e} for k, (s, e) in DEFAULT_WORKING_HOURS.items()}

    hours: dict[int, WorkingHours] = {}
    for key, value in raw.items():
        try:
            weekday = int(key)
        except (TypeError, ValueError):
            raise ValidationError(f"Invalid weekday {key!r}") from None
        if not 0 <= weekday <= 6:
            raise ValidationError(f"Weekday must be 0 (Sunday) to 6 (Saturday), got {weekday}")
        if value is None:
            continue

        if isinstance(value, WorkingHours):
            wh = value
        else:
            try:
                wh = WorkingHours(start=parse_hhmm(value["start"]), end=parse_hhmm(value["end"]))
            except (KeyError, TypeError):
                raise ValidationError(f"Working hours for weekday {weekday} need start and end") from None

        if wh.start >= wh.end:
            raise ValidationError(f"Working hours for weekday {weekday}: start must be before end")
        hours[weekday] = wh
    return hours


def build_office(payload: Mapping[str, Any], *, office_id: int = 0) -> Office:
    """Validate an admin payload into an Office."""

    name = require_non_empty(str(payload.get("name") or ""), "Office name")

    coords = payload.get("coordinates") or {}
    center = require_coordinate(coords.get("latitude"), coords.get("longitude"))

    radius = require_positive(payload.get("radius_m", DEFAULT_GEOFENCE_RADIUS_M), "Geofence radius")

    try:
        offset = int(payload.get("utc_offset_minutes", DEFAULT_UTC_OFFSET_MINUTES))
    except (TypeError, ValueError):
        raise ValidationError("utc_offset_minutes must be an integer") from None
    if not -14 * 60 <= offset <= 14 * 60:
        raise ValidationError("utc_offset_minutes must be within +/-14 hours")

    return Office(
        office_id=int(office_id),
        name=name,
        center=center,
        radius_m=radius,
        working_hours=parse_working_hours(payload.get("working_hours")),
        utc_offset_minutes=offset,
    )


class OfficeService:
    def __init__(self, offices: OfficeRepository):
        self._offices = offices

    def list_offices(self):
        return list(self._offices.list_all())

    def governing_office(self) -> Optional[Office]:
        """The office attendance is evaluated against (first registered)."""

        offices = self._offices.list_all()
        return offices[0] if offices else None

    def create(self, *, current_role: Role, payload: Mapping[str, Any]) -> int:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only administrators can manage offices")

        office = build_office(payload)
        office_id = self._offices.create(office)
        logger.info("Office %s created (%r, radius=%sm)", office_id, office.name, office.radius_m)
        return office_id

    def update(self, *, current_role: Role, office_id: int, payload: Mapping[str, Any]) -> Office:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only administrators can manage offices")

        if not self._offices.get_by_id(int(office_id)):
            raise ValidationError("Office not found")

        office = build_office(payload, office_id=int(office_id))
        if not self._offices.update(office):
            raise ValidationError("Updating office failed")
        logger.info("Office %s updated", office_id)
        return office

    def delete(self, *, current_role: Role, office_id: int) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only administrators can manage offices")

        if not self._offices.delete(int(office_id)):
            raise ValidationError("Deleting office failed")
        logger.info("Office %s deleted", office_id)
