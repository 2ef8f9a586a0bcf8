"""Validate a check-in/check-out attempt and produce the event to store.

The recorder performs no I/O of its own apart from the device-binding
relation it is handed; persisting the returned event is the caller's job.
Failures are raised as ``AttendanceRejected`` subclasses and never logged
here.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Callable, Iterable, Optional

from ..common.datetime_utils import ensure_utc, local_date
from ..core.enums import EventKind
from ..core.exceptions import DuplicateEvent, LocationUnavailable, NotAuthenticated, OfficeNotConfigured, OutOfGeofence
from ..devices.binding import authorize_device
from ..devices.repository import DeviceBindingRepository
from ..geo.geofence import check_geofence
from ..geo.model import Coordinate
from ..offices.model import Office
from .model import AttendanceEvent
from .punctuality import PunctualityPolicy


def _new_event_id() -> str:
    return uuid.uuid4().hex


def _precheck(
    kind: EventKind,
    user_id: Optional[str],
    location: Optional[Coordinate],
    office: Optional[Office],
    now: datetime,
    todays_events: Iterable[AttendanceEvent],
    allow_multiple: bool,
) -> tuple[str, Coordinate, Office]:
    if not user_id:
        raise NotAuthenticated()
    if location is None or location.latitude is None or location.longitude is None:
        raise LocationUnavailable()
    if office is None:
        raise OfficeNotConfigured()

    if not allow_multiple:
        today = local_date(now, office.utc_offset_minutes)
        for event in todays_events:
            if (
                event.user_id == user_id
                and event.kind == kind
                and local_date(event.timestamp, office.utc_offset_minutes) == today
            ):
                raise DuplicateEvent(kind.value)
    return user_id, location, office


def _fenced_distance(location: Coordinate, office: Office) -> float:
    gate = check_geofence(location, office.center, office.radius_m)
    if not gate.within_fence:
        raise OutOfGeofence(distance_m=gate.distance_m, radius_m=office.radius_m)
    return gate.distance_m


def record_check_in(
    user_id: Optional[str],
    device_id: Optional[str],
    location: Optional[Coordinate],
    office: Optional[Office],
    bindings: DeviceBindingRepository,
    now: datetime,
    *,
    policy: Optional[PunctualityPolicy] = None,
    todays_events: Iterable[AttendanceEvent] = (),
    allow_multiple: bool = False,
    id_factory: Callable[[], str] = _new_event_id,
) -> AttendanceEvent:
    """Device check, geofence gate, punctuality, in that order.

    A device bound here stays bound even if the geofence then rejects the
    attempt; the two checks are independent.
    """

    now = ensure_utc(now)
    user_id, location, office = _precheck(
        EventKind.CHECK_IN, user_id, location, office, now, todays_events, allow_multiple
    )

    authorize_device(user_id, device_id, bindings)
    distance = _fenced_distance(location, office)
    status = (policy or PunctualityPolicy()).check_in_status(now, office)

    return AttendanceEvent(
        event_id=id_factory(),
        user_id=user_id,
        kind=EventKind.CHECK_IN,
        timestamp=now,
        coordinates=location,
        distance_m=int(round(distance)),
        device_id=device_id or None,
        status=status,
    )


def record_check_out(
    user_id: Optional[str],
    device_id: Optional[str],
    location: Optional[Coordinate],
    office: Optional[Office],
    now: datetime,
    *,
    policy: Optional[PunctualityPolicy] = None,
    todays_events: Iterable[AttendanceEvent] = (),
    allow_multiple: bool = False,
    id_factory: Callable[[], str] = _new_event_id,
) -> AttendanceEvent:
    """Same gate as check-in, without device binding.

    Status stays unset unless the policy has an early-departure margin.
    """

    now = ensure_utc(now)
    user_id, location, office = _precheck(
        EventKind.CHECK_OUT, user_id, location, office, now, todays_events, allow_multiple
    )

    distance = _fenced_distance(location, office)
    status = (policy or PunctualityPolicy()).check_out_status(now, office)

    return AttendanceEvent(
        event_id=id_factory(),
        user_id=user_id,
        kind=EventKind.CHECK_OUT,
        timestamp=now,
        coordinates=location,
        distance_m=int(round(distance)),
        device_id=device_id or None,
        status=status,
    )
