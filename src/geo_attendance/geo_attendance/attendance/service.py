from __future__ import annotations

import logging
from datetime import MAXYEAR, MINYEAR, date, datetime, time, timedelta
from typing import Callable, Iterable, Optional

from ..common.datetime_utils import ensure_utc, fixed_offset, now_utc, to_local
from ..core.exceptions import AttendanceRejected, OfficeNotConfigured, ValidationError
from ..devices.repository import DeviceBindingRepository
from ..geo.model import Coordinate
from ..offices.model import Office
from ..offices.service import OfficeService
from .model import AttendanceEvent, DayRecord
from .punctuality import PunctualityPolicy
from .recorder import record_check_in, record_check_out
from .repository import AttendanceEventRepository
from .timeline import build_month, holiday_dates, validate_holidays

logger = logging.getLogger(__name__)


def local_day_bounds(day: date, office: Office) -> tuple[datetime, datetime]:
    """UTC instants covering ``day`` in the office's civil time."""

    tz = fixed_offset(office.utc_offset_minutes)
    start = datetime.combine(day, time.min, tzinfo=tz)
    return ensure_utc(start), ensure_utc(start + timedelta(days=1))


def local_month_bounds(year: int, month: int, office: Office) -> tuple[datetime, datetime]:
    first = date(year, month, 1)
    following = date(year + 1, 1, 1) if month == 12 else date(year, month + 1, 1)
    return local_day_bounds(first, office)[0], local_day_bounds(following, office)[0]


class AttendanceService:
    """Thin orchestration around the pure recorder/timeline.

    Reads the governing office, today's events and device bindings from the
    store, then appends the accepted event.
    """

    def __init__(
        self,
        events: AttendanceEventRepository,
        bindings: DeviceBindingRepository,
        offices: OfficeService,
        *,
        policy: Optional[PunctualityPolicy] = None,
        allow_multiple_per_day: bool = False,
        public_holidays: Iterable[str] = (),
        clock: Callable[[], datetime] = now_utc,
    ):
        self._events = events
        self._bindings = bindings
        self._offices = offices
        self._policy = policy or PunctualityPolicy()
        self._allow_multiple = bool(allow_multiple_per_day)
        self._public_holidays = tuple(public_holidays)
        validate_holidays(self._public_holidays)
        self._clock = clock

    def _todays_events(self, user_id: Optional[str], office: Optional[Office], now: datetime):
        if not user_id or office is None or self._allow_multiple:
            return ()
        start, end = local_day_bounds(to_local(now, office.utc_offset_minutes).date(), office)
        return self._events.list_between(start=start, end=end, user_id=user_id)

    def check_in(
        self,
        user_id: Optional[str],
        *,
        location: Optional[Coordinate],
        device_id: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> AttendanceEvent:
        now = ensure_utc(now or self._clock())
        office = self._offices.governing_office()
        try:
            event = record_check_in(
                user_id,
                device_id,
                location,
                office,
                self._bindings,
                now,
                policy=self._policy,
                todays_events=self._todays_events(user_id, office, now),
                allow_multiple=self._allow_multiple,
            )
        except AttendanceRejected as e:
            logger.info("Check-in rejected for user %s: %s", user_id, e.kind)
            raise

        self._events.add(event)
        logger.info("Check-in %s for user %s (%s, %dm)", event.event_id, user_id, event.status.value, event.distance_m)
        return event

    def check_out(
        self,
        user_id: Optional[str],
        *,
        location: Optional[Coordinate],
        device_id: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> AttendanceEvent:
        now = ensure_utc(now or self._clock())
        office = self._offices.governing_office()
        try:
            event = record_check_out(
                user_id,
                device_id,
                location,
                office,
                now,
                policy=self._policy,
                todays_events=self._todays_events(user_id, office, now),
                allow_multiple=self._allow_multiple,
            )
        except AttendanceRejected as e:
            logger.info("Check-out rejected for user %s: %s", user_id, e.kind)
            raise

        self._events.add(event)
        logger.info("Check-out %s for user %s (%dm)", event.event_id, user_id, event.distance_m)
        return event

    def today_events(self, user_id: Optional[str] = None, *, now: Optional[datetime] = None) -> list[AttendanceEvent]:
        office = self._require_office()
        now = ensure_utc(now or self._clock())
        start, end = local_day_bounds(to_local(now, office.utc_offset_minutes).date(), office)
        return sorted(self._events.list_between(start=start, end=end, user_id=user_id), key=lambda e: e.timestamp)

    def month_events(self, *, month: int, year: int, user_id: Optional[str] = None) -> list[AttendanceEvent]:
        if not 1 <= int(month) <= 12:
            raise ValidationError("month must be within 1..12")
        if not MINYEAR < int(year) < MAXYEAR:
            raise ValidationError(f"year must be within {MINYEAR + 1}..{MAXYEAR - 1}")
        office = self._require_office()
        start, end = local_month_bounds(year, month, office)
        return list(self._events.list_between(start=start, end=end, user_id=user_id))

    def month_history(self, user_id: str, *, month: int, year: int, newest_first: bool = True) -> list[DayRecord]:
        office = self._require_office()
        return self.build_history(
            user_id,
            month=month,
            year=year,
            office=office,
            events=self.month_events(month=month, year=year, user_id=user_id),
            newest_first=newest_first,
        )

    def build_history(
        self,
        user_id: str,
        *,
        month: int,
        year: int,
        office: Office,
        events: Iterable[AttendanceEvent],
        newest_first: bool = False,
    ) -> list[DayRecord]:
        return build_month(
            user_id,
            month,
            year,
            office,
            events,
            policy=self._policy,
            holidays=holiday_dates(year, self._public_holidays),
            newest_first=newest_first,
        )

    def _require_office(self) -> Office:
        office = self._offices.governing_office()
        if office is None:
            raise OfficeNotConfigured()
        return office
