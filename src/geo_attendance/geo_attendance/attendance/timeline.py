"""Monthly attendance timeline.

A pure fold of the event log over the office's working-day policy: every
working day of the month gets exactly one DayRecord, absent by default,
overlaid with whatever check-in/check-out events fall on that local date.
Non-working days (and public holidays) are left out entirely.
"""

from __future__ import annotations

import calendar
from collections import defaultdict
from datetime import date
from typing import Collection, Iterable, Optional, Sequence

from ..common.datetime_utils import local_date
from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError
from ..offices.model import Office
from .model import AttendanceEvent, DayRecord
from .punctuality import PunctualityPolicy


def _parse_month_day(item: str) -> tuple[int, int]:
    try:
        month_s, day_s = item.strip().split("-")
        month, day = int(month_s), int(day_s)
        # 2000 is a leap year, so 02-29 passes.
        date(2000, month, day)
    except (AttributeError, ValueError):
        raise ValidationError(f"Invalid holiday {item!r}, expected MM-DD") from None
    return month, day


def validate_holidays(month_days: Iterable[str]) -> None:
    for item in month_days:
        _parse_month_day(item)


def holiday_dates(year: int, month_days: Iterable[str]) -> set[date]:
    """Expand ``"MM-DD"`` entries into dates of ``year``.

    Entries that do not exist in ``year`` (02-29 outside leap years) are skipped.
    """

    out: set[date] = set()
    for item in month_days:
        month, day = _parse_month_day(item)
        if month == 2 and day == 29 and not calendar.isleap(year):
            continue
        out.add(date(year, month, day))
    return out


def working_days(year: int, month: int, office: Office, *, holidays: Collection[date] = ()) -> list[date]:
    if not 1 <= month <= 12:
        raise ValidationError("month must be within 1..12")

    _, last_day = calendar.monthrange(year, month)
    days = []
    for day_no in range(1, last_day + 1):
        day = date(year, month, day_no)
        if office.hours_for_date(day) is None or day in holidays:
            continue
        days.append(day)
    return days


def group_by_local_date(events: Iterable[AttendanceEvent], utc_offset_minutes: int) -> dict[date, list[AttendanceEvent]]:
    grouped: dict[date, list[AttendanceEvent]] = defaultdict(list)
    for event in events:
        grouped[local_date(event.timestamp, utc_offset_minutes)].append(event)
    for day_events in grouped.values():
        day_events.sort(key=lambda e: e.timestamp)
    return dict(grouped)


def resolve_day(
    day: date,
    day_events: Sequence[AttendanceEvent],
    office: Office,
    policy: PunctualityPolicy,
) -> DayRecord:
    """Status and hours for one working day.

    With several events of a kind the earliest check-in and latest check-out
    are used, so the result does not depend on event order.
    """

    check_ins = [e for e in day_events if e.is_check_in]
    check_outs = [e for e in day_events if e.is_check_out]
    check_in = min(check_ins, key=lambda e: e.timestamp) if check_ins else None
    check_out = max(check_outs, key=lambda e: e.timestamp) if check_outs else None

    if check_in is None:
        status = AttendanceStatus.ABSENT
    else:
        status = check_in.status or policy.check_in_status(check_in.timestamp, office)
        if status == AttendanceStatus.ON_TIME and check_out and check_out.status == AttendanceStatus.EARLY_DEPARTURE:
            status = AttendanceStatus.EARLY_DEPARTURE

    hours_worked: Optional[float] = None
    if check_in and check_out:
        # Negative spans are data-quality issues upstream; surfaced as-is.
        hours_worked = (check_out.timestamp - check_in.timestamp).total_seconds() / 3600

    return DayRecord(day=day, events=tuple(day_events), status=status, hours_worked=hours_worked)


def build_month(
    user_id: str,
    month: int,
    year: int,
    office: Office,
    events: Iterable[AttendanceEvent],
    *,
    policy: Optional[PunctualityPolicy] = None,
    holidays: Collection[date] = (),
    newest_first: bool = False,
) -> list[DayRecord]:
    """One DayRecord per working day of ``month``/``year`` for ``user_id``.

    Events of other users in ``events`` are ignored. Ordered by date
    ascending, or descending with ``newest_first`` for tables.
    """

    policy = policy or PunctualityPolicy()
    own = (e for e in events if e.user_id == user_id)
    grouped = group_by_local_date(own, office.utc_offset_minutes)

    records = [
        resolve_day(day, grouped.get(day, ()), office, policy)
        for day in working_days(year, month, office, holidays=holidays)
    ]
    if newest_first:
        records.reverse()
    return records


def format_hours(hours: Optional[float]) -> str:
    if hours is None or hours <= 0:
        return "-"
    return f"{hours:.1f}h"
