from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone

from ..core.exceptions import ValidationError


def parse_hhmm(value: str) -> time:
    """Parse an ``"HH:MM"`` civil time."""

    try:
        return datetime.strptime(value.strip(), "%H:%M").time()
    except (AttributeError, ValueError):
        raise ValidationError(f"Invalid time {value!r}, expected HH:MM") from None


def now_utc() -> datetime:
    """Current instant, timezone-aware UTC.

    Note: Wrapped so tests can patch/mock easier.
    """
    return datetime.now(timezone.utc)


def ensure_utc(instant: datetime) -> datetime:
    """Normalize an instant to aware UTC. Naive values are taken as UTC."""

    if instant.tzinfo is None:
        return instant.replace(tzinfo=timezone.utc)
    return instant.astimezone(timezone.utc)


def fixed_offset(utc_offset_minutes: int) -> timezone:
    return timezone(timedelta(minutes=int(utc_offset_minutes)))


def to_local(instant: datetime, utc_offset_minutes: int) -> datetime:
    """Office civil time for ``instant`` under a fixed UTC offset."""

    return ensure_utc(instant).astimezone(fixed_offset(utc_offset_minutes))


def local_date(instant: datetime, utc_offset_minutes: int) -> date:
    return to_local(instant, utc_offset_minutes).date()


def sunday_weekday(day: date) -> int:
    """Day of week with 0=Sunday..6=Saturday."""

    return (day.weekday() + 1) % 7
