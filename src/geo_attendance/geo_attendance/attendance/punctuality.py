"""On-time/late classification in the office's civil time.

Both the live check-in path and history reconstruction go through
``PunctualityPolicy`` so the two can never disagree.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, time
from typing import Optional

from ..common.datetime_utils import to_local
from ..core.constants import DEFAULT_GRACE_MINUTES, DEFAULT_UTC_OFFSET_MINUTES
from ..core.enums import AttendanceStatus
from ..offices.model import Office
from .factory import AttendanceStrategyFactory


def classify(
    check_in: datetime,
    start: Optional[time],
    *,
    grace_minutes: int = DEFAULT_GRACE_MINUTES,
    utc_offset_minutes: int = DEFAULT_UTC_OFFSET_MINUTES,
    factory: Optional[AttendanceStrategyFactory] = None,
) -> AttendanceStatus:
    """Late when the local check-in is strictly after start + grace.

    A day without a start time (non-working day) counts as on-time.
    """

    factory = factory or AttendanceStrategyFactory()
    local_now = to_local(check_in, utc_offset_minutes)
    strategy = factory.for_checkin(local_now=local_now, start=start, grace_minutes=grace_minutes)
    return strategy.decide_checkin(local_now=local_now, start=start, grace_minutes=grace_minutes).status


def classify_check_out(
    check_out: datetime,
    end: Optional[time],
    *,
    utc_offset_minutes: int = DEFAULT_UTC_OFFSET_MINUTES,
    factory: Optional[AttendanceStrategyFactory] = None,
) -> Optional[AttendanceStatus]:
    factory = factory or AttendanceStrategyFactory()
    local_now = to_local(check_out, utc_offset_minutes)
    strategy = factory.for_checkout(local_now=local_now, end=end)
    return strategy.decide_checkout(local_now=local_now, end=end).status


@dataclass(frozen=True)
class PunctualityPolicy:
    grace_minutes: int = DEFAULT_GRACE_MINUTES
    early_departure_margin_minutes: Optional[int] = None
    factory: AttendanceStrategyFactory = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        factory = AttendanceStrategyFactory(early_departure_margin_minutes=self.early_departure_margin_minutes)
        object.__setattr__(self, "factory", factory)

    def check_in_status(self, instant: datetime, office: Office) -> AttendanceStatus:
        local_day = to_local(instant, office.utc_offset_minutes).date()
        hours = office.hours_for_date(local_day)
        return classify(
            instant,
            hours.start if hours else None,
            grace_minutes=self.grace_minutes,
            utc_offset_minutes=office.utc_offset_minutes,
            factory=self.factory,
        )

    def check_out_status(self, instant: datetime, office: Office) -> Optional[AttendanceStatus]:
        local_day = to_local(instant, office.utc_offset_minutes).date()
        hours = office.hours_for_date(local_day)
        return classify_check_out(
            instant,
            hours.end if hours else None,
            utc_offset_minutes=office.utc_offset_minutes,
            factory=self.factory,
        )
