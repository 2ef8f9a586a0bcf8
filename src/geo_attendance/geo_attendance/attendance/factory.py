from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, time, timedelta
from typing import Optional

from .strategies.base import AttendanceStrategy
from .strategies.early_strategy import EarlyDepartureStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.normal_strategy import NormalStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose appropriate strategy based on rules.

    ``early_departure_margin_minutes`` of None disables check-out
    classification entirely.
    """

    early_departure_margin_minutes: Optional[int] = None

    def for_checkin(self, *, local_now: datetime, start: Optional[time], grace_minutes: int) -> AttendanceStrategy:
        if start is None:
            return NormalStrategy()

        local_start = datetime.combine(local_now.date(), start, tzinfo=local_now.tzinfo)
        if local_now <= local_start + timedelta(minutes=grace_minutes):
            return NormalStrategy()
        return LateStrategy()

    def for_checkout(self, *, local_now: datetime, end: Optional[time]) -> AttendanceStrategy:
        if end is None or self.early_departure_margin_minutes is None:
            return NormalStrategy()

        local_end = datetime.combine(local_now.date(), end, tzinfo=local_now.tzinfo)
        if local_now < local_end - timedelta(minutes=self.early_departure_margin_minutes):
            return EarlyDepartureStrategy()
        return NormalStrategy()
