from __future__ import annotations

from datetime import datetime, time
from typing import Optional

from ...core.enums import AttendanceStatus
from .base import AttendanceStrategy, StatusDecision


class LateStrategy(AttendanceStrategy):
    """Check-in after the grace deadline."""

    def decide_checkin(self, *, local_now: datetime, start: Optional[time], grace_minutes: int) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.LATE)

    def decide_checkout(self, *, local_now: datetime, end: Optional[time]) -> StatusDecision:
        return StatusDecision(status=None)
