from __future__ import annotations

from datetime import datetime, time
from typing import Optional

from ...core.enums import AttendanceStatus
from .base import AttendanceStrategy, StatusDecision


class EarlyDepartureStrategy(AttendanceStrategy):
    """Check-out before closing time minus the configured margin."""

    def decide_checkin(self, *, local_now: datetime, start: Optional[time], grace_minutes: int) -> StatusDecision:
        return StatusDecision(status=None)

    def decide_checkout(self, *, local_now: datetime, end: Optional[time]) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.EARLY_DEPARTURE)
