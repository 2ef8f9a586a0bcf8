from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, time
from typing import Optional

from ...core.enums import AttendanceStatus


@dataclass(frozen=True)
class StatusDecision:
    status: Optional[AttendanceStatus]


class AttendanceStrategy(ABC):
    """Strategy Pattern: encapsulate how we decide an attendance status.

    ``local_now`` is always in the office's civil time.
    """

    @abstractmethod
    def decide_checkin(self, *, local_now: datetime, start: Optional[time], grace_minutes: int) -> StatusDecision:
        raise NotImplementedError

    @abstractmethod
    def decide_checkout(self, *, local_now: datetime, end: Optional[time]) -> StatusDecision:
        raise NotImplementedError
